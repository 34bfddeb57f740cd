"""公司信息 Repository."""

from __future__ import annotations

from typing import cast

from sergas import db
from sergas.models.company_data import CompanyData


class CompanyRepository:
    """公司信息(单行表)Repository."""

    def get_current(self) -> CompanyData | None:
        return cast("CompanyData | None", CompanyData.query.order_by(CompanyData.id.asc()).first())

    def add(self, company: CompanyData) -> CompanyData:
        db.session.add(company)
        db.session.flush()
        return company
