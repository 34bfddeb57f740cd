"""公司信息 Service(单行 upsert)."""

from __future__ import annotations

from typing import Any

from sergas.models.company_data import CompanyData
from sergas.repositories.company_repository import CompanyRepository
from sergas.schemas.company import CompanyPayload
from sergas.schemas.validation import validate_or_raise
from sergas.utils.json_columns import dump_mapping_column
from sergas.utils.structlog_config import log_info


class CompanyService:
    """公司信息服务."""

    def __init__(self, repository: CompanyRepository | None = None) -> None:
        self._repository = repository or CompanyRepository()

    def get_current(self) -> dict[str, Any] | None:
        company = self._repository.get_current()
        return company.to_dict() if company else None

    def upsert(self, payload: object, *, operator_id: int | None = None) -> CompanyData:
        """更新第一行, 表为空时插入."""
        parsed = validate_or_raise(CompanyPayload, payload or {})
        changes = parsed.changes()

        company = self._repository.get_current()
        created = company is None
        if company is None:
            company = CompanyData()

        for field, value in changes.items():
            if field == "redes":
                company.redes = dump_mapping_column(value)
            else:
                setattr(company, field, value)

        self._repository.add(company)
        log_info(
            "公司信息已创建" if created else "公司信息已更新",
            module="company",
            user_id=operator_id,
            fields=sorted(changes),
        )
        return company
