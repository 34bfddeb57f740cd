"""公司信息写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import StrictStr, field_validator

from sergas.schemas.base import PayloadSchema
from sergas.schemas.fields import parse_mapping_field


class CompanyPayload(PayloadSchema):
    """公司信息 upsert payload,所有字段可选."""

    nombre: StrictStr | None = None
    razon_social: StrictStr | None = None
    cuit: StrictStr | None = None
    direccion: StrictStr | None = None
    telefono: StrictStr | None = None
    whatsapp: StrictStr | None = None
    email: StrictStr | None = None
    horario: StrictStr | None = None
    descripcion: StrictStr | None = None
    mision: StrictStr | None = None
    vision: StrictStr | None = None
    logo: StrictStr | None = None
    mapa_url: StrictStr | None = None
    redes: dict[str, Any] | None = None

    @field_validator("redes", mode="before")
    @classmethod
    def _parse_redes(cls, value: Any) -> dict:
        return parse_mapping_field(value)
