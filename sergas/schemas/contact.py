"""联系表单 schema."""

from __future__ import annotations

from typing import Any

from pydantic import StrictStr, field_validator, model_validator

from sergas.schemas.base import PayloadSchema, require_fields
from sergas.schemas.fields import validate_email


class ContactMessagePayload(PayloadSchema):
    """官网联系表单 payload."""

    nombre: StrictStr
    email: StrictStr
    mensaje: StrictStr
    telefono: StrictStr | None = None
    empresa: StrictStr | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("nombre", "email", "mensaje"))

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return validate_email(value)
