"""认证相关 schema."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import StrictStr, field_validator, model_validator

from sergas.schemas.base import PayloadSchema
from sergas.schemas.validation import SchemaMessageKeyError


class LoginPayload(PayloadSchema):
    """登录 payload."""

    email: StrictStr
    password: StrictStr

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise SchemaMessageKeyError("Email y contraseña son obligatorios", message_key="VALIDATION_ERROR")

        email = data.get("email")
        password = data.get("password")
        if email is None or password is None:
            raise SchemaMessageKeyError("Email y contraseña son obligatorios", message_key="VALIDATION_ERROR")
        if isinstance(email, str) and not email.strip():
            raise SchemaMessageKeyError("Email y contraseña son obligatorios", message_key="VALIDATION_ERROR")
        if isinstance(password, str) and password == "":
            raise SchemaMessageKeyError("Email y contraseña son obligatorios", message_key="VALIDATION_ERROR")
        return data

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()
