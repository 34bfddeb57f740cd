"""用户写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from sergas.constants import UserRole
from sergas.models.user import MIN_USER_PASSWORD_LENGTH
from sergas.schemas.base import PayloadSchema, reject_blank_fields, require_fields
from sergas.schemas.fields import parse_bool_field, parse_mapping_field, validate_email


def _validate_role(value: str) -> str:
    cleaned = value.strip().lower()
    if not UserRole.is_valid(cleaned):
        raise ValueError("El rol debe ser admin o editor")
    return cleaned


def _validate_password(value: str) -> str:
    if len(value) < MIN_USER_PASSWORD_LENGTH:
        raise ValueError(f"La contraseña debe tener al menos {MIN_USER_PASSWORD_LENGTH} caracteres")
    return value


class UserCreatePayload(PayloadSchema):
    """创建用户 payload."""

    email: StrictStr
    nombre: StrictStr
    password: StrictStr
    rol: StrictStr = UserRole.EDITOR
    permisos: dict[str, Any] = Field(default_factory=dict)
    activo: bool = True

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("email", "nombre", "password"))

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        return _validate_password(value)

    @field_validator("rol")
    @classmethod
    def _validate_role(cls, value: str) -> str:
        return _validate_role(value)

    @field_validator("permisos", mode="before")
    @classmethod
    def _parse_permisos(cls, value: Any) -> dict:
        return parse_mapping_field(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)


class UserUpdatePayload(PayloadSchema):
    """更新用户 payload; password 为空字符串时视为不修改."""

    nombre: StrictStr | None = None
    rol: StrictStr | None = None
    permisos: dict[str, Any] | None = None
    activo: bool | None = None
    password: StrictStr | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_blank_fields(cls, data: Any) -> Any:
        return reject_blank_fields(data, fields=("nombre", "rol"))

    @field_validator("password", mode="before")
    @classmethod
    def _blank_password_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value == "":
            return None
        return value

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _validate_password(value)

    @field_validator("rol")
    @classmethod
    def _validate_role(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _validate_role(value)

    @field_validator("permisos", mode="before")
    @classmethod
    def _parse_permisos(cls, value: Any) -> dict:
        return parse_mapping_field(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)
