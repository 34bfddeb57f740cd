"""项目写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from sergas.schemas.base import PayloadSchema, reject_blank_fields, require_fields
from sergas.schemas.fields import parse_bool_field, parse_list_field

_LIST_FIELDS = ("categorias", "tags", "galeria", "documentos")


def _parse_optional_int(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _ProjectFieldsMixin(PayloadSchema):
    descripcion: StrictStr | None = None
    cliente: StrictStr | None = None
    ubicacion: StrictStr | None = None
    anio: int | None = None
    imagen: StrictStr | None = None
    categorias: list[Any] = Field(default_factory=list)
    tags: list[Any] = Field(default_factory=list)
    galeria: list[Any] = Field(default_factory=list)
    documentos: list[Any] = Field(default_factory=list)
    orden: int | None = None

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _parse_list_columns(cls, value: Any) -> list:
        return parse_list_field(value)

    @field_validator("anio", "orden", mode="before")
    @classmethod
    def _parse_optional_ints(cls, value: Any) -> Any:
        return _parse_optional_int(value)


class ProjectCreatePayload(_ProjectFieldsMixin):
    """创建项目 payload."""

    titulo: StrictStr
    destacado: bool = False

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("titulo",))

    @field_validator("destacado", mode="before")
    @classmethod
    def _parse_destacado(cls, value: Any) -> bool:
        return parse_bool_field(value, default=False)


class ProjectUpdatePayload(_ProjectFieldsMixin):
    """更新项目 payload(只更新显式提交的字段)."""

    titulo: StrictStr | None = None
    destacado: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_blank_fields(cls, data: Any) -> Any:
        return reject_blank_fields(data, fields=("titulo",))

    @field_validator("destacado", mode="before")
    @classmethod
    def _parse_destacado(cls, value: Any) -> bool:
        return parse_bool_field(value, default=False)
