"""工种、统计数字、知识库写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from sergas.schemas.base import PayloadSchema, reject_blank_fields, require_fields
from sergas.schemas.fields import parse_bool_field, parse_list_field
from sergas.utils.text_utils import slugify


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_slug(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return slugify(value) or None
    return value


def _parse_valor(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class WorkTypeCreatePayload(PayloadSchema):
    """创建工种 payload; slug 缺省时由 nombre 推导."""

    nombre: StrictStr
    slug: StrictStr | None = None
    descripcion: StrictStr | None = None
    icono: StrictStr | None = None
    imagen: StrictStr | None = None
    activo: bool = True
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("nombre",))

    @field_validator("slug", mode="before")
    @classmethod
    def _normalize_slug(cls, value: Any) -> Any:
        return _parse_slug(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)


class WorkTypeUpdatePayload(PayloadSchema):
    """更新工种 payload."""

    nombre: StrictStr | None = None
    slug: StrictStr | None = None
    descripcion: StrictStr | None = None
    icono: StrictStr | None = None
    imagen: StrictStr | None = None
    activo: bool | None = None
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_blank_fields(cls, data: Any) -> Any:
        return reject_blank_fields(data, fields=("nombre",))

    @field_validator("slug", mode="before")
    @classmethod
    def _normalize_slug(cls, value: Any) -> Any:
        return _parse_slug(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)


class StatisticCreatePayload(PayloadSchema):
    """创建统计数字 payload."""

    etiqueta: StrictStr
    valor: StrictStr
    sufijo: StrictStr | None = None
    icono: StrictStr | None = None
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("etiqueta", "valor"))

    @field_validator("valor", mode="before")
    @classmethod
    def _parse_valor(cls, value: Any) -> Any:
        return _parse_valor(value)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)


class StatisticUpdatePayload(PayloadSchema):
    """更新统计数字 payload."""

    etiqueta: StrictStr | None = None
    valor: StrictStr | None = None
    sufijo: StrictStr | None = None
    icono: StrictStr | None = None
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_blank_fields(cls, data: Any) -> Any:
        return reject_blank_fields(data, fields=("etiqueta", "valor"))

    @field_validator("valor", mode="before")
    @classmethod
    def _parse_valor(cls, value: Any) -> Any:
        return _parse_valor(value)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)


class KnowledgeCreatePayload(PayloadSchema):
    """创建知识库条目 payload."""

    pregunta: StrictStr
    respuesta: StrictStr
    categoria: StrictStr | None = None
    palabras_clave: list[Any] = Field(default_factory=list)
    activo: bool = True
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("pregunta", "respuesta"))

    @field_validator("palabras_clave", mode="before")
    @classmethod
    def _parse_palabras_clave(cls, value: Any) -> list:
        return parse_list_field(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)


class KnowledgeUpdatePayload(PayloadSchema):
    """更新知识库条目 payload."""

    pregunta: StrictStr | None = None
    respuesta: StrictStr | None = None
    categoria: StrictStr | None = None
    palabras_clave: list[Any] | None = None
    activo: bool | None = None
    orden: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_blank_fields(cls, data: Any) -> Any:
        return reject_blank_fields(data, fields=("pregunta", "respuesta"))

    @field_validator("palabras_clave", mode="before")
    @classmethod
    def _parse_palabras_clave(cls, value: Any) -> list:
        return parse_list_field(value)

    @field_validator("activo", mode="before")
    @classmethod
    def _parse_activo(cls, value: Any) -> bool:
        return parse_bool_field(value, default=True)

    @field_validator("orden", mode="before")
    @classmethod
    def _parse_orden(cls, value: Any) -> Any:
        return _blank_to_none(value)
