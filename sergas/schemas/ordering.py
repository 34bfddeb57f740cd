"""排序请求 schema."""

from __future__ import annotations

from typing import Any

from pydantic import StrictInt, model_validator

from sergas.schemas.base import PayloadSchema, ensure_mapping


class ReorderPayload(PayloadSchema):
    """排序 payload.

    `ids` 的形状由排序服务校验,这里只要求字段存在.
    """

    ids: Any
    base_offset: StrictInt | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_ids_present(cls, data: Any) -> Any:
        mapping = ensure_mapping(data)
        if "ids" not in mapping:
            raise ValueError("El campo ids es obligatorio")
        return data
