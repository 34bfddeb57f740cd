"""Schema 基础设施."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class PayloadSchema(BaseModel):
    """写路径 payload 的基础 schema.

    约定:
    - 默认忽略未知字段, 以兼容前端的扩展字段.
    - 更新类 payload 全部字段可选, 通过 `changes()` 只取客户端显式提交的字段.
    """

    model_config = ConfigDict(extra="ignore")

    def changes(self) -> dict[str, Any]:
        """返回客户端显式提交的字段(用于部分更新)."""
        return self.model_dump(exclude_unset=True)


def ensure_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("Formato de datos inválido")
    return data


def require_fields(data: Any, *, required: tuple[str, ...]) -> Any:
    mapping = ensure_mapping(data)
    for field in required:
        value = mapping.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"El campo {field} es obligatorio")
    return data


def reject_blank_fields(data: Any, *, fields: tuple[str, ...]) -> Any:
    """更新 payload 中显式提交的必填字段不能为空."""
    mapping = ensure_mapping(data)
    for field in fields:
        if field not in mapping:
            continue
        value = mapping.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"El campo {field} no puede estar vacío")
    return data
