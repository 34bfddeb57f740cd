"""排序端点共用逻辑."""

from __future__ import annotations

from flask import current_app

from sergas import REORDER_SERVICE_EXTENSION
from sergas.schemas.ordering import ReorderPayload
from sergas.schemas.validation import validate_or_raise
from sergas.services.ordering.reorder_service import ReorderService


def get_reorder_service() -> ReorderService:
    return current_app.extensions[REORDER_SERVICE_EXTENSION]


def apply_reorder(collection: str, payload: object) -> dict[str, object]:
    """校验请求体并执行排序; 未提供 base_offset 时使用 REORDER_BASE_OFFSET."""
    parsed = validate_or_raise(ReorderPayload, payload or {})
    base_offset = parsed.base_offset
    if base_offset is None:
        base_offset = int(current_app.config.get("REORDER_BASE_OFFSET", 0))

    get_reorder_service().reorder(collection, parsed.ids, base_offset)
    return {"collection": collection, "count": len(parsed.ids), "base_offset": base_offset}
