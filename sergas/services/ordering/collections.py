"""可排序集合注册表: 集合名 -> 模型."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sergas.errors import InvalidArgumentError
from sergas.models.knowledge_entry import KnowledgeEntry
from sergas.models.project import Project
from sergas.models.statistic import Statistic
from sergas.models.work_type import WorkType

if TYPE_CHECKING:
    from sqlalchemy import Table

ORDERABLE_COLLECTIONS: dict[str, type] = {
    "proyectos": Project,
    "tipos_trabajo": WorkType,
    "estadisticas": Statistic,
    "assistant_knowledge": KnowledgeEntry,
}


def resolve_collection_table(collection: object) -> Table:
    """根据集合名获取表对象,未注册的名称抛出 InvalidArgumentError."""
    model = ORDERABLE_COLLECTIONS.get(collection) if isinstance(collection, str) else None
    if model is None:
        raise InvalidArgumentError(
            f"Colección no ordenable: {collection!r}",
            extra={"collection": str(collection)},
        )
    return model.__table__  # type: ignore[attr-defined]


__all__ = ["ORDERABLE_COLLECTIONS", "resolve_collection_table"]
