"""工种 Repository."""

from __future__ import annotations

from sergas import db
from sergas.models.work_type import WorkType
from sergas.repositories.orderable_repository import OrderableRepository


class WorkTypesRepository(OrderableRepository[WorkType]):
    """工种查询 Repository."""

    def __init__(self) -> None:
        super().__init__(WorkType)

    def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool:
        query = WorkType.query.filter_by(slug=slug)
        if exclude_id is not None:
            query = query.filter(WorkType.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def fetch_slug_map() -> dict[int, str]:
        """返回 {工种 ID: slug},供项目分类解析使用."""
        rows = db.session.query(WorkType.id, WorkType.slug).all()
        return {int(row_id): str(slug) for row_id, slug in rows if slug}
