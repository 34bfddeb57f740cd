"""项目 Repository."""

from __future__ import annotations

from sergas.models.project import Project
from sergas.repositories.orderable_repository import OrderableRepository


class ProjectsRepository(OrderableRepository[Project]):
    """项目查询 Repository."""

    def __init__(self) -> None:
        super().__init__(Project)
