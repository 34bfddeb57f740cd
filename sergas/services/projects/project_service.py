"""项目 Service.

读路径把 `categorias` 中的工种 ID 解析为 slug, 写路径复用可排序集合的通用编排.
"""

from __future__ import annotations

from typing import Any

from sergas.models.project import Project
from sergas.repositories.projects_repository import ProjectsRepository
from sergas.repositories.work_types_repository import WorkTypesRepository
from sergas.schemas.projects import ProjectCreatePayload, ProjectUpdatePayload
from sergas.services.catalog.orderable_write_service import OrderableWriteService
from sergas.utils.json_columns import resolve_slugs


class ProjectService(OrderableWriteService):
    """项目服务."""

    model = Project
    create_schema = ProjectCreatePayload
    update_schema = ProjectUpdatePayload
    module = "proyectos"
    list_columns = Project.LIST_COLUMNS

    def __init__(
        self,
        repository: ProjectsRepository | None = None,
        work_types_repository: WorkTypesRepository | None = None,
    ) -> None:
        super().__init__(repository or ProjectsRepository())
        self._work_types = work_types_repository or WorkTypesRepository()

    def list_items(self) -> list[dict[str, Any]]:
        slug_map = self._work_types.fetch_slug_map()
        return [self.serialize(project, slug_map=slug_map) for project in self._repository.list_ordered()]

    def serialize(self, entity: Any, *, slug_map: dict[int, str] | None = None) -> dict[str, Any]:
        if slug_map is None:
            slug_map = self._work_types.fetch_slug_map()
        payload = entity.to_dict()
        payload["categoria_slugs"] = resolve_slugs(payload["categorias"], slug_map)
        return payload
