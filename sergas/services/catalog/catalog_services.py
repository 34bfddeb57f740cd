"""工种、统计数字、知识库写服务."""

from __future__ import annotations

from typing import Any

from sergas.errors import ConflictError, ValidationError
from sergas.models.knowledge_entry import KnowledgeEntry
from sergas.models.statistic import Statistic
from sergas.models.work_type import WorkType
from sergas.repositories.work_types_repository import WorkTypesRepository
from sergas.schemas.catalog import (
    KnowledgeCreatePayload,
    KnowledgeUpdatePayload,
    StatisticCreatePayload,
    StatisticUpdatePayload,
    WorkTypeCreatePayload,
    WorkTypeUpdatePayload,
)
from sergas.services.catalog.orderable_write_service import OrderableWriteService
from sergas.utils.text_utils import slugify


class WorkTypeService(OrderableWriteService):
    """工种服务: slug 唯一, 缺省时由 nombre 推导."""

    model = WorkType
    create_schema = WorkTypeCreatePayload
    update_schema = WorkTypeUpdatePayload
    module = "tipos_trabajo"

    def __init__(self, repository: WorkTypesRepository | None = None) -> None:
        self._work_types = repository or WorkTypesRepository()
        super().__init__(self._work_types)

    def _prepare_values(self, values: dict[str, Any], *, entity: Any | None) -> dict[str, Any]:
        if entity is None and not values.get("slug"):
            values["slug"] = slugify(values.get("nombre") or "")
        elif entity is not None and "slug" in values and not values["slug"]:
            values.pop("slug")

        slug = values.get("slug")
        if entity is None and not slug:
            raise ValidationError("No se pudo generar un slug a partir del nombre")
        if slug and self._work_types.slug_exists(slug, exclude_id=getattr(entity, "id", None)):
            raise ConflictError(f"El slug {slug} ya existe", extra={"slug": slug})
        return values


class StatisticService(OrderableWriteService):
    """首页统计数字服务."""

    model = Statistic
    create_schema = StatisticCreatePayload
    update_schema = StatisticUpdatePayload
    module = "estadisticas"


class KnowledgeService(OrderableWriteService):
    """智能助手知识库服务."""

    model = KnowledgeEntry
    create_schema = KnowledgeCreatePayload
    update_schema = KnowledgeUpdatePayload
    module = "knowledge"
    list_columns = ("palabras_clave",)
