"""可排序集合写操作 Service 基类.

职责:
- 处理创建/更新/删除编排, payload 经 schema 校验
- 列表型字段写库前统一序列化为 JSON 文本
- 新建行默认排在集合末尾
- 调用 repository 执行 add/delete/flush, 不返回 Response、不 commit
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from sergas.errors import NotFoundError
from sergas.repositories.orderable_repository import OrderableRepository
from sergas.schemas.validation import validate_or_raise
from sergas.utils.json_columns import dump_list_column
from sergas.utils.structlog_config import log_info

if TYPE_CHECKING:
    from sergas.schemas.base import PayloadSchema


class OrderableWriteService:
    """可排序集合的通用 CRUD 服务.

    子类声明 `model`、`create_schema`、`update_schema`、`module`,
    以及需要 JSON 序列化的 `list_columns`.
    """

    model: ClassVar[type]
    create_schema: ClassVar[type[PayloadSchema]]
    update_schema: ClassVar[type[PayloadSchema]]
    module: ClassVar[str]
    list_columns: ClassVar[tuple[str, ...]] = ()

    def __init__(self, repository: OrderableRepository | None = None) -> None:
        self._repository = repository or OrderableRepository(self.model)

    def list_items(self) -> list[dict[str, Any]]:
        return [self.serialize(entity) for entity in self._repository.list_ordered()]

    def get_item(self, entity_id: int) -> dict[str, Any]:
        return self.serialize(self._get_or_raise(entity_id))

    def serialize(self, entity: Any) -> dict[str, Any]:
        return entity.to_dict()

    def create(self, payload: object, *, base_offset: int = 0, operator_id: int | None = None) -> Any:
        """校验 payload 并创建实体; 未指定 orden 时排在末尾."""
        parsed = validate_or_raise(self.create_schema, payload or {})
        values = self._prepare_values(parsed.model_dump(), entity=None)
        if values.get("orden") is None:
            values["orden"] = self._repository.next_position(base_offset)

        entity = self.model()
        self._assign(entity, values)
        self._repository.add(entity)
        log_info(f"{self.module}创建成功", module=self.module, user_id=operator_id, entity_id=entity.id)
        return entity

    def update(self, entity_id: int, payload: object, *, operator_id: int | None = None) -> Any:
        """部分更新: 只写入客户端显式提交的字段."""
        entity = self._get_or_raise(entity_id)
        parsed = validate_or_raise(self.update_schema, payload or {})
        values = self._prepare_values(parsed.changes(), entity=entity)
        if "orden" in values and values["orden"] is None:
            values.pop("orden")

        self._assign(entity, values)
        self._repository.add(entity)
        log_info(
            f"{self.module}更新成功",
            module=self.module,
            user_id=operator_id,
            entity_id=entity.id,
            fields=sorted(values),
        )
        return entity

    def delete(self, entity_id: int, *, operator_id: int | None = None) -> None:
        entity = self._get_or_raise(entity_id)
        self._repository.delete(entity)
        log_info(f"{self.module}删除成功", module=self.module, user_id=operator_id, entity_id=entity_id)

    def _prepare_values(self, values: dict[str, Any], *, entity: Any | None) -> dict[str, Any]:
        """子类钩子: 写入前补充/校验字段."""
        return values

    def _assign(self, entity: Any, values: dict[str, Any]) -> None:
        for field, value in values.items():
            if field in self.list_columns:
                value = dump_list_column(value)
            setattr(entity, field, value)

    def _get_or_raise(self, entity_id: int) -> Any:
        entity = self._repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(extra={"module": self.module, "entity_id": entity_id})
        return entity
