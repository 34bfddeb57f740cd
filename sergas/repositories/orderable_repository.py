"""可排序集合的通用 Repository.

职责:
- 负责 Query 组装与数据库读取(read)
- 负责写操作的数据落库(add/delete/flush)(write)
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sergas import db

ModelT = TypeVar("ModelT")


class OrderableRepository(Generic[ModelT]):
    """按 `orden` 排序的集合 Repository(项目、工种、统计、知识库共用)."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    @property
    def _model(self) -> Any:
        return cast(Any, self.model)

    def list_ordered(self) -> list[ModelT]:
        # 所有集合(含 assistant_knowledge)统一按 orden 升序,与 PUT /orden 写入的位置一致
        return list(self._model.query.order_by(self._model.orden.asc(), self._model.id.asc()).all())

    def get_by_id(self, entity_id: int) -> ModelT | None:
        return cast("ModelT | None", db.session.get(self.model, entity_id))

    def next_position(self, base_offset: int = 0) -> int:
        """新建行的位置: 当前最大值 + 1,集合为空时取 base_offset."""
        current_max = db.session.query(db.func.max(self._model.orden)).scalar()
        if current_max is None:
            return base_offset
        return max(int(current_max) + 1, base_offset)

    def add(self, entity: ModelT) -> ModelT:
        db.session.add(entity)
        db.session.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        db.session.delete(entity)
        db.session.flush()
