"""排序列写入 Repository.

职责:
- 在调用方提供的 Connection 上执行单条位置更新
- 不开启/提交事务,事务边界由排序服务统一控制
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import update

if TYPE_CHECKING:
    from sqlalchemy import Connection, Table

    from sergas.types import EntityId

POSITION_COLUMN = "orden"


class OrderingRepository:
    """排序列写入 Repository."""

    def __init__(self, position_column: str = POSITION_COLUMN) -> None:
        self._position_column = position_column

    def update_position(self, connection: Connection, table: Table, entity_id: EntityId, position: int) -> int:
        """把指定行的排序列更新为 position,返回匹配行数(0 表示行不存在)."""
        statement = (
            update(table)
            .where(table.c.id == entity_id)
            .values({self._position_column: position})
        )
        result = connection.execute(statement)
        return int(result.rowcount or 0)
