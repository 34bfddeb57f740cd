"""批量排序服务.

把客户端提交的 ID 序列写成 `orden = base_offset + 下标`:
- 整批在同一连接、同一事务中执行,任一语句失败则整体回滚并抛出 PersistenceError;
- 同一集合的排序请求在进程内串行化,后提交者生效;
- 事务总时长受 transaction_timeout 约束,在每条语句前检查.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from sergas.errors import InvalidArgumentError, NotFoundError, PersistenceError
from sergas.repositories.ordering_repository import OrderingRepository
from sergas.services.ordering.collections import resolve_collection_table
from sergas.utils.structlog_config import get_db_logger

if TYPE_CHECKING:
    from sqlalchemy import Engine, Table

    from sergas.types import EntityId

DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0
DEFAULT_TRANSACTION_TIMEOUT_SECONDS = 10.0


class CollectionLockRegistry:
    """按集合名分配进程内互斥锁."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, collection: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(collection)
            if lock is None:
                lock = threading.Lock()
                self._locks[collection] = lock
            return lock


class ReorderService:
    """批量排序服务.

    Args:
        engine: SQLAlchemy Engine,每次排序从连接池取出一条专用连接.
        lock_timeout: 等待集合锁的最长秒数.
        transaction_timeout: 单次排序事务的最长秒数.
        strict_ids: 为 True 时,任何未匹配到行的 ID 都会导致回滚并抛出 NotFoundError.
        repository: 位置写入 Repository,测试可注入.
        clock: 单调时钟,测试可注入.

    """

    def __init__(
        self,
        engine: Engine,
        *,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        transaction_timeout: float = DEFAULT_TRANSACTION_TIMEOUT_SECONDS,
        strict_ids: bool = False,
        repository: OrderingRepository | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._engine = engine
        self._lock_timeout = lock_timeout
        self._transaction_timeout = transaction_timeout
        self._strict_ids = strict_ids
        self._repository = repository or OrderingRepository()
        self._clock = clock
        self._locks = CollectionLockRegistry()
        self._logger = get_db_logger()

    def reorder(self, collection: str, ids: Sequence[EntityId], base_offset: int = 0) -> None:
        """按 ids 顺序写入排序位置.

        Args:
            collection: 集合名,如 "proyectos".
            ids: 目标顺序的 ID 序列,允许重复(最后一次出现生效).
            base_offset: 起始位置,0 或 1.

        Raises:
            InvalidArgumentError: 集合名、ids 或 base_offset 不合法,此时不会发生任何写入.
            NotFoundError: strict 模式下存在未匹配的 ID(已回滚).
            PersistenceError: 存储失败、事务超时或等待锁超时(已回滚).

        """
        table = resolve_collection_table(collection)
        normalized_ids = self._normalize_ids(ids)
        if isinstance(base_offset, bool) or not isinstance(base_offset, int):
            raise InvalidArgumentError(
                "base_offset debe ser un entero",
                extra={"base_offset": repr(base_offset)},
            )

        if not normalized_ids:
            self._logger.debug("排序请求为空,跳过", collection=collection)
            return

        lock = self._locks.get(collection)
        if not lock.acquire(timeout=self._lock_timeout):
            self._logger.warning(
                "等待排序锁超时",
                collection=collection,
                lock_timeout=self._lock_timeout,
            )
            raise PersistenceError(
                message_key="DATABASE_TIMEOUT",
                extra={"collection": collection, "storage_error": "lock acquisition timed out"},
            )
        try:
            missing_ids = self._apply(collection, table, normalized_ids, base_offset)
        finally:
            lock.release()

        if missing_ids:
            self._logger.warning(
                "排序请求包含不存在的 ID,已忽略",
                collection=collection,
                missing_ids=missing_ids,
            )
        self._logger.info(
            "排序已提交",
            collection=collection,
            count=len(normalized_ids),
            base_offset=base_offset,
        )

    def _apply(
        self,
        collection: str,
        table: Table,
        ids: list[EntityId],
        base_offset: int,
    ) -> list[EntityId]:
        deadline = self._clock() + self._transaction_timeout
        missing_ids: list[EntityId] = []
        try:
            # engine.begin(): 正常退出提交,异常退出回滚,连接总会归还连接池
            with self._engine.begin() as connection:
                for position, entity_id in enumerate(ids, start=base_offset):
                    if self._clock() > deadline:
                        raise PersistenceError(
                            message_key="DATABASE_TIMEOUT",
                            extra={
                                "collection": collection,
                                "storage_error": "transaction deadline exceeded",
                                "processed": position - base_offset,
                            },
                        )
                    matched = self._repository.update_position(connection, table, entity_id, position)
                    if matched:
                        continue
                    if self._strict_ids:
                        raise NotFoundError(
                            f"Registro {entity_id} no encontrado en {collection}",
                            extra={"collection": collection, "entity_id": str(entity_id)},
                        )
                    missing_ids.append(entity_id)
        except SQLAlchemyError as exc:
            self._logger.error(
                "排序事务失败,已回滚",
                collection=collection,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            raise PersistenceError(
                extra={"collection": collection, "storage_error": str(exc)},
            ) from exc
        return missing_ids

    @staticmethod
    def _normalize_ids(ids: object) -> list[EntityId]:
        if isinstance(ids, (str, bytes, bytearray, Mapping)) or not isinstance(ids, Sequence):
            raise InvalidArgumentError(
                "ids debe ser una lista de identificadores",
                extra={"ids_type": type(ids).__name__},
            )
        normalized: list[EntityId] = []
        for index, item in enumerate(ids):
            if isinstance(item, bool) or not isinstance(item, (int, str)):
                raise InvalidArgumentError(
                    "ids contiene un identificador inválido",
                    extra={"index": index, "item_type": type(item).__name__},
                )
            if isinstance(item, str):
                stripped = item.strip()
                # 主键均为整数; isdigit() 会放过 "²" 这类 int() 无法解析的字符
                if not stripped.isdecimal():
                    raise InvalidArgumentError(
                        "ids contiene un identificador inválido",
                        extra={"index": index, "item": item[:32]},
                    )
                normalized.append(int(stripped))
            else:
                normalized.append(item)
        return normalized


__all__ = ["CollectionLockRegistry", "ReorderService"]
