"""类型别名集中导出."""

from sergas.types.structures import (
    ContextDict,
    ContextMapping,
    EntityId,
    JsonDict,
    JsonValue,
    ListColumnItem,
    LoggerExtra,
    PayloadValue,
    ScalarValue,
    StructlogEventDict,
)

__all__ = [
    "ContextDict",
    "ContextMapping",
    "EntityId",
    "JsonDict",
    "JsonValue",
    "ListColumnItem",
    "LoggerExtra",
    "PayloadValue",
    "ScalarValue",
    "StructlogEventDict",
]
