"""表单/JSON 数据类型转换工具.

提供稳定的转换函数,将 `PayloadValue` 映射为具体的 bool 类型,
便于 schema 层书写宽松的布尔解析.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sergas.types.structures import PayloadValue

_STRING_LIKE_TYPES = (str, bytes, bytearray)
_TRUE_VALUES = frozenset({"true", "1", "yes", "on", "si", "sí"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def _unwrap_sequence(value: PayloadValue | None) -> PayloadValue | None:
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        if not value:
            return None
        return value[-1]
    return value


def as_bool(value: PayloadValue | None, *, default: bool = False) -> bool:
    """把表单/JSON 值解析为 bool, 无法识别时返回 default(多值取最后一个)."""
    base = _unwrap_sequence(value)
    if base is None:
        return default
    if isinstance(base, bool):
        return base
    if isinstance(base, (int, float)):
        return bool(base)
    if isinstance(base, str):
        normalized = base.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        return default
    return default
