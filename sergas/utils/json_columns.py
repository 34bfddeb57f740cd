"""列表型/字典型 JSON 列的宽松解析.

历史数据中同一列可能同时存在多种编码:
- 早期存单个 ID(`3` 或 `"3"`),后来改为 JSON 数组文本(`"[3,5]"`);
- 偶有手工写入的非法 JSON(`"[abc"`).

本模块只负责把原始列值归一化为 list/dict,从不抛异常,
与存储层、HTTP 层完全解耦,便于单独测试.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sergas.types import ListColumnItem

_JSON_ARRAY_OPENER = "["
_JSON_OBJECT_OPENER = "{"


def normalize_list_column(raw: object) -> list:
    """把列表型列的原始值归一化为 list.

    判定顺序不可调整:
    1. None / "" -> []
    2. 已经是 list/tuple -> 原样返回(tuple 转 list)
    3. 数字 -> [数字]
    4. 不以 "[" 开头的字符串 -> [原字符串]("3" 仍为字符串 "3")
    5. 其余按 JSON 解析,得到 list 则返回,否则 []

    Args:
        raw: 数据库列原始值,形状未知.

    Returns:
        list: 归一化后的列表,永不抛异常.

    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return []

    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    if isinstance(raw, tuple):
        return list(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return [raw]
    if not isinstance(raw, str):
        return []
    if not raw.lstrip().startswith(_JSON_ARRAY_OPENER):
        return [raw]

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return []
    return parsed if isinstance(parsed, list) else []


def resolve_slugs(ids: object, lookup: Mapping[int, str]) -> list[str]:
    """把分类 ID 列表映射为 slug 列表,查不到的 ID 静默丢弃.

    Args:
        ids: 已解析的 ID 序列(也接受原始列值,内部先做归一化).
        lookup: ID -> slug 映射.

    Returns:
        list[str]: 按输入顺序排列的 slug.

    Example:
        >>> resolve_slugs([1, 2, 99], {1: "a", 2: "b"})
        ['a', 'b']

    """
    slugs: list[str] = []
    for item in normalize_list_column(ids):
        key = _as_lookup_key(item)
        if key is None:
            continue
        slug = lookup.get(key)
        if slug:
            slugs.append(slug)
    return slugs


def _as_lookup_key(item: object) -> int | None:
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return item
    if isinstance(item, float):
        return int(item) if item.is_integer() else None
    if isinstance(item, str):
        stripped = item.strip()
        # isdigit() 也接受 "²" 这类 int() 无法解析的字符
        if stripped.isdecimal():
            return int(stripped)
    return None


def dump_list_column(value: object) -> str:
    """写库前把列表型字段序列化为 JSON 文本(空值写 "[]")."""
    items: list[ListColumnItem] = normalize_list_column(value)
    return json.dumps(items, ensure_ascii=False, separators=(",", ":"))


def normalize_mapping_column(raw: object) -> dict:
    """把字典型列(如 permisos、redes)归一化为 dict,非法值一律返回 {}."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return {}

    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str) or not raw.lstrip().startswith(_JSON_OBJECT_OPENER):
        return {}

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def dump_mapping_column(value: object) -> str:
    """写库前把字典型字段序列化为 JSON 文本(空值写 "{}")."""
    return json.dumps(normalize_mapping_column(value), ensure_ascii=False, separators=(",", ":"))


__all__ = [
    "dump_list_column",
    "dump_mapping_column",
    "normalize_list_column",
    "normalize_mapping_column",
    "resolve_slugs",
]
