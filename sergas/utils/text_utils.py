"""文本处理工具."""

from __future__ import annotations

import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """把名称转换为 URL slug.

    去掉重音符号、转小写,非字母数字字符折叠为单个 "-".

    Example:
        >>> slugify("Construcción Civil")
        'construccion-civil'

    """
    normalized = unicodedata.normalize("NFKD", value or "")
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_SLUG_CHARS.sub("-", ascii_text).strip("-")


__all__ = ["slugify"]
