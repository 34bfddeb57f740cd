"""多个 schema 共用的字段解析."""

from __future__ import annotations

import re
from typing import Any

from sergas.types.converters import as_bool
from sergas.utils.json_columns import normalize_list_column, normalize_mapping_column

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_list_field(value: Any) -> list:
    return normalize_list_column(value)


def parse_mapping_field(value: Any) -> dict:
    return normalize_mapping_column(value)


def parse_bool_field(value: Any, *, default: bool) -> bool:
    if value is None:
        return default
    return as_bool(value, default=default)


def validate_email(value: str) -> str:
    cleaned = value.strip().lower()
    if not _EMAIL_PATTERN.match(cleaned):
        raise ValueError("Email inválido")
    return cleaned
