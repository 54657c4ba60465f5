from __future__ import annotations

from typing import Any, Mapping

from .errors import FieldLookupError


def split_key(key: str) -> list[str]:
    return [part.strip() for part in key.split(".")]


def lookup(row: Mapping[str, Any], key: str) -> Any:
    parts = split_key(key)
    if not key or not parts[0]:
        raise FieldLookupError(key, "empty field name")

    current: Any = row
    for depth, part in enumerate(parts):
        if not isinstance(current, Mapping):
            raise FieldLookupError(key, f"malformed structure at {'.'.join(parts[:depth])}")
        if part not in current:
            raise FieldLookupError(key, "field not found")
        current = current[part]
    return current
