from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .errors import ValueProcessingError

_PASSTHROUGH = (str, bool, int, float, Decimal)


def format_value(value: Any, fmt: str) -> Any:
    if isinstance(value, (datetime, date, time)):
        if not fmt:
            return value
        try:
            return value.strftime(fmt)
        except (ValueError, TypeError) as exc:
            raise ValueProcessingError(f"Cannot format {value!r} with {fmt!r}: {exc}") from exc
    return value


def join_list(values: list[Any] | tuple[Any, ...], fmt: str, separator: str) -> str:
    parts: list[str] = []
    for item in values:
        if fmt:
            item = format_value(item, fmt)
        parts.append(_text(item))
    return separator.join(parts)


def process_value(value: Any, fmt: str = "", list_separator: str = "") -> Any:
    if value is None or isinstance(value, _PASSTHROUGH):
        return value
    if isinstance(value, (list, tuple)):
        if list_separator:
            return join_list(value, fmt, list_separator)
        return str(list(value))
    if isinstance(value, (datetime, date, time)):
        return format_value(value, fmt)
    return str(value)


def is_empty(value: Any) -> bool:
    return value is None or _text(value).strip() == ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def comparable_text(value: Any) -> str:
    return _text(value).strip()
