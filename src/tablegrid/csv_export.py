from __future__ import annotations

import csv
import io
from typing import Sequence

from .data import lookup
from .errors import FieldLookupError, ValueProcessingError
from .model import Column, Table
from .values import process_value


def header_levels(table: Table) -> list[list[str]]:
    if not table.header_rows:
        return []
    total = table.columns.leaf_count()
    levels = [[""] * total for _ in range(table.header_rows)]
    _fill_headers(levels, table.columns.roots, 0, 0)
    return levels


def _fill_headers(levels: list[list[str]], columns: Sequence[Column], level: int, start: int) -> int:
    col = start
    for column in columns:
        levels[level][col] = column.header_label
        if column.is_leaf:
            col += 1
            continue
        _fill_headers(levels, column.children, level + 1, col)
        col += column.leaf_count()
    return col


def table_records(table: Table) -> list[list[str]]:
    records: list[list[str]] = []
    leaves = table.columns.leaves()
    for item in table.visible_rows():
        record: list[str] = []
        for column in leaves:
            try:
                value = lookup(item, column.name)
            except FieldLookupError:
                record.append("")
                continue
            try:
                processed = process_value(value, column.format, table.list_separator)
            except ValueProcessingError as exc:
                raise ValueProcessingError(f"Error processing value for column {column.header_label}: {exc}") from exc
            record.append("" if processed is None else str(processed))
        records.append(record)
    return records


def render_csv(table: Table, *, delimiter: str = ",") -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n")
    writer.writerows(header_levels(table))
    writer.writerows(table_records(table))
    return buffer.getvalue()
