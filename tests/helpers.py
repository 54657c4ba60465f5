from __future__ import annotations

from typing import Any

from tablegrid.backends.memory import MemoryBackend
from tablegrid.model import CellConfig, Column, MergeConfig, RowConfig, Table


def leaf(name: str, label: str = "", **kwargs: Any) -> Column:
    return Column(name=name, label=label or name.upper(), **kwargs)


def group(label: str, *children: Column) -> Column:
    return Column(label=label, children=list(children))


def vmerge(*conditions: str) -> MergeConfig:
    return MergeConfig(vertical=frozenset(conditions))


def hmerge(*conditions: str) -> MergeConfig:
    return MergeConfig(horizontal=frozenset(conditions))


def make_table(
    rows: list[dict[str, Any]],
    columns: list[Column],
    *,
    row_configs: dict[int, RowConfig] | None = None,
    cell_configs: dict[int, dict[int, CellConfig]] | None = None,
    write_header: bool = False,
    **kwargs: Any,
) -> Table:
    return Table(
        rows=rows,
        columns=columns,
        row_configs=row_configs or {},
        cell_configs=cell_configs or {},
        write_header=write_header,
        **kwargs,
    )


def merge_refs(backend: MemoryBackend) -> list[str]:
    return [rng.ref for rng in backend.merges]


def calls_named(backend: MemoryBackend, name: str) -> list[tuple[Any, ...]]:
    return [args for call, args in backend.calls if call == name]
