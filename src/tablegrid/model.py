from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Literal, Mapping

MergeCondition = Literal["identical", "empty"]
BorderStyle = Literal["none", "thin", "medium", "dashed", "dotted", "thick", "double"]
Alignment = Literal[
    "none",
    "left",
    "center",
    "right",
    "top",
    "middle",
    "bottom",
    "center_middle",
    "left_middle",
    "right_middle",
]

MERGE_CONDITIONS: frozenset[str] = frozenset({"identical", "empty"})
BORDER_STYLES: tuple[str, ...] = ("none", "thin", "medium", "dashed", "dotted", "thick", "double")
BORDER_SIDES: tuple[str, ...] = ("left", "right", "top", "bottom")

_ALIGNMENT_VALUES: dict[str, tuple[str, str]] = {
    "left": ("left", "top"),
    "center": ("center", "top"),
    "right": ("right", "top"),
    "top": ("left", "top"),
    "middle": ("left", "center"),
    "bottom": ("left", "bottom"),
    "center_middle": ("center", "center"),
    "left_middle": ("left", "center"),
    "right_middle": ("right", "center"),
}

_column_ids = itertools.count(1)


def _condition_set(values: Iterable[str]) -> frozenset[str]:
    conditions = frozenset(values)
    unknown = conditions - MERGE_CONDITIONS
    if unknown:
        raise ValueError(f"Unknown merge condition(s): {', '.join(sorted(unknown))}")
    return conditions


@dataclass(slots=True)
class MergeConfig:
    vertical: frozenset[str] = frozenset()
    horizontal: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        self.vertical = _condition_set(self.vertical)
        self.horizontal = _condition_set(self.horizontal)


@dataclass(slots=True)
class BorderSide:
    style: BorderStyle = "thin"
    color: str = "000000"

    def __post_init__(self) -> None:
        if self.style not in BORDER_STYLES:
            raise ValueError(f"Unknown border style: {self.style}")

    @property
    def visible(self) -> bool:
        return self.style != "none"


@dataclass(slots=True)
class BorderConfig:
    left: BorderSide | None = None
    right: BorderSide | None = None
    top: BorderSide | None = None
    bottom: BorderSide | None = None
    inner: BorderConfig | None = None

    @classmethod
    def boundaries(cls, style: BorderStyle, *, color: str = "000000", inner: bool = False) -> BorderConfig:
        side = BorderSide(style=style, color=color)
        config = cls(left=side, right=side, top=side, bottom=side)
        if inner:
            config.inner = cls(left=side, right=side, top=side, bottom=side)
        return config

    def has_borders(self) -> bool:
        return any(side is not None and side.visible for _, side in self._all_sides())

    def sides(self) -> Iterator[tuple[str, BorderSide]]:
        for name, side in self._all_sides():
            if side is not None and side.visible:
                yield name, side

    def _all_sides(self) -> Iterator[tuple[str, BorderSide | None]]:
        yield "left", self.left
        yield "right", self.right
        yield "top", self.top
        yield "bottom", self.bottom


@dataclass(slots=True)
class StyleConfig:
    bold: bool = False
    italic: bool = False
    underline: str = ""
    text_color: str = ""
    background_color: str = ""
    font_size: float | None = None
    font_family: str = ""
    alignment: Alignment = "none"

    def alignment_values(self) -> tuple[str, str] | None:
        if self.alignment == "none":
            return None
        return _ALIGNMENT_VALUES.get(self.alignment, ("left", "top"))

    def has_font(self) -> bool:
        return bool(
            self.bold
            or self.italic
            or self.underline
            or self.text_color
            or self.font_family
            or (self.font_size is not None and self.font_size > 0)
        )


@dataclass(slots=True)
class Column:
    name: str = ""
    label: str = ""
    format: str = ""
    merge: MergeConfig | None = None
    border: BorderConfig | None = None
    style: StyleConfig | None = None
    children: list[Column] = field(default_factory=list)
    column_id: int = field(default_factory=lambda: next(_column_ids), compare=False)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def header_label(self) -> str:
        return self.label or self.name

    def leaf_count(self) -> int:
        if self.is_leaf:
            return 1
        return sum(child.leaf_count() for child in self.children)

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(child.depth() for child in self.children)


def flatten_columns(columns: Iterable[Column]) -> list[Column]:
    leaves: list[Column] = []
    for column in columns:
        if column.is_leaf:
            leaves.append(column)
        else:
            leaves.extend(flatten_columns(column.children))
    return leaves


def max_depth(columns: Iterable[Column]) -> int:
    depth = 1
    for column in columns:
        depth = max(depth, column.depth())
    return depth


class ColumnTree:
    def __init__(self, columns: Iterable[Column] = ()) -> None:
        self.roots: list[Column] = list(columns)
        self._leaves = flatten_columns(self.roots)
        self._depth = max_depth(self.roots)
        self._index_by_id: dict[int, int] = {}
        for index, leaf in enumerate(self._leaves, start=1):
            self._index_by_id.setdefault(leaf.column_id, index)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def __bool__(self) -> bool:
        return bool(self.roots)

    def leaves(self) -> list[Column]:
        return list(self._leaves)

    def indexed_leaves(self) -> list[tuple[int, Column]]:
        return list(enumerate(self._leaves, start=1))

    def leaf_count(self) -> int:
        return len(self._leaves)

    def max_depth(self) -> int:
        return self._depth

    def physical_index(self, column: Column) -> int:
        try:
            return self._index_by_id[column.column_id]
        except KeyError:
            raise KeyError(f"Column is not a leaf of this tree: {column.header_label!r}") from None

    def leaf_at(self, index: int) -> Column:
        if index < 1 or index > len(self._leaves):
            raise IndexError(f"Physical column out of range: {index}")
        return self._leaves[index - 1]


@dataclass(slots=True)
class RowConfig:
    border: BorderConfig | None = None
    merge: MergeConfig | None = None
    style: StyleConfig | None = None
    mergeable: bool = True


@dataclass(slots=True)
class CellConfig:
    border: BorderConfig | None = None
    style: StyleConfig | None = None
    mergeable: bool = True


@dataclass(slots=True)
class Table:
    rows: list[Mapping[str, Any]]
    columns: ColumnTree
    row_configs: dict[int, RowConfig] = field(default_factory=dict)
    cell_configs: dict[int, dict[int, CellConfig]] = field(default_factory=dict)
    write_header: bool = True
    limit: int | None = None
    list_separator: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.columns, ColumnTree):
            self.columns = ColumnTree(self.columns)
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"Row limit must be >= 0, got {self.limit}")

    @property
    def header_rows(self) -> int:
        if self.write_header and self.columns:
            return self.columns.max_depth()
        return 0

    @property
    def data_start_row(self) -> int:
        return self.header_rows + 1

    def visible_rows(self) -> list[Mapping[str, Any]]:
        if self.limit:
            return list(self.rows[: self.limit])
        return list(self.rows)

    def row_config(self, row_index: int) -> RowConfig | None:
        return self.row_configs.get(row_index)

    def cell_config(self, col_index: int, row_index: int) -> CellConfig | None:
        return self.cell_configs.get(col_index, {}).get(row_index)


@dataclass(slots=True)
class RangeRef:
    ref: str
    start_row: int
    start_col: int
    end_row: int
    end_col: int


@dataclass(slots=True)
class RenderOptions:
    sheet_name: str = "Sheet1"
    column_width: float | None = 15.0
    html_title: str = "Table"


@dataclass(slots=True)
class RenderResult:
    header_rows: int = 0
    data_start_row: int = 1
    row_count: int = 0
    column_count: int = 0
    merges: list[RangeRef] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
