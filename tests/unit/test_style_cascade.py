from __future__ import annotations

import pytest

from tablegrid.backends.memory import MemoryBackend
from tablegrid.errors import BackendError
from tablegrid.model import BorderConfig, BorderSide, CellConfig, RowConfig, StyleConfig
from tablegrid.style import HEADER_STYLE, StyleResolver, resolve_style

from tests.helpers import calls_named, leaf, make_table

COLUMN_STYLE = StyleConfig(italic=True)
ROW_STYLE = StyleConfig(text_color="#FF0000")
CELL_STYLE = StyleConfig(bold=True, background_color="#FFFF00")


def _rows(count: int) -> list[dict[str, int]]:
    return [{"a": n, "b": n, "c": n} for n in range(count)]


def test_style_precedence() -> None:
    column = leaf("a", style=COLUMN_STYLE)
    table = make_table(
        _rows(3),
        [column],
        row_configs={1: RowConfig(style=ROW_STYLE), 2: RowConfig(style=ROW_STYLE)},
        cell_configs={1: {2: CellConfig(style=CELL_STYLE)}},
    )
    assert resolve_style(table, column, 1, 0) is COLUMN_STYLE
    assert resolve_style(table, column, 1, 1) is ROW_STYLE
    assert resolve_style(table, column, 1, 2) is CELL_STYLE


def test_unstyled_cell_gets_nothing(backend) -> None:
    table = make_table(_rows(2), [leaf("a")])
    StyleResolver(table, backend).render()
    assert backend.styles == {}


def test_cell_styles_applied_per_cell(backend) -> None:
    table = make_table(
        _rows(3),
        [leaf("a", style=COLUMN_STYLE), leaf("b")],
        row_configs={1: RowConfig(style=ROW_STYLE)},
        cell_configs={1: {2: CellConfig(style=CELL_STYLE)}},
    )
    StyleResolver(table, backend).render()

    assert backend.styles[(1, 1)] is COLUMN_STYLE
    assert backend.styles[(1, 2)] is ROW_STYLE
    assert backend.styles[(2, 2)] is ROW_STYLE
    assert backend.styles[(1, 3)] is CELL_STYLE
    assert (2, 1) not in backend.styles


def test_column_border_outlines_the_data_block(backend) -> None:
    table = make_table(_rows(3), [leaf("a", border=BorderConfig.boundaries("thin"))])
    StyleResolver(table, backend).render()

    assert set(backend.borders[(1, 1)]) == {"left", "right", "top"}
    assert set(backend.borders[(1, 2)]) == {"left", "right"}
    assert set(backend.borders[(1, 3)]) == {"left", "right", "bottom"}


def test_column_inner_border_boxes_every_cell(backend) -> None:
    table = make_table(_rows(3), [leaf("a", border=BorderConfig.boundaries("dashed", inner=True))])
    StyleResolver(table, backend).render()

    for row in (1, 2, 3):
        assert set(backend.borders[(1, row)]) == {"left", "right", "top", "bottom"}
        assert backend.border_style(1, row, "top") == "dashed"


def test_row_border_outlines_the_row(backend) -> None:
    table = make_table(
        _rows(2),
        [leaf("a"), leaf("b"), leaf("c")],
        row_configs={0: RowConfig(border=BorderConfig.boundaries("medium"))},
    )
    StyleResolver(table, backend).render()

    assert set(backend.borders[(1, 1)]) == {"left", "top", "bottom"}
    assert set(backend.borders[(2, 1)]) == {"top", "bottom"}
    assert set(backend.borders[(3, 1)]) == {"right", "top", "bottom"}
    assert (1, 2) not in backend.borders


def test_cell_border_overrides_column_border(backend) -> None:
    table = make_table(
        _rows(5),
        [leaf("a"), leaf("b"), leaf("c", border=BorderConfig.boundaries("thin"))],
        cell_configs={3: {4: CellConfig(border=BorderConfig(left=BorderSide("thick")))}},
    )
    StyleResolver(table, backend).render()

    assert backend.border_style(3, 5, "left") == "thick"
    assert backend.border_style(3, 5, "right") == "thin"
    assert backend.border_style(3, 5, "bottom") == "thin"
    assert backend.border_style(3, 4, "left") == "thin"


def test_row_border_overrides_column_border(backend) -> None:
    table = make_table(
        _rows(1),
        [leaf("a", border=BorderConfig.boundaries("thin"))],
        row_configs={0: RowConfig(border=BorderConfig(top=BorderSide("double")))},
    )
    StyleResolver(table, backend).render()
    assert backend.border_style(1, 1, "top") == "double"
    assert backend.border_style(1, 1, "left") == "thin"


def test_invisible_border_is_not_applied(backend) -> None:
    none = BorderSide("none")
    table = make_table(_rows(2), [leaf("a", border=BorderConfig(left=none, right=none))])
    StyleResolver(table, backend).render()
    assert backend.borders == {}


def test_cell_border_outside_grid_is_ignored(backend) -> None:
    table = make_table(
        _rows(2),
        [leaf("a")],
        cell_configs={
            4: {0: CellConfig(border=BorderConfig.boundaries("thin"))},
            1: {7: CellConfig(border=BorderConfig.boundaries("thin"))},
        },
    )
    StyleResolver(table, backend).render()
    assert backend.borders == {}


def test_header_styles(backend, two_level_columns) -> None:
    table = make_table(_rows(1), two_level_columns, write_header=True)
    StyleResolver(table, backend).render()

    assert calls_named(backend, "apply_range_style") == [(1, 1, 3, 2)]
    for col in (1, 2, 3):
        assert backend.border_style(col, 2, "bottom") == "thin"
        assert backend.styles[(col, 1)] == HEADER_STYLE
    assert HEADER_STYLE.bold
    assert HEADER_STYLE.alignment == "center"
    assert (1, 3) not in backend.styles


def test_header_range_style_falls_back_to_cells(two_level_columns) -> None:
    class NoRangeStyle(MemoryBackend):
        def apply_range_style(self, start_col, start_row, end_col, end_row, style):
            raise BackendError("range styles unsupported")

    backend = NoRangeStyle()
    warnings: list[str] = []
    table = make_table([], two_level_columns, write_header=True)
    StyleResolver(table, backend, warnings=warnings).render()

    assert len(calls_named(backend, "apply_cell_style")) == 6
    assert backend.styles[(3, 2)] == HEADER_STYLE
    assert any("range style" in message for message in warnings)


def test_backend_failure_on_one_cell_is_logged(caplog) -> None:
    class Flaky(MemoryBackend):
        def apply_cell_style(self, col, row, style):
            if (col, row) == (1, 2):
                raise BackendError("locked cell")
            super().apply_cell_style(col, row, style)

    backend = Flaky()
    warnings: list[str] = []
    table = make_table(_rows(3), [leaf("a", style=COLUMN_STYLE)])

    with caplog.at_level("WARNING", logger="tablegrid"):
        StyleResolver(table, backend, warnings=warnings).render()

    assert (1, 1) in backend.styles
    assert (1, 3) in backend.styles
    assert (1, 2) not in backend.styles
    assert warnings == ["Failed to apply cell style at (1,2): locked cell"]
    assert "locked cell" in caplog.text


def test_borders_applied_after_styles(backend) -> None:
    table = make_table(
        _rows(1),
        [leaf("a", style=COLUMN_STYLE, border=BorderConfig.boundaries("thin"))],
    )
    StyleResolver(table, backend).render()
    names = [name for name, _ in backend.calls]
    assert names.index("apply_cell_style") < names.index("apply_cell_border")


def test_unknown_border_style_rejected() -> None:
    with pytest.raises(ValueError):
        BorderSide("wavy")


def test_row_inner_border_boxes_every_cell(backend) -> None:
    table = make_table(
        _rows(2),
        [leaf("a"), leaf("b"), leaf("c")],
        row_configs={0: RowConfig(border=BorderConfig.boundaries("thin", inner=True))},
    )
    StyleResolver(table, backend).render()

    for col in (1, 2, 3):
        assert set(backend.borders[(col, 1)]) == {"left", "right", "top", "bottom"}
    assert (2, 2) not in backend.borders


def test_cell_border_overrides_column_and_row_borders(backend) -> None:
    thick = BorderSide("thick")
    table = make_table(
        _rows(5),
        [leaf("a"), leaf("b"), leaf("c", border=BorderConfig.boundaries("thin"))],
        row_configs={4: RowConfig(border=BorderConfig.boundaries("medium"))},
        cell_configs={3: {4: CellConfig(border=BorderConfig(left=thick, top=thick))}},
    )
    StyleResolver(table, backend).render()

    assert backend.border_style(3, 5, "left") == "thick"
    assert backend.border_style(3, 5, "top") == "thick"
    assert backend.border_style(3, 5, "right") == "medium"
    assert backend.border_style(3, 5, "bottom") == "medium"
    assert backend.border_style(3, 4, "left") == "thin"
