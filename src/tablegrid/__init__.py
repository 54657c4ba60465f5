from .api import render_table, render_table_csv, render_table_html, render_table_xlsx
from .errors import BackendError, FieldLookupError, RenderPhaseError, TableGridError, ValueProcessingError
from .model import (
    BorderConfig,
    BorderSide,
    CellConfig,
    Column,
    ColumnTree,
    MergeConfig,
    RenderOptions,
    RenderResult,
    RowConfig,
    StyleConfig,
    Table,
)
from .render import TableRenderer

__all__ = [
    "BackendError",
    "BorderConfig",
    "BorderSide",
    "CellConfig",
    "Column",
    "ColumnTree",
    "FieldLookupError",
    "MergeConfig",
    "RenderOptions",
    "RenderPhaseError",
    "RenderResult",
    "RowConfig",
    "StyleConfig",
    "Table",
    "TableGridError",
    "TableRenderer",
    "render_table",
    "render_table_csv",
    "render_table_html",
    "render_table_xlsx",
]
