from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from .backends.base import TableBackend
from .backends.html import HtmlBackend
from .backends.xlsx import XlsxBackend
from .csv_export import render_csv
from .model import RenderOptions, RenderResult, Table
from .render import TableRenderer


def render_table(
    table: Table,
    backend: TableBackend,
    *,
    options: RenderOptions | None = None,
    logger: logging.Logger | None = None,
) -> RenderResult:
    return TableRenderer(options, logger=logger).render(table, backend)


def render_table_html(
    table: Table,
    *,
    options: RenderOptions | None = None,
    logger: logging.Logger | None = None,
) -> str:
    opts = options or RenderOptions()
    backend = HtmlBackend(list_separator=table.list_separator)
    result = render_table(table, backend, options=opts, logger=logger)
    return backend.to_html(
        title=opts.html_title,
        header_rows=result.header_rows,
        min_rows=result.data_start_row + result.row_count - 1,
        min_cols=result.column_count,
    )


def render_table_xlsx(
    table: Table,
    target: str | Path | IO[bytes],
    *,
    options: RenderOptions | None = None,
    logger: logging.Logger | None = None,
) -> RenderResult:
    opts = options or RenderOptions()
    backend = XlsxBackend(sheet_name=opts.sheet_name, list_separator=table.list_separator)
    result = render_table(table, backend, options=opts, logger=logger)
    backend.save(target)
    return result


def render_table_csv(table: Table, *, delimiter: str = ",") -> str:
    return render_csv(table, delimiter=delimiter)
