#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rendering of HTML tables as padded pipe tables."""

from __future__ import annotations

import re
from typing import Callable

from bs4 import Tag

from editor2md.constants import MIN_TABLE_COLUMN_WIDTH
from editor2md.context import SerializationContext, SerializerState

ChildSerializer = Callable[[Tag, SerializationContext, SerializerState], str]

_CELL_LINE_BREAK = re.compile(r"\s*\n\s*")


def direct_cells(row: Tag) -> list[Tag]:
    return row.find_all(["th", "td"], recursive=False)


def _has_header_cell(row: Tag) -> bool:
    return any(cell.name == "th" for cell in direct_cells(row))


def calculate_column_widths(rows: list[list[str]], num_cols: int) -> list[int]:
    """Calculate column widths, never narrower than a three-dash separator.

    Parameters
    ----------
    rows : list[list[str]]
        Padded cell strings, header first
    num_cols : int
        Number of columns

    Returns
    -------
    list[int]
        Width of each column

    """
    col_widths = [MIN_TABLE_COLUMN_WIDTH] * num_cols
    for row in rows:
        for i, cell in enumerate(row[:num_cols]):
            col_widths[i] = max(col_widths[i], len(cell))
    return col_widths


def format_row(cells: list[str], col_widths: list[int]) -> str:
    return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, col_widths)) + " |"


def format_separator(col_widths: list[int]) -> str:
    return "| " + " | ".join("-" * width for width in col_widths) + " |"


def render_table(
    table: Tag,
    ctx: SerializationContext,
    state: SerializerState,
    serialize_children: ChildSerializer,
    escape_pipes: bool = True,
) -> str:
    """Render a table, promoting the first row to header when none has ``<th>``.

    Rows are collected in document order across ``thead``/``tbody``/``tfoot``.
    Cells are serialized inline with footnote capture disabled, so block
    content inside a cell is flattened onto one line.

    Parameters
    ----------
    table : Tag
        The ``<table>`` element
    ctx : SerializationContext
        Context of the table
    state : SerializerState
        Per-conversion state
    serialize_children : ChildSerializer
        Serializer used for cell content
    escape_pipes : bool, default True
        Escape ``|`` inside cells

    Returns
    -------
    str
        Header, separator and body lines joined by newlines, or ``""`` for a
        table without cells.

    """
    # Rows of nested tables belong to the cell that holds them
    rows = [row for row in table.find_all("tr") if row.find_parent("table") is table]
    if not rows:
        return ""

    cell_ctx = ctx.descend().with_inline().with_depth(ctx.depth + 1).with_capture_disabled()

    def cell_text(cell: Tag) -> str:
        text = _CELL_LINE_BREAK.sub(" ", serialize_children(cell, cell_ctx, state).strip())
        return text.replace("|", "\\|") if escape_pipes else text

    header: list[str] | None = None
    body: list[list[str]] = []
    for row in rows:
        cells = [cell_text(cell) for cell in direct_cells(row)]
        if header is None and _has_header_cell(row):
            header = cells
        else:
            body.append(cells)

    if header is None:
        header = body.pop(0)

    num_cols = max(len(row) for row in [header, *body])
    if num_cols == 0:
        return ""

    padded = [row + [""] * (num_cols - len(row)) for row in [header, *body]]
    col_widths = calculate_column_widths(padded, num_cols)

    lines = [format_row(padded[0], col_widths), format_separator(col_widths)]
    lines.extend(format_row(row, col_widths) for row in padded[1:])
    return "\n".join(lines)
