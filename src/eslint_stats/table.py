# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Markdown-style table rendering that measures visible width, not bytes."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Final

from rich.console import Console
from rich.text import Text
from typing_extensions import TypeAliasType

from .models import Column, FormattedDisplayEntry, GroupBy
from .theme import Icons, ThemeConfig

NO_DATA_MESSAGE: Final[str] = "No data to display."
CELL_SEPARATOR: Final[str] = " | "
INDENT: Final[str] = "  "

_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

Cell = TypeAliasType("Cell", str | Text)


class Alignment(str, Enum):
    """Horizontal alignment of a table column."""

    LEFT = "left"
    RIGHT = "right"


FIRST_COLUMN_HEADERS: Final[dict[GroupBy, str]] = {
    GroupBy.RULE: "Rule",
    GroupBy.FILE: "File",
    GroupBy.FILE_RULE: "File / Rule",
}


def strip_ansi(value: str) -> str:
    """Return ``value`` without ANSI escape sequences."""

    return _ANSI_ESCAPE_RE.sub("", value)


def first_column_header(group_by: GroupBy) -> str:
    """Return the identifier column title for ``group_by``."""

    return FIRST_COLUMN_HEADERS[GroupBy(group_by)]


def table_headers(group_by: GroupBy, columns: Sequence[Column], icons: Icons | None = None) -> list[str]:
    """Build the header row for a grouping and a column selection.

    Args:
        group_by: Active grouping; decides the identifier column title.
        columns: Optional columns shown after the identifier.
        icons: Glyphs prefixed to the violation headers.

    Returns:
        list[str]: Header titles in display order.
    """

    glyphs = icons or Icons()
    titles = {
        Column.TIME: "Time",
        Column.PERCENT: "%",
        Column.ERRORS: f"{glyphs.error} Errors",
        Column.WARNINGS: f"{glyphs.warning} Warnings",
    }
    return [first_column_header(group_by), *(titles[Column(column)] for column in columns)]


_COLUMN_ATTRIBUTES: Final[dict[Column, str]] = {
    Column.TIME: "time",
    Column.PERCENT: "relative_percent",
    Column.ERRORS: "error_count",
    Column.WARNINGS: "warning_count",
}


def _column_cell(entry: FormattedDisplayEntry, column: Column) -> Text:
    return getattr(entry, _COLUMN_ATTRIBUTES[column])


def flatten_rows(
    entries: Sequence[FormattedDisplayEntry],
    columns: Sequence[Column],
    depth: int = 0,
) -> list[list[Text]]:
    """Flatten a formatted tree into table rows, indenting nested identifiers.

    Args:
        entries: Formatted entries of one level.
        columns: Columns to emit after the identifier cell.
        depth: Nesting level of ``entries``; each level indents by two spaces.

    Returns:
        list[list[Text]]: One row per entry, parents before their children.
    """

    rows: list[list[Text]] = []
    for entry in entries:
        identifier = Text(INDENT * depth) + entry.identifier if depth else entry.identifier
        rows.append([identifier, *(_column_cell(entry, Column(column)) for column in columns)])
        if entry.children:
            rows.extend(flatten_rows(entry.children, columns, depth + 1))
    return rows


def _as_text(cell: Cell) -> Text:
    if isinstance(cell, Text):
        return cell
    return Text.from_ansi(cell) if "\x1b" in cell else Text(cell)


def _separator_cell(width: int, alignment: Alignment) -> str:
    width = max(width, 1)
    if alignment is Alignment.RIGHT:
        return "-" * (width - 1) + ":"
    return ":" + "-" * (width - 1)


def render_table(
    rows: Sequence[Sequence[Cell]],
    headers: Sequence[str],
    *,
    alignments: Sequence[Alignment] | None = None,
    width_overrides: Mapping[int, int] | None = None,
    color: bool = True,
    theme: ThemeConfig | None = None,
) -> str:
    """Render rows as an aligned, pipe-separated table.

    Column widths are the widest visible cell in each column, measured after
    ANSI codes are removed and with wide characters counted as two cells.

    Args:
        rows: Table body; cells are plain strings, ANSI strings, or Rich text.
        headers: Column titles.
        alignments: Per-column alignment. Defaults to left for the first
            column and right for the rest.
        width_overrides: Fixed widths keyed by column index. Longer cells are cut.
        color: Emit ANSI styling when ``True``; plain text otherwise.
        theme: Styles for the header and separator rows.

    Returns:
        str: Rendered table, or ``"No data to display."`` for an empty body.
    """

    if not rows:
        return NO_DATA_MESSAGE

    column_count = len(headers)
    aligns = list(alignments or [])
    aligns.extend(
        Alignment.LEFT if index == 0 else Alignment.RIGHT for index in range(len(aligns), column_count)
    )
    header_cells = [Text(header) for header in headers]
    body = [[_as_text(cell) for cell in row] for row in rows]

    widths = [cell.cell_len for cell in header_cells]
    for row in body:
        for index, cell in enumerate(row[:column_count]):
            widths[index] = max(widths[index], cell.cell_len)
    for index, width in (width_overrides or {}).items():
        if 0 <= index < column_count:
            widths[index] = width

    styles = theme or ThemeConfig(color_enabled=color)
    lines = [_join_cells(header_cells, widths, aligns, style=styles.style("bold") if color else "")]
    separator = "|".join(
        _separator_cell(width + _cell_padding(index, column_count), aligns[index])
        for index, width in enumerate(widths)
    )
    lines.append(Text(separator, style=styles.style(styles.border_style) if color else ""))
    lines.extend(_join_cells(row, widths, aligns) for row in body)

    return render_lines(lines, color=color)


def _cell_padding(index: int, column_count: int) -> int:
    return (1 if index > 0 else 0) + (1 if index < column_count - 1 else 0)


def _join_cells(cells: Sequence[Text], widths: Sequence[int], aligns: Sequence[Alignment], style: str = "") -> Text:
    line = Text(style=style)
    for index, width in enumerate(widths):
        cell = cells[index].copy() if index < len(cells) else Text("")
        cell.align(aligns[index].value, width)
        if index:
            line.append(CELL_SEPARATOR)
        line.append_text(cell)
    return line


def render_lines(lines: Sequence[Text], *, color: bool = True) -> str:
    """Render Rich text lines to a string, with ANSI styling when ``color`` is set.

    Lines are never wrapped or cropped, so the visible characters of the
    coloured output match the plain output exactly.
    """

    if not color:
        return "\n".join(line.plain for line in lines)
    console = Console(
        color_system="truecolor",
        force_terminal=True,
        legacy_windows=False,
        width=10_000,
        highlight=False,
    )
    with console.capture() as capture:
        for index, line in enumerate(lines):
            console.print(line, soft_wrap=True, end="" if index == len(lines) - 1 else "\n")
    return capture.get()


__all__ = [
    "FIRST_COLUMN_HEADERS",
    "NO_DATA_MESSAGE",
    "Alignment",
    "Cell",
    "first_column_header",
    "flatten_rows",
    "render_lines",
    "render_table",
    "strip_ansi",
    "table_headers",
]
