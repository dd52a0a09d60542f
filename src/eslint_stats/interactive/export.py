# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Append rendered views to a markdown report."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Final

from ..errors import StatsFileError
from ..table import strip_ansi
from .state import InteractiveState, describe_state

REPORT_TITLE: Final[str] = "# Eslint Stats Analysis"
SECTION_BREAK: Final[str] = "\n\n---\n\n"


def markdown_section(state: InteractiveState, table: str) -> str:
    """Return the state line followed by the colour-stripped ``table``."""

    return f"{describe_state(state)}\n\n{strip_ansi(table)}"


def append_markdown(out_path: Path, analysed_file: Path, content: str) -> None:
    """Append ``content`` to ``out_path``, starting a titled report when it is new.

    Args:
        out_path: Markdown report to create or extend.
        analysed_file: Stats file named in the report title block.
        content: Section body to append.

    Raises:
        StatsFileError: If the report cannot be written.
    """

    try:
        has_content = out_path.is_file() and out_path.stat().st_size > 0
        if has_content:
            chunk = f"{SECTION_BREAK}{content}"
        else:
            chunk = f"{REPORT_TITLE}\n\nFile: **{analysed_file.name}**{SECTION_BREAK}{content}"
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("a", encoding="utf-8") as handle:
            handle.write(chunk)
    except OSError as exc:
        raise StatsFileError(f"Could not write markdown report {out_path}: {exc}") from exc


def write_markdown(
    state: InteractiveState,
    table: str,
    out_path: Path | None = None,
    analysed_file: Path | None = None,
) -> InteractiveState:
    """Commit the current view to the markdown report.

    Args:
        state: State whose grouping, sorting, and limits head the section.
        table: Rendered table; ANSI codes are removed before writing.
        out_path: Report path; defaults to ``state.out_path``.
        analysed_file: Stats file for the title block; defaults to ``state.file``.

    Returns:
        InteractiveState: ``state`` with an ``Appended to <name>`` notification.

    Raises:
        StatsFileError: If no output path is known or the report cannot be written.
    """

    target = out_path or state.out_path
    if target is None:
        raise StatsFileError("No markdown output path configured")
    append_markdown(target, analysed_file or state.file, markdown_section(state, table))
    return replace(state, notification=f"Appended to {target.name}")


__all__ = ["REPORT_TITLE", "append_markdown", "markdown_section", "write_markdown"]
