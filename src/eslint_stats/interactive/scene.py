# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the interactive screen: legend, table, and the info panel."""

from __future__ import annotations

from typing import Final

from rich.text import Text

from ..formatting import format_duration, shorten_path, sparkline
from ..models import GroupBy, LoadedStats, SortDirection
from ..pipeline import render_view
from ..table import render_lines
from ..theme import ThemeConfig
from .state import GROUP_BY_OPTIONS, SORT_BY_OPTIONS, Action, InteractiveState, Layer

LEGEND_SEPARATOR: Final[str] = " · "
GROUP_WIDTH: Final[int] = max(len(option.value) for option in GROUP_BY_OPTIONS)
SORT_WIDTH: Final[int] = max(len(option.value) for option in SORT_BY_OPTIONS)

VIEW_DESCRIPTIONS: Final[dict[GroupBy, str]] = {
    GroupBy.RULE: "ESLint rules ranked by their cost",
    GroupBy.FILE: "Files ranked by their linting results",
    GroupBy.FILE_RULE: "Files with their rules nested below",
}


def _control(label: str, value: str, hint: str, *, active: bool, theme: ThemeConfig) -> Text:
    weight = "bold " if active else ""
    control = Text.assemble(
        (f"{label}:", theme.style(f"{weight}cyan")),
        " ",
        (value, theme.style(f"{weight}yellow")),
    )
    if hint:
        control.append(f" {hint}", style=theme.style(f"{weight}dim"))
    return control


def _join(parts: list[Text]) -> Text:
    return Text(LEGEND_SEPARATOR).join(parts)


def rows_label(state: InteractiveState) -> str:
    """Return the row-limit summary, ``F:n,R:m`` in the file-rule view."""

    if state.group_by is GroupBy.FILE_RULE:
        return f"F:{state.file_limit},R:{state.rule_limit}"
    return ",".join(str(limit) for limit in state.take)


def legend_lines(state: InteractiveState, theme: ThemeConfig) -> list[Text]:
    """Build the legend shown above the table.

    The first line lists the view controls, the second the actions. The last
    action is emphasised and a pending notification is printed first.

    Args:
        state: Current interactive state.
        theme: Presentation settings.

    Returns:
        list[Text]: Legend lines, top to bottom.
    """

    action = state.last_action
    order = "↓" if state.sort_direction is SortDirection.DESC else "↑"
    rows = _control(
        "Rows",
        rows_label(state),
        "(+/−)",
        active=action in (Action.ROWS, Action.LAYER),
        theme=theme,
    )
    if state.group_by is GroupBy.FILE_RULE:
        if state.active_layer is Layer.FILE:
            rows.append(" [F]", style=theme.style("bold green"))
        else:
            rows.append(" [R]", style=theme.style("bold blue"))

    view_controls = [
        _control(
            "Group", state.group_by.value.ljust(GROUP_WIDTH), "(↹)", active=action is Action.GROUP, theme=theme
        ),
        _control("Sort", state.sort_by.value.ljust(SORT_WIDTH), "(←/→)", active=action is Action.SORT, theme=theme),
        _control("Order", order, "(↑/↓)", active=action is Action.ORDER, theme=theme),
        rows,
    ]
    action_controls: list[Text] = []
    if state.out_path is not None:
        action_controls.append(_control("Write", "⏎", "", active=action is Action.WRITE, theme=theme))
    if state.group_by is GroupBy.FILE_RULE:
        action_controls.append(_control("Layer", "L", "", active=action is Action.LAYER, theme=theme))
    action_controls.append(_control("Info", "I", "", active=action is Action.INFO, theme=theme))
    action_controls.append(_control("Quit", "⌃C", "", active=False, theme=theme))

    lines = [_join(view_controls), _join(action_controls)]
    if state.notification:
        lines.insert(0, Text(state.notification, style=theme.style("green")))
    return lines


def _section(title: str, theme: ThemeConfig) -> Text:
    return Text(title, style=theme.style("bold underline"))


def _item(label: str, value: str, description: str, theme: ThemeConfig, *, label_style: str = "cyan") -> Text:
    line = Text.assemble((f"{label}:", theme.style(label_style)), " ", (value, theme.style("bold")))
    if description:
        line.append(f" - {description}", style=theme.style(theme.muted_style))
    return line


def info_lines(state: InteractiveState, stats: LoadedStats, theme: ThemeConfig) -> list[Text]:
    """Build the summary panel toggled with ``i``.

    Args:
        state: Current interactive state.
        stats: Loaded stats whose run-wide totals are shown.
        theme: Presentation settings.

    Returns:
        list[Text]: Panel lines, sections separated by blank lines.
    """

    summary = stats.summary
    icons = theme.icons
    style = theme.duration_style
    lines: list[Text] = [_section("ESLint Stats Analysis", theme)]
    lines.append(Text(f"{icons.stats} {shorten_path(str(stats.file), max_length=theme.max_identifier_width)}"))
    provenance = []
    if stats.date is not None:
        provenance.append(f"⏱ {stats.date:%Y-%m-%d %H:%M:%S}")
    if stats.command:
        provenance.append(f"$ {stats.command}")
    if provenance:
        lines.append(Text(LEGEND_SEPARATOR.join(provenance), style=theme.style(theme.muted_style)))

    lines += [Text(""), _section("Totals", theme)]
    lines.append(_item(f"{icons.file} Files", str(summary.file_count), "files processed by ESLint", theme))
    lines.append(_item(f"{icons.rule} Rules", str(summary.rule_count), "unique rules executed", theme))
    lines.append(_item(f"{icons.error} Errors", str(summary.error_count), "error-level violations", theme))
    lines.append(_item(f"{icons.warning} Warnings", str(summary.warning_count), "warning-level violations", theme))
    lines.append(_item(f"{icons.fixable} Fixable", str(summary.fixable_count), "violations with an autofix", theme))
    if summary.test_file_count:
        lines.append(_item("Test files", str(summary.test_file_count), "files named *.test.* or *.spec.*", theme))

    parts = [
        ("Parse", summary.parse_time_ms, "parsing source files"),
        ("Rules", summary.rules_time_ms, "running rules"),
        ("Fix", summary.fix_time_ms, "applying fixes"),
        ("Other", summary.other_time_ms, "remaining overhead"),
    ]
    lines += [Text(""), _section("Times", theme)]
    lines.append(
        _item(f"{icons.time} Total", format_duration(summary.total_time_ms, style), "all passes, all files", theme)
    )
    for label, value, description in parts:
        lines.append(_item(label, format_duration(value, style), description, theme, label_style=theme.muted_style))
    lines.append(
        _item("Chart", sparkline([value for _, value, _ in parts]), "parse/rules/fix/other", theme, label_style="dim")
    )

    lines += [Text(""), _section("Current Table State", theme)]
    order = "descending" if state.sort_direction is SortDirection.DESC else "ascending"
    lines.append(_item("View", state.group_by.value.upper(), VIEW_DESCRIPTIONS[state.group_by], theme))
    lines.append(_item("Sort", f"{state.sort_by.value.upper()} ({order})", "", theme))
    lines.append(_item("Rows", rows_label(state), "row limits", theme))
    if state.group_by is GroupBy.FILE_RULE:
        lines.append(_item("Active layer", state.active_layer.value.upper(), "which limit +/- adjusts", theme))
    return lines


def render_table_view(state: InteractiveState, stats: LoadedStats, theme: ThemeConfig) -> str:
    """Render the report table for ``state``."""

    return render_view(stats.records, state.view_request(), theme)


def render_scene(state: InteractiveState, stats: LoadedStats, theme: ThemeConfig | None = None) -> str:
    """Render the full screen for ``state``: legend, then table or info panel.

    Args:
        state: Current interactive state.
        stats: Loaded stats file.
        theme: Presentation settings; defaults to a coloured theme.

    Returns:
        str: Screen content without cursor control sequences.
    """

    active_theme = theme or ThemeConfig()
    legend = render_lines(legend_lines(state, active_theme), color=active_theme.color_enabled)
    if state.show_info:
        body = render_lines(info_lines(state, stats, active_theme), color=active_theme.color_enabled)
    else:
        body = render_table_view(state, stats, active_theme)
    return f"{legend}\n\n{body}"


__all__ = [
    "info_lines",
    "legend_lines",
    "render_scene",
    "render_table_view",
    "rows_label",
]
