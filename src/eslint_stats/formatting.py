# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn processed time entries into styled, display-ready cells."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from typing import Final

from rich.text import Text

from .models import DurationStyle, FormattedDisplayEntry, GroupBy, ProcessedTimeEntry, TimeEntry
from .ranking import UNDEFINED_PERCENT
from .theme import ThemeConfig

PATH_SEPARATORS: Final[tuple[str, ...]] = ("/", "\\")
ELLIPSIS: Final[str] = "..."
NOT_AVAILABLE: Final[str] = "N/A"
SPARK_TICKS: Final[str] = "▁▂▃▄▅▆▇█"


def format_duration(duration_ms: float, style: DurationStyle = DurationStyle.SHORT) -> str:
    """Render a duration given in milliseconds.

    Args:
        duration_ms: Duration in milliseconds.
        style: ``SHORT`` renders ``"12.34 ms"`` below one second and
            ``"1.23 s"`` above; ``SI`` additionally uses ``µs`` below one millisecond.

    Returns:
        str: Duration with two decimals and a unit suffix.
    """

    if DurationStyle(style) is DurationStyle.SI and 0 < duration_ms < 1:
        return f"{duration_ms * 1000:.2f} µs"
    if duration_ms < 1000:
        return f"{duration_ms:.2f} ms"
    return f"{duration_ms / 1000:.2f} s"


def format_percentage(percentage: float) -> str:
    """Render a percentage with one decimal, or ``"N/A"`` for the undefined sentinel."""

    if percentage == UNDEFINED_PERCENT:
        return NOT_AVAILABLE
    return f"{percentage:.1f}%"


def sparkline(values: Sequence[float]) -> str:
    """Return one block glyph per value, scaled between the smallest and largest."""

    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    top = len(SPARK_TICKS) - 1
    return "".join(SPARK_TICKS[round((value - low) / span * top) if span else 0] for value in values)


def _last_separator(value: str) -> int:
    return max(value.rfind(separator) for separator in PATH_SEPARATORS)


def find_common_base_path(paths: Sequence[str]) -> str:
    """Return the longest common directory prefix, including its trailing separator.

    Args:
        paths: Candidate file paths.

    Returns:
        str: Shared ancestor directory, or ``""`` for fewer than two paths.
    """

    if len(paths) <= 1:
        return ""
    common = os.path.commonprefix(list(paths))
    separator_index = _last_separator(common)
    if separator_index < 0:
        return ""
    return common[: separator_index + 1]


def shorten_path(full_path: str, common_base_path: str = "", max_length: int = 50) -> str:
    """Strip the shared base directory and collapse middle segments of long paths.

    Long paths keep their first segment and their last two segments around an
    ellipsis. When that still does not fit, leading segments are dropped, and
    a lone oversized segment keeps its suffix.

    Args:
        full_path: Path to shorten.
        common_base_path: Prefix removed from ``full_path`` when present.
        max_length: Maximum number of characters in the result.

    Returns:
        str: Shortened path.
    """

    path = full_path
    if common_base_path and full_path.startswith(common_base_path):
        path = full_path[len(common_base_path) :]
    if len(path) <= max_length:
        return path

    parts = path.replace("\\", "/").split("/")
    if len(parts) == 1:
        return _truncate_segment(path, max_length)

    candidates: list[str] = []
    if len(parts) > 3:
        candidates.append("/".join([parts[0], ELLIPSIS, *parts[-2:]]))
    candidates.append("/".join([ELLIPSIS, *parts[-2:]]))
    candidates.append("/".join([ELLIPSIS, parts[-1]]))
    for candidate in candidates:
        if len(candidate) <= max_length:
            return candidate
    return _truncate_segment(parts[-1], max_length)


def _truncate_segment(segment: str, max_length: int) -> str:
    keep = max(1, max_length - len(ELLIPSIS))
    return ELLIPSIS + segment[-keep:]


def format_rule_id(rule_id: str, theme: ThemeConfig) -> Text:
    """Return ``rule_id`` with its plugin prefix (before the first ``/``) dimmed."""

    plugin, separator, name = rule_id.partition("/")
    if not separator:
        return Text(rule_id, style=theme.style(theme.rule_style))
    return Text.assemble(
        (f"{plugin}/", theme.style(theme.muted_style)),
        (name, theme.style(theme.rule_style)),
    )


def format_file_path(file_path: str, common_base_path: str, theme: ThemeConfig) -> Text:
    """Return a shortened file path with a muted directory and styled basename."""

    shortened = shorten_path(file_path, common_base_path, theme.max_identifier_width)
    separator_index = _last_separator(shortened)
    if separator_index < 0:
        return Text(shortened, style=theme.style(theme.file_style))
    return Text.assemble(
        (shortened[: separator_index + 1], theme.style(theme.muted_style)),
        (shortened[separator_index + 1 :], theme.style(theme.file_style)),
    )


def names_files(group_by: GroupBy, depth: int = 0) -> bool:
    """Return ``True`` when identifiers at ``depth`` of a ``group_by`` view are file paths."""

    return depth == 0 and GroupBy(group_by) is not GroupBy.RULE


def collect_file_identifiers(entries: Iterable[TimeEntry], group_by: GroupBy) -> list[str]:
    """Collect the file paths of a grouped view, skipping truncation markers."""

    if not names_files(group_by):
        return []
    return [
        entry.identifier
        for entry in entries
        if not (isinstance(entry, ProcessedTimeEntry) and entry.is_marker)
    ]


class DisplayFormatter:
    """Format a processed entry tree using a shared base path and theme."""

    def __init__(
        self,
        entries: Sequence[ProcessedTimeEntry],
        theme: ThemeConfig | None = None,
        *,
        group_by: GroupBy = GroupBy.RULE,
        common_base_path: str | None = None,
    ) -> None:
        """Capture the theme and the base path shared by every file identifier.

        Args:
            entries: Processed tree that will be formatted.
            theme: Presentation settings; defaults to a coloured theme.
            group_by: Grouping that produced ``entries``; decides which level holds file paths.
            common_base_path: Base path computed before truncation. When omitted it
                is derived from ``entries``.
        """

        self.theme = theme or ThemeConfig()
        self.group_by = GroupBy(group_by)
        if common_base_path is None:
            common_base_path = find_common_base_path(collect_file_identifiers(entries, self.group_by))
        self.common_base_path = common_base_path

    def format(self, entries: Sequence[ProcessedTimeEntry], depth: int = 0) -> list[FormattedDisplayEntry]:
        """Format one level of entries and, recursively, their children."""

        regular = [entry for entry in entries if not entry.is_marker]
        max_time = max((entry.time_ms for entry in regular), default=0.0)
        max_percent = max((entry.relative_percent for entry in regular), default=0.0)
        max_errors = max((entry.error_count for entry in regular), default=0)
        max_warnings = max((entry.warning_count for entry in regular), default=0)

        formatted: list[FormattedDisplayEntry] = []
        for entry in entries:
            if entry.is_marker:
                formatted.append(self._marker())
                continue
            theme = self.theme
            children = None
            if entry.children is not None:
                children = self.format(entry.children, depth + 1)  # type: ignore[arg-type]
            formatted.append(
                FormattedDisplayEntry(
                    identifier=self.format_identifier(entry, depth),
                    time=Text(
                        format_duration(entry.time_ms, theme.duration_style),
                        style=theme.metric_style(entry.time_ms, max_time, theme.time_color_scale, theme.time_max_style),
                    ),
                    relative_percent=self._percent_cell(entry.relative_percent, max_percent),
                    warning_count=self._count_cell(
                        entry,
                        entry.warning_count,
                        theme.metric_style(
                            entry.warning_count, max_warnings, theme.warning_color_scale, theme.warning_max_style
                        ),
                    ),
                    error_count=self._count_cell(
                        entry,
                        entry.error_count,
                        theme.metric_style(entry.error_count, max_errors, theme.error_color_scale, theme.error_max_style),
                    ),
                    raw_time_ms=entry.time_ms,
                    fixable=entry.fixable,
                    manually_fixable=entry.manually_fixable,
                    children=children,
                ),
            )
        return formatted

    def format_identifier(self, entry: TimeEntry, depth: int = 0) -> Text:
        """Return the identifier cell: shortened path for files, dimmed plugin for rules."""

        if names_files(self.group_by, depth):
            return format_file_path(entry.identifier, self.common_base_path, self.theme)
        return format_rule_id(entry.identifier, self.theme)

    def _percent_cell(self, percentage: float, max_percent: float) -> Text:
        theme = self.theme
        if percentage == UNDEFINED_PERCENT:
            return Text(NOT_AVAILABLE, style=theme.style(theme.muted_style))
        style = theme.metric_style(percentage, max_percent, theme.time_color_scale, theme.time_max_style)
        return Text(format_percentage(percentage), style=style)

    def _count_cell(self, entry: TimeEntry, count: int, style: str) -> Text:
        cell = Text(str(count), style=style)
        if count == 0:
            return cell
        icons = self.theme.icons
        if entry.fixable:
            cell.append(f" {icons.fixable}")
        if entry.manually_fixable:
            cell.append(f" {icons.manually_fixable}")
        return cell

    def _marker(self) -> FormattedDisplayEntry:
        return FormattedDisplayEntry(
            identifier=Text(ELLIPSIS, style=self.theme.style(self.theme.muted_style)),
            time=Text(""),
            relative_percent=Text(""),
            warning_count=Text(""),
            error_count=Text(""),
        )


def format_entries(
    entries: Sequence[ProcessedTimeEntry],
    theme: ThemeConfig | None = None,
    *,
    group_by: GroupBy = GroupBy.RULE,
    common_base_path: str | None = None,
) -> list[FormattedDisplayEntry]:
    """Format a processed entry tree for display, preserving its shape.

    Args:
        entries: Processed entries, typically ranked and truncated.
        theme: Presentation settings; defaults to a coloured theme.
        group_by: Grouping that produced ``entries``.
        common_base_path: Base path shared by the untruncated file set.

    Returns:
        list[FormattedDisplayEntry]: Display rows mirroring ``entries``.
    """

    formatter = DisplayFormatter(entries, theme, group_by=group_by, common_base_path=common_base_path)
    return formatter.format(entries)


__all__ = [
    "DisplayFormatter",
    "collect_file_identifiers",
    "find_common_base_path",
    "format_duration",
    "format_entries",
    "format_file_path",
    "format_percentage",
    "format_rule_id",
    "names_files",
    "shorten_path",
    "sparkline",
]
