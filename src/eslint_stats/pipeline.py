# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run aggregation, ranking, formatting, and rendering for one view."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .aggregation import group_records
from .formatting import collect_file_identifiers, find_common_base_path, format_entries
from .models import (
    DEFAULT_COLUMNS,
    CanonicalRuleRecord,
    Column,
    FixabilityRule,
    FormattedDisplayEntry,
    GroupBy,
    PercentagePolicy,
    SortBy,
    SortDirection,
)
from .ranking import rank
from .table import flatten_rows, render_table, table_headers
from .theme import ThemeConfig


@dataclass(slots=True, frozen=True)
class ViewRequest:
    """Everything that decides what a report table shows."""

    group_by: GroupBy = GroupBy.RULE
    sort_by: SortBy = SortBy.TIME
    sort_direction: SortDirection = SortDirection.DESC
    take: tuple[int, ...] = (10,)
    columns: tuple[Column, ...] = field(default=DEFAULT_COLUMNS)
    percentage_policy: PercentagePolicy = PercentagePolicy.GLOBAL
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS


def build_view(
    records: Sequence[CanonicalRuleRecord],
    request: ViewRequest,
    theme: ThemeConfig | None = None,
) -> list[FormattedDisplayEntry]:
    """Group, rank, and format ``records`` for ``request``.

    The shared base path is taken from every grouped file, before truncation.
    """

    entries = group_records(records, request.group_by, fixability=request.fixability)
    base_path = find_common_base_path(collect_file_identifiers(entries, request.group_by))
    ranked = rank(
        entries,
        sort_by=request.sort_by,
        direction=request.sort_direction,
        limits=request.take,
        policy=request.percentage_policy,
    )
    return format_entries(ranked, theme, group_by=request.group_by, common_base_path=base_path)


def render_view(
    records: Sequence[CanonicalRuleRecord],
    request: ViewRequest,
    theme: ThemeConfig | None = None,
) -> str:
    """Render the complete table for ``request``.

    Args:
        records: Canonical records loaded from a stats file.
        request: Grouping, sorting, truncation, and column selection.
        theme: Presentation settings. Colour output follows ``theme.color_enabled``.

    Returns:
        str: Rendered table text.
    """

    active_theme = theme or ThemeConfig()
    formatted = build_view(records, request, active_theme)
    rows = flatten_rows(formatted, request.columns)
    headers = table_headers(request.group_by, request.columns, active_theme.icons)
    return render_table(rows, headers, color=active_theme.color_enabled, theme=active_theme)


__all__ = ["ViewRequest", "build_view", "render_view"]
