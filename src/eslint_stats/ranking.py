# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Relative percentages, per-level sorting, and truncation of time entries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Final

from .models import PercentagePolicy, ProcessedTimeEntry, SortBy, SortDirection, TimeEntry

UNDEFINED_PERCENT: Final[float] = -1.0


def relative_percent(value: float, total: float) -> float:
    """Return ``value`` as a percentage of ``total``, or ``-1`` for a zero total."""

    if total == 0:
        return UNDEFINED_PERCENT
    return value / total * 100


def grand_total(entries: Sequence[TimeEntry]) -> float:
    """Return the summed time of top-level, non-marker entries."""

    return sum(entry.time_ms for entry in entries if not _is_marker(entry))


def compute_relative_percent(
    entries: Sequence[TimeEntry],
    policy: PercentagePolicy = PercentagePolicy.GLOBAL,
) -> list[ProcessedTimeEntry]:
    """Annotate every entry in the tree with its relative time share.

    Args:
        entries: Top-level entries, optionally carrying one level of children.
        policy: ``GLOBAL`` divides every node by the grand total of the
            top-level entries. ``PARENT`` divides children by their parent's time.

    Returns:
        list[ProcessedTimeEntry]: New entries in the same order and shape.
    """

    total = grand_total(entries)
    return [_process(entry, total, total, PercentagePolicy(policy)) for entry in entries]


def _process(entry: TimeEntry, divisor: float, total: float, policy: PercentagePolicy) -> ProcessedTimeEntry:
    if _is_marker(entry):
        return ProcessedTimeEntry.marker()
    children: list[TimeEntry] | None = None
    if entry.children is not None:
        child_divisor = total if policy is PercentagePolicy.GLOBAL else entry.time_ms
        children = [_process(child, child_divisor, total, policy) for child in entry.children]
    return ProcessedTimeEntry(
        identifier=entry.identifier,
        time_ms=entry.time_ms,
        warning_count=entry.warning_count,
        error_count=entry.error_count,
        fixable=entry.fixable,
        manually_fixable=entry.manually_fixable,
        children=children,
        relative_percent=relative_percent(entry.time_ms, divisor),
    )


def sort_entries(
    entries: Sequence[ProcessedTimeEntry],
    sort_by: SortBy = SortBy.TIME,
    direction: SortDirection = SortDirection.DESC,
) -> list[ProcessedTimeEntry]:
    """Sort entries level by level without flattening the tree.

    Ties on the primary key are broken by identifier in ascending order,
    whatever the direction. Marker rows stay at the end of their level.

    Args:
        entries: Entries of one level.
        sort_by: ``TIME`` uses ``time_ms``; ``VIOLATIONS`` uses errors + warnings.
        direction: ``ASC`` or ``DESC`` for the primary key.

    Returns:
        list[ProcessedTimeEntry]: New list with children sorted recursively.
    """

    key = SortBy(sort_by)
    reverse = SortDirection(direction) is SortDirection.DESC
    regular = [entry for entry in entries if not entry.is_marker]
    markers = [entry for entry in entries if entry.is_marker]

    ordered = sorted(regular, key=lambda entry: entry.identifier)
    if key is SortBy.VIOLATIONS:
        ordered.sort(key=lambda entry: entry.violation_count, reverse=reverse)
    else:
        ordered.sort(key=lambda entry: entry.time_ms, reverse=reverse)

    result: list[ProcessedTimeEntry] = []
    for entry in ordered:
        if entry.children:
            entry = replace(entry, children=sort_entries(entry.children, key, direction))  # type: ignore[arg-type]
        result.append(entry)
    return result + markers


def take_first(entries: Sequence[ProcessedTimeEntry], limits: Sequence[int] = (10,)) -> list[ProcessedTimeEntry]:
    """Keep the first ``n`` entries per level and mark what was cut.

    Args:
        entries: Sorted entries of one level.
        limits: ``[n]`` or ``[top_limit, child_limit]``. A single limit applies
            to both levels. Values ``<= 0`` keep everything.

    Returns:
        list[ProcessedTimeEntry]: Truncated entries, with one ``"..."`` marker
        appended at each level that lost rows.
    """

    limit_values = list(limits) or [0]
    top_limit = limit_values[0]
    child_limits = limit_values[1:] or limit_values[:1]

    kept = list(entries)
    truncated = 0 < top_limit < len(kept)
    if truncated:
        kept = kept[:top_limit]

    result: list[ProcessedTimeEntry] = []
    for entry in kept:
        if entry.children and not entry.is_marker:
            entry = replace(entry, children=take_first(entry.children, child_limits))  # type: ignore[arg-type]
        result.append(entry)
    if truncated:
        result.append(ProcessedTimeEntry.marker())
    return result


def rank(
    entries: Sequence[TimeEntry],
    *,
    sort_by: SortBy = SortBy.TIME,
    direction: SortDirection = SortDirection.DESC,
    limits: Sequence[int] = (10,),
    policy: PercentagePolicy = PercentagePolicy.GLOBAL,
) -> list[ProcessedTimeEntry]:
    """Compute percentages, sort each level, and truncate.

    Percentages are computed before truncation so that shares always refer
    to the complete data set.
    """

    processed = compute_relative_percent(entries, policy)
    return take_first(sort_entries(processed, sort_by, direction), limits)


def _is_marker(entry: TimeEntry) -> bool:
    return isinstance(entry, ProcessedTimeEntry) and entry.is_marker


__all__ = [
    "UNDEFINED_PERCENT",
    "compute_relative_percent",
    "grand_total",
    "rank",
    "relative_percent",
    "sort_entries",
    "take_first",
]
