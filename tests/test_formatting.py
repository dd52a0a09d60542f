# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for display formatting of processed entries."""

from __future__ import annotations

import pytest

from eslint_stats.formatting import (
    DisplayFormatter,
    find_common_base_path,
    format_duration,
    format_entries,
    format_percentage,
    format_rule_id,
    names_files,
    shorten_path,
    sparkline,
)
from eslint_stats.models import DurationStyle, GroupBy, ProcessedTimeEntry
from eslint_stats.theme import PLAIN_THEME, ThemeConfig


@pytest.mark.parametrize(
    ("duration_ms", "expected"),
    [
        (0.0, "0.00 ms"),
        (12.346, "12.35 ms"),
        (999.99, "999.99 ms"),
        (1000.0, "1.00 s"),
        (1234.0, "1.23 s"),
    ],
)
def test_format_duration_short(duration_ms: float, expected: str) -> None:
    assert format_duration(duration_ms) == expected


def test_format_duration_si_uses_microseconds() -> None:
    assert format_duration(0.25, DurationStyle.SI) == "250.00 µs"
    assert format_duration(0.0, DurationStyle.SI) == "0.00 ms"
    assert format_duration(2500.0, DurationStyle.SI) == "2.50 s"


def test_format_percentage() -> None:
    assert format_percentage(-1) == "N/A"
    assert format_percentage(0) == "0.0%"
    assert format_percentage(33.333) == "33.3%"
    assert format_percentage(100) == "100.0%"


def test_sparkline_scales_between_extremes() -> None:
    assert sparkline([]) == ""
    assert sparkline([1.0, 1.0]) == "▁▁"
    line = sparkline([0.0, 5.0, 10.0])
    assert line[0] == "▁"
    assert line[-1] == "█"


def test_names_files_follows_grouping_level() -> None:
    assert names_files(GroupBy.FILE)
    assert names_files(GroupBy.FILE_RULE)
    assert not names_files(GroupBy.FILE_RULE, depth=1)
    assert not names_files(GroupBy.RULE)


def test_find_common_base_path() -> None:
    assert find_common_base_path(["src/app/a.ts", "src/app/b.ts"]) == "src/app/"
    assert find_common_base_path(["src/app/a.ts", "src/lib/b.ts"]) == "src/"
    assert find_common_base_path(["src/app/a.ts"]) == ""
    assert find_common_base_path([]) == ""
    assert find_common_base_path(["a.ts", "b.ts"]) == ""


def test_shorten_path_strips_common_base() -> None:
    assert shorten_path("src/app/a.ts", "src/app/") == "a.ts"
    assert shorten_path("lib/b.ts", "src/app/") == "lib/b.ts"


def test_shorten_path_collapses_middle_segments() -> None:
    path = "packages/frontend/src/components/forms/inputs/TextField.tsx"

    shortened = shorten_path(path, max_length=40)

    assert shortened == "packages/.../inputs/TextField.tsx"
    assert len(shortened) <= 40


def test_shorten_path_falls_back_to_last_segments() -> None:
    path = "packages/frontend/src/components/forms/inputs/TextField.tsx"

    assert shorten_path(path, max_length=25) == ".../inputs/TextField.tsx"
    assert shorten_path(path, max_length=20) == ".../TextField.tsx"


def test_shorten_path_truncates_single_long_segment() -> None:
    shortened = shorten_path("a" * 30 + ".ts", max_length=12)

    assert shortened == "...aaaaaa.ts"
    assert len(shortened) == 12


def test_format_rule_id_dims_plugin_prefix() -> None:
    text = format_rule_id("@typescript-eslint/no-explicit-any", ThemeConfig())

    assert text.plain == "@typescript-eslint/no-explicit-any"
    dimmed = [text.plain[span.start : span.end] for span in text.spans if span.style == "dim"]
    assert dimmed == ["@typescript-eslint/"]


def test_format_rule_id_without_color_has_no_styles() -> None:
    text = format_rule_id("@typescript-eslint/no-explicit-any", PLAIN_THEME)

    assert all(not span.style for span in text.spans)


def test_format_entries_strips_shared_directory() -> None:
    entries = [
        ProcessedTimeEntry(identifier="src/app/a.ts", time_ms=3.0, relative_percent=75.0),
        ProcessedTimeEntry(identifier="src/app/b.ts", time_ms=1.0, relative_percent=25.0),
    ]

    formatted = format_entries(entries, PLAIN_THEME, group_by=GroupBy.FILE)

    assert [row.identifier.plain for row in formatted] == ["a.ts", "b.ts"]
    assert [row.time.plain for row in formatted] == ["3.00 ms", "1.00 ms"]
    assert [row.relative_percent.plain for row in formatted] == ["75.0%", "25.0%"]


def test_format_entries_appends_fixability_icons_to_counts() -> None:
    entries = [
        ProcessedTimeEntry(
            identifier="no-console",
            warning_count=2,
            fixable=True,
            manually_fixable=True,
            relative_percent=-1,
        ),
    ]

    (row,) = format_entries(entries, PLAIN_THEME)

    assert row.warning_count.plain == "2 🔧 💡"
    assert row.error_count.plain == "0"
    assert row.relative_percent.plain == "N/A"


def test_format_entries_renders_marker_rows() -> None:
    entries = [ProcessedTimeEntry(identifier="semi", time_ms=1.0, relative_percent=100.0), ProcessedTimeEntry.marker()]

    formatted = format_entries(entries, PLAIN_THEME)

    marker = formatted[-1]
    assert marker.identifier.plain == "..."
    assert marker.time.plain == ""
    assert marker.error_count.plain == ""


def test_format_entries_keeps_children_and_uses_tree_wide_base() -> None:
    entries = [
        ProcessedTimeEntry(
            identifier="/repo/src/a.ts",
            time_ms=2.0,
            relative_percent=50.0,
            children=[ProcessedTimeEntry(identifier="semi", time_ms=2.0, relative_percent=50.0)],
        ),
        ProcessedTimeEntry(identifier="/repo/lib/b.ts", time_ms=2.0, relative_percent=50.0, children=[]),
    ]

    formatted = format_entries(entries, PLAIN_THEME, group_by=GroupBy.FILE_RULE)

    assert [row.identifier.plain for row in formatted] == ["src/a.ts", "lib/b.ts"]
    assert formatted[0].children is not None
    assert formatted[0].children[0].identifier.plain == "semi"
    assert formatted[1].children == []


def test_colored_maximum_uses_emphasis_style() -> None:
    entries = [
        ProcessedTimeEntry(identifier="semi", time_ms=4.0, error_count=3, relative_percent=80.0),
        ProcessedTimeEntry(identifier="eqeqeq", time_ms=1.0, relative_percent=20.0),
    ]
    theme = ThemeConfig()

    first, second = DisplayFormatter(entries, theme).format(entries)

    assert first.time.style == theme.time_max_style
    assert first.error_count.style == theme.error_max_style
    assert second.error_count.style == theme.muted_style
    assert str(second.time.style).startswith("rgb(")


def test_rule_ids_with_dots_are_not_shortened_as_paths() -> None:
    entries = [ProcessedTimeEntry(identifier="vue/no-v.html", time_ms=1.0, relative_percent=100.0)]

    (row,) = format_entries(entries, ThemeConfig(), group_by=GroupBy.RULE)

    assert row.identifier.plain == "vue/no-v.html"
    dimmed = [row.identifier.plain[span.start : span.end] for span in row.identifier.spans if span.style == "dim"]
    assert dimmed == ["vue/"]


def test_format_entries_uses_supplied_base_path() -> None:
    entries = [ProcessedTimeEntry(identifier="/repo/src/app/a.ts", time_ms=1.0, relative_percent=100.0)]

    (row,) = format_entries(entries, PLAIN_THEME, group_by=GroupBy.FILE, common_base_path="/repo/src/app/")

    assert row.identifier.plain == "a.ts"
