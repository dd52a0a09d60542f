# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the ESLint result parser and stats file loader."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from eslint_stats.errors import MalformedInputError, MissingStatsError, StatsFileError
from eslint_stats.parsing import (
    STATS_FILE_PREFIX,
    build_stats_filename,
    decode_command,
    describe_stats_filename,
    encode_command,
    load_stats,
    parse_results,
    parse_stats_filename,
)


def test_parse_results_creates_one_record_per_message_and_silent_rule(sample_results) -> None:
    records = parse_results(sample_results)

    pairs = [(Path(record.file_path).name, record.rule_id) for record in records]
    assert pairs == [
        ("a.ts", "no-unused-vars"),
        ("a.ts", "no-console"),
        ("a.ts", "@typescript-eslint/no-explicit-any"),
        ("b.test.ts", "no-console"),
    ]


def test_parse_results_reads_timings_severity_and_fixability(sample_results) -> None:
    unused, console, any_rule, test_console = parse_results(sample_results)

    assert unused.time_ms == 20.0
    assert unused.severity == 2
    assert unused.error_count == 1
    assert not unused.fixable

    assert console.time_ms == 10.0
    assert console.warning_count == 1
    assert console.fixable

    assert any_rule.severity == 0
    assert any_rule.time_ms == 4.0
    assert not any_rule.has_violation

    assert test_console.manually_fixable
    assert test_console.is_test_file
    assert not unused.is_test_file


def test_parse_results_skips_messages_without_rule_id(sample_results) -> None:
    records = parse_results(sample_results)

    assert all(record.rule_id for record in records)
    assert sum(record.error_count for record in records) == 1


def test_rule_time_is_attributed_once_per_file() -> None:
    raw = [
        {
            "filePath": "src/a.ts",
            "messages": [
                {"ruleId": "no-console", "severity": 1},
                {"ruleId": "no-console", "severity": 1},
            ],
            "stats": {"times": {"passes": [{"rules": {"no-console": {"total": 12.5}}, "total": 12.5}]}},
        },
    ]

    records = parse_results(raw)

    assert [record.time_ms for record in records] == [12.5, 0.0]
    assert sum(record.warning_count for record in records) == 2


def test_timing_fixable_flag_marks_records_fixable() -> None:
    raw = [
        {
            "filePath": "src/a.ts",
            "messages": [{"ruleId": "prefer-const", "severity": 2}],
            "stats": {"times": {"passes": [{"rules": {"prefer-const": {"total": 1.0, "fixable": True}}}]}},
        },
    ]

    (record,) = parse_results(raw)

    assert record.fixable


def test_result_without_stats_degrades_to_zero_time() -> None:
    raw = [{"filePath": "src/a.ts", "messages": [{"ruleId": "eqeqeq", "severity": 2}]}]

    (record,) = parse_results(raw)

    assert record.time_ms == 0.0
    assert record.error_count == 1


def test_parse_results_rejects_non_array() -> None:
    with pytest.raises(MalformedInputError):
        parse_results({"filePath": "src/a.ts"})


def test_parse_results_rejects_invalid_severity() -> None:
    with pytest.raises(MalformedInputError):
        parse_results([{"filePath": "src/a.ts", "messages": [{"ruleId": "eqeqeq", "severity": 3}]}])


def test_load_stats_returns_records_and_summary(stats_file) -> None:
    stats = load_stats(stats_file)

    assert stats.file == stats_file
    assert len(stats.records) == 4
    summary = stats.summary
    assert summary.file_count == 2
    assert summary.rule_count == 3
    assert summary.total_time_ms == pytest.approx(50.0)
    assert summary.parse_time_ms == pytest.approx(8.0)
    assert summary.rules_time_ms == pytest.approx(40.0)
    assert summary.fix_time_ms == pytest.approx(1.0)
    assert summary.other_time_ms == pytest.approx(1.0)
    assert summary.warning_count == 2
    assert summary.fixable_count == 1
    assert summary.test_file_count == 1
    assert stats.date is None
    assert stats.command is None


def test_load_stats_without_any_stats_block_raises_missing_stats(write_stats) -> None:
    path = write_stats(
        [
            {"filePath": "src/a.ts", "messages": []},
            {"filePath": "src/b.ts", "messages": []},
        ],
    )

    with pytest.raises(MissingStatsError) as excinfo:
        load_stats(path)

    message = str(excinfo.value)
    assert "missing performance data" in message
    assert "--stats" in message
    assert str(path) in message


def test_load_stats_accepts_partial_stats(write_stats) -> None:
    path = write_stats(
        [
            {"filePath": "src/a.ts", "messages": []},
            {"filePath": "src/b.ts", "messages": [], "stats": {"times": {"passes": [{"rules": {"eqeqeq": {"total": 2}}}]}}},
        ],
    )

    stats = load_stats(path)

    assert [record.rule_id for record in stats.records] == ["eqeqeq"]


def test_load_stats_accepts_empty_stats_block(write_stats) -> None:
    path = write_stats([{"filePath": "src/a.ts", "messages": [], "stats": {}}])

    assert load_stats(path).records == []


def test_load_stats_accepts_empty_array(write_stats) -> None:
    assert load_stats(write_stats([])).records == []


def test_load_stats_reports_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(MalformedInputError, match="broken.json"):
        load_stats(path)


def test_load_stats_reports_missing_file(tmp_path) -> None:
    with pytest.raises(StatsFileError, match="missing.json"):
        load_stats(tmp_path / "missing.json")


def test_command_encoding_round_trip() -> None:
    parts = ["npx", "eslint", "src/**/*.ts", "--", "--stats", "--format=json"]

    slug = encode_command(parts)

    assert "=" not in slug
    assert "+" not in slug and "/" not in slug
    assert decode_command(slug) == " ".join(parts)


def test_stats_filename_round_trip() -> None:
    date = datetime(2025, 3, 4, 5, 6, 7)

    name = build_stats_filename("my prefix!", date)

    assert name == "my-prefix-.20250304.050607.json"
    assert parse_stats_filename(name) == ("my-prefix-", date)


def test_parse_stats_filename_rejects_other_names() -> None:
    with pytest.raises(ValueError):
        parse_stats_filename("stats.json")


def test_load_stats_decodes_command_from_filename(write_stats, sample_results) -> None:
    date = datetime(2025, 1, 2, 3, 4, 5)
    name = build_stats_filename(f"{STATS_FILE_PREFIX}{encode_command(['eslint', 'src'])}", date)

    stats = load_stats(write_stats(sample_results, name=name))

    assert stats.date == date
    assert stats.command == "eslint src"
    assert describe_stats_filename(Path("plain.json")) == (None, None)
