# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from eslint_stats.models import CanonicalRuleRecord, JsonValue


def _pass(parse: float, rules: dict[str, float], fix: float, total: float) -> dict[str, JsonValue]:
    return {
        "parse": {"total": parse},
        "rules": {rule_id: {"total": time_ms} for rule_id, time_ms in rules.items()},
        "fix": {"total": fix},
        "total": total,
    }


@pytest.fixture
def sample_results() -> list[dict[str, JsonValue]]:
    """Return ESLint ``--format json --stats`` output for two files."""

    return [
        {
            "filePath": "/repo/src/app/a.ts",
            "messages": [
                {"ruleId": "no-unused-vars", "severity": 2, "message": "'x' is unused"},
                {"ruleId": "no-console", "severity": 1, "message": "Unexpected console", "fix": {"range": [0, 12], "text": ""}},
                {"ruleId": None, "severity": 2, "message": "Parsing error"},
            ],
            "errorCount": 2,
            "warningCount": 1,
            "stats": {
                "times": {
                    "passes": [
                        _pass(
                            5.0,
                            {"no-unused-vars": 20.0, "no-console": 10.0, "@typescript-eslint/no-explicit-any": 4.0},
                            1.0,
                            40.0,
                        ),
                    ],
                },
                "fixPasses": 0,
            },
        },
        {
            "filePath": "/repo/src/app/b.test.ts",
            "messages": [
                {
                    "ruleId": "no-console",
                    "severity": 1,
                    "message": "Unexpected console",
                    "suggestions": [{"desc": "Remove the call", "fix": {"range": [0, 4], "text": ""}}],
                },
            ],
            "stats": {"times": {"passes": [_pass(3.0, {"no-console": 6.0}, 0.0, 10.0)]}},
        },
    ]


@pytest.fixture
def write_stats(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing a JSON payload to a file under ``tmp_path``."""

    def _write(payload: object, name: str = "stats.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def stats_file(write_stats: Callable[..., Path], sample_results: list[dict[str, JsonValue]]) -> Path:
    """Return a stats file containing :func:`sample_results`."""

    return write_stats(sample_results)


@pytest.fixture
def make_record() -> Callable[..., CanonicalRuleRecord]:
    """Return a factory for canonical records with sensible defaults."""

    def _make(
        rule_id: str = "no-console",
        file_path: str = "src/app/a.ts",
        *,
        time_ms: float = 0.0,
        severity: int = 0,
        fixable: bool = False,
        manually_fixable: bool = False,
    ) -> CanonicalRuleRecord:
        return CanonicalRuleRecord(
            file_path=file_path,
            rule_id=rule_id,
            time_ms=time_ms,
            fixable=fixable,
            manually_fixable=manually_fixable,
            severity=severity,  # type: ignore[arg-type]
        )

    return _make
