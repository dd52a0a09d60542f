# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the instrumented ESLint runner."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from eslint_stats.errors import LinterLaunchError
from eslint_stats.parsing import describe_stats_filename, parse_stats_filename
from eslint_stats.runner import (
    CommandOptions,
    build_measure_command,
    default_output_file,
    run_eslint_with_stats,
    stats_flags,
)


class FakeRunner:
    """Record invocations and return a canned process result."""

    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[tuple[list[str], CommandOptions]] = []

    def __call__(self, args, *, options: CommandOptions) -> CompletedProcess[str]:
        self.calls.append((list(args), options))
        return CompletedProcess(list(args), self.returncode, stdout="", stderr=self.stderr)


def test_stats_flags() -> None:
    assert stats_flags("out.json") == ["--stats", "--format=json", "--output-file=out.json"]


def test_build_measure_command_appends_stats_flags() -> None:
    argv = build_measure_command(["npx", "eslint"], ["src", "--ext", ".ts"], Path("out.json"))

    assert argv == ["npx", "eslint", "src", "--ext", ".ts", "--stats", "--format=json", "--output-file=out.json"]


def test_default_output_file_encodes_command_and_timestamp(tmp_path: Path) -> None:
    date = datetime(2025, 6, 7, 8, 9, 10)

    path = default_output_file(["eslint"], ["src"], directory=tmp_path, date=date)

    assert path.parent == tmp_path
    assert path.name.startswith("ESLINT-STATS--")
    assert path.name.endswith(".20250607.080910.json")
    assert parse_stats_filename(path)[1] == date
    assert describe_stats_filename(path) == (
        date,
        "eslint src -- --stats --format=json --output-file=<generated>",
    )


def test_run_eslint_with_stats_passes_argv_and_options(tmp_path: Path) -> None:
    runner = FakeRunner()
    output = tmp_path / "stats.json"

    result = run_eslint_with_stats(["eslint"], ["src"], output_file=output, cwd=tmp_path, runner=runner)

    ((argv, options),) = runner.calls
    assert argv == ["eslint", "src", "--stats", "--format=json", f"--output-file={output}"]
    assert options.cwd == tmp_path
    assert result.output_file == output
    assert result.command == tuple(argv)
    assert result.returncode == 0


def test_run_eslint_with_stats_tolerates_lint_failures(tmp_path: Path) -> None:
    runner = FakeRunner(returncode=1, stderr="3 problems")

    result = run_eslint_with_stats(["eslint"], output_file=tmp_path / "stats.json", runner=runner)

    assert result.returncode == 1
    assert result.stderr == "3 problems"


def test_run_eslint_with_stats_defaults_output_to_cwd(tmp_path: Path) -> None:
    runner = FakeRunner()

    result = run_eslint_with_stats(["eslint"], ["."], cwd=tmp_path, runner=runner)

    assert result.output_file.parent == tmp_path
    assert result.output_file.name.startswith("ESLINT-STATS--")


def test_run_eslint_with_stats_reports_launch_failure(tmp_path: Path) -> None:
    def broken_runner(args, *, options):
        raise FileNotFoundError("Executable 'eslint' was not found on PATH")

    with pytest.raises(LinterLaunchError, match="Could not start 'eslint'"):
        run_eslint_with_stats(["eslint"], output_file=tmp_path / "stats.json", runner=broken_runner)


def test_missing_executable_raises_launch_error(tmp_path: Path) -> None:
    with pytest.raises(LinterLaunchError, match="not found on PATH"):
        run_eslint_with_stats(["eslint-stats-missing-executable"], output_file=tmp_path / "stats.json")
