# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for the eslint-stats command line."""

from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest
from typer.testing import CliRunner

from eslint_stats.cli import app
from eslint_stats.cli.commands import measure as measure_module
from eslint_stats.interactive.export import REPORT_TITLE
from eslint_stats.runner import run_eslint_with_stats


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("eslint-stats ")


def test_analyse_prints_table(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("Rule")
    assert lines[2].startswith("no-unused-vars")
    assert "\x1b[" not in result.output


def test_analyze_alias(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyze", str(stats_file), "--no-interactive", "-g", "file"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("File")
    assert lines[2].startswith("a.ts")


def test_analyse_file_rule_with_limits(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(
        app,
        ["analyse", str(stats_file), "--no-interactive", "-g", "file-rule", "-t", "1", "-t", "1"],
    )

    assert result.exit_code == 0, result.output
    identifiers = [line.split(" | ")[0].rstrip() for line in result.output.splitlines()[2:]]
    assert identifiers == ["a.ts", "  no-unused-vars", "  ...", "..."]


def test_analyse_column_selection(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "--show", "time"])

    assert result.exit_code == 0, result.output
    header = result.output.splitlines()[0]
    assert header.split(" | ")[1].strip() == "Time"
    assert "Errors" not in header


def test_analyse_sorts_by_violations(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "-s", "violations"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[2].startswith("no-console")


def test_analyse_appends_to_out_path(runner: CliRunner, stats_file: Path, tmp_path: Path) -> None:
    report = tmp_path / "report.md"

    first = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "-o", str(report)])
    second = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "-o", str(report), "-g", "file"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    content = report.read_text(encoding="utf-8")
    assert content.startswith(REPORT_TITLE)
    assert "File: **stats.json**" in content
    assert "Group by **rule**" in content
    assert "Group by **file**" in content
    assert "Appended to report.md" in first.output


def test_analyse_missing_stats_exits_with_error(runner: CliRunner, write_stats) -> None:
    path = write_stats([{"filePath": "src/a.ts", "messages": []}])

    result = runner.invoke(app, ["analyse", str(path), "--no-interactive"])

    assert result.exit_code == 1
    assert "missing performance data" in result.output


def test_analyse_malformed_json_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("not json", encoding="utf-8")

    result = runner.invoke(app, ["analyse", str(path), "--no-interactive"])

    assert result.exit_code == 1
    assert "Error parsing file" in result.output


def test_analyse_rejects_three_take_values(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "-t", "1", "-t", "2", "-t", "3"])

    assert result.exit_code == 1


def test_analyse_rejects_unknown_group_by_with_exit_one(runner: CliRunner, stats_file: Path) -> None:
    result = runner.invoke(app, ["analyse", str(stats_file), "--no-interactive", "--group-by", "bogus"])

    assert result.exit_code == 1
    assert "bogus" in result.output


def test_analyse_without_file_exits_with_one(runner: CliRunner) -> None:
    result = runner.invoke(app, ["analyse", "--no-interactive"])

    assert result.exit_code == 1


def test_analyse_accepts_camel_case_options(runner: CliRunner, stats_file: Path, tmp_path: Path) -> None:
    report = tmp_path / "camel.md"

    result = runner.invoke(
        app,
        [
            "analyse",
            str(stats_file),
            "--no-interactive",
            "--groupBy",
            "file",
            "--sortBy",
            "violations",
            "--outPath",
            str(report),
        ],
    )

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("File")
    assert lines[2].startswith("a.ts")
    assert "Group by **file**" in report.read_text(encoding="utf-8")


def _fake_measure(payload: object, returncode: int = 1):
    def fake_runner(args, *, options):
        output = next(arg.split("=", 1)[1] for arg in args if arg.startswith("--output-file="))
        Path(output).write_text(json.dumps(payload), encoding="utf-8")
        return CompletedProcess(list(args), returncode, stdout="", stderr="")

    def fake_run(eslint_command, args=(), **kwargs):
        return run_eslint_with_stats(eslint_command, args, runner=fake_runner, **kwargs)

    return fake_run


def test_measure_runs_eslint_and_shows_report(
    runner: CliRunner,
    monkeypatch: pytest.MonkeyPatch,
    sample_results,
    tmp_path: Path,
) -> None:
    output = tmp_path / "measured.json"
    monkeypatch.setattr(measure_module, "run_eslint_with_stats", _fake_measure(sample_results))

    result = runner.invoke(
        app,
        ["measure", "--eslint-command", "npx eslint", "--file-output", str(output), "--no-interactive", "--", "src"],
    )

    assert result.exit_code == 0, result.output
    assert output.is_file()
    assert "ESLint exited with status 1" in result.output
    assert f"Stats written to {output}" in result.output
    assert "no-unused-vars" in result.output


def test_measure_without_show_skips_report(
    runner: CliRunner,
    monkeypatch: pytest.MonkeyPatch,
    sample_results,
    tmp_path: Path,
) -> None:
    output = tmp_path / "measured.json"
    monkeypatch.setattr(measure_module, "run_eslint_with_stats", _fake_measure(sample_results, returncode=0))

    result = runner.invoke(app, ["measure", "--file-output", str(output), "--no-show"])

    assert result.exit_code == 0, result.output
    assert "no-unused-vars" not in result.output
    assert "ESLint exited" not in result.output


def test_measure_reports_missing_output(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def no_output(eslint_command, args=(), **kwargs):
        return run_eslint_with_stats(
            eslint_command,
            args,
            runner=lambda argv, *, options: CompletedProcess(list(argv), 2, stdout="", stderr="Oops"),
            **kwargs,
        )

    monkeypatch.setattr(measure_module, "run_eslint_with_stats", no_output)

    result = runner.invoke(app, ["measure", "--file-output", str(tmp_path / "none.json")])

    assert result.exit_code == 2
    assert "did not write a stats file" in result.output


def test_measure_reports_launch_failure(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["measure", "--eslint-command", "eslint-stats-missing-executable", "--file-output", str(tmp_path / "x.json")],
    )

    assert result.exit_code == 1
    assert "Could not start" in result.output
