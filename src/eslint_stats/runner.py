# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run ESLint with performance instrumentation and capture its stats file."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .errors import LinterLaunchError
from .parsing import STATS_FILE_PREFIX, build_stats_filename, encode_command

DEFAULT_ESLINT_COMMAND: Final[tuple[str, ...]] = ("eslint",)
OUTPUT_PLACEHOLDER: Final[str] = "<generated>"


@dataclass(slots=True)
class CommandOptions:
    """Execution options for :func:`run_command`."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True


@dataclass(slots=True)
class MeasureResult:
    """Outcome of one instrumented lint run."""

    output_file: Path
    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""


CommandRunner = Callable[..., CompletedProcess[str]]


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` on ``PATH``.

    Args:
        args: Command and arguments.

    Returns:
        list[str]: Arguments with an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    A non-zero exit status is returned to the caller, not raised.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment, and capture settings.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    return subprocess.run(  # nosec B603 - argument list, no shell
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        check=False,
        capture_output=resolved_options.capture_output,
        text=resolved_options.text,
    )


def stats_flags(output_file: Path | str) -> list[str]:
    """Return the ESLint flags that write JSON results with timing data."""

    return ["--stats", "--format=json", f"--output-file={output_file}"]


def build_measure_command(
    eslint_command: Sequence[str],
    args: Sequence[str],
    output_file: Path | str,
) -> list[str]:
    """Return the full argv of an instrumented lint run."""

    return [*eslint_command, *args, *stats_flags(output_file)]


def default_output_file(
    eslint_command: Sequence[str],
    args: Sequence[str],
    *,
    directory: Path | None = None,
    date: datetime | None = None,
) -> Path:
    """Return a timestamped stats path whose name encodes the invoked command.

    The output file itself is replaced by a placeholder before encoding so the
    decoded command stays stable across runs.

    Args:
        eslint_command: Linter executable and its leading arguments.
        args: Extra arguments passed to the linter.
        directory: Target directory; defaults to the current directory.
        date: Timestamp used in the filename; defaults to now.

    Returns:
        Path: ``ESLINT-STATS--<encoded>.YYYYMMDD.HHMMSS.json`` inside ``directory``.
    """

    encoded = encode_command([*eslint_command, *args, "--", *stats_flags(OUTPUT_PLACEHOLDER)])
    return (directory or Path.cwd()) / build_stats_filename(f"{STATS_FILE_PREFIX}{encoded}", date)


def run_eslint_with_stats(
    eslint_command: Sequence[str],
    args: Sequence[str] = (),
    *,
    output_file: Path | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    runner: CommandRunner = run_command,
) -> MeasureResult:
    """Run the linter with stats enabled, tolerating a non-zero exit.

    ESLint exits non-zero whenever it reports violations, which is expected
    here; only a failure to start the process is an error.

    Args:
        eslint_command: Linter executable and its leading arguments.
        args: Extra arguments passed to the linter.
        output_file: Stats file to write; defaults to :func:`default_output_file`.
        cwd: Working directory of the linter process.
        env: Environment of the linter process.
        runner: Process runner, replaceable in tests.

    Returns:
        MeasureResult: Output path, argv, exit status, and captured streams.

    Raises:
        LinterLaunchError: If the linter process could not be started.
    """

    command = list(eslint_command) or list(DEFAULT_ESLINT_COMMAND)
    target = output_file or default_output_file(command, args, directory=cwd)
    argv = build_measure_command(command, args, target)
    try:
        completed = runner(argv, options=CommandOptions(cwd=cwd, env=env))
    except (OSError, ValueError) as exc:
        raise LinterLaunchError(f"Could not start '{command[0]}': {exc}") from exc
    return MeasureResult(
        output_file=target,
        command=tuple(argv),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = [
    "DEFAULT_ESLINT_COMMAND",
    "CommandOptions",
    "MeasureResult",
    "build_measure_command",
    "default_output_file",
    "run_command",
    "run_eslint_with_stats",
    "stats_flags",
]
