# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``measure`` command: run ESLint with ``--stats`` and optionally analyse the result."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.text import Text

from ...config import AnalyseOptions, MeasureOptions
from ...errors import EslintStatsError
from ...runner import DEFAULT_ESLINT_COMMAND, MeasureResult, run_eslint_with_stats
from ..shared import CLIError, CLILogger, build_cli_logger
from ..typer_ext import SortedTyper
from .analyse import run_analyse


def run_measure(options: MeasureOptions, logger: CLILogger, *, color: bool = True) -> MeasureResult:
    """Run the linter with stats enabled and chain into ``analyse`` when requested.

    Args:
        options: Validated measure options.
        logger: CLI logger for status and debug messages.
        color: Whether the chained report may use colour.

    Returns:
        MeasureResult: Outcome of the linter run.

    Raises:
        EslintStatsError: If the linter cannot start or the stats file is unusable.
        CLIError: If the linter finished without writing the stats file.
    """

    logger.info(f"Running {shlex.join([*options.eslint_command, *options.args])} with --stats")
    result = run_eslint_with_stats(options.eslint_command, options.args, output_file=options.file_output)
    logger.debug(f"command={shlex.join(result.command)} returncode={result.returncode}")
    if result.stderr.strip():
        logger.console.print(Text(result.stderr.rstrip(), style="dim"))
    if result.returncode != 0:
        logger.warn(f"ESLint exited with status {result.returncode}; reading the collected stats anyway.")
    if not result.output_file.is_file():
        raise CLIError(
            f"ESLint did not write a stats file to {result.output_file}",
            exit_code=result.returncode or 1,
        )
    logger.ok(f"Stats written to {result.output_file}")

    if options.show:
        run_analyse(AnalyseOptions(file=result.output_file, interactive=options.interactive, color=color), logger)
    return result


def measure(
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Arguments passed to ESLint, e.g. files, globs, or --config."),
    ] = None,
    eslint_command: Annotated[
        str,
        typer.Option("--eslint-command", help="Command that runs ESLint, e.g. 'npx eslint'."),
    ] = " ".join(DEFAULT_ESLINT_COMMAND),
    file_output: Annotated[
        Path | None,
        typer.Option("--file-output", help="Stats file to write. Defaults to a timestamped name.", dir_okay=False),
    ] = None,
    show: Annotated[
        bool,
        typer.Option("--show/--no-show", help="Analyse the stats file after ESLint finishes."),
    ] = True,
    interactive: Annotated[
        bool | None,
        typer.Option("--interactive/--no-interactive", help="Browse the chained report with the keyboard."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print debug diagnostics.")] = False,
) -> None:
    """Run ESLint with performance statistics enabled."""

    logger = build_cli_logger(emoji=True, debug=debug, no_color=no_color)
    try:
        options = MeasureOptions(
            args=tuple(args or ()),
            eslint_command=tuple(shlex.split(eslint_command)),
            file_output=file_output,
            show=show,
            interactive=interactive,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        run_measure(options, logger, color=not no_color)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except EslintStatsError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc


def register(app: SortedTyper) -> None:
    """Register the measure command.

    Unknown options are forwarded to ESLint instead of being rejected.

    Args:
        app: Typer application receiving the command.
    """

    app.command(
        name="measure",
        context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    )(measure)


__all__ = ["measure", "register", "run_measure"]
