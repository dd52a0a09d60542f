# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``analyse`` command: render an ESLint stats file as a table or interactive view."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from ...config import AnalyseOptions
from ...console import detect_tty
from ...errors import EslintStatsError
from ...interactive import init_state, run_session, write_markdown
from ...interactive.state import InteractiveState
from ...models import Column, GroupBy, PercentagePolicy, SortBy, SortDirection
from ...parsing import load_stats
from ...pipeline import render_view
from ..shared import CLILogger, build_cli_logger
from ..typer_ext import SortedTyper


def state_from_options(options: AnalyseOptions) -> InteractiveState:
    """Return the initial interactive state described by ``options``."""

    return init_state(
        options.file,
        group_by=options.group_by,
        sort_by=options.sort_by,
        sort_direction=options.sort_direction,
        take=options.take,
        out_path=options.out_path,
        columns=options.columns,
        percentage_policy=options.percentage_policy,
        fixability=options.fixability,
    )


def run_analyse(options: AnalyseOptions, logger: CLILogger) -> None:
    """Load the stats file and show it interactively or print it once.

    In non-interactive mode the table goes to stdout and, when an output path
    was given explicitly, is also appended to that markdown report.

    Args:
        options: Validated analyse options.
        logger: CLI logger for status and debug messages.

    Raises:
        EslintStatsError: If the stats file cannot be loaded or the report written.
    """

    stats = load_stats(options.file)
    logger.debug(f"file={options.file} records={len(stats.records)} group_by={options.group_by.value}")

    if options.wants_interactive():
        logger.debug("mode=interactive")
        run_session(stats, state_from_options(options), theme=options.theme())
        return

    theme = options.theme(color=detect_tty())
    table = render_view(stats.records, options.view_request(), theme)
    logger.echo(table)
    if options.out_path is not None:
        state = write_markdown(state_from_options(options), table)
        logger.ok(state.notification or f"Appended to {options.out_path.name}")


def analyse(
    file: Annotated[
        Path,
        typer.Argument(help="ESLint JSON output produced with --stats.", dir_okay=False),
    ],
    group_by: Annotated[
        GroupBy,
        typer.Option("--group-by", "--groupBy", "-g", help="Group rows by rule, file, or file with nested rules."),
    ] = GroupBy.RULE,
    sort_by: Annotated[
        SortBy,
        typer.Option("--sort-by", "--sortBy", "-s", help="Rank rows by time or by violation count."),
    ] = SortBy.TIME,
    sort_direction: Annotated[
        SortDirection,
        typer.Option("--sort-direction", "--sortDirection", "-d", help="Sort direction."),
    ] = SortDirection.DESC,
    show: Annotated[
        list[Column] | None,
        typer.Option("--show", "-w", help="Columns to show. Repeat for several columns."),
    ] = None,
    take: Annotated[
        list[int] | None,
        typer.Option(
            "--take",
            "-t",
            help="Row limit. Pass twice for separate file and rule limits; 0 shows everything.",
        ),
    ] = None,
    out_path: Annotated[
        Path | None,
        typer.Option("--out-path", "--outPath", "-o", help="Markdown report to append views to.", dir_okay=False),
    ] = None,
    percent: Annotated[
        PercentagePolicy,
        typer.Option("--percent", help="Divide nested rows by the grand total or by their parent."),
    ] = PercentagePolicy.GLOBAL,
    interactive: Annotated[
        bool | None,
        typer.Option(
            "--interactive/--no-interactive",
            help="Browse the report with the keyboard. Defaults to on in a terminal outside CI.",
        ),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    max_identifier_width: Annotated[
        int,
        typer.Option("--max-identifier-width", help="Shorten file paths longer than this.", min=8),
    ] = 50,
    debug: Annotated[bool, typer.Option("--debug", help="Print debug diagnostics.")] = False,
) -> None:
    """Analyse an ESLint stats file."""

    logger = build_cli_logger(emoji=True, debug=debug, no_color=no_color)
    try:
        options = AnalyseOptions(
            file=file,
            group_by=group_by,
            sort_by=sort_by,
            sort_direction=sort_direction,
            columns=tuple(show or ()),
            take=tuple(take or ()),
            out_path=out_path,
            percentage_policy=percent,
            interactive=interactive,
            color=not no_color,
            max_identifier_width=max_identifier_width,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        run_analyse(options, logger)
    except EslintStatsError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc


def register(app: SortedTyper) -> None:
    """Register the analyse command; ``analyze`` resolves to it as an alias.

    Args:
        app: Typer application receiving the command.
    """

    app.command(name="analyse")(analyse)


__all__ = ["analyse", "register", "run_analyse", "state_from_options"]
