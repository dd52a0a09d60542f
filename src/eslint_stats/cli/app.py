# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from .commands import register_commands
from .typer_ext import create_typer

app = create_typer(
    name="eslint-stats",
    help="Analyse ESLint performance statistics by rule, file, or file and rule.",
    no_args_is_help=True,
    add_completion=False,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"eslint-stats {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show the version and exit.", callback=_show_version, is_eager=True),
    ] = False,
) -> None:
    """Analyse ESLint performance statistics."""


register_commands(app)


def main() -> None:
    """Run the ``eslint-stats`` console script."""

    app()


__all__ = ["app", "main"]
