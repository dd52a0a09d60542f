# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Custom Typer helpers for consistent, sorted CLI help output."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Final, TypeVar

import click
import typer
from click.core import Command, Context, Parameter
from click.formatting import HelpFormatter
from typer.core import TyperCommand, TyperGroup

ARGUMENT_PARAM_TYPE: Final[str] = "argument"
COMMAND_ALIASES: Final[dict[str, str]] = {"analyze": "analyse"}
USAGE_ERROR_EXIT_CODE: Final[int] = 1


class SortedTyperCommand(TyperCommand):
    """Typer command that renders options in sorted order within help output."""

    def format_options(
        self,
        ctx: Context,
        formatter: HelpFormatter,
    ) -> None:
        """Render positional arguments and sorted options within CLI help.

        Args:
            ctx: Click context describing the application invocation.
            formatter: Click help formatter used to emit definition lists.
        """

        argument_records: list[tuple[str, str]] = []
        option_entries: list[tuple[tuple[str, int], tuple[str, str]]] = []

        for index, param in enumerate(self.get_params(ctx)):
            record = param.get_help_record(ctx)
            if record is None:
                continue
            if getattr(param, "param_type_name", "") == ARGUMENT_PARAM_TYPE:
                argument_records.append(record)
                continue
            option_entries.append(((_primary_option_name(param), index), record))

        if argument_records:
            with formatter.section("Arguments"):
                formatter.write_dl(argument_records)

        if option_entries:
            sorted_entries = sorted(option_entries, key=lambda item: item[0])
            sorted_records = [entry for _, entry in sorted_entries]
            with formatter.section("Options"):
                formatter.write_dl(sorted_records)


@contextmanager
def _usage_errors_exit_with(exit_code: int) -> Iterator[None]:
    """Rewrite the exit code carried by Click usage errors raised in the block."""

    try:
        yield
    except click.UsageError as exc:
        exc.exit_code = exit_code
        raise


class SortedTyperGroup(TyperGroup):
    """Typer group using :class:`SortedTyperCommand` and resolving command aliases.

    Aliases are looked up before the command table, so they never show up as
    separate entries in the help listing. Usage errors (unknown options,
    invalid choices, missing arguments) exit with :data:`USAGE_ERROR_EXIT_CODE`
    like every other failure instead of Click's default of 2.
    """

    command_class = SortedTyperCommand
    aliases: dict[str, str] = COMMAND_ALIASES
    usage_error_exit_code: int = USAGE_ERROR_EXIT_CODE

    def get_command(self, ctx: Context, cmd_name: str) -> Command | None:
        """Return the command registered as ``cmd_name`` or under its alias target."""

        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: Context | None = None,
        **extra: Any,
    ) -> Context:
        """Parse group-level arguments, remapping usage error exit codes."""

        with _usage_errors_exit_with(self.usage_error_exit_code):
            return super().make_context(info_name, args, parent=parent, **extra)

    def invoke(self, ctx: Context) -> Any:
        """Dispatch to the sub-command, remapping usage error exit codes."""

        with _usage_errors_exit_with(self.usage_error_exit_code):
            return super().invoke(ctx)


CommandCallback = TypeVar("CommandCallback", bound=Callable[..., Any])


class SortedTyper(typer.Typer):
    """Typer application that emits sorted option listings by default."""

    def __init__(self, *args: Any, cls: type[TyperGroup] | None = None, **kwargs: Any) -> None:
        """Initialise the Typer application with sorted help semantics.

        Args:
            *args: Positional arguments forwarded to :class:`typer.Typer`.
            cls: Optional group class to override the default sorted group.
            **kwargs: Keyword arguments forwarded to :class:`typer.Typer`.
        """

        group_cls = cls or SortedTyperGroup
        super().__init__(*args, cls=group_cls, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[CommandCallback], CommandCallback]:
        """Return a decorator that registers commands using sorted help output.

        Args:
            name: Optional explicit command name.
            cls: Command class to instantiate; defaults to
                :class:`SortedTyperCommand` when ``None``.
            **kwargs: Additional keyword arguments forwarded to
                :meth:`typer.Typer.command`.

        Returns:
            Callable[[CommandCallback], CommandCallback]: Registering decorator.
        """

        if cls is None:
            cls = SortedTyperCommand
        return super().command(name, cls=cls, **kwargs)


def create_typer(*, cls: type[TyperGroup] | None = None, **kwargs: Any) -> SortedTyper:
    """Return a :class:`SortedTyper` configured to emit sorted help listings.

    Args:
        cls: Optional Typer group subclass controlling command creation.
        **kwargs: Additional arguments forwarded to :class:`SortedTyper`.

    Returns:
        SortedTyper: Configured Typer application with sorted help output.
    """

    return SortedTyper(cls=cls, **kwargs)


def _primary_option_name(param: Parameter) -> str:
    """Return the canonical name used for sorting a Click parameter.

    Args:
        param: Click parameter being inspected.

    Returns:
        str: Normalised option name (without leading dashes) for sorting.
    """

    option_names: Iterable[str] = tuple(getattr(param, "opts", ())) + tuple(
        getattr(param, "secondary_opts", ()),
    )
    long_names = [name for name in option_names if name.startswith("--")]
    candidate = long_names[0] if long_names else (next(iter(option_names), "") or param.name or "")
    return candidate.lstrip("-").lower()


__all__ = [
    "COMMAND_ALIASES",
    "SortedTyper",
    "SortedTyperCommand",
    "SortedTyperGroup",
    "USAGE_ERROR_EXIT_CODE",
    "create_typer",
]
