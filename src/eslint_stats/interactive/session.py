# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Blocking keypress loop that redraws the report after every key."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

import click
from rich.console import Console
from rich.text import Text

from ..errors import EslintStatsError
from ..models import LoadedStats
from ..theme import ThemeConfig
from .export import write_markdown
from .keys import Key, normalize_key
from .scene import render_scene, render_table_view
from .state import Action, InteractiveState, update_state

KeyReader = Callable[[], str]


def read_keypress() -> str:
    """Block until one keypress is available and return its raw sequence."""

    return click.getchar(echo=False)


def _draw(console: Console, scene: str) -> None:
    console.clear()
    console.print(Text.from_ansi(scene), soft_wrap=True, highlight=False)


def run_session(
    stats: LoadedStats,
    state: InteractiveState,
    *,
    read_key: KeyReader | None = None,
    console: Console | None = None,
    theme: ThemeConfig | None = None,
) -> InteractiveState:
    """Drive the interactive view until the user quits.

    Every handled key recomputes the whole view from the loaded records.
    ``Enter`` appends the current table to the markdown report; write
    failures become the next notification instead of ending the session.

    Args:
        stats: Loaded stats file.
        state: Initial state.
        read_key: Blocking source of raw keypresses. Defaults to ``click.getchar``.
        console: Console receiving the redrawn screen.
        theme: Presentation settings; defaults to a coloured theme.

    Returns:
        InteractiveState: Final state when the session ended.
    """

    reader = read_key or read_keypress
    output = console or Console()
    active_theme = theme or ThemeConfig()
    _draw(output, render_scene(state, stats, active_theme))

    while True:
        try:
            raw = reader()
        except (KeyboardInterrupt, EOFError):
            break
        key = normalize_key(raw)
        if key is Key.CTRL_C:
            break
        next_state = update_state(state, raw)
        if next_state is state:
            continue
        state = next_state
        if key is Key.ENTER and state.last_action is Action.WRITE:
            try:
                state = write_markdown(state, render_table_view(state, stats, active_theme))
            except EslintStatsError as exc:
                state = replace(state, notification=str(exc))
        _draw(output, render_scene(state, stats, active_theme))
    return state


__all__ = ["KeyReader", "read_keypress", "run_session"]
