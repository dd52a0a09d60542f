# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable interactive state and its keypress transitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Final, TypeVar

from ..models import (
    DEFAULT_COLUMNS,
    Column,
    FixabilityRule,
    GroupBy,
    PercentagePolicy,
    SortBy,
    SortDirection,
)
from ..pipeline import ViewRequest
from .keys import Key, normalize_key

GROUP_BY_OPTIONS: Final[tuple[GroupBy, ...]] = (GroupBy.RULE, GroupBy.FILE, GroupBy.FILE_RULE)
SORT_BY_OPTIONS: Final[tuple[SortBy, ...]] = (SortBy.TIME, SortBy.VIOLATIONS)
DEFAULT_TAKE: Final[tuple[int, ...]] = (10,)
MIN_TAKE: Final[int] = 1

OptionT = TypeVar("OptionT")


class Layer(str, Enum):
    """Level whose row limit ``+``/``-`` adjusts in the file-rule view."""

    FILE = "file"
    RULE = "rule"


class Action(str, Enum):
    """Last user action, emphasised in the legend."""

    GROUP = "group"
    SORT = "sort"
    ORDER = "order"
    ROWS = "rows"
    LAYER = "layer"
    WRITE = "write"
    INFO = "info"


@dataclass(slots=True, frozen=True)
class InteractiveState:
    """Snapshot of the interactive view; every transition returns a new one."""

    file: Path
    group_by: GroupBy = GroupBy.RULE
    sort_by: SortBy = SortBy.TIME
    sort_direction: SortDirection = SortDirection.DESC
    take: tuple[int, ...] = DEFAULT_TAKE
    active_layer: Layer = Layer.FILE
    last_action: Action | None = Action.SORT
    out_path: Path | None = None
    notification: str | None = None
    show_info: bool = False
    columns: tuple[Column, ...] = DEFAULT_COLUMNS
    percentage_policy: PercentagePolicy = PercentagePolicy.GLOBAL
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS

    @property
    def file_limit(self) -> int:
        """Return the top-level row limit."""

        return self.take[0] if self.take else DEFAULT_TAKE[0]

    @property
    def rule_limit(self) -> int:
        """Return the nested row limit; a single limit applies to both levels."""

        return self.take[1] if len(self.take) > 1 else self.file_limit

    def view_request(self) -> ViewRequest:
        """Return the pipeline request matching this state."""

        return ViewRequest(
            group_by=self.group_by,
            sort_by=self.sort_by,
            sort_direction=self.sort_direction,
            take=self.take or DEFAULT_TAKE,
            columns=self.columns,
            percentage_policy=self.percentage_policy,
            fixability=self.fixability,
        )


def default_out_path(file: Path) -> Path:
    """Return the markdown path next to ``file``, sharing its stem."""

    return file.resolve().with_suffix(".md")


def init_state(
    file: Path,
    *,
    group_by: GroupBy = GroupBy.RULE,
    sort_by: SortBy = SortBy.TIME,
    sort_direction: SortDirection = SortDirection.DESC,
    take: Sequence[int] | None = None,
    out_path: Path | None = None,
    columns: Sequence[Column] = DEFAULT_COLUMNS,
    percentage_policy: PercentagePolicy = PercentagePolicy.GLOBAL,
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS,
) -> InteractiveState:
    """Build the initial state for an analysed stats file.

    Args:
        file: Stats file being analysed.
        group_by: Initial grouping.
        sort_by: Initial sort key.
        sort_direction: Initial sort direction.
        take: Initial row limits; defaults to ``(10,)``.
        out_path: Markdown output; defaults to ``file`` with a ``.md`` suffix.
        columns: Columns shown after the identifier.
        percentage_policy: Divisor policy for relative percentages.
        fixability: Rule used to fold fixable flags.

    Returns:
        InteractiveState: State with ``sort`` as the emphasised action.
    """

    return InteractiveState(
        file=file,
        group_by=GroupBy(group_by),
        sort_by=SortBy(sort_by),
        sort_direction=SortDirection(sort_direction),
        take=tuple(take) if take else DEFAULT_TAKE,
        out_path=(out_path.resolve() if out_path is not None else default_out_path(file)),
        columns=tuple(columns),
        percentage_policy=PercentagePolicy(percentage_policy),
        fixability=FixabilityRule(fixability),
    )


def _cycle(options: Sequence[OptionT], current: OptionT, step: int) -> OptionT:
    return options[(options.index(current) + step) % len(options)]


def _step_limit(limit: int, delta: int) -> int:
    # Unlimited (0 or less) stays unlimited.
    if limit <= 0:
        return limit
    return max(MIN_TAKE, limit + delta)


def _adjust_take(state: InteractiveState, delta: int) -> tuple[int, ...]:
    if state.group_by is not GroupBy.FILE_RULE:
        return tuple(_step_limit(limit, delta) for limit in state.take)
    file_limit, rule_limit = state.file_limit, state.rule_limit
    if state.active_layer is Layer.FILE:
        file_limit = _step_limit(file_limit, delta)
    else:
        rule_limit = _step_limit(rule_limit, delta)
    return (file_limit, rule_limit)


def update_state(state: InteractiveState, key: str | Key) -> InteractiveState:
    """Return the state that follows ``state`` after ``key`` is pressed.

    Unbound keys return ``state`` itself. Handled keys clear any pending
    notification. ``Enter`` only selects the write action when an output path
    is configured; the session performs the write.

    Args:
        state: Current state.
        key: Raw keypress or :class:`Key`.

    Returns:
        InteractiveState: Next state.
    """

    resolved = key if isinstance(key, Key) else normalize_key(key)
    if resolved is None:
        return state
    cleared = replace(state, notification=None)
    if resolved in (Key.TAB, Key.SHIFT_TAB):
        step = 1 if resolved is Key.TAB else -1
        return replace(cleared, group_by=_cycle(GROUP_BY_OPTIONS, state.group_by, step), last_action=Action.GROUP)
    if resolved in (Key.ARROW_RIGHT, Key.ARROW_LEFT):
        step = 1 if resolved is Key.ARROW_RIGHT else -1
        return replace(cleared, sort_by=_cycle(SORT_BY_OPTIONS, state.sort_by, step), last_action=Action.SORT)
    if resolved in (Key.ARROW_UP, Key.ARROW_DOWN):
        direction = SortDirection.ASC if state.sort_direction is SortDirection.DESC else SortDirection.DESC
        return replace(cleared, sort_direction=direction, last_action=Action.ORDER)
    if resolved in (Key.PLUS, Key.MINUS):
        delta = 1 if resolved is Key.PLUS else -1
        return replace(cleared, take=_adjust_take(state, delta), last_action=Action.ROWS)
    if resolved is Key.TOGGLE_LAYER and state.group_by is GroupBy.FILE_RULE:
        layer = Layer.RULE if state.active_layer is Layer.FILE else Layer.FILE
        return replace(cleared, active_layer=layer, last_action=Action.LAYER)
    if resolved is Key.INFO:
        return replace(cleared, show_info=not state.show_info, last_action=Action.INFO)
    if resolved is Key.ENTER and state.out_path is not None:
        return replace(cleared, last_action=Action.WRITE)
    return state


def describe_state(state: InteractiveState) -> str:
    """Return the markdown state line written above an exported table."""

    rows = ", ".join(str(limit) for limit in state.take)
    return (
        f"> State: Group by **{state.group_by.value}**, Sort by **{state.sort_by.value}** "
        f"({state.sort_direction.value}), Rows: **{rows}**"
    )


__all__ = [
    "DEFAULT_TAKE",
    "GROUP_BY_OPTIONS",
    "SORT_BY_OPTIONS",
    "Action",
    "InteractiveState",
    "Layer",
    "default_out_path",
    "describe_state",
    "init_state",
    "update_state",
]
