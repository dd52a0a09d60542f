# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validated option models for the ``analyse`` and ``measure`` commands."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .console import detect_tty
from .models import (
    DEFAULT_COLUMNS,
    Column,
    DurationStyle,
    FixabilityRule,
    GroupBy,
    PercentagePolicy,
    SortBy,
    SortDirection,
)
from .pipeline import ViewRequest
from .runner import DEFAULT_ESLINT_COMMAND
from .theme import DEFAULT_MAX_IDENTIFIER_WIDTH, ThemeConfig

# Environment variables that suppress interactive mode unless it is requested explicitly.
NON_INTERACTIVE_ENV_VARS: Final[tuple[str, ...]] = ("CI", "DISABLE_AUTO_UPDATE")
MAX_TAKE_LEVELS: Final[int] = 2


def interactive_default(env: Mapping[str, str] | None = None) -> bool:
    """Return whether interactive mode should be enabled when not requested.

    Args:
        env: Environment to inspect; defaults to ``os.environ``.

    Returns:
        bool: ``True`` when stdout is a terminal and no opt-out variable is set.
    """

    environment = os.environ if env is None else env
    if any(name in environment for name in NON_INTERACTIVE_ENV_VARS):
        return False
    return detect_tty()


class AnalyseOptions(BaseModel):
    """Options accepted by the ``analyse`` command."""

    model_config = ConfigDict(validate_assignment=True)

    file: Path
    group_by: GroupBy = GroupBy.RULE
    sort_by: SortBy = SortBy.TIME
    sort_direction: SortDirection = SortDirection.DESC
    columns: tuple[Column, ...] = DEFAULT_COLUMNS
    take: tuple[int, ...] = (10,)
    out_path: Path | None = None
    percentage_policy: PercentagePolicy = PercentagePolicy.GLOBAL
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS
    interactive: bool | None = None
    color: bool = True
    max_identifier_width: int = Field(default=DEFAULT_MAX_IDENTIFIER_WIDTH, ge=8)
    duration_style: DurationStyle = DurationStyle.SHORT

    @field_validator("take")
    @classmethod
    def _validate_take(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        """Accept one limit, or separate file and rule limits."""

        if not value:
            return (10,)
        if len(value) > MAX_TAKE_LEVELS:
            raise ValueError("take accepts at most two limits (files, rules)")
        return value

    @field_validator("columns")
    @classmethod
    def _validate_columns(cls, value: tuple[Column, ...]) -> tuple[Column, ...]:
        """Drop duplicate columns while keeping their first position."""

        return tuple(dict.fromkeys(value)) or DEFAULT_COLUMNS

    def wants_interactive(self, env: Mapping[str, str] | None = None) -> bool:
        """Return the explicit interactive flag, or the environment default."""

        if self.interactive is not None:
            return self.interactive
        return interactive_default(env)

    def view_request(self) -> ViewRequest:
        """Return the pipeline request described by these options."""

        return ViewRequest(
            group_by=self.group_by,
            sort_by=self.sort_by,
            sort_direction=self.sort_direction,
            take=self.take,
            columns=self.columns,
            percentage_policy=self.percentage_policy,
            fixability=self.fixability,
        )

    def theme(self, *, color: bool | None = None) -> ThemeConfig:
        """Return the formatting configuration for these options."""

        return ThemeConfig(
            color_enabled=self.color if color is None else color and self.color,
            max_identifier_width=self.max_identifier_width,
            duration_style=self.duration_style,
        )


class MeasureOptions(BaseModel):
    """Options accepted by the ``measure`` command."""

    model_config = ConfigDict(validate_assignment=True)

    args: tuple[str, ...] = ()
    eslint_command: tuple[str, ...] = DEFAULT_ESLINT_COMMAND
    file_output: Path | None = None
    show: bool = True
    interactive: bool | None = None

    @field_validator("eslint_command")
    @classmethod
    def _validate_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least an executable name."""

        if not value:
            raise ValueError("eslint command must not be empty")
        return value


__all__ = [
    "NON_INTERACTIVE_ENV_VARS",
    "AnalyseOptions",
    "MeasureOptions",
    "interactive_default",
]
