# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for validated command options."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from eslint_stats.config import AnalyseOptions, MeasureOptions, interactive_default
from eslint_stats.models import DEFAULT_COLUMNS, Column, DurationStyle, GroupBy


def test_analyse_options_defaults() -> None:
    options = AnalyseOptions(file=Path("stats.json"))

    assert options.group_by is GroupBy.RULE
    assert options.take == (10,)
    assert options.columns == DEFAULT_COLUMNS


def test_take_accepts_at_most_two_limits() -> None:
    assert AnalyseOptions(file=Path("stats.json"), take=(5, 2)).take == (5, 2)
    assert AnalyseOptions(file=Path("stats.json"), take=()).take == (10,)
    with pytest.raises(ValidationError):
        AnalyseOptions(file=Path("stats.json"), take=(1, 2, 3))


def test_columns_are_deduplicated() -> None:
    options = AnalyseOptions(file=Path("stats.json"), columns=(Column.TIME, Column.ERRORS, Column.TIME))

    assert options.columns == (Column.TIME, Column.ERRORS)
    assert AnalyseOptions(file=Path("stats.json"), columns=()).columns == DEFAULT_COLUMNS


def test_max_identifier_width_lower_bound() -> None:
    with pytest.raises(ValidationError):
        AnalyseOptions(file=Path("stats.json"), max_identifier_width=4)


def test_assignment_is_validated() -> None:
    options = AnalyseOptions(file=Path("stats.json"))

    with pytest.raises(ValidationError):
        options.take = (1, 2, 3)


def test_view_request_mirrors_options() -> None:
    options = AnalyseOptions(file=Path("stats.json"), group_by=GroupBy.FILE_RULE, take=(3, 2))

    request = options.view_request()

    assert request.group_by is GroupBy.FILE_RULE
    assert request.take == (3, 2)


def test_theme_combines_flags() -> None:
    options = AnalyseOptions(file=Path("stats.json"), max_identifier_width=30, duration_style=DurationStyle.SI)

    assert options.theme().color_enabled
    assert not options.theme(color=False).color_enabled
    assert not AnalyseOptions(file=Path("stats.json"), color=False).theme(color=True).color_enabled
    assert options.theme().max_identifier_width == 30
    assert options.theme().duration_style is DurationStyle.SI


@pytest.mark.parametrize("variable", ["CI", "DISABLE_AUTO_UPDATE"])
def test_interactive_default_respects_opt_out_variables(variable: str) -> None:
    assert interactive_default({variable: "1"}) is False


def test_explicit_interactive_flag_wins() -> None:
    assert AnalyseOptions(file=Path("stats.json"), interactive=True).wants_interactive({"CI": "true"})
    assert not AnalyseOptions(file=Path("stats.json"), interactive=False).wants_interactive({})


def test_measure_options_require_command() -> None:
    assert MeasureOptions().eslint_command == ("eslint",)
    with pytest.raises(ValidationError):
        MeasureOptions(eslint_command=())
