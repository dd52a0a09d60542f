# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

from ..typer_ext import SortedTyper
from . import analyse, measure

__all__ = ["register_commands"]


def register_commands(app: SortedTyper) -> None:
    """Register the built-in commands on ``app``.

    Args:
        app: Typer application receiving command registrations.
    """

    analyse.register(app)
    measure.register(app)
