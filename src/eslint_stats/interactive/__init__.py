# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interactive keypress-driven report session."""

from __future__ import annotations

from .export import write_markdown
from .keys import Key, normalize_key
from .scene import render_scene
from .session import run_session
from .state import Action, InteractiveState, Layer, describe_state, init_state, update_state

__all__ = [
    "Action",
    "InteractiveState",
    "Key",
    "Layer",
    "describe_state",
    "init_state",
    "normalize_key",
    "render_scene",
    "run_session",
    "update_state",
    "write_markdown",
]
