# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Raw keypress sequences understood by the interactive session."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Key(str, Enum):
    """Keys that drive the interactive state machine."""

    ARROW_UP = "\x1b[A"
    ARROW_DOWN = "\x1b[B"
    ARROW_RIGHT = "\x1b[C"
    ARROW_LEFT = "\x1b[D"
    TAB = "\t"
    SHIFT_TAB = "\x1b[Z"
    ENTER = "\r"
    PLUS = "+"
    MINUS = "-"
    TOGGLE_LAYER = "l"
    INFO = "i"
    CTRL_C = "\x03"


# Sequences produced by other terminals or by ``click.getchar`` on Windows.
KEY_ALIASES: Final[dict[str, Key]] = {
    "\n": Key.ENTER,
    "\r\n": Key.ENTER,
    "=": Key.PLUS,
    "_": Key.MINUS,
    "L": Key.TOGGLE_LAYER,
    "I": Key.INFO,
    "\x1bOA": Key.ARROW_UP,
    "\x1bOB": Key.ARROW_DOWN,
    "\x1bOC": Key.ARROW_RIGHT,
    "\x1bOD": Key.ARROW_LEFT,
    "\xe0H": Key.ARROW_UP,
    "\xe0P": Key.ARROW_DOWN,
    "\xe0M": Key.ARROW_RIGHT,
    "\xe0K": Key.ARROW_LEFT,
    "\x00H": Key.ARROW_UP,
    "\x00P": Key.ARROW_DOWN,
    "\x00M": Key.ARROW_RIGHT,
    "\x00K": Key.ARROW_LEFT,
}


def normalize_key(raw: str) -> Key | None:
    """Map a raw keypress to a :class:`Key`, or ``None`` when it is not bound."""

    try:
        return Key(raw)
    except ValueError:
        return KEY_ALIASES.get(raw)


__all__ = ["KEY_ALIASES", "Key", "normalize_key"]
