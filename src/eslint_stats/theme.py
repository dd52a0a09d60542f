# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatting configuration injected into the display formatter and table renderer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final

from rich.color import blend_rgb
from rich.color_triplet import ColorTriplet

from .models import DurationStyle

ColorScale = Callable[[float, float], str]

DEFAULT_MAX_IDENTIFIER_WIDTH: Final[int] = 50


def clamped_scale(start: ColorTriplet, end: ColorTriplet, low: float = 0.3, high: float = 0.8) -> ColorScale:
    """Return a sequential colour scale clamped to a mid-tone band.

    Args:
        start: Colour at ratio ``0``.
        end: Colour at ratio ``1``.
        low: Lower bound of the blend position actually used.
        high: Upper bound of the blend position actually used.

    Returns:
        ColorScale: Callable mapping ``(value, maximum)`` to a Rich colour string.
    """

    def scale(value: float, maximum: float) -> str:
        ratio = value / maximum if maximum > 0 else 0.0
        ratio = min(1.0, max(0.0, ratio))
        triplet = blend_rgb(start, end, low + (high - low) * ratio)
        return f"rgb({triplet.red},{triplet.green},{triplet.blue})"

    return scale


BLUES: Final[tuple[ColorTriplet, ColorTriplet]] = (ColorTriplet(247, 251, 255), ColorTriplet(8, 48, 107))
REDS: Final[tuple[ColorTriplet, ColorTriplet]] = (ColorTriplet(255, 245, 240), ColorTriplet(103, 0, 13))
ORANGES: Final[tuple[ColorTriplet, ColorTriplet]] = (ColorTriplet(255, 245, 235), ColorTriplet(127, 39, 4))


@dataclass(slots=True, frozen=True)
class Icons:
    """Glyphs used in headers and count cells."""

    fixable: str = "🔧"
    manually_fixable: str = "💡"
    error: str = "🚨"
    warning: str = "⚠️"
    time: str = "⚡"
    file: str = "📁"
    rule: str = "⚙️"
    stats: str = "📊"


@dataclass(slots=True, frozen=True)
class ThemeConfig:
    """Presentation settings for formatting and table rendering.

    Attributes:
        color_enabled: Emit Rich styles when ``True``; plain text otherwise.
        time_color_scale: Scale used for durations and percentages.
        error_color_scale: Scale used for error counts.
        warning_color_scale: Scale used for warning counts.
        max_identifier_width: File-like identifiers longer than this are shortened.
        duration_style: Rendering style for durations.
        icons: Glyphs for headers and fixability markers.
    """

    color_enabled: bool = True
    time_color_scale: ColorScale = field(default_factory=lambda: clamped_scale(*BLUES))
    error_color_scale: ColorScale = field(default_factory=lambda: clamped_scale(*REDS))
    warning_color_scale: ColorScale = field(default_factory=lambda: clamped_scale(*ORANGES, low=0.2, high=0.6))
    max_identifier_width: int = DEFAULT_MAX_IDENTIFIER_WIDTH
    duration_style: DurationStyle = DurationStyle.SHORT
    icons: Icons = field(default_factory=Icons)
    file_style: str = "green"
    rule_style: str = "cyan"
    muted_style: str = "dim"
    border_style: str = "dim"
    time_max_style: str = "bold blue"
    error_max_style: str = "bold red"
    warning_max_style: str = "bold yellow"

    def style(self, name: str | None) -> str:
        """Return ``name`` when colour is enabled, otherwise an empty style."""

        if not self.color_enabled or not name:
            return ""
        return name

    def metric_style(self, value: float, maximum: float, scale: ColorScale, max_style: str) -> str:
        """Return the intensity style for ``value`` relative to ``maximum``.

        Zero values are muted, the maximum gets ``max_style``, and everything
        in between is coloured from ``scale``.
        """

        if not self.color_enabled:
            return ""
        if value == 0:
            return self.muted_style
        if value == maximum:
            return max_style
        return scale(value, maximum)


PLAIN_THEME: Final[ThemeConfig] = ThemeConfig(color_enabled=False)


__all__ = [
    "BLUES",
    "DEFAULT_MAX_IDENTIFIER_WIDTH",
    "ORANGES",
    "PLAIN_THEME",
    "REDS",
    "ColorScale",
    "Icons",
    "ThemeConfig",
    "clamped_scale",
]
