# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models shared across the eslint-stats pipeline.

Raw ESLint payloads are validated with pydantic; everything derived from them
(records, aggregated entries, display rows) uses lightweight dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field
from rich.text import Text
from typing_extensions import TypeAliasType

JsonScalar = TypeAliasType("JsonScalar", str | int | float | bool | None)
JsonValue = TypeAliasType("JsonValue", "JsonScalar | list[JsonValue] | dict[str, JsonValue]")

TRUNCATION_MARKER: Final[str] = "..."
TEST_FILE_MARKERS: Final[tuple[str, ...]] = (".test.", ".spec.")


class GroupBy(str, Enum):
    """Enumerate the report groupings."""

    RULE = "rule"
    FILE = "file"
    FILE_RULE = "file-rule"


class SortBy(str, Enum):
    """Enumerate the keys entries can be ranked by."""

    TIME = "time"
    VIOLATIONS = "violations"


class SortDirection(str, Enum):
    """Enumerate sort directions."""

    ASC = "asc"
    DESC = "desc"


class PercentagePolicy(str, Enum):
    """Select the divisor used for relative time percentages.

    ``GLOBAL`` divides every node by the grand total of top-level entries.
    ``PARENT`` divides nested entries by their parent's time instead.
    """

    GLOBAL = "global"
    PARENT = "parent"


class FixabilityRule(str, Enum):
    """Select how per-record fixability folds into an aggregate entry."""

    ALL_VIOLATIONS = "all-violations"
    ANY = "any"


class DurationStyle(str, Enum):
    """Select how durations are rendered.

    ``SHORT`` prints milliseconds below one second and seconds above it.
    ``SI`` picks the SI prefix matching the magnitude (µs, ms, s).
    """

    SHORT = "short"
    SI = "si"


class Column(str, Enum):
    """Enumerate optional table columns besides the identifier."""

    TIME = "time"
    PERCENT = "percent"
    ERRORS = "errors"
    WARNINGS = "warnings"


DEFAULT_COLUMNS: Final[tuple[Column, ...]] = (Column.TIME, Column.PERCENT, Column.ERRORS, Column.WARNINGS)


# ---------------------------------------------------------------------------
# Raw ESLint JSON (``eslint --format json --stats``)
# ---------------------------------------------------------------------------


class RawMessage(BaseModel):
    """Single lint message emitted for a file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    rule_id: str | None = Field(default=None, alias="ruleId")
    severity: Literal[0, 1, 2] = 0
    fix: dict[str, JsonValue] | None = None
    suggestions: list[dict[str, JsonValue]] | None = None


class RawTiming(BaseModel):
    """Timing block carrying a ``total`` in milliseconds."""

    model_config = ConfigDict(extra="allow")

    total: float = 0.0


class RawRuleTiming(RawTiming):
    """Per-rule timing block with an optional fixable flag."""

    fixable: bool = False


class RawPass(BaseModel):
    """Timings for a single lint pass."""

    model_config = ConfigDict(extra="allow")

    parse: RawTiming | None = None
    rules: dict[str, RawRuleTiming] = Field(default_factory=dict)
    fix: RawTiming | None = None
    total: float = 0.0


class RawTimes(BaseModel):
    """Container for the per-pass timing list."""

    model_config = ConfigDict(extra="allow")

    passes: list[RawPass] = Field(default_factory=list)


class RawStats(BaseModel):
    """Performance block added by ``eslint --stats``."""

    model_config = ConfigDict(extra="allow")

    times: RawTimes | None = None


class RawFileResult(BaseModel):
    """One element of the ESLint JSON result array."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    file_path: str = Field(alias="filePath")
    messages: list[RawMessage] = Field(default_factory=list)
    stats: RawStats | None = None

    def first_pass(self) -> RawPass | None:
        """Return the first timing pass when the result carries stats.

        Returns:
            RawPass | None: Timings of pass zero, or ``None`` without stats.
        """

        if self.stats is None or self.stats.times is None or not self.stats.times.passes:
            return None
        return self.stats.times.passes[0]


# ---------------------------------------------------------------------------
# Canonical records and aggregated entries
# ---------------------------------------------------------------------------


def is_test_file(file_path: str) -> bool:
    """Return ``True`` when ``file_path`` names a test or spec file."""

    lowered = file_path.lower()
    return any(marker in lowered for marker in TEST_FILE_MARKERS)


@dataclass(slots=True, frozen=True)
class CanonicalRuleRecord:
    """One observed file × rule pair with its timing and violation data."""

    file_path: str
    rule_id: str
    time_ms: float = 0.0
    fixable: bool = False
    manually_fixable: bool = False
    severity: Literal[0, 1, 2] = 0
    is_test_file: bool = False

    @property
    def error_count(self) -> int:
        """Return ``1`` for error-severity records, ``0`` otherwise."""

        return 1 if self.severity == 2 else 0

    @property
    def warning_count(self) -> int:
        """Return ``1`` for warning-severity records, ``0`` otherwise."""

        return 1 if self.severity == 1 else 0

    @property
    def has_violation(self) -> bool:
        """Return ``True`` when the record represents a warning or error."""

        return self.severity in (1, 2)


@dataclass(slots=True)
class TimeEntry:
    """Aggregated timing and violation totals for one identifier."""

    identifier: str
    time_ms: float = 0.0
    warning_count: int = 0
    error_count: int = 0
    fixable: bool = False
    manually_fixable: bool = False
    children: list[TimeEntry] | None = None

    @property
    def violation_count(self) -> int:
        """Return the combined warning and error count."""

        return self.warning_count + self.error_count


@dataclass(slots=True)
class ProcessedTimeEntry(TimeEntry):
    """Time entry annotated with its share of the relevant total.

    ``relative_percent`` is ``-1`` when that total is zero. Marker entries
    stand in for rows removed by truncation and carry no numeric data.
    Children of a processed entry are processed entries as well.
    """

    relative_percent: float = -1.0
    is_marker: bool = False

    @classmethod
    def marker(cls) -> ProcessedTimeEntry:
        """Return the synthetic continuation row appended after truncation."""

        return cls(identifier=TRUNCATION_MARKER, is_marker=True)


@dataclass(slots=True)
class FormattedDisplayEntry:
    """Display-ready cells for one row, keeping the raw time for colouring."""

    identifier: Text
    time: Text
    relative_percent: Text
    warning_count: Text
    error_count: Text
    raw_time_ms: float = 0.0
    fixable: bool = False
    manually_fixable: bool = False
    children: list[FormattedDisplayEntry] | None = None


# ---------------------------------------------------------------------------
# Loaded stats file
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class StatsSummary:
    """Run-wide totals shown on the info panel."""

    file_count: int = 0
    rule_count: int = 0
    total_time_ms: float = 0.0
    parse_time_ms: float = 0.0
    rules_time_ms: float = 0.0
    fix_time_ms: float = 0.0
    error_count: int = 0
    warning_count: int = 0
    fixable_count: int = 0
    test_file_count: int = 0

    @property
    def other_time_ms(self) -> float:
        """Return pass time not attributed to parsing, rules, or fixing."""

        return max(0.0, self.total_time_ms - self.parse_time_ms - self.rules_time_ms - self.fix_time_ms)


@dataclass(slots=True)
class LoadedStats:
    """Records and metadata produced from one stats file."""

    file: Path
    records: list[CanonicalRuleRecord] = field(default_factory=list)
    summary: StatsSummary = field(default_factory=StatsSummary)
    date: datetime | None = None
    command: str | None = None


__all__ = [
    "DEFAULT_COLUMNS",
    "DurationStyle",
    "TRUNCATION_MARKER",
    "CanonicalRuleRecord",
    "Column",
    "FixabilityRule",
    "FormattedDisplayEntry",
    "GroupBy",
    "JsonValue",
    "LoadedStats",
    "PercentagePolicy",
    "ProcessedTimeEntry",
    "RawFileResult",
    "RawMessage",
    "RawPass",
    "RawRuleTiming",
    "RawStats",
    "RawTimes",
    "RawTiming",
    "SortBy",
    "SortDirection",
    "StatsSummary",
    "TimeEntry",
    "is_test_file",
]
