# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the stats loader, runner, and CLI."""

from __future__ import annotations

from pathlib import Path


class EslintStatsError(Exception):
    """Base class for failures the CLI reports and exits on."""


class MalformedInputError(EslintStatsError):
    """Raised when a stats payload does not match the ESLint JSON result format."""


class MissingStatsError(MalformedInputError):
    """Raised when a stats file carries no ``stats`` block on any result."""

    def __init__(self, file: Path | str) -> None:
        """Build the remediation message for ``file``.

        Args:
            file: Path of the stats file missing performance data.
        """

        super().__init__(
            "The ESLint stats file seems to be missing performance data. "
            "Please make sure you generate it with the '--stats' flag, e.g., "
            f"'eslint . --format json --output-file {file} --stats'."
        )
        self.file = Path(file)


class StatsFileError(EslintStatsError):
    """Raised when the stats file cannot be read from disk."""


class LinterLaunchError(EslintStatsError):
    """Raised when the external linter process cannot be started."""


__all__ = [
    "EslintStatsError",
    "LinterLaunchError",
    "MalformedInputError",
    "MissingStatsError",
    "StatsFileError",
]
