# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load ESLint ``--stats`` output and normalise it into per-file/per-rule records."""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Final

from pydantic import TypeAdapter, ValidationError

from .errors import MalformedInputError, MissingStatsError, StatsFileError
from .models import (
    CanonicalRuleRecord,
    LoadedStats,
    RawFileResult,
    RawRuleTiming,
    StatsSummary,
    is_test_file,
)

STATS_FILE_PREFIX: Final[str] = "ESLINT-STATS--"
STATS_FILE_EXTENSION: Final[str] = "json"

_RESULTS_ADAPTER: Final[TypeAdapter[list[RawFileResult]]] = TypeAdapter(list[RawFileResult])
_STATS_FILENAME_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<prefix>[^.]+)\.(?P<ymd>\d{8})\.(?P<hms>\d{6})\.(?P<ext>json)$",
)
_PREFIX_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_PREFIX_INVALID_RE: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9_-]")


def validate_results(raw: object) -> list[RawFileResult]:
    """Validate decoded JSON against the ESLint result schema.

    Args:
        raw: Decoded JSON payload.

    Returns:
        list[RawFileResult]: Validated per-file results.

    Raises:
        MalformedInputError: If ``raw`` is not an array or an element does not
            match the expected structure.
    """

    if not isinstance(raw, list):
        raise MalformedInputError(f"Expected a JSON array of ESLint results, got {type(raw).__name__}")
    try:
        return _RESULTS_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise MalformedInputError(f"Invalid ESLint result payload:\n{exc}") from exc


def records_for_file(result: RawFileResult) -> list[CanonicalRuleRecord]:
    """Return the canonical records observed for a single file.

    One record is produced per message carrying a rule id. The rule's time is
    attributed to the first message of that rule so per-record times still sum
    to the measured rule time. Rules that ran without reporting anything get a
    zero-violation record carrying their time.

    Args:
        result: Validated ESLint result for one file.

    Returns:
        list[CanonicalRuleRecord]: Records in message order followed by silent rules.
    """

    timings = _rule_timings(result)
    test_file = is_test_file(result.file_path)
    records: list[CanonicalRuleRecord] = []
    timed: set[str] = set()

    for message in result.messages:
        rule_id = message.rule_id
        if rule_id is None:
            continue
        timing = timings.get(rule_id)
        time_ms = 0.0
        if timing is not None and rule_id not in timed:
            time_ms = timing.total
            timed.add(rule_id)
        records.append(
            CanonicalRuleRecord(
                file_path=result.file_path,
                rule_id=rule_id,
                time_ms=time_ms,
                fixable=message.fix is not None or (timing.fixable if timing is not None else False),
                manually_fixable=bool(message.suggestions),
                severity=message.severity,
                is_test_file=test_file,
            ),
        )

    referenced = {message.rule_id for message in result.messages if message.rule_id is not None}
    for rule_id, timing in timings.items():
        if rule_id in referenced:
            continue
        records.append(
            CanonicalRuleRecord(
                file_path=result.file_path,
                rule_id=rule_id,
                time_ms=timing.total,
                fixable=timing.fixable,
                is_test_file=test_file,
            ),
        )
    return records


def records_from_results(results: Iterable[RawFileResult]) -> list[CanonicalRuleRecord]:
    """Flatten validated results into canonical records, file by file."""

    return [record for result in results for record in records_for_file(result)]


def parse_results(raw: object) -> list[CanonicalRuleRecord]:
    """Validate ``raw`` ESLint JSON and return its canonical records.

    Args:
        raw: Decoded JSON payload, expected to be an array of file results.

    Returns:
        list[CanonicalRuleRecord]: Normalised file × rule records.

    Raises:
        MalformedInputError: If the payload is not a valid result array.
    """

    return records_from_results(validate_results(raw))


def ensure_stats_present(raw: Sequence[object], file: Path | str) -> None:
    """Reject non-empty payloads in which no result carries a ``stats`` block.

    Args:
        raw: Decoded JSON array.
        file: Stats file the payload came from, used in the error message.

    Raises:
        MissingStatsError: If every element lacks performance data.
    """

    if not raw:
        return
    if not any(isinstance(item, dict) and item.get("stats") is not None for item in raw):
        raise MissingStatsError(file)


def summarise(results: Sequence[RawFileResult]) -> StatsSummary:
    """Compute run-wide totals across validated results.

    Args:
        results: Validated per-file results.

    Returns:
        StatsSummary: Totals for the info panel.
    """

    summary = StatsSummary(file_count=len(results))
    rule_ids: set[str] = set()
    for result in results:
        if is_test_file(result.file_path):
            summary.test_file_count += 1
        first_pass = result.first_pass()
        if first_pass is not None:
            summary.total_time_ms += first_pass.total
            summary.parse_time_ms += first_pass.parse.total if first_pass.parse else 0.0
            summary.fix_time_ms += first_pass.fix.total if first_pass.fix else 0.0
            summary.rules_time_ms += sum(timing.total for timing in first_pass.rules.values())
            rule_ids.update(first_pass.rules)
        for message in result.messages:
            if message.rule_id is not None:
                rule_ids.add(message.rule_id)
            if message.severity == 2:
                summary.error_count += 1
            elif message.severity == 1:
                summary.warning_count += 1
            if message.fix is not None:
                summary.fixable_count += 1
    summary.rule_count = len(rule_ids)
    return summary


def load_stats(file: Path | str) -> LoadedStats:
    """Read, validate, and normalise an ESLint stats file.

    Args:
        file: Path to the JSON file produced by ``eslint --format json --stats``.

    Returns:
        LoadedStats: Canonical records, summary totals, and filename metadata.

    Raises:
        StatsFileError: If the file cannot be read.
        MalformedInputError: If the content is not valid ESLint JSON output.
        MissingStatsError: If no result carries performance data.
    """

    path = Path(file)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StatsFileError(f'Error reading file "{path}": {exc}') from exc
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f'Error parsing file "{path}": {exc}') from exc

    results = validate_results(payload)
    ensure_stats_present(payload, path)
    date, command = describe_stats_filename(path)
    return LoadedStats(
        file=path,
        records=records_from_results(results),
        summary=summarise(results),
        date=date,
        command=command,
    )


def _rule_timings(result: RawFileResult) -> dict[str, RawRuleTiming]:
    first_pass = result.first_pass()
    if first_pass is None:
        return {}
    return first_pass.rules


# ---------------------------------------------------------------------------
# Stats filenames
# ---------------------------------------------------------------------------


def encode_command(parts: Sequence[str]) -> str:
    """Encode a command line into a filename-safe slug.

    Args:
        parts: Executable followed by its arguments.

    Returns:
        str: URL-safe base64 without padding.
    """

    combined = " ".join(parts)
    return base64.urlsafe_b64encode(combined.encode("utf-8")).decode("ascii").rstrip("=")


def decode_command(slug: str) -> str:
    """Decode a slug produced by :func:`encode_command`.

    Raises:
        ValueError: If ``slug`` is not valid base64 or not UTF-8.
    """

    padded = slug + "=" * (-len(slug) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError) as exc:
        raise ValueError(f"Cannot decode command slug '{slug}'") from exc


def build_stats_filename(prefix: str, date: datetime | None = None) -> str:
    """Return ``PREFIX.YYYYMMDD.HHMMSS.json`` for ``prefix`` at ``date``.

    Whitespace and characters outside ``[A-Za-z0-9_-]`` in the prefix are
    replaced with dashes.
    """

    moment = date or datetime.now()
    prepared = _PREFIX_INVALID_RE.sub("-", _PREFIX_WHITESPACE_RE.sub("-", prefix.strip()))
    return f"{prepared}.{moment:%Y%m%d}.{moment:%H%M%S}.{STATS_FILE_EXTENSION}"


def parse_stats_filename(file: Path | str) -> tuple[str, datetime]:
    """Split a generated stats filename into its prefix and timestamp.

    Args:
        file: Path or name following :func:`build_stats_filename`.

    Returns:
        tuple[str, datetime]: Prefix and the encoded local timestamp.

    Raises:
        ValueError: If the name does not follow the expected pattern.
    """

    name = Path(file).name
    match = _STATS_FILENAME_RE.match(name)
    if match is None:
        raise ValueError(f"Invalid ESLint stats filename format: {name}")
    date = datetime.strptime(f"{match['ymd']}{match['hms']}", "%Y%m%d%H%M%S")
    return match["prefix"], date


def describe_stats_filename(file: Path | str) -> tuple[datetime | None, str | None]:
    """Return the run date and command encoded in a stats filename, if any."""

    try:
        prefix, date = parse_stats_filename(file)
    except ValueError:
        return None, None
    if not prefix.startswith(STATS_FILE_PREFIX):
        return date, None
    try:
        command = decode_command(prefix.removeprefix(STATS_FILE_PREFIX))
    except ValueError:
        command = None
    return date, command


__all__ = [
    "STATS_FILE_PREFIX",
    "build_stats_filename",
    "decode_command",
    "describe_stats_filename",
    "encode_command",
    "ensure_stats_present",
    "load_stats",
    "parse_results",
    "parse_stats_filename",
    "records_for_file",
    "records_from_results",
    "summarise",
    "validate_results",
]
