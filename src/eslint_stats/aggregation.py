# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Group canonical records into rule, file, or file→rule time entries."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .models import CanonicalRuleRecord, FixabilityRule, GroupBy, TimeEntry


def _accumulate(entry: TimeEntry, record: CanonicalRuleRecord) -> None:
    entry.time_ms += record.time_ms
    entry.error_count += record.error_count
    entry.warning_count += record.warning_count
    entry.manually_fixable = entry.manually_fixable or record.manually_fixable


def resolve_fixable(flags: Iterable[tuple[bool, bool]], rule: FixabilityRule = FixabilityRule.ALL_VIOLATIONS) -> bool:
    """Fold ``(has_violation, fixable)`` pairs into one fixable flag.

    Args:
        flags: Violation/fixable pairs for every contributor of an entry.
        rule: Folding rule. ``ALL_VIOLATIONS`` requires at least one violating
            contributor and every violating contributor to be fixable; ``ANY``
            accepts any violating contributor that is fixable.

    Returns:
        bool: Aggregate fixability. Always ``False`` without violations.
    """

    violating = [fixable for has_violation, fixable in flags if has_violation]
    if not violating:
        return False
    if rule is FixabilityRule.ANY:
        return any(violating)
    return all(violating)


def group_by_rule(
    records: Sequence[CanonicalRuleRecord],
    *,
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS,
) -> list[TimeEntry]:
    """Aggregate records per rule id across all files.

    Args:
        records: Canonical records.
        fixability: Rule used to fold per-record fixable flags.

    Returns:
        list[TimeEntry]: One entry per rule in first-seen order.
    """

    return _group_flat(records, key=lambda record: record.rule_id, fixability=fixability)


def group_by_file(
    records: Sequence[CanonicalRuleRecord],
    *,
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS,
) -> list[TimeEntry]:
    """Aggregate records per file path.

    A file is fixable only when it has at least one violation and every
    violating record in it is fixable.

    Args:
        records: Canonical records.
        fixability: Rule used to fold per-record fixable flags.

    Returns:
        list[TimeEntry]: One entry per file in first-seen order.
    """

    return _group_flat(records, key=lambda record: record.file_path, fixability=fixability)


def group_by_file_and_rule(
    records: Sequence[CanonicalRuleRecord],
    *,
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS,
) -> list[TimeEntry]:
    """Aggregate records into files with one child entry per rule.

    File fixability is derived from that file's own rule children.

    Args:
        records: Canonical records.
        fixability: Rule used to fold fixable flags at both levels.

    Returns:
        list[TimeEntry]: File entries whose ``children`` hold rule entries.
    """

    files: dict[str, TimeEntry] = {}
    rules: dict[str, dict[str, TimeEntry]] = {}
    rule_flags: dict[tuple[str, str], list[tuple[bool, bool]]] = {}

    for record in records:
        file_entry = files.get(record.file_path)
        if file_entry is None:
            file_entry = TimeEntry(identifier=record.file_path, children=[])
            files[record.file_path] = file_entry
            rules[record.file_path] = {}
        _accumulate(file_entry, record)

        file_rules = rules[record.file_path]
        rule_entry = file_rules.get(record.rule_id)
        if rule_entry is None:
            rule_entry = TimeEntry(identifier=record.rule_id)
            file_rules[record.rule_id] = rule_entry
        _accumulate(rule_entry, record)
        rule_flags.setdefault((record.file_path, record.rule_id), []).append(
            (record.has_violation, record.fixable),
        )

    result: list[TimeEntry] = []
    for file_path, file_entry in files.items():
        children = list(rules[file_path].values())
        for child in children:
            child.fixable = resolve_fixable(rule_flags[(file_path, child.identifier)], fixability)
        file_entry.children = children
        file_entry.fixable = resolve_fixable(
            ((child.violation_count > 0, child.fixable) for child in children),
            fixability,
        )
        result.append(file_entry)
    return result


_GROUPERS: dict[GroupBy, Callable[..., list[TimeEntry]]] = {
    GroupBy.RULE: group_by_rule,
    GroupBy.FILE: group_by_file,
    GroupBy.FILE_RULE: group_by_file_and_rule,
}


def group_records(
    records: Sequence[CanonicalRuleRecord],
    group_by: GroupBy,
    *,
    fixability: FixabilityRule = FixabilityRule.ALL_VIOLATIONS,
) -> list[TimeEntry]:
    """Dispatch ``records`` to the grouping function for ``group_by``."""

    return _GROUPERS[GroupBy(group_by)](records, fixability=fixability)


def _group_flat(
    records: Sequence[CanonicalRuleRecord],
    *,
    key: Callable[[CanonicalRuleRecord], str],
    fixability: FixabilityRule,
) -> list[TimeEntry]:
    entries: dict[str, TimeEntry] = {}
    flags: dict[str, list[tuple[bool, bool]]] = {}
    for record in records:
        identifier = key(record)
        entry = entries.get(identifier)
        if entry is None:
            entry = TimeEntry(identifier=identifier)
            entries[identifier] = entry
            flags[identifier] = []
        _accumulate(entry, record)
        flags[identifier].append((record.has_violation, record.fixable))
    for identifier, entry in entries.items():
        entry.fixable = resolve_fixable(flags[identifier], fixability)
    return list(entries.values())


__all__ = [
    "group_by_file",
    "group_by_file_and_rule",
    "group_by_rule",
    "group_records",
    "resolve_fixable",
]
