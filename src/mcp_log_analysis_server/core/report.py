"""Report builder: turns raw log text into an AnalysisResult.

This module is the main integration point of the engine. It performs no I/O and
never raises on text input; reading files is left to :mod:`.ingest`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from .classifier import classify_line, timeline_event_kind
from .context import extract_context
from .models import (
    AnalysisResult,
    ClassifiedError,
    ClassifiedWarning,
    SecurityEvent,
    Severity,
    Summary,
    TimelineEntry,
)
from .statistics import aggregate
from .timestamps import extract_timestamp, extract_timestamps, parse_timestamp

LOGGER = logging.getLogger(__name__)

NO_TIMESTAMPS = "No timestamps found"


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` / ``\\r\\n``; a trailing terminator does not add an empty line."""
    if not content:
        return []
    lines = content.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def classify_lines(
    lines: Sequence[str],
) -> tuple[tuple[ClassifiedError, ...], tuple[ClassifiedWarning, ...], tuple[SecurityEvent, ...]]:
    """One classification pass; a line may land in several collections."""
    errors: list[ClassifiedError] = []
    warnings: list[ClassifiedWarning] = []
    security_events: list[SecurityEvent] = []

    for line_number, line in enumerate(lines, start=1):
        c = classify_line(line)
        if c.is_plain:
            continue
        message = line.strip()
        timestamp = extract_timestamp(line)
        context = extract_context(line)

        if c.error_severity is not None:
            errors.append(
                ClassifiedError(
                    line_number=line_number,
                    message=message,
                    severity=c.error_severity,
                    timestamp=timestamp,
                    context=context,
                )
            )
        if c.is_warning:
            warnings.append(
                ClassifiedWarning(
                    line_number=line_number,
                    message=message,
                    timestamp=timestamp,
                    context=context,
                )
            )
        if c.security_type is not None and c.security_severity is not None:
            security_events.append(
                SecurityEvent(
                    line_number=line_number,
                    event_type=c.security_type,
                    description=message,
                    severity=c.security_severity,
                    timestamp=timestamp,
                    context=context,
                )
            )

    return tuple(errors), tuple(warnings), tuple(security_events)


def build_timeline(lines: Sequence[str]) -> tuple[TimelineEntry, ...]:
    """Entries for lines whose timestamp parses, sorted by instant (stable)."""
    entries: list[TimelineEntry] = []
    for line in lines:
        ts = extract_timestamp(line)
        if ts is None:
            continue
        instant = parse_timestamp(ts)
        if instant is None:
            LOGGER.debug("Skipping timeline entry for unparseable timestamp %r", ts)
            continue
        entries.append(
            TimelineEntry(
                instant=instant,
                event_text=line.strip(),
                event_kind=timeline_event_kind(line),
            )
        )
    entries.sort(key=lambda e: e.instant)
    return tuple(entries)


def describe_time_range(lines: Sequence[str]) -> str:
    """First and last timestamp in file order (not sorted order)."""
    timestamps = extract_timestamps(lines)
    if len(timestamps) >= 2:
        return f"{timestamps[0]} to {timestamps[-1]}"
    if timestamps:
        return timestamps[0]
    return NO_TIMESTAMPS


def key_findings(
    errors: Sequence[ClassifiedError],
    warnings: Sequence[ClassifiedWarning],
    security_events: Sequence[SecurityEvent],
) -> tuple[str, ...]:
    findings: list[str] = []
    if errors:
        findings.append(f"Found {len(errors)} errors in the log")
    if warnings:
        findings.append(f"Found {len(warnings)} warnings in the log")
    if security_events:
        findings.append(f"Detected {len(security_events)} security-related events")
    critical = _count_critical(errors)
    if critical:
        findings.append(f"{critical} critical errors require immediate attention")
    return tuple(findings)


def _count_critical(errors: Sequence[ClassifiedError]) -> int:
    return sum(1 for e in errors if e.severity is Severity.CRITICAL)


def analyze(
    file_name: str,
    file_size: int,
    content: str,
    *,
    now: datetime | None = None,
) -> AnalysisResult:
    """Analyze a fully buffered log text.

    `now` only sets ``analysis_date``; every other field depends on the input alone.
    """
    lines = split_lines(content)

    errors, warnings, security_events = classify_lines(lines)
    timeline = build_timeline(lines)
    statistics = aggregate(lines)

    summary = Summary(
        total_lines=len(lines),
        error_count=len(errors),
        warning_count=len(warnings),
        critical_issues=_count_critical(errors),
        time_range=describe_time_range(lines),
        key_findings=key_findings(errors, warnings, security_events),
    )

    LOGGER.debug(
        "Analyzed %s: lines=%d errors=%d warnings=%d security=%d timeline=%d",
        file_name,
        len(lines),
        len(errors),
        len(warnings),
        len(security_events),
        len(timeline),
    )

    return AnalysisResult(
        file_name=file_name,
        file_size=file_size,
        analysis_date=now or datetime.now(UTC),
        raw_content=content,
        summary=summary,
        errors=errors,
        warnings=warnings,
        security_events=security_events,
        timeline=timeline,
        statistics=statistics,
    )
