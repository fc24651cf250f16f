"""Aggregate statistics over all lines of a log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta
from types import MappingProxyType

from .models import Statistics
from .timestamps import extract_timestamps, parse_timestamp

TOP_ERRORS_LIMIT = 5

# Rates use the plain keyword, not the full error/warning rule sets.
_ERROR_TOKEN = "error"
_WARNING_TOKEN = "warning"


def _rate(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return 100 * count / total


def compute_time_span(timestamps: Sequence[str]) -> timedelta:
    """Return max - min over the timestamps that parse; zero with fewer than two."""
    instants = [dt for dt in (parse_timestamp(ts) for ts in timestamps) if dt is not None]
    if len(instants) < 2:
        return timedelta(0)
    return max(instants) - min(instants)


def top_error_lines(
    lines: Sequence[str], *, limit: int = TOP_ERRORS_LIMIT
) -> MappingProxyType[str, int]:
    """Count identical error lines; most frequent first, ties in first-seen order."""
    counts: dict[str, int] = {}
    for line in lines:
        if _ERROR_TOKEN in line.lower():
            counts[line] = counts.get(line, 0) + 1
    # sorted() is stable, so equal counts keep insertion order.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return MappingProxyType(dict(ranked[:limit]))


def aggregate(lines: Sequence[str]) -> Statistics:
    """Compute rates, span, average length and the most common error lines."""
    total = len(lines)
    error_count = sum(1 for line in lines if _ERROR_TOKEN in line.lower())
    warning_count = sum(1 for line in lines if _WARNING_TOKEN in line.lower())
    average = sum(len(line) for line in lines) // total if total else 0

    return Statistics(
        total_lines=total,
        error_rate=_rate(error_count, total),
        warning_rate=_rate(warning_count, total),
        average_line_length=average,
        time_span=compute_time_span(extract_timestamps(lines)),
        top_errors=top_error_lines(lines),
    )


def format_time_span(span: timedelta) -> str:
    """Render a span as ``"2h 5m"``, ``"5m 3s"`` or ``"3s"``."""
    total = int(span.total_seconds())
    hours = total // 3600
    minutes = total % 3600 // 60
    seconds = total % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
