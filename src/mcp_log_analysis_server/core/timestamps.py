"""Timestamp recognition and parsing.

Patterns are tried in a fixed order and the first one that matches wins:

1. ``YYYY-MM-DD HH:MM:SS``
2. ``MM/DD/YYYY HH:MM:SS``
3. ``YYYY-MM-DDTHH:MM:SS``
4. ``[YYYY-MM-DD HH:MM:SS]``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime

LOGGER = logging.getLogger(__name__)

TIMESTAMP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"),
    re.compile(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}"),
    re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"),
    re.compile(r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]"),
)

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "[%Y-%m-%d %H:%M:%S]",
)

_BRACKETED_RE = TIMESTAMP_PATTERNS[3]


def extract_timestamp(line: str) -> str | None:
    """Return the first recognized timestamp substring, verbatim."""
    for pattern in TIMESTAMP_PATTERNS:
        m = pattern.search(line)
        if not m:
            continue
        # Pattern 4 is the bracketed form of pattern 1; keep the brackets.
        if m.start() > 0:
            wrapped = _BRACKETED_RE.match(line, m.start() - 1)
            if wrapped:
                return wrapped.group()
        return m.group()
    return None


def extract_timestamps(lines: Iterable[str]) -> list[str]:
    """Return every line's timestamp match, in file order."""
    out: list[str] = []
    for line in lines:
        ts = extract_timestamp(line)
        if ts is not None:
            out.append(ts)
    return out


def parse_timestamp(text: str) -> datetime | None:
    """Parse a timestamp string into a UTC datetime, or None if no format fits."""
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    return None


def parse_timestamp_or_now(text: str, *, now: datetime | None = None) -> datetime:
    """Parse like :func:`parse_timestamp` but fall back to the current instant.

    Callers that need to tell a real timestamp from the fallback should use
    :func:`parse_timestamp` instead.
    """
    parsed = parse_timestamp(text)
    if parsed is not None:
        return parsed
    LOGGER.debug("Unparseable timestamp %r; using current time", text)
    return now or datetime.now(UTC)
