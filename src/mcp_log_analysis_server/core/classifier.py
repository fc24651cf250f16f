"""Keyword rules for classifying a single log line.

Every check is a substring test on the lower-cased line. No tokenization and no
word boundaries: a file called ``error_report.txt`` makes the line an error.
Rule tables are ordered and the first matching row wins.

``critical`` and ``fatal`` count as error keywords, both for error detection and
for the coarse timeline kind, even without ``error``/``failed``/``exception`` in
the line: a line like ``"CRITICAL: disk failure"`` is reported as a Critical
error and an Error timeline entry.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from .models import EventKind, SecurityEventType, Severity

T = TypeVar("T")

ERROR_KEYWORDS: tuple[str, ...] = ("error", "failed", "exception", "critical", "fatal")
WARNING_KEYWORDS: tuple[str, ...] = ("warning", "warn")
SECURITY_KEYWORDS: tuple[str, ...] = (
    "authentication",
    "authorization",
    "login",
    "access denied",
    "permission",
    "unauthorized",
)

ERROR_SEVERITY_RULES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("critical", "fatal"), Severity.CRITICAL),
    (("severe", "major"), Severity.HIGH),
    (("minor", "info"), Severity.LOW),
)

SECURITY_TYPE_RULES: tuple[tuple[tuple[str, ...], SecurityEventType], ...] = (
    (("authentication", "login"), SecurityEventType.AUTHENTICATION),
    (("authorization", "permission"), SecurityEventType.AUTHORIZATION),
    (("file", "directory"), SecurityEventType.FILE_ACCESS),
    (("network", "connection"), SecurityEventType.NETWORK_ACTIVITY),
    (("system", "config"), SecurityEventType.SYSTEM_CHANGE),
)

SECURITY_SEVERITY_RULES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("critical", "fatal"), Severity.CRITICAL),
    (("high", "severe"), Severity.HIGH),
    (("medium", "moderate"), Severity.MEDIUM),
)

# Display-oriented; deliberately coarser than the rules above.
EVENT_KIND_RULES: tuple[tuple[tuple[str, ...], EventKind], ...] = (
    (("error", "critical", "fatal"), EventKind.ERROR),
    (("warning",), EventKind.WARNING),
    (("security", "auth"), EventKind.SECURITY),
)


def _contains_any(lowered: str, keywords: Sequence[str]) -> bool:
    return any(k in lowered for k in keywords)


def _first_match(
    line: str,
    rules: Sequence[tuple[Sequence[str], T]],
    default: T,
) -> T:
    lowered = line.lower()
    for keywords, outcome in rules:
        if _contains_any(lowered, keywords):
            return outcome
    return default


def is_error(line: str) -> bool:
    return _contains_any(line.lower(), ERROR_KEYWORDS)


def is_warning(line: str) -> bool:
    return _contains_any(line.lower(), WARNING_KEYWORDS)


def is_security_event(line: str) -> bool:
    return _contains_any(line.lower(), SECURITY_KEYWORDS)


def error_severity(line: str) -> Severity:
    """Severity of an error line; Medium when no severity keyword is present."""
    return _first_match(line, ERROR_SEVERITY_RULES, Severity.MEDIUM)


def security_event_type(line: str) -> SecurityEventType:
    return _first_match(line, SECURITY_TYPE_RULES, SecurityEventType.SUSPICIOUS_ACTIVITY)


def security_severity(line: str) -> Severity:
    return _first_match(line, SECURITY_SEVERITY_RULES, Severity.LOW)


def timeline_event_kind(line: str) -> EventKind:
    return _first_match(line, EVENT_KIND_RULES, EventKind.INFO)


@dataclass(frozen=True, slots=True)
class LineClassification:
    """Independent judgments for one line (categories may overlap)."""

    error_severity: Severity | None
    is_warning: bool
    security_type: SecurityEventType | None
    security_severity: Severity | None

    @property
    def is_error(self) -> bool:
        return self.error_severity is not None

    @property
    def is_security_event(self) -> bool:
        return self.security_type is not None

    @property
    def is_plain(self) -> bool:
        return not (self.is_error or self.is_warning or self.is_security_event)


def classify_line(line: str) -> LineClassification:
    """Run every rule table against one line."""
    security = is_security_event(line)
    return LineClassification(
        error_severity=error_severity(line) if is_error(line) else None,
        is_warning=is_warning(line),
        security_type=security_event_type(line) if security else None,
        security_severity=security_severity(line) if security else None,
    )


def rule_tables() -> dict[str, object]:
    """Return the rule tables as plain data (for publishing and inspection)."""

    def rows(rules, default) -> list[dict[str, object]]:
        out: list[dict[str, object]] = [
            {"keywords": list(keywords), "outcome": outcome.value} for keywords, outcome in rules
        ]
        out.append({"keywords": [], "outcome": default.value})
        return out

    return {
        "error_keywords": list(ERROR_KEYWORDS),
        "warning_keywords": list(WARNING_KEYWORDS),
        "security_keywords": list(SECURITY_KEYWORDS),
        "error_severity": rows(ERROR_SEVERITY_RULES, Severity.MEDIUM),
        "security_event_type": rows(SECURITY_TYPE_RULES, SecurityEventType.SUSPICIOUS_ACTIVITY),
        "security_severity": rows(SECURITY_SEVERITY_RULES, Severity.LOW),
        "timeline_event_kind": rows(EVENT_KIND_RULES, EventKind.INFO),
    }
