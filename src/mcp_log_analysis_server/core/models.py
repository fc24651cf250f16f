"""Core data models for log analysis reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType


class Severity(str, Enum):
    """Severity shared by classified errors and security events."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SecurityEventType(str, Enum):
    """Category of a security-related log line."""

    AUTHENTICATION = "Authentication"
    AUTHORIZATION = "Authorization"
    FILE_ACCESS = "File Access"
    NETWORK_ACTIVITY = "Network Activity"
    SYSTEM_CHANGE = "System Change"
    SUSPICIOUS_ACTIVITY = "Suspicious Activity"


class EventKind(str, Enum):
    """Coarse display category of a timeline entry."""

    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    SECURITY = "Security"


@dataclass(frozen=True, slots=True)
class ClassifiedError:
    """Line matched by the error rules."""

    line_number: int
    message: str  # trimmed original line
    severity: Severity
    timestamp: str | None = None
    context: str | None = None


@dataclass(frozen=True, slots=True)
class ClassifiedWarning:
    """Line matched by the warning rules."""

    line_number: int
    message: str
    timestamp: str | None = None
    context: str | None = None


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """Line matched by the security rules."""

    line_number: int
    event_type: SecurityEventType
    description: str
    severity: Severity
    timestamp: str | None = None
    context: str | None = None


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    """A line with a genuinely parsed timestamp."""

    instant: datetime
    event_text: str
    event_kind: EventKind


@dataclass(frozen=True, slots=True)
class Statistics:
    total_lines: int
    error_rate: float
    warning_rate: float
    average_line_length: int
    time_span: timedelta
    # Read-only view; most frequent first.
    top_errors: MappingProxyType[str, int] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class Summary:
    """Headline numbers and findings shown above the detailed sections."""

    total_lines: int
    error_count: int
    warning_count: int
    critical_issues: int
    time_range: str
    key_findings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Root aggregate returned by the report builder.

    `raw_content` is kept verbatim so consumers can show the source next to the findings.
    """

    file_name: str
    file_size: int
    analysis_date: datetime
    raw_content: str
    summary: Summary
    errors: tuple[ClassifiedError, ...]
    warnings: tuple[ClassifiedWarning, ...]
    security_events: tuple[SecurityEvent, ...]
    timeline: tuple[TimelineEntry, ...]
    statistics: Statistics
