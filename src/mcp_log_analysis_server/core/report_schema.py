"""JSON-facing report models.

These mirror :class:`~.models.AnalysisResult` for tool output and for the published
JSON schema; the engine itself works on the frozen dataclasses.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .models import AnalysisResult
from .statistics import format_time_span

SeverityName = Literal["Critical", "High", "Medium", "Low"]
SecurityEventTypeName = Literal[
    "Authentication",
    "Authorization",
    "File Access",
    "Network Activity",
    "System Change",
    "Suspicious Activity",
]
EventKindName = Literal["Error", "Warning", "Info", "Security"]


class ErrorModel(BaseModel):
    line_number: int = Field(ge=1)
    message: str
    severity: SeverityName
    timestamp: str | None = None
    context: str | None = None


class WarningModel(BaseModel):
    line_number: int = Field(ge=1)
    message: str
    timestamp: str | None = None
    context: str | None = None


class SecurityEventModel(BaseModel):
    line_number: int = Field(ge=1)
    event_type: SecurityEventTypeName
    description: str
    severity: SeverityName
    timestamp: str | None = None
    context: str | None = None


class TimelineEntryModel(BaseModel):
    instant: datetime
    event_text: str
    event_kind: EventKindName


class TopErrorModel(BaseModel):
    line: str = Field(description="Exact raw text of the repeated error line.")
    count: int = Field(ge=1)


class StatisticsModel(BaseModel):
    total_lines: int = Field(ge=0)
    error_rate: float = Field(ge=0.0, le=100.0, description="Percent of lines containing 'error'.")
    warning_rate: float = Field(
        ge=0.0, le=100.0, description="Percent of lines containing 'warning'."
    )
    average_line_length: int = Field(ge=0)
    time_span_seconds: float = Field(ge=0.0)
    time_span_display: str
    top_errors: list[TopErrorModel] = Field(default_factory=list, max_length=5)


class SummaryModel(BaseModel):
    total_lines: int = Field(ge=0)
    error_count: int = Field(ge=0)
    warning_count: int = Field(ge=0)
    critical_issues: int = Field(ge=0)
    time_range: str
    key_findings: list[str] = Field(default_factory=list)


class AnalysisReport(BaseModel):
    file_name: str
    file_size: int = Field(ge=0)
    analysis_date: datetime
    summary: SummaryModel
    statistics: StatisticsModel
    errors: list[ErrorModel] = Field(default_factory=list)
    warnings: list[WarningModel] = Field(default_factory=list)
    security_events: list[SecurityEventModel] = Field(default_factory=list)
    timeline: list[TimelineEntryModel] = Field(default_factory=list)
    truncated: bool = Field(
        default=False, description="True when any listed section was capped by max_entries."
    )
    raw_content: str | None = Field(default=None, description="Original text when requested.")


def to_report_model(
    result: AnalysisResult,
    *,
    include_raw: bool = False,
    max_entries: int | None = None,
) -> AnalysisReport:
    """Convert an AnalysisResult, optionally capping each listed section."""

    def cap(items: Sequence) -> Sequence:
        return items if max_entries is None else items[:max_entries]

    sections = (result.errors, result.warnings, result.security_events, result.timeline)
    truncated = max_entries is not None and any(len(s) > max_entries for s in sections)

    stats = result.statistics
    summary = result.summary
    return AnalysisReport(
        file_name=result.file_name,
        file_size=result.file_size,
        analysis_date=result.analysis_date,
        summary=SummaryModel(
            total_lines=summary.total_lines,
            error_count=summary.error_count,
            warning_count=summary.warning_count,
            critical_issues=summary.critical_issues,
            time_range=summary.time_range,
            key_findings=list(summary.key_findings),
        ),
        statistics=StatisticsModel(
            total_lines=stats.total_lines,
            error_rate=stats.error_rate,
            warning_rate=stats.warning_rate,
            average_line_length=stats.average_line_length,
            time_span_seconds=stats.time_span.total_seconds(),
            time_span_display=format_time_span(stats.time_span),
            top_errors=[TopErrorModel(line=k, count=v) for k, v in stats.top_errors.items()],
        ),
        errors=[
            ErrorModel(
                line_number=e.line_number,
                message=e.message,
                severity=e.severity.value,
                timestamp=e.timestamp,
                context=e.context,
            )
            for e in cap(result.errors)
        ],
        warnings=[
            WarningModel(
                line_number=w.line_number,
                message=w.message,
                timestamp=w.timestamp,
                context=w.context,
            )
            for w in cap(result.warnings)
        ],
        security_events=[
            SecurityEventModel(
                line_number=s.line_number,
                event_type=s.event_type.value,
                description=s.description,
                severity=s.severity.value,
                timestamp=s.timestamp,
                context=s.context,
            )
            for s in cap(result.security_events)
        ],
        timeline=[
            TimelineEntryModel(
                instant=t.instant,
                event_text=t.event_text,
                event_kind=t.event_kind.value,
            )
            for t in cap(result.timeline)
        ],
        truncated=truncated,
        raw_content=result.raw_content if include_raw else None,
    )
