"""Log analysis engine: classification, timeline and statistics over raw log text."""

from __future__ import annotations

from .ingest import IngestConfig, IngestionError, LogDocument, analyze_file, read_log_file
from .models import (
    AnalysisResult,
    ClassifiedError,
    ClassifiedWarning,
    EventKind,
    SecurityEvent,
    SecurityEventType,
    Severity,
    Statistics,
    Summary,
    TimelineEntry,
)
from .report import analyze, split_lines
from .statistics import aggregate

__all__ = [
    "AnalysisResult",
    "ClassifiedError",
    "ClassifiedWarning",
    "EventKind",
    "IngestConfig",
    "IngestionError",
    "LogDocument",
    "SecurityEvent",
    "SecurityEventType",
    "Severity",
    "Statistics",
    "Summary",
    "TimelineEntry",
    "aggregate",
    "analyze",
    "analyze_file",
    "read_log_file",
    "split_lines",
]
