from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from mcp_log_analysis_server.core.ingest import IngestionError, analyze_file
from mcp_log_analysis_server.core.models import AnalysisResult
from mcp_log_analysis_server.core.report_schema import to_report_model
from mcp_log_analysis_server.core.statistics import format_time_span
from mcp_log_analysis_server.log_config import configure_logging


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}") from e
    if value < 1:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return value


def _print_text(result: AnalysisResult, *, max_entries: int) -> None:
    summary = result.summary
    stats = result.statistics

    print(f"{result.file_name} ({result.file_size} bytes)")
    print(f"Lines: {summary.total_lines}  Time range: {summary.time_range}")
    print(
        f"Errors: {summary.error_count} ({summary.critical_issues} critical)  "
        f"Warnings: {summary.warning_count}  Security events: {len(result.security_events)}"
    )
    print(
        f"Error rate: {stats.error_rate:.1f}%  Warning rate: {stats.warning_rate:.1f}%  "
        f"Avg line length: {stats.average_line_length}  Span: {format_time_span(stats.time_span)}"
    )

    for finding in summary.key_findings:
        print(f"- {finding}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors[:max_entries]:
            print(f"  {e.line_number} [{e.severity.value}] {e.message}")
    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings[:max_entries]:
            print(f"  {w.line_number} {w.message}")
    if result.security_events:
        print("\nSecurity events:")
        for s in result.security_events[:max_entries]:
            print(f"  {s.line_number} [{s.event_type.value}/{s.severity.value}] {s.description}")
    if stats.top_errors:
        print("\nMost common errors:")
        for line, count in stats.top_errors.items():
            print(f"  {count}x {line.strip()}")


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Analyze a log file (errors, warnings, security, timeline).")
    p.add_argument("log_path")
    p.add_argument("--json", action="store_true", help="Print the full report as JSON")
    p.add_argument("--raw", dest="include_raw", action="store_true", help="Include raw content in the JSON report (requires --json)")
    p.add_argument(
        "--max-bytes",
        type=_positive_int,
        default=None,
        help="File size limit (default: LOG_ANALYSIS_MAX_BYTES or 50 MiB)",
    )
    p.add_argument(
        "--max-entries",
        type=_positive_int,
        default=20,
        help="Entries listed per section (default: 20)",
    )

    args = p.parse_args(argv)
    if args.include_raw and not args.json:
        p.error("--raw requires --json")

    configure_logging()

    try:
        result = asyncio.run(analyze_file(args.log_path, max_bytes=args.max_bytes))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (IngestionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if args.json:
        report = to_report_model(result, include_raw=args.include_raw, max_entries=args.max_entries)
        exclude = None if args.include_raw else {"raw_content"}
        print(json.dumps(report.model_dump(mode="json", exclude=exclude), indent=2))
        return

    _print_text(result, max_entries=args.max_entries)


if __name__ == "__main__":
    main()
