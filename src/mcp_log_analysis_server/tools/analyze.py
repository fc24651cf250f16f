"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from mcp_log_analysis_server.core.ingest import analyze_file
from mcp_log_analysis_server.core.report_schema import to_report_model

DEFAULT_MAX_ENTRIES = 200
HARD_MAX_ENTRIES = 5000


def _resolve_max_entries(max_entries: int | None) -> int:
    """Apply the default and the hard cap to a per-section entry limit."""
    if max_entries is None:
        return DEFAULT_MAX_ENTRIES
    if max_entries <= 0:
        raise ValueError("max_entries must be > 0")
    return min(max_entries, HARD_MAX_ENTRIES)


async def analyze_log_impl(
    *,
    log_path: str,
    include_raw: bool = False,
    max_entries: int | None = None,
    max_bytes: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `analyze_log` MCP tool.

    Notes
    -----
    - max_entries caps each listed section (errors, warnings, security events,
      timeline); summary counts and statistics always cover the whole file.
    - include_raw adds the original file text to the response.
    """
    limit = _resolve_max_entries(max_entries)
    result = await analyze_file(log_path, max_bytes=max_bytes)
    report = to_report_model(result, include_raw=include_raw, max_entries=limit)
    exclude = None if include_raw else {"raw_content"}
    return report.model_dump(mode="json", exclude=exclude)
