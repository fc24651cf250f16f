"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (analyze a log file)
- Resources: addressable data blobs (rules, schema, raw log via URI)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m mcp_log_analysis_server.server.log_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_analysis_server.log_config import configure_logging
from mcp_log_analysis_server.prompts.registry import register_prompts
from mcp_log_analysis_server.resources.registry import register_resources
from mcp_log_analysis_server.tools.analyze import analyze_log_impl

LOGGER = logging.getLogger(__name__)


mcp = FastMCP("log-analysis", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def analyze_log(
    log_path: str,
    include_raw: bool = False,
    max_entries: int | None = None,
    max_bytes: int | None = None,
) -> dict[str, Any]:
    """Analyze a log file and return a structured report.

    Parameters
    ----------
    log_path:
        Path to a local log file. Supports plain text and .gz.
    include_raw:
        Whether to include the full original text in the response.
    max_entries:
        Maximum number of entries listed per section (errors, warnings,
        security events, timeline). Summary counts are never capped.
    max_bytes:
        Size limit for the file; defaults to LOG_ANALYSIS_MAX_BYTES or 50 MiB.

    Returns
    -------
    dict:
        {"file_name", "summary", "statistics", "errors", "warnings",
         "security_events", "timeline", "truncated", ...}
    """
    return await analyze_log_impl(
        log_path=log_path,
        include_raw=include_raw,
        max_entries=max_entries,
        max_bytes=max_bytes,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
