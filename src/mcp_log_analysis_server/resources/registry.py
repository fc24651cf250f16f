"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import asyncio
import gzip
import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_analysis_server.core.classifier import rule_tables
from mcp_log_analysis_server.core.report_schema import AnalysisReport
from mcp_log_analysis_server.core.timestamps import TIMESTAMP_FORMATS

ALLOWED_FILE_SUFFIXES = {".log", ".txt", ".out"}
BASE_DIR_ENV = "LOG_ANALYSIS_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"

SAMPLE_LOG = (
    "2025-12-30 08:12:01 INFO service started\n"
    "2025-12-30 08:12:03 WARNING retrying request id=abc123\n"
    "2025-12-30 08:12:04 ERROR upstream timeout route=/api/v1/items\n"
    "2025-12-30 08:12:05 Login failed for user admin: access denied\n"
    "[2025-12-30 08:12:06] FATAL database unavailable\n"
)


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _allowed_suffix(path: Path) -> str:
    """Return the effective suffix for allowlist checks."""
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    return suffix


def resolve_log_resource_path(path: str) -> Path:
    """Resolve and validate a log resource path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if _allowed_suffix(resolved) not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed}.")
    return resolved


def _read_text(path: Path) -> str:
    """Read text from a file, supporting optional gzip compression."""
    if path.suffix.lower() == ".gz":
        with gzip.open(path, mode="rt", encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
            return f.read()
    return path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-analysis/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        return (
            "Resources:\n"
            "- app://log-analysis/help\n"
            "- app://log-analysis/rules\n"
            "- app://log-analysis/schemas/analysis-report\n"
            "- app://log-analysis/examples/sample-log\n"
            f"- log://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed}, .gz)\n"
            f"\nBase directory: {_base_dir()}\n"
        )

    @mcp.resource("app://log-analysis/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://log-analysis/rules")
    def rules() -> dict[str, Any]:
        """Return the classification keyword tables and timestamp formats."""
        out = rule_tables()
        out["timestamp_formats"] = list(TIMESTAMP_FORMATS)
        return out

    @mcp.resource("app://log-analysis/schemas/analysis-report")
    def analysis_report_schema() -> dict[str, Any]:
        """Return the JSON schema of the analyze_log response."""
        return AnalysisReport.model_json_schema()

    @mcp.resource("log://{path}")
    async def read_log(path: str) -> str:
        """Return the full log contents."""
        p = resolve_log_resource_path(path)
        return await asyncio.to_thread(_read_text, p)
