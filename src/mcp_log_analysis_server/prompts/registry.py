"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def investigate_log_file(log_path: str, max_entries: int = 50) -> list[dict[str, Any]]:
        """Build a prompt for an evidence-based walkthrough of an analysis report."""
        return [
            {
                "role": "system",
                "content": (
                    "You are a senior incident triage assistant. "
                    "Provide concise, evidence-based summaries from log analysis reports. "
                    "Do not invent details; if the evidence is insufficient, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Analyze the log file using analyze_log. Follow this workflow:\n"
                    "- Call analyze_log first with the parameters below.\n"
                    "- Start from summary.key_findings and statistics.top_errors.\n"
                    "- Use the timeline to order events; entries are sorted by timestamp.\n"
                    "- Quote lines with their line_number; do not fabricate lines.\n"
                    "- If the report has no errors, warnings or security events, say so.\n\n"
                    "Call analyze_log with:\n"
                    f"- log_path: {log_path}\n"
                    f"- max_entries: {max_entries}\n\n"
                    "Return this structure:\n"
                    "1) What happened (1-3 bullets)\n"
                    "2) Evidence (2-5 quoted lines with line_number)\n"
                    "3) Suspected root cause (1-2 sentences; say 'Unknown' if unclear)\n"
                    "4) Next actions (2-4 bullets)\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": "Optional: if you need raw context, you can read the log via:",
                    },
                    {"type": "resource", "uri": f"log://{log_path}"},
                ],
            },
        ]

    @mcp.prompt()
    def security_review(log_path: str) -> list[dict[str, Any]]:
        """Build a prompt focused on the security events of a log."""
        return [
            {
                "role": "system",
                "content": (
                    "You review authentication, authorization and access events in logs. "
                    "Redact secrets, credentials, or PII if present."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Use tool analyze_log on {log_path}.\n"
                    "From security_events, group events by event_type and severity, "
                    "call out repeated failures from the same source, and list any "
                    "Critical or High severity events first.\n"
                    "End with recommended follow-up checks."
                ),
            },
        ]
