"""Process-wide logging setup shared by the server and the CLI."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "LOG_ANALYSIS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    Logs go to stderr: the MCP client typically captures it, and the CLI keeps
    stdout for the report.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
