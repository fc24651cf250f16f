"""Reading log files for analysis.

The engine in :mod:`.report` only sees text; this module owns file access,
the size limit and decoding.
"""

from __future__ import annotations

import gzip
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .models import AnalysisResult
from .report import analyze

LOGGER = logging.getLogger(__name__)

MAX_BYTES_ENV = "LOG_ANALYSIS_MAX_BYTES"
DEFAULT_MAX_BYTES = 50 * 1024 * 1024


class IngestionError(OSError):
    """Raised when a log file cannot be read or is too large to analyze."""


@dataclass(frozen=True, slots=True)
class IngestConfig:
    max_bytes: int = DEFAULT_MAX_BYTES
    encoding: str = "utf-8"


@dataclass(frozen=True, slots=True)
class LogDocument:
    """A log file loaded into memory."""

    name: str
    size: int  # on-disk bytes; compressed size for .gz
    content: str


def resolve_ingest_config(cfg: IngestConfig | None = None) -> IngestConfig:
    """Return config with the optional LOG_ANALYSIS_MAX_BYTES override applied."""
    if cfg is None:
        cfg = IngestConfig()

    env = os.getenv(MAX_BYTES_ENV)
    if env is None or env == "":
        return cfg

    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{MAX_BYTES_ENV} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{MAX_BYTES_ENV} must be >= 1")

    if value == cfg.max_bytes:
        return cfg
    return replace(cfg, max_bytes=value)


@asynccontextmanager
async def _open_bytes(path: Path):
    """Open a log file for async binary reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rb")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, mode="rb") as f:
            yield f


def decode_content(data: bytes, *, encoding: str = "utf-8") -> str:
    """Decode file bytes; undecodable input becomes an empty string."""
    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        LOGGER.warning("Log content is not valid %s; analyzing it as empty", encoding)
        return ""


async def read_log_file(
    log_path: str | Path,
    *,
    max_bytes: int | None = None,
    config: IngestConfig | None = None,
) -> LogDocument:
    """Read a whole log file, enforcing the size limit before decoding.

    The limit applies to the decompressed bytes; ``LogDocument.size`` is the
    size of the file on disk.
    """
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    cfg = resolve_ingest_config(config)
    if max_bytes is not None:
        if max_bytes < 1:
            raise ValueError("max_bytes must be >= 1")
        cfg = replace(cfg, max_bytes=max_bytes)

    try:
        file_size = path.stat().st_size
        async with _open_bytes(path) as f:
            # One extra byte tells "exactly at the limit" from "over it".
            data = await f.read(cfg.max_bytes + 1)
    except (OSError, EOFError) as exc:
        raise IngestionError(f"Failed to read log file {path}: {exc}") from exc

    if len(data) > cfg.max_bytes:
        raise IngestionError(
            f"Log file {path} exceeds the {cfg.max_bytes} byte limit; "
            f"raise {MAX_BYTES_ENV} or pass max_bytes to analyze it."
        )

    LOGGER.debug("Read %d bytes from %s (%d on disk)", len(data), path, file_size)
    return LogDocument(
        name=path.name,
        size=file_size,
        content=decode_content(data, encoding=cfg.encoding),
    )


async def analyze_file(
    log_path: str | Path,
    *,
    max_bytes: int | None = None,
    config: IngestConfig | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Read a log file and run the report builder on it."""
    doc = await read_log_file(log_path, max_bytes=max_bytes, config=config)
    return analyze(doc.name, doc.size, doc.content, now=now)
