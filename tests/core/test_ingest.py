from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from mcp_log_analysis_server.core.ingest import (
    IngestConfig,
    IngestionError,
    analyze_file,
    decode_content,
    read_log_file,
    resolve_ingest_config,
)


@pytest.mark.asyncio
async def test_read_log_file(tmp_path: Path, write_log, mixed_content: str) -> None:
    path = tmp_path / "app.log"
    write_log(path)

    doc = await read_log_file(path)

    assert doc.name == "app.log"
    assert doc.size == len(mixed_content.encode("utf-8"))
    assert doc.content == mixed_content


@pytest.mark.asyncio
async def test_read_gzip_log(tmp_path: Path, write_bytes, mixed_content: str) -> None:
    path = tmp_path / "app.log.gz"
    write_bytes(path, gzip.compress(mixed_content.encode("utf-8")))

    doc = await read_log_file(path)

    assert doc.name == "app.log.gz"
    assert doc.size == path.stat().st_size
    assert doc.content == mixed_content


@pytest.mark.asyncio
async def test_read_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await read_log_file(tmp_path / "missing.log")


@pytest.mark.asyncio
async def test_size_limit(tmp_path: Path, write_bytes) -> None:
    path = tmp_path / "big.log"
    write_bytes(path, b"0123456789")

    doc = await read_log_file(path, max_bytes=10)
    assert doc.size == 10

    with pytest.raises(IngestionError, match="byte limit"):
        await read_log_file(path, max_bytes=9)


@pytest.mark.asyncio
async def test_size_limit_from_env(
    tmp_path: Path, write_bytes, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "big.log"
    write_bytes(path, b"0123456789")
    monkeypatch.setenv("LOG_ANALYSIS_MAX_BYTES", "4")

    with pytest.raises(IngestionError):
        await read_log_file(path)


def test_invalid_env_max_bytes_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_ANALYSIS_MAX_BYTES", "abc")
    with pytest.raises(ValueError, match="LOG_ANALYSIS_MAX_BYTES"):
        resolve_ingest_config()

    monkeypatch.setenv("LOG_ANALYSIS_MAX_BYTES", "0")
    with pytest.raises(ValueError, match="LOG_ANALYSIS_MAX_BYTES"):
        resolve_ingest_config()


def test_resolve_ingest_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_ANALYSIS_MAX_BYTES", raising=False)
    cfg = IngestConfig(max_bytes=123)
    assert resolve_ingest_config(cfg) is cfg


def test_decode_invalid_utf8_is_empty() -> None:
    assert decode_content(b"\xff\xfe error") == ""
    assert decode_content("café error".encode("utf-8")) == "café error"


def test_ingestion_error_is_os_error() -> None:
    assert issubclass(IngestionError, OSError)


@pytest.mark.asyncio
async def test_analyze_file(tmp_path: Path, write_log) -> None:
    path = tmp_path / "app.log"
    write_log(path)

    result = await analyze_file(path)

    assert result.file_name == "app.log"
    assert result.file_size == path.stat().st_size
    assert result.summary.total_lines == 5
    assert result.summary.error_count == 3


@pytest.mark.asyncio
async def test_analyze_undecodable_file_as_empty(tmp_path: Path, write_bytes) -> None:
    path = tmp_path / "binary.log"
    write_bytes(path, b"\xff\xfe\x00error\n")

    result = await analyze_file(path)

    assert result.file_size == 9
    assert result.summary.total_lines == 0
    assert result.errors == ()


@pytest.mark.asyncio
async def test_gzip_file_size_is_compressed_size(tmp_path: Path, write_bytes) -> None:
    text = "x" * 8000
    path = tmp_path / "big.log.gz"
    write_bytes(path, gzip.compress(text.encode("utf-8")))

    result = await analyze_file(path)

    assert result.file_size == path.stat().st_size
    assert result.file_size < 8000
    assert result.raw_content == text


@pytest.mark.asyncio
async def test_gzip_size_limit_applies_to_decompressed_bytes(
    tmp_path: Path, write_bytes
) -> None:
    path = tmp_path / "big.log.gz"
    write_bytes(path, gzip.compress(b"x" * 8000))
    assert path.stat().st_size < 1000

    with pytest.raises(IngestionError, match="byte limit"):
        await read_log_file(path, max_bytes=1000)
