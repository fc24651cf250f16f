from __future__ import annotations

from pathlib import Path

import pytest

from mcp_log_analysis_server.tools.analyze import HARD_MAX_ENTRIES, _resolve_max_entries, analyze_log_impl


@pytest.mark.asyncio
async def test_analyze_log_impl(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    out = await analyze_log_impl(log_path=str(log))

    assert out["file_name"] == "app.log"
    assert out["summary"]["error_count"] == 3
    assert out["summary"]["critical_issues"] == 1
    assert [e["line_number"] for e in out["errors"]] == [3, 4, 5]
    assert out["warnings"][0]["line_number"] == 2
    assert out["security_events"][0]["event_type"] == "Authentication"
    assert [t["event_kind"] for t in out["timeline"]] == ["Info", "Warning", "Error", "Info", "Error"]
    assert out["timeline"][0]["instant"].startswith("2025-12-30T08:12:01")
    assert "raw_content" not in out


@pytest.mark.asyncio
async def test_analyze_log_impl_caps_entries(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    out = await analyze_log_impl(log_path=str(log), max_entries=1)

    assert len(out["errors"]) == 1
    assert out["summary"]["error_count"] == 3
    assert out["truncated"] is True


@pytest.mark.asyncio
async def test_analyze_log_impl_include_raw(tmp_path: Path, write_log, mixed_content: str) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    out = await analyze_log_impl(log_path=str(log), include_raw=True)

    assert out["raw_content"] == mixed_content


@pytest.mark.asyncio
async def test_analyze_log_impl_invalid_limit(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    with pytest.raises(ValueError, match="max_entries"):
        await analyze_log_impl(log_path=str(log), max_entries=0)


@pytest.mark.asyncio
async def test_analyze_log_impl_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await analyze_log_impl(log_path=str(tmp_path / "missing.log"))


def test_resolve_max_entries_hard_cap() -> None:
    assert _resolve_max_entries(None) == 200
    assert _resolve_max_entries(10) == 10
    assert _resolve_max_entries(HARD_MAX_ENTRIES + 1) == HARD_MAX_ENTRIES
