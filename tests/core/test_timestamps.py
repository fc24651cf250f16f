from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mcp_log_analysis_server.core.timestamps import (
    extract_timestamp,
    extract_timestamps,
    parse_timestamp,
    parse_timestamp_or_now,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("2024-01-01 12:00:00 INFO boot", "2024-01-01 12:00:00"),
        ("boot at 01/15/2024 08:30:00 done", "01/15/2024 08:30:00"),
        ("2024-01-01T12:00:00Z start", "2024-01-01T12:00:00"),
        ("[2024-01-01 12:00:00] CRITICAL: disk failure", "[2024-01-01 12:00:00]"),
        ("no timestamp here", None),
        ("", None),
    ],
)
def test_extract_timestamp(line: str, expected: str | None) -> None:
    assert extract_timestamp(line) == expected


def test_extract_timestamp_pattern_order_beats_position() -> None:
    line = "01/02/2024 10:00:00 replayed from 2024-03-04 05:06:07"
    assert extract_timestamp(line) == "2024-03-04 05:06:07"


def test_extract_timestamp_unbalanced_bracket_is_not_widened() -> None:
    assert extract_timestamp("[2024-01-01 12:00:00 boom") == "2024-01-01 12:00:00"


def test_extract_timestamps_keeps_file_order() -> None:
    lines = ["2024-01-02 00:00:00 b", "nothing", "2024-01-01 00:00:00 a"]
    assert extract_timestamps(lines) == ["2024-01-02 00:00:00", "2024-01-01 00:00:00"]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-01-01 12:00:00", datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)),
        ("01/15/2024 08:30:00", datetime(2024, 1, 15, 8, 30, 0, tzinfo=UTC)),
        ("2024-01-01T12:00:00", datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)),
        ("[2024-01-01 12:00:00]", datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)),
    ],
)
def test_parse_timestamp_formats(text: str, expected: datetime) -> None:
    assert parse_timestamp(text) == expected


def test_parse_timestamp_invalid_returns_none() -> None:
    # Matches the pattern shape but is not a real date.
    assert extract_timestamp("2024-13-45 99:99:99 boom") == "2024-13-45 99:99:99"
    assert parse_timestamp("2024-13-45 99:99:99") is None
    assert parse_timestamp("garbage") is None


def test_parse_timestamp_or_now_fallback() -> None:
    now = datetime(2030, 1, 1, tzinfo=UTC)
    assert parse_timestamp_or_now("garbage", now=now) == now
    assert parse_timestamp_or_now("2024-01-01 12:00:00", now=now) == datetime(
        2024, 1, 1, 12, 0, 0, tzinfo=UTC
    )
