from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

MIXED_LINES = [
    "2025-12-30 08:12:01 INFO service started",
    "2025-12-30 08:12:03 WARNING retrying request id=abc123",
    "2025-12-30 08:12:04 ERROR upstream timeout route=/api/v1/items",
    "2025-12-30 08:12:05 Login failed for user admin: access denied",
    "[2025-12-30 08:12:06] FATAL database unavailable",
]


@pytest.fixture
def mixed_content() -> str:
    return "\n".join(MIXED_LINES) + "\n"


@pytest.fixture
def write_log(mixed_content: str) -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(mixed_content, encoding="utf-8")

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, bytes], None]:
    def _write(path: Path, data: bytes) -> None:
        path.write_bytes(data)

    return _write
