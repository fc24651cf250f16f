"""Short trailing context for long lines."""

from __future__ import annotations

CONTEXT_MIN_TOKENS = 10
CONTEXT_TAIL_TOKENS = 5


def extract_context(line: str) -> str | None:
    """Return the last five whitespace-separated tokens of lines with more than ten."""
    tokens = line.split()
    if len(tokens) > CONTEXT_MIN_TOKENS:
        return " ".join(tokens[-CONTEXT_TAIL_TOKENS:])
    return None
