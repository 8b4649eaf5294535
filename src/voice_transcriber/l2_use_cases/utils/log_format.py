"""Helpers for keeping long transcriptions readable in logs."""

from __future__ import annotations

DEFAULT_TRUNCATE_THRESHOLD = 1000


def truncate_for_log(text: str, threshold: int = DEFAULT_TRUNCATE_THRESHOLD) -> str:
    if len(text) <= threshold:
        return text
    return f'{text[:threshold]}... (truncated, total {len(text)} chars)'
