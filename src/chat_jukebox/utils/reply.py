"""Utility functions for formatting chat replies and HTTP items."""

from __future__ import annotations

from functools import cache


@cache
def format_duration(seconds: int | float | None) -> str:
    if seconds is None:
        return "–"

    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_minutes_seconds(seconds: int | float) -> str:
    """Format as M:SS where minutes are not folded into hours (e.g. 75:00)."""
    total_seconds = max(0, int(seconds))
    minutes, secs = divmod(total_seconds, 60)
    return f"{minutes}:{secs:02d}"


def sanitize_song_input(text: str) -> str:
    """Strip whitespace and the angle brackets chat clients wrap links in."""
    text = text.strip()
    text = text.lstrip("<")
    text = text.rstrip(">")
    return text.strip()


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"
