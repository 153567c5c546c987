"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from chat_jukebox.domain.shared.types import DurationSeconds, NonEmptyStr

    class MyModel(BaseModel):
        name: NonEmptyStr
        duration_seconds: DurationSeconds
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

VolumeInt = Annotated[int, Field(ge=0, le=100)]
"""Player volume percentage in [0, 100]."""

PortInt = Annotated[int, Field(ge=1, le=65535)]
"""TCP port number."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

SongNameStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Song name: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Domain-specific numeric constraints ─────────────────────────────

DurationSeconds = Annotated[int, Field(ge=0, le=86_400)]
"""Song duration in seconds: 0 … 86 400 (24 hours). 0 means unbounded."""

