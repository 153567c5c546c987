"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from chat_jukebox.domain.music.value_objects import PlaybackStatus, ProviderName, SongKind
from chat_jukebox.domain.shared.types import (
    DurationSeconds,
    HttpUrlStr,
    NonEmptyStr,
    NonNegativeInt,
    SongNameStr,
)
from chat_jukebox.utils.reply import format_duration


class Song(BaseModel):
    """Immutable value object representing a resolved playable unit."""

    model_config = ConfigDict(frozen=True, strict=True)

    identifier: NonEmptyStr
    provider: ProviderName
    name: SongNameStr
    source_url: HttpUrlStr
    artist: str = ""
    duration_seconds: DurationSeconds = 0
    kind: SongKind = SongKind.TRACK

    @property
    def is_livestream(self) -> bool:
        return self.kind == SongKind.LIVESTREAM

    @property
    def is_unbounded(self) -> bool:
        """No natural end: a livestream, or a track whose length is unknown (0)."""
        return self.is_livestream or self.duration_seconds == 0

    @property
    def effective_duration(self) -> int:
        """Duration that counts towards aggregates; livestreams are unbounded and count 0."""
        if self.is_livestream:
            return 0
        return self.duration_seconds

    @property
    def duration_formatted(self) -> str:
        """Format duration as M:SS or H:MM:SS."""
        if self.is_livestream:
            return "live"
        return format_duration(self.duration_seconds)

    @property
    def display_name(self) -> str:
        """Artist and name as shown in chat, without the artist when it is unknown."""
        if self.artist:
            return f"{self.artist}: {self.name}"
        return self.name


class CurrentSong(BaseModel):
    """Read-only view of what the playback machine is doing right now."""

    model_config = ConfigDict(frozen=True)

    status: PlaybackStatus
    song: Song | None = None
    remaining_seconds: float | None = None

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING


class PlaybackSnapshot(BaseModel):
    """Current song and queue contents observed atomically."""

    model_config = ConfigDict(frozen=True)

    current: CurrentSong
    queue: list[Song]

    @property
    def queue_length(self) -> int:
        return len(self.queue)


class QueueInfo(BaseModel):
    """Aggregate view of the queue for the `queue` command."""

    model_config = ConfigDict(frozen=True)

    length: NonNegativeInt
    total_duration_seconds: NonNegativeInt
    upcoming: list[Song]

    @property
    def remaining_count(self) -> int:
        return max(0, self.length - len(self.upcoming))
