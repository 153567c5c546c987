"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from enum import Enum, StrEnum


class ProviderName(StrEnum):
    """Tag identifying the gateway a song was resolved by."""

    YOUTUBE = "youtube"
    SOUNDCLOUD = "soundcloud"


class SongKind(Enum):
    """Whether a song has a natural end.

    Livestreams have no natural end and never auto-advance.
    """

    TRACK = "track"
    LIVESTREAM = "livestream"


class PlaybackStatus(Enum):
    """Playback status.

    Transitions, enforced by the playback state machine:
    - STOPPED -> PLAYING (play / next)
    - PLAYING -> PAUSED (pause)
    - PLAYING -> STOPPED (stop, or next with an empty queue)
    - PAUSED -> PLAYING (resume)
    - PAUSED -> STOPPED (stop)
    """

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"

    @property
    def is_active(self) -> bool:
        return self in {PlaybackStatus.PLAYING, PlaybackStatus.PAUSED}
