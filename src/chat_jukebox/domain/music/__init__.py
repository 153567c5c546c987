"""
Music Bounded Context

Domain logic for songs, the queue, playback transitions and volume.
The stateful structures live in ``queue``, ``playback`` and ``volume``.
"""

from chat_jukebox.domain.music.entities import CurrentSong, PlaybackSnapshot, QueueInfo, Song
from chat_jukebox.domain.music.value_objects import PlaybackStatus, ProviderName, SongKind

__all__ = [
    # Entities
    "Song",
    "CurrentSong",
    "PlaybackSnapshot",
    "QueueInfo",
    # Value Objects
    "ProviderName",
    "SongKind",
    "PlaybackStatus",
]
