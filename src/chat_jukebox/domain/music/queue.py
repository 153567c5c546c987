"""Ordered song queue guarded by an asyncio lock."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from chat_jukebox.domain.music.entities import Song
from chat_jukebox.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class SongQueue:
    """FIFO of songs waiting to be played.

    Every public coroutine takes the queue lock, so each call is atomic with
    respect to the others. The internal list is never handed out; ``items``
    and ``peek`` return copies.

    Callers that need to combine a queue operation with another structure's
    state (the playback machine popping the head while it swaps the current
    song) enter :meth:`locked` and use the ``*_unlocked`` primitives while
    holding it.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._songs: list[Song] = []
        self._lock = asyncio.Lock()
        self._rng = rng or random.Random()

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[SongQueue]:
        async with self._lock:
            yield self

    # === Guarded operations ===

    async def add(self, song: Song) -> int:
        async with self._lock:
            self._songs.append(song)
            length = len(self._songs)
        logger.info(LogTemplates.QUEUE_ADDED, song.display_name, length)
        return length

    async def add_many(self, songs: Iterable[Song]) -> int:
        """Append songs in order as one atomic step. Returns the new length."""
        batch = list(songs)
        async with self._lock:
            self._songs.extend(batch)
            length = len(self._songs)
        logger.info(LogTemplates.QUEUE_ADDED_MANY, len(batch), length)
        return length

    async def next(self) -> Song | None:
        async with self._lock:
            return self._pop_unlocked()

    async def peek(self, n: int) -> list[Song]:
        async with self._lock:
            n = max(0, min(n, len(self._songs)))
            return list(self._songs[:n])

    async def total_duration(self) -> int:
        async with self._lock:
            return sum(song.effective_duration for song in self._songs)

    async def flush(self) -> int:
        async with self._lock:
            removed = len(self._songs)
            self._songs = []
        logger.info(LogTemplates.QUEUE_FLUSHED, removed)
        return removed

    async def shuffle(self) -> None:
        async with self._lock:
            self._rng.shuffle(self._songs)
            count = len(self._songs)
        logger.info(LogTemplates.QUEUE_SHUFFLED, count)

    async def length(self) -> int:
        async with self._lock:
            return len(self._songs)

    async def items(self) -> list[Song]:
        async with self._lock:
            return self._items_unlocked()

    # === Primitives for callers already holding the lock ===

    def _pop_unlocked(self) -> Song | None:
        if not self._songs:
            return None
        song = self._songs.pop(0)
        logger.debug(LogTemplates.QUEUE_POPPED, song.display_name, len(self._songs))
        return song

    def _length_unlocked(self) -> int:
        return len(self._songs)

    def _items_unlocked(self) -> list[Song]:
        return list(self._songs)
