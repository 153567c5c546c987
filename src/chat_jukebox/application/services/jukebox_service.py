"""Jukebox Application Service - the one shared entry point for chat and HTTP."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.music.entities import CurrentSong, PlaybackSnapshot, QueueInfo, Song
from ...domain.shared.events import EventBus, QueueFlushed, SongsQueued, get_event_bus
from ...domain.shared.exceptions import SongNotFoundError

if TYPE_CHECKING:
    from ...domain.auth.whitelist import Whitelist
    from ...domain.music.playback import PlaybackStateMachine
    from ...domain.music.queue import SongQueue
    from ...domain.music.volume import VolumeController
    from .resolution_service import SongResolver

logger = logging.getLogger(__name__)


class JukeboxService:
    """Core operations over the queue, playback, volume and whitelist.

    Every inbound surface holds the same instance, so a song added over HTTP
    is visible to the next chat command and vice versa. Provider lookups run
    before any structure is locked.
    """

    def __init__(
        self,
        *,
        queue: SongQueue,
        playback: PlaybackStateMachine,
        volume: VolumeController,
        whitelist: Whitelist,
        resolver: SongResolver,
        event_bus: EventBus | None = None,
        autoplay: bool = False,
        queue_preview_size: int = 5,
        volume_step: int = 10,
    ) -> None:
        self._queue = queue
        self._playback = playback
        self._volume = volume
        self._whitelist = whitelist
        self._resolver = resolver
        self._bus = event_bus or get_event_bus()
        self._autoplay = autoplay
        self._queue_preview_size = queue_preview_size
        self._volume_step = volume_step

    @property
    def whitelist(self) -> Whitelist:
        return self._whitelist

    @property
    def volume_step(self) -> int:
        return self._volume_step

    # === Queueing ===

    async def add(self, text: str, requested_by: str | None = None) -> list[Song]:
        """Resolve a URL or query and append the resulting songs to the queue."""
        songs = await self._resolver.resolve(text)
        return await self._enqueue(songs, requested_by)

    async def search(self, query: str, limit: int | None = None) -> list[Song]:
        return await self._resolver.search(query, limit)

    async def search_add(self, query: str, requested_by: str | None = None) -> Song:
        """Queue the best search match. The queue is untouched when nothing matches."""
        results = await self._resolver.search(query, limit=1)
        if not results:
            raise SongNotFoundError(query)
        song = results[0]
        await self._enqueue([song], requested_by)
        return song

    async def _enqueue(self, songs: list[Song], requested_by: str | None) -> list[Song]:
        length = await self._queue.add_many(songs)
        await self._bus.publish(
            SongsQueued(songs=songs, requested_by=requested_by, queue_length=length)
        )
        if self._autoplay:
            await self._playback.start_if_stopped()
        return songs

    async def flush(self) -> int:
        count = await self._queue.flush()
        await self._bus.publish(QueueFlushed(song_count=count))
        return count

    async def shuffle(self) -> None:
        await self._queue.shuffle()

    # === Playback ===

    async def play(self) -> Song:
        return await self._playback.play()

    async def pause(self) -> Song:
        return await self._playback.pause()

    async def stop(self) -> None:
        await self._playback.stop()

    async def next(self) -> Song:
        return await self._playback.next()

    async def current(self) -> CurrentSong:
        return await self._playback.current()

    async def status(self) -> PlaybackSnapshot:
        return await self._playback.snapshot()

    async def queue_info(self, preview_size: int | None = None) -> QueueInfo:
        """Queue length, total duration and the next few songs, read atomically."""
        n = self._queue_preview_size if preview_size is None else preview_size
        async with self._queue.locked() as queue:
            songs = queue._items_unlocked()
        return QueueInfo(
            length=len(songs),
            total_duration_seconds=sum(song.effective_duration for song in songs),
            upcoming=songs[: max(0, n)],
        )

    # === Volume ===

    async def get_volume(self) -> int:
        return await self._volume.get()

    async def set_volume(self, value: int) -> int:
        return await self._volume.set(value)

    async def increase_volume(self, delta: int | None = None) -> int:
        return await self._volume.increase(self._volume_step if delta is None else delta)

    async def decrease_volume(self, delta: int | None = None) -> int:
        return await self._volume.decrease(self._volume_step if delta is None else delta)

    # === Whitelist ===

    async def whitelist_add(self, actor: str, name: str) -> None:
        await self._whitelist.require(actor, "whitelist")
        await self._whitelist.add(name)

    async def whitelist_remove(self, actor: str, name: str) -> None:
        await self._whitelist.require(actor, "whitelist")
        await self._whitelist.remove(name)
