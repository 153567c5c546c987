"""Playback state machine: current song, transitions and remaining time."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from chat_jukebox.domain.music.entities import CurrentSong, PlaybackSnapshot, Song
from chat_jukebox.domain.music.value_objects import PlaybackStatus
from chat_jukebox.domain.shared.events import (
    DomainEvent,
    EventBus,
    PlaybackPaused,
    PlaybackResumed,
    PlaybackStopped,
    QueueExhausted,
    SongStarted,
    get_event_bus,
)
from chat_jukebox.domain.shared.exceptions import InvalidTransitionError, NoSongAvailableError
from chat_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from chat_jukebox.application.interfaces.player_actuator import PlayerActuator
    from chat_jukebox.domain.music.queue import SongQueue

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class PlaybackStateMachine:
    """Owns the current song and moves songs from the queue into playback.

    Remaining time is never stored. It is derived on read from the instant the
    actuator was last told to start (``started_at``) and the time already
    played before the last pause (``accumulated``), using an injectable
    monotonic clock.

    Lock order is always playback lock first, then the queue lock. Events are
    published after the playback lock is released.
    """

    def __init__(
        self,
        *,
        queue: SongQueue,
        actuator: PlayerActuator,
        event_bus: EventBus | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._queue = queue
        self._actuator = actuator
        self._bus = event_bus or get_event_bus()
        self._clock = clock
        self._lock = asyncio.Lock()

        self._status = PlaybackStatus.STOPPED
        self._current: Song | None = None
        self._started_at: float | None = None
        self._accumulated = 0.0

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    # === Transitions ===

    async def play(self) -> Song:
        """Start the head of the queue, or resume when paused.

        Playing while already playing is a successful no-op.
        """
        async with self._lock:
            if self._status is PlaybackStatus.PLAYING and self._current is not None:
                logger.debug(LogTemplates.PLAYBACK_ALREADY_PLAYING, self._current.display_name)
                return self._current

            if self._status is PlaybackStatus.PAUSED and self._current is not None:
                events = await self._resume_unlocked()
            else:
                song = await self._pop_head()
                if song is None:
                    raise NoSongAvailableError()
                events = await self._start_unlocked(song, automatic=False)

            current = self._current

        await self._bus.publish_all(events)
        assert current is not None
        return current

    async def start_if_stopped(self) -> Song | None:
        """Start the head of the queue only when nothing is current."""
        async with self._lock:
            if self._status is not PlaybackStatus.STOPPED:
                return None
            song = await self._pop_head()
            if song is None:
                return None
            events = await self._start_unlocked(song, automatic=False)

        await self._bus.publish_all(events)
        return song

    async def pause(self) -> Song:
        async with self._lock:
            if self._status is PlaybackStatus.STOPPED or self._current is None:
                raise InvalidTransitionError("pause", self._status.value)

            song = self._current
            if self._status is PlaybackStatus.PAUSED:
                return song

            self._accumulated = self._elapsed_unlocked()
            self._started_at = None
            self._status = PlaybackStatus.PAUSED
            await self._actuator.pause()
            logger.info(LogTemplates.PLAYBACK_PAUSED, song.display_name, self._accumulated)

        await self._bus.publish(PlaybackPaused(song=song))
        return song

    async def stop(self) -> None:
        async with self._lock:
            was_active = self._status.is_active
            last_song = self._current
            self._reset_unlocked()
            if was_active:
                await self._actuator.stop()
                logger.info(LogTemplates.PLAYBACK_STOPPED)

        if was_active:
            await self._bus.publish(PlaybackStopped(last_song=last_song))

    async def next(self) -> Song:
        """Discard the current song and start the next one.

        With an empty queue playback ends up STOPPED and
        :class:`NoSongAvailableError` is raised.
        """
        async with self._lock:
            song, events = await self._advance_unlocked(automatic=False)

        await self._bus.publish_all(events)
        if song is None:
            raise NoSongAvailableError()
        return song

    async def advance_if_finished(self) -> Song | None:
        """Advance to the next song when the playing track has run out.

        Returns the song that was started, or None when nothing happened or
        the queue was exhausted. Livestreams and songs of unknown length
        never finish on their own.
        """
        async with self._lock:
            current = self._current
            if self._status is not PlaybackStatus.PLAYING or current is None:
                return None
            if current.is_unbounded:
                return None
            remaining = self._remaining_unlocked()
            if remaining is None or remaining > 0:
                return None

            logger.info(LogTemplates.PLAYBACK_AUTO_ADVANCE, current.display_name)
            song, events = await self._advance_unlocked(automatic=True)

        await self._bus.publish_all(events)
        return song

    # === Reads ===

    async def current(self) -> CurrentSong:
        async with self._lock:
            return self._current_unlocked()

    async def snapshot(self) -> PlaybackSnapshot:
        """Current song and queued songs as observed at a single instant."""
        async with self._lock:
            async with self._queue.locked() as queue:
                return PlaybackSnapshot(
                    current=self._current_unlocked(),
                    queue=queue._items_unlocked(),
                )

    # === Internals (playback lock held) ===

    async def _pop_head(self) -> Song | None:
        async with self._queue.locked() as queue:
            return queue._pop_unlocked()

    async def _start_unlocked(self, song: Song, *, automatic: bool) -> list[DomainEvent]:
        self._current = song
        self._status = PlaybackStatus.PLAYING
        self._accumulated = 0.0
        self._started_at = self._clock()
        await self._actuator.play(song)
        logger.info(LogTemplates.PLAYBACK_STARTED, song.display_name, automatic)
        return [SongStarted(song=song, automatic=automatic)]

    async def _resume_unlocked(self) -> list[DomainEvent]:
        assert self._current is not None
        self._started_at = self._clock()
        self._status = PlaybackStatus.PLAYING
        await self._actuator.resume()
        logger.info(LogTemplates.PLAYBACK_RESUMED, self._current.display_name)
        return [PlaybackResumed(song=self._current)]

    async def _advance_unlocked(self, *, automatic: bool) -> tuple[Song | None, list[DomainEvent]]:
        previous = self._current
        was_active = self._status.is_active

        song = await self._pop_head()
        if song is not None:
            return song, await self._start_unlocked(song, automatic=automatic)

        self._reset_unlocked()
        if was_active:
            await self._actuator.stop()
        logger.info(LogTemplates.PLAYBACK_QUEUE_EXHAUSTED)
        return None, [QueueExhausted(last_song=previous, automatic=automatic)]

    def _reset_unlocked(self) -> None:
        self._status = PlaybackStatus.STOPPED
        self._current = None
        self._started_at = None
        self._accumulated = 0.0

    def _elapsed_unlocked(self) -> float:
        elapsed = self._accumulated
        if self._status is PlaybackStatus.PLAYING and self._started_at is not None:
            elapsed += self._clock() - self._started_at
        return elapsed

    def _remaining_unlocked(self) -> float | None:
        if self._current is None or self._current.is_unbounded:
            return None
        return max(0.0, self._current.duration_seconds - self._elapsed_unlocked())

    def _current_unlocked(self) -> CurrentSong:
        return CurrentSong(
            status=self._status,
            song=self._current,
            remaining_seconds=self._remaining_unlocked(),
        )
