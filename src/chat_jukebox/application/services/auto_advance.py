"""Background task that moves on to the next song when the current one ends."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import Song
    from ...domain.music.playback import PlaybackStateMachine

logger = logging.getLogger(__name__)


class AutoAdvanceTicker:
    def __init__(
        self,
        *,
        playback: PlaybackStateMachine,
        interval_seconds: float = 0.5,
    ) -> None:
        self._playback = playback
        self._interval = interval_seconds
        self._running = False
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        if self._running:
            logger.warning(LogTemplates.TICKER_ALREADY_RUNNING)
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(LogTemplates.TICKER_STARTED, self._interval)

    async def stop(self) -> None:
        self._running = False

        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info(LogTemplates.TICKER_STOPPED)

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.tick()
            except Exception:
                logger.exception(LogTemplates.TICKER_ERROR)

            try:
                await asyncio.sleep(self._interval)
            except asyncio.CancelledError:
                break

    async def tick(self) -> Song | None:
        """Run one auto-advance check. Returns the song that was started, if any."""
        return await self._playback.advance_if_finished()

    @property
    def is_running(self) -> bool:
        return self._running
