"""Process-wide playback volume."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from chat_jukebox.domain.shared.events import EventBus, VolumeChanged, get_event_bus
from chat_jukebox.domain.shared.exceptions import InvalidVolumeError
from chat_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from chat_jukebox.application.interfaces.player_actuator import PlayerActuator

logger = logging.getLogger(__name__)

MIN_VOLUME = 0
MAX_VOLUME = 100


class VolumeController:
    """Volume percentage in [0, 100].

    Absolute values outside the range are rejected; relative steps clamp.
    """

    def __init__(
        self,
        *,
        actuator: PlayerActuator,
        initial: int = 50,
        event_bus: EventBus | None = None,
    ) -> None:
        if not MIN_VOLUME <= initial <= MAX_VOLUME:
            raise InvalidVolumeError(initial, MIN_VOLUME, MAX_VOLUME)
        self._actuator = actuator
        self._bus = event_bus or get_event_bus()
        self._volume = initial
        self._lock = asyncio.Lock()

    async def get(self) -> int:
        async with self._lock:
            return self._volume

    async def set(self, value: int) -> int:
        if not MIN_VOLUME <= value <= MAX_VOLUME:
            raise InvalidVolumeError(value, MIN_VOLUME, MAX_VOLUME)
        return await self._apply(lambda _: value)

    async def increase(self, delta: int) -> int:
        return await self._apply(lambda current: current + delta)

    async def decrease(self, delta: int) -> int:
        return await self._apply(lambda current: current - delta)

    async def _apply(self, compute: Callable[[int], int]) -> int:
        async with self._lock:
            previous = self._volume
            volume = max(MIN_VOLUME, min(MAX_VOLUME, compute(previous)))
            await self._actuator.set_volume(volume)
            self._volume = volume
        logger.info(LogTemplates.VOLUME_CHANGED, previous, volume)
        await self._bus.publish(VolumeChanged(previous=previous, volume=volume))
        return volume
