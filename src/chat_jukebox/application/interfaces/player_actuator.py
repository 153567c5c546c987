"""Port interface for the component that actually produces audio."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from chat_jukebox.domain.shared.types import VolumeInt

if TYPE_CHECKING:
    from ...domain.music.entities import Song


class PlayerActuator(ABC):
    """Commands sent by the playback machine when its state changes.

    The actuator never reports back; remaining time is estimated from when
    ``play`` or ``resume`` was issued.
    """

    @abstractmethod
    async def play(self, song: "Song") -> None:
        ...

    @abstractmethod
    async def pause(self) -> None:
        ...

    @abstractmethod
    async def resume(self) -> None:
        ...

    @abstractmethod
    async def stop(self) -> None:
        ...

    @abstractmethod
    async def set_volume(self, volume: VolumeInt) -> None:
        ...
