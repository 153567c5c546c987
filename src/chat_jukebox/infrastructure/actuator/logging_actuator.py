"""PlayerActuator that records commands instead of producing audio."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...application.interfaces.player_actuator import PlayerActuator
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import Song

logger = logging.getLogger(__name__)


class LoggingPlayerActuator(PlayerActuator):
    """Headless actuator for deployments where an external player follows the log.

    Keeps the last song and volume it was told about so the HTTP API and
    tests can check what the player would be doing.
    """

    def __init__(self) -> None:
        self.song: Song | None = None
        self.volume: int | None = None
        self.paused = False

    async def play(self, song: Song) -> None:
        self.song = song
        self.paused = False
        logger.info(LogTemplates.ACTUATOR_COMMAND, "play", song.source_url)

    async def pause(self) -> None:
        self.paused = True
        logger.info(LogTemplates.ACTUATOR_COMMAND, "pause", "")

    async def resume(self) -> None:
        self.paused = False
        logger.info(LogTemplates.ACTUATOR_COMMAND, "resume", "")

    async def stop(self) -> None:
        self.song = None
        self.paused = False
        logger.info(LogTemplates.ACTUATOR_COMMAND, "stop", "")

    async def set_volume(self, volume: int) -> None:
        self.volume = volume
        logger.info(LogTemplates.ACTUATOR_COMMAND, "set_volume", volume)
