"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the shared jukebox state and its adapters.
Components are created on-demand and cached, so the HTTP API and the chat
adapter always see the same queue and playback machine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ..application.commands.router import CommandRouter
    from ..application.interfaces.player_actuator import PlayerActuator
    from ..application.interfaces.provider_gateway import ProviderGateway
    from ..application.services.auto_advance import AutoAdvanceTicker
    from ..application.services.jukebox_service import JukeboxService
    from ..application.services.resolution_service import SongResolver
    from ..domain.auth.whitelist import Whitelist
    from ..domain.music.playback import PlaybackStateMachine
    from ..domain.music.queue import SongQueue
    from ..domain.music.volume import VolumeController
    from ..domain.shared.events import EventBus
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. Tests can pass
    their own actuator or gateways before anything else is built.
    """

    settings: Settings

    # Infrastructure adapters
    _event_bus: EventBus | None = None
    _actuator: PlayerActuator | None = None
    _gateways: list[ProviderGateway] | None = None

    # Shared state
    _queue: SongQueue | None = None
    _playback: PlaybackStateMachine | None = None
    _volume: VolumeController | None = None
    _whitelist: Whitelist | None = None

    # Application services
    _resolver: SongResolver | None = None
    _jukebox: JukeboxService | None = None
    _command_router: CommandRouter | None = None

    # Background jobs
    _ticker: AutoAdvanceTicker | None = None

    # === Infrastructure ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def actuator(self) -> PlayerActuator:
        """Get the player actuator."""
        if self._actuator is None:
            from ..infrastructure.actuator.logging_actuator import LoggingPlayerActuator

            self._actuator = LoggingPlayerActuator()
        return self._actuator

    @property
    def gateways(self) -> list[ProviderGateway]:
        """Get the enabled provider gateways, in configuration order."""
        if self._gateways is None:
            from ..infrastructure.providers.ytdlp_gateway import create_gateways

            self._gateways = create_gateways(self.settings.providers)
        return self._gateways

    # === Shared State ===

    @property
    def queue(self) -> SongQueue:
        if self._queue is None:
            from ..domain.music.queue import SongQueue

            self._queue = SongQueue()
        return self._queue

    @property
    def playback(self) -> PlaybackStateMachine:
        if self._playback is None:
            from ..domain.music.playback import PlaybackStateMachine

            self._playback = PlaybackStateMachine(
                queue=self.queue,
                actuator=self.actuator,
                event_bus=self.event_bus,
            )
        return self._playback

    @property
    def volume(self) -> VolumeController:
        if self._volume is None:
            from ..domain.music.volume import VolumeController

            self._volume = VolumeController(
                actuator=self.actuator,
                initial=self.settings.player.default_volume,
                event_bus=self.event_bus,
            )
        return self._volume

    @property
    def whitelist(self) -> Whitelist:
        if self._whitelist is None:
            from ..domain.auth.whitelist import Whitelist

            self._whitelist = Whitelist(self.settings.whitelist.members)
        return self._whitelist

    # === Application Services ===

    @property
    def resolver(self) -> SongResolver:
        if self._resolver is None:
            from ..application.services.resolution_service import SongResolver

            self._resolver = SongResolver(
                self.gateways,
                timeout_seconds=self.settings.providers.timeout_seconds,
                search_limit=self.settings.player.search_limit,
            )
        return self._resolver

    @property
    def jukebox(self) -> JukeboxService:
        """Get the jukebox service shared by every entry point."""
        if self._jukebox is None:
            from ..application.services.jukebox_service import JukeboxService

            player = self.settings.player
            self._jukebox = JukeboxService(
                queue=self.queue,
                playback=self.playback,
                volume=self.volume,
                whitelist=self.whitelist,
                resolver=self.resolver,
                event_bus=self.event_bus,
                autoplay=player.autoplay,
                queue_preview_size=player.queue_preview_size,
                volume_step=player.volume_step,
            )
        return self._jukebox

    @property
    def command_router(self) -> CommandRouter:
        if self._command_router is None:
            from ..application.commands.router import create_command_router

            self._command_router = create_command_router(self.jukebox, self.settings)
        return self._command_router

    def create_http_app(self) -> FastAPI:
        from ..infrastructure.http.app import create_app

        return create_app(self.jukebox, self.settings)

    # === Background Jobs ===

    @property
    def ticker(self) -> AutoAdvanceTicker:
        """Get the auto-advance ticker."""
        if self._ticker is None:
            from ..application.services.auto_advance import AutoAdvanceTicker

            self._ticker = AutoAdvanceTicker(
                playback=self.playback,
                interval_seconds=self.settings.player.tick_interval_seconds,
            )
        return self._ticker

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Build the shared state and start background jobs."""
        await self.actuator.set_volume(await self.volume.get())
        self.ticker.start()

    async def shutdown(self) -> None:
        """Stop background jobs and the player."""
        if self._ticker is not None:
            await self._ticker.stop()

        try:
            if self._playback is not None:
                await self._playback.stop()
        except Exception as exc:
            logger.warning("Failed stopping playback on shutdown: %r", exc)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
