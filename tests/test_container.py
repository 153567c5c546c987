"""
Unit Tests for Dependency Injection Container

Tests for:
- Lazy initialization and caching of every component
- One shared queue and playback machine behind chat and HTTP
- Settings flowing into the components they configure
- Lifecycle methods (initialize, shutdown)
"""

import httpx
import pytest

from chat_jukebox.application.commands.router import InboundMessage
from chat_jukebox.config.container import Container, create_container
from chat_jukebox.config.settings import Settings
from chat_jukebox.domain.music.value_objects import PlaybackStatus
from chat_jukebox.domain.shared.events import get_event_bus
from chat_jukebox.infrastructure.actuator.logging_actuator import LoggingPlayerActuator
from chat_jukebox.infrastructure.providers.ytdlp_gateway import SoundCloudGateway, YouTubeGateway

from conftest import FakeGateway, RecordingActuator


@pytest.fixture
def container_settings():
    return Settings(
        _env_file=None,
        api={"username": "admin", "password": "secret"},
        player={"default_volume": 30, "volume_step": 5, "tick_interval_seconds": 0.01},
        whitelist={"members": ["master"]},
    )


@pytest.fixture
def container(container_settings, song_a):
    return Container(
        settings=container_settings,
        _actuator=RecordingActuator(),
        _gateways=[FakeGateway(urls={"https://youtube.com/watch?v=aaa": song_a})],
    )


class TestLazyInitialization:
    def test_create_container(self, container_settings):
        container = create_container(container_settings)
        assert container.settings is container_settings

    def test_components_are_cached(self, container):
        assert container.queue is container.queue
        assert container.playback is container.playback
        assert container.jukebox is container.jukebox
        assert container.command_router is container.command_router
        assert container.ticker is container.ticker

    def test_event_bus_is_global(self, container):
        assert container.event_bus is get_event_bus()

    def test_default_actuator(self, container_settings):
        container = Container(settings=container_settings)
        assert isinstance(container.actuator, LoggingPlayerActuator)

    def test_default_gateways_follow_settings(self):
        settings = Settings(_env_file=None, providers={"enabled": ["soundcloud", "youtube"]})
        gateways = Container(settings=settings).gateways

        assert isinstance(gateways[0], SoundCloudGateway)
        assert isinstance(gateways[1], YouTubeGateway)

    @pytest.mark.asyncio
    async def test_settings_reach_components(self, container):
        assert await container.volume.get() == 30
        assert container.jukebox.volume_step == 5
        assert await container.whitelist.members() == ["master"]


class TestSharedState:
    @pytest.mark.asyncio
    async def test_chat_and_http_share_one_queue(self, container):
        await container.command_router.dispatch(
            InboundMessage(sender="alice", text="add https://youtube.com/watch?v=aaa")
        )

        transport = httpx.ASGITransport(app=container.create_http_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            listing = (await client.get("/list")).json()
            played = await client.get("/play", auth=("admin", "secret"))

        assert [item["title"] for item in listing] == ["Band A: Alpha"]
        assert played.json()["title"] == "Band A: Alpha"
        assert container.playback.status is PlaybackStatus.PLAYING


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_pushes_volume_and_starts_ticker(self, container):
        await container.initialize()
        try:
            assert container.actuator.calls == [("set_volume", 30)]
            assert container.ticker.is_running
        finally:
            await container.shutdown()

        assert not container.ticker.is_running

    @pytest.mark.asyncio
    async def test_shutdown_stops_playback(self, container, song_a):
        await container.queue.add(song_a)
        await container.initialize()
        await container.playback.play()

        await container.shutdown()

        assert container.playback.status is PlaybackStatus.STOPPED
        assert container.actuator.calls[-1] == ("stop",)

    @pytest.mark.asyncio
    async def test_shutdown_before_initialize(self, container):
        await container.shutdown()
