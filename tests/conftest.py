import asyncio

import pytest
import pytest_asyncio

from chat_jukebox.application.interfaces.player_actuator import PlayerActuator
from chat_jukebox.application.interfaces.provider_gateway import ProviderGateway
from chat_jukebox.domain.music.entities import Song
from chat_jukebox.domain.music.value_objects import ProviderName, SongKind
from chat_jukebox.domain.shared.events import EventBus, reset_event_bus
from chat_jukebox.domain.shared.exceptions import ProviderError, SongNotFoundError

# ============================================================================
# Test Doubles
# ============================================================================


class FakeClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingActuator(PlayerActuator):
    """Actuator that records every command it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def play(self, song):
        self.calls.append(("play", song.identifier))

    async def pause(self):
        self.calls.append(("pause",))

    async def resume(self):
        self.calls.append(("resume",))

    async def stop(self):
        self.calls.append(("stop",))

    async def set_volume(self, volume):
        self.calls.append(("set_volume", volume))

    @property
    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeGateway(ProviderGateway):
    """In-memory provider gateway.

    ``urls`` maps a URL to the song it resolves to, ``playlists`` maps a URL to
    its songs and ``results`` is returned (truncated to ``limit``) by search.
    """

    def __init__(
        self,
        provider: ProviderName = ProviderName.YOUTUBE,
        *,
        hosts: tuple[str, ...] = ("youtube.com", "youtu.be"),
        urls: dict[str, Song] | None = None,
        playlists: dict[str, list[Song]] | None = None,
        results: list[Song] | None = None,
        fail: bool = False,
        delay: float = 0.0,
    ) -> None:
        self._provider = provider
        self._hosts = hosts
        self.urls = urls or {}
        self.playlists = playlists or {}
        self.results = results or []
        self.fail = fail
        self.delay = delay
        self.search_calls: list[tuple[str, int]] = []

    @property
    def name(self):
        return self._provider

    def handles(self, url):
        return any(host in url for host in self._hosts)

    def is_playlist(self, url):
        return url in self.playlists

    async def _maybe_fail(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ProviderError(str(self._provider), "provider unavailable")

    async def resolve_url(self, url):
        await self._maybe_fail()
        if url not in self.urls:
            raise SongNotFoundError(url)
        return self.urls[url]

    async def resolve_playlist(self, url):
        await self._maybe_fail()
        return list(self.playlists.get(url, []))

    async def search(self, query, limit=5):
        self.search_calls.append((query, limit))
        await self._maybe_fail()
        return list(self.results[:limit])


def make_song(
    identifier: str = "song-1",
    *,
    name: str | None = None,
    artist: str = "Test Artist",
    duration: int = 180,
    kind: SongKind = SongKind.TRACK,
    provider: ProviderName = ProviderName.YOUTUBE,
) -> Song:
    return Song(
        identifier=identifier,
        provider=provider,
        name=name or f"Song {identifier}",
        artist=artist,
        duration_seconds=0 if kind == SongKind.LIVESTREAM else duration,
        kind=kind,
        source_url=f"https://youtube.com/watch?v={identifier}",
    )


# ============================================================================
# Global State
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_event_bus():
    """Make sure no handler leaks between tests through the global bus."""
    reset_event_bus()
    yield
    reset_event_bus()


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def actuator():
    return RecordingActuator()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def published(event_bus):
    """Every event published on ``event_bus``, in order."""
    from chat_jukebox.domain.shared.events import (
        PlaybackPaused,
        PlaybackResumed,
        PlaybackStopped,
        QueueExhausted,
        QueueFlushed,
        SongsQueued,
        SongStarted,
        VolumeChanged,
    )

    events: list = []

    async def record(event):
        events.append(event)

    for event_type in (
        SongStarted,
        PlaybackPaused,
        PlaybackResumed,
        PlaybackStopped,
        QueueExhausted,
        QueueFlushed,
        SongsQueued,
        VolumeChanged,
    ):
        event_bus.subscribe(event_type, record)
    return events


@pytest.fixture
def song_a():
    return make_song("aaa", name="Alpha", artist="Band A", duration=180)


@pytest.fixture
def song_b():
    return make_song("bbb", name="Bravo", artist="Band B", duration=240)


@pytest.fixture
def song_c():
    return make_song("ccc", name="Charlie", artist="", duration=60)


@pytest.fixture
def livestream():
    return make_song("live", name="Radio", artist="Station", kind=SongKind.LIVESTREAM)


@pytest.fixture
def queue():
    import random

    from chat_jukebox.domain.music.queue import SongQueue

    return SongQueue(rng=random.Random(1234))


@pytest.fixture
def playback(queue, actuator, event_bus, clock):
    from chat_jukebox.domain.music.playback import PlaybackStateMachine

    return PlaybackStateMachine(queue=queue, actuator=actuator, event_bus=event_bus, clock=clock)


@pytest.fixture
def volume(actuator, event_bus):
    from chat_jukebox.domain.music.volume import VolumeController

    return VolumeController(actuator=actuator, initial=50, event_bus=event_bus)


@pytest.fixture
def whitelist():
    from chat_jukebox.domain.auth.whitelist import Whitelist

    return Whitelist(["master"])


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def gateway(song_a, song_b, song_c):
    return FakeGateway(
        urls={"https://youtube.com/watch?v=aaa": song_a},
        playlists={"https://youtube.com/playlist?list=PL1": [song_b, song_c]},
        results=[song_a, song_b, song_c],
    )


@pytest.fixture
def resolver(gateway):
    from chat_jukebox.application.services.resolution_service import SongResolver

    return SongResolver([gateway], timeout_seconds=1.0)


@pytest.fixture
def settings():
    from chat_jukebox.config.settings import Settings

    return Settings(
        _env_file=None,
        api={"username": "admin", "password": "secret"},
        whitelist={"members": ["master"]},
    )


@pytest_asyncio.fixture
async def jukebox(queue, playback, volume, whitelist, resolver, event_bus):
    from chat_jukebox.application.services.jukebox_service import JukeboxService

    return JukeboxService(
        queue=queue,
        playback=playback,
        volume=volume,
        whitelist=whitelist,
        resolver=resolver,
        event_bus=event_bus,
    )
