"""
Tests for JukeboxService

Tests for:
- Adding songs by URL, playlist and query
- SongsQueued events and autoplay
- search-add leaving the queue untouched when nothing matches
- Queue info and flushing
- Volume stepping with the configured step
- Whitelist management gated by the whitelist itself
"""

import pytest

from chat_jukebox.application.services.jukebox_service import JukeboxService
from chat_jukebox.domain.music.value_objects import PlaybackStatus
from chat_jukebox.domain.shared.events import QueueFlushed, SongsQueued
from chat_jukebox.domain.shared.exceptions import (
    NoSongAvailableError,
    SongNotFoundError,
    UnauthorizedError,
)

from conftest import make_song


class TestAdd:
    @pytest.mark.asyncio
    async def test_add_url(self, jukebox, queue, song_a):
        songs = await jukebox.add("https://youtube.com/watch?v=aaa", requested_by="alice")

        assert songs == [song_a]
        assert await queue.items() == [song_a]

    @pytest.mark.asyncio
    async def test_add_playlist_appends_in_order(self, jukebox, queue, song_a, song_b, song_c):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        await jukebox.add("https://youtube.com/playlist?list=PL1")

        assert await queue.items() == [song_a, song_b, song_c]

    @pytest.mark.asyncio
    async def test_add_publishes_songs_queued(self, jukebox, song_a, published):
        await jukebox.add("https://youtube.com/watch?v=aaa", requested_by="alice")

        event = published[-1]
        assert isinstance(event, SongsQueued)
        assert event.songs == [song_a]
        assert event.requested_by == "alice"
        assert event.queue_length == 1

    @pytest.mark.asyncio
    async def test_add_does_not_start_playback_by_default(self, jukebox, playback):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        assert playback.status is PlaybackStatus.STOPPED

    @pytest.mark.asyncio
    async def test_add_unknown_url_leaves_queue_empty(self, jukebox, queue):
        with pytest.raises(SongNotFoundError):
            await jukebox.add("https://youtube.com/watch?v=missing")
        assert await queue.length() == 0

    @pytest.mark.asyncio
    async def test_autoplay_starts_when_stopped(
        self, queue, playback, volume, whitelist, resolver, event_bus, actuator, song_a
    ):
        jukebox = JukeboxService(
            queue=queue,
            playback=playback,
            volume=volume,
            whitelist=whitelist,
            resolver=resolver,
            event_bus=event_bus,
            autoplay=True,
        )

        await jukebox.add("https://youtube.com/watch?v=aaa")

        current = await jukebox.current()
        assert current.song == song_a
        assert current.status is PlaybackStatus.PLAYING
        assert actuator.calls == [("play", "aaa")]
        assert await queue.length() == 0


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_does_not_queue(self, jukebox, queue, song_a, song_b):
        assert await jukebox.search("query", limit=2) == [song_a, song_b]
        assert await queue.length() == 0

    @pytest.mark.asyncio
    async def test_search_add_queues_best_match(self, jukebox, queue, song_a):
        assert await jukebox.search_add("alpha", requested_by="bob") == song_a
        assert await queue.items() == [song_a]

    @pytest.mark.asyncio
    async def test_search_add_without_results(self, jukebox, queue, gateway):
        gateway.results = []

        with pytest.raises(SongNotFoundError):
            await jukebox.search_add("nothing")
        assert await queue.length() == 0


class TestQueueOperations:
    @pytest.mark.asyncio
    async def test_queue_info(self, jukebox, song_a, song_b, song_c):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        await jukebox.add("https://youtube.com/playlist?list=PL1")

        info = await jukebox.queue_info(preview_size=2)

        assert info.length == 3
        assert info.total_duration_seconds == 180 + 240 + 60
        assert info.upcoming == [song_a, song_b]
        assert info.remaining_count == 1

    @pytest.mark.asyncio
    async def test_queue_info_empty(self, jukebox):
        info = await jukebox.queue_info()

        assert info.length == 0
        assert info.total_duration_seconds == 0
        assert info.upcoming == []

    @pytest.mark.asyncio
    async def test_flush(self, jukebox, queue):
        await jukebox.add("https://youtube.com/playlist?list=PL1")

        assert await jukebox.flush() == 2
        assert await queue.length() == 0

    @pytest.mark.asyncio
    async def test_flush_publishes_event(self, jukebox, published):
        await jukebox.add("https://youtube.com/playlist?list=PL1")

        await jukebox.flush()

        assert isinstance(published[-1], QueueFlushed)
        assert published[-1].song_count == 2

    @pytest.mark.asyncio
    async def test_flush_keeps_current_song(self, jukebox, song_a):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        await jukebox.add("https://youtube.com/playlist?list=PL1")
        await jukebox.play()

        await jukebox.flush()

        assert (await jukebox.current()).song == song_a


class TestPlayback:
    @pytest.mark.asyncio
    async def test_status_snapshot(self, jukebox, song_a, song_b, song_c):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        await jukebox.add("https://youtube.com/playlist?list=PL1")
        await jukebox.play()

        snapshot = await jukebox.status()

        assert snapshot.current.song == song_a
        assert snapshot.queue == [song_b, song_c]

    @pytest.mark.asyncio
    async def test_next_on_empty_queue(self, jukebox):
        with pytest.raises(NoSongAvailableError):
            await jukebox.next()

    @pytest.mark.asyncio
    async def test_add_play_next_flow(self, jukebox, song_a, song_b):
        await jukebox.add("https://youtube.com/watch?v=aaa")
        await jukebox.add("https://youtube.com/playlist?list=PL1")

        assert await jukebox.play() == song_a
        assert await jukebox.next() == song_b
        assert (await jukebox.queue_info()).length == 1


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_two_tracks_play_then_auto_advance(self, jukebox, gateway, playback, clock):
        first = make_song("first", duration=180)
        second = make_song("second", duration=270)
        gateway.urls["https://youtube.com/watch?v=first"] = first
        gateway.urls["https://youtube.com/watch?v=second"] = second

        await jukebox.add("https://youtube.com/watch?v=first")
        await jukebox.add("https://youtube.com/watch?v=second")
        assert (await jukebox.queue_info()).total_duration_seconds == 450

        assert await jukebox.play() == first
        clock.advance(180)

        assert await playback.advance_if_finished() == second
        assert (await jukebox.current()).song == second
        assert (await jukebox.queue_info()).length == 0


class TestVolume:
    @pytest.mark.asyncio
    async def test_increase_uses_configured_step(self, jukebox):
        assert jukebox.volume_step == 10
        assert await jukebox.increase_volume() == 60

    @pytest.mark.asyncio
    async def test_decrease_with_explicit_delta(self, jukebox):
        assert await jukebox.decrease_volume(25) == 25

    @pytest.mark.asyncio
    async def test_set_and_get(self, jukebox):
        await jukebox.set_volume(80)
        assert await jukebox.get_volume() == 80


class TestWhitelistManagement:
    @pytest.mark.asyncio
    async def test_master_can_add(self, jukebox, whitelist):
        await jukebox.whitelist_add("master", "alice")
        assert await whitelist.contains("alice")

    @pytest.mark.asyncio
    async def test_master_can_remove(self, jukebox, whitelist):
        await jukebox.whitelist_add("master", "alice")
        await jukebox.whitelist_remove("master", "alice")
        assert not await whitelist.contains("alice")

    @pytest.mark.asyncio
    async def test_stranger_cannot_add(self, jukebox, whitelist):
        with pytest.raises(UnauthorizedError):
            await jukebox.whitelist_add("stranger", "stranger")

        assert await whitelist.members() == ["master"]
