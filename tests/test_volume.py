"""
Unit Tests for VolumeController

Tests for:
- Absolute set within [0, 100]
- Out-of-range values rejected
- Relative steps clamp at the bounds
- Actuator and event bus are informed of every change
"""

import pytest

from chat_jukebox.domain.music.volume import MAX_VOLUME, MIN_VOLUME, VolumeController
from chat_jukebox.domain.shared.events import VolumeChanged
from chat_jukebox.domain.shared.exceptions import InvalidVolumeError


class TestVolumeController:
    @pytest.mark.asyncio
    async def test_initial_volume(self, volume):
        assert await volume.get() == 50

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [MIN_VOLUME, 1, 42, MAX_VOLUME])
    async def test_set_within_range(self, volume, actuator, value):
        assert await volume.set(value) == value
        assert await volume.get() == value
        assert actuator.calls[-1] == ("set_volume", value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [-1, 101, 1000])
    async def test_set_out_of_range_rejected(self, volume, actuator, value):
        with pytest.raises(InvalidVolumeError) as exc_info:
            await volume.set(value)

        assert exc_info.value.value == value
        assert await volume.get() == 50
        assert actuator.calls == []

    @pytest.mark.asyncio
    async def test_increase(self, volume):
        assert await volume.increase(10) == 60

    @pytest.mark.asyncio
    async def test_decrease(self, volume):
        assert await volume.decrease(10) == 40

    @pytest.mark.asyncio
    async def test_increase_clamps_at_max(self, volume):
        await volume.set(95)
        assert await volume.increase(10) == MAX_VOLUME

    @pytest.mark.asyncio
    async def test_decrease_clamps_at_min(self, volume):
        await volume.set(5)
        assert await volume.decrease(10) == MIN_VOLUME

    @pytest.mark.asyncio
    async def test_change_publishes_event(self, volume, published):
        await volume.set(70)

        assert len(published) == 1
        event = published[0]
        assert isinstance(event, VolumeChanged)
        assert event.previous == 50
        assert event.volume == 70

    def test_invalid_initial_volume(self, actuator):
        with pytest.raises(InvalidVolumeError):
            VolumeController(actuator=actuator, initial=150)
