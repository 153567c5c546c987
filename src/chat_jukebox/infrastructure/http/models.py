"""Response models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chat_jukebox.domain.music.entities import Song
from chat_jukebox.domain.shared.types import NonNegativeInt
from chat_jukebox.utils.reply import format_minutes_seconds


class Item(BaseModel):
    """A song as exposed over HTTP."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    seconds: NonNegativeInt
    seconds_remaining: NonNegativeInt = Field(serialization_alias="secondsRemaining")
    formatted_time: str = Field(serialization_alias="formattedTime")
    url: str

    @classmethod
    def from_song(cls, song: Song, remaining: float | None = None) -> Item:
        """Queued songs have not started, so their remaining time is their duration."""
        seconds = song.effective_duration
        if remaining is None:
            remaining = seconds
        return cls(
            title=song.display_name,
            seconds=seconds,
            seconds_remaining=int(remaining),
            formatted_time=format_minutes_seconds(seconds),
            url=song.source_url,
        )


class StatusResponse(BaseModel):
    status: str
    current: Item | None = None
    songs: list[Item] = Field(default_factory=list, serialization_alias="list")
