"""Port interface for resolving songs from one external provider."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from chat_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr, PositiveInt

if TYPE_CHECKING:
    from ...domain.music.entities import Song
    from ...domain.music.value_objects import ProviderName


class ProviderGateway(ABC):
    """Capability interface implemented once per provider."""

    @property
    @abstractmethod
    def name(self) -> "ProviderName":
        ...

    @abstractmethod
    def handles(self, url: str) -> bool:
        """Whether this provider recognises the URL."""
        ...

    @abstractmethod
    def is_playlist(self, url: HttpUrlStr) -> bool:
        ...

    @abstractmethod
    async def resolve_url(self, url: HttpUrlStr) -> "Song":
        """Resolve a single item URL.

        Raises:
            SongNotFoundError: The URL does not point at a playable item.
            ProviderError: The provider could not be reached or failed.
        """
        ...

    @abstractmethod
    async def resolve_playlist(self, url: HttpUrlStr) -> list["Song"]:
        """Resolve every entry of a playlist, skipping entries that fail."""
        ...

    @abstractmethod
    async def search(self, query: NonEmptyStr, limit: PositiveInt = 5) -> list["Song"]:
        """Search for songs, best match first. An empty list means nothing matched."""
        ...
