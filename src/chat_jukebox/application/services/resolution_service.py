"""Turns a URL or a free-text query into songs using the provider gateways."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Sequence
from itertools import chain, zip_longest
from typing import TYPE_CHECKING, Final, TypeVar

from chat_jukebox.domain.shared.exceptions import DomainError, ProviderError, SongNotFoundError
from chat_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from chat_jukebox.utils.reply import sanitize_song_input

if TYPE_CHECKING:
    from ...domain.music.entities import Song
    from ..interfaces.provider_gateway import ProviderGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SEARCH_LIMIT: Final[int] = 5

URL_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"^https?://", re.IGNORECASE),
    re.compile(r"^www\.", re.IGNORECASE),
]


def is_url(text: str) -> bool:
    return any(pattern.search(text) for pattern in URL_PATTERNS)


def _interleave(result_lists: Sequence[list[Song]]) -> list[Song]:
    """Merge ranked lists round-robin, keeping each list's own order."""
    _missing = object()
    merged = chain.from_iterable(zip_longest(*result_lists, fillvalue=_missing))
    return [song for song in merged if song is not _missing]


class SongResolver:
    """Routes URLs to the gateway that recognises them and fans searches out.

    Every gateway call is bounded by ``timeout_seconds``. Provider calls never
    happen while jukebox state is locked; callers resolve first and mutate
    afterwards.
    """

    def __init__(
        self,
        gateways: Sequence[ProviderGateway],
        *,
        timeout_seconds: float = 15.0,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self._gateways = list(gateways)
        self._timeout = timeout_seconds
        self._search_limit = search_limit

    @property
    def gateways(self) -> list[ProviderGateway]:
        return list(self._gateways)

    async def resolve(self, text: str) -> list[Song]:
        """Resolve user input to the songs it stands for.

        A single-item URL gives one song, a playlist URL gives its entries
        and anything else is searched with the best match used.

        Raises:
            SongNotFoundError: Nothing could be resolved.
            ProviderError: The provider failed or timed out.
        """
        query = sanitize_song_input(text)
        if not query:
            raise SongNotFoundError(text)

        if not is_url(query):
            results = await self.search(query, limit=1)
            if not results:
                raise SongNotFoundError(query)
            return results[:1]

        gateway = self._gateway_for(query)
        if gateway is None:
            raise SongNotFoundError(query, ErrorMessages.PROVIDER_NOT_AVAILABLE.format(url=query))

        logger.info(LogTemplates.PROVIDER_RESOLVING, query, gateway.name)
        if gateway.is_playlist(query):
            songs = await self._call(gateway, query, gateway.resolve_playlist(query))
            if not songs:
                raise SongNotFoundError(query)
            return songs

        return [await self._call(gateway, query, gateway.resolve_url(query))]

    async def search(self, query: str, limit: int | None = None) -> list[Song]:
        """Search every gateway concurrently and merge the ranked results.

        Results alternate between gateways in configuration order, so the
        primary gateway's best match comes first. A failing gateway is
        skipped; when all of them fail :class:`ProviderError` is raised.
        """
        query = sanitize_song_input(query)
        limit = limit or self._search_limit
        if not query or not self._gateways:
            return []

        logger.debug(LogTemplates.PROVIDER_SEARCHING, query, len(self._gateways))

        async def search_one(gateway: ProviderGateway) -> list[Song] | None:
            try:
                return await self._call(gateway, query, gateway.search(query, limit))
            except SongNotFoundError:
                return []
            except DomainError as e:
                logger.warning(LogTemplates.PROVIDER_FAILED, gateway.name, query, e.message)
                return None

        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(search_one(gateway)) for gateway in self._gateways]

        outcomes = [task.result() for task in tasks]
        succeeded = [songs for songs in outcomes if songs is not None]
        if not succeeded:
            raise ProviderError("all", ErrorMessages.ALL_PROVIDERS_FAILED.format(query=query))

        return _interleave(succeeded)[:limit]

    def _gateway_for(self, url: str) -> ProviderGateway | None:
        for gateway in self._gateways:
            if gateway.handles(url):
                return gateway
        return None

    async def _call(self, gateway: ProviderGateway, query: str, call: Awaitable[T]) -> T:
        try:
            async with asyncio.timeout(self._timeout):
                return await call
        except TimeoutError as e:
            logger.warning(LogTemplates.PROVIDER_TIMEOUT, gateway.name, self._timeout, query)
            raise ProviderError(
                str(gateway.name),
                ErrorMessages.PROVIDER_TIMEOUT.format(provider=gateway.name, timeout=self._timeout),
            ) from e
        except DomainError:
            raise
        except Exception as e:
            logger.warning(LogTemplates.PROVIDER_FAILED, gateway.name, query, e)
            raise ProviderError(str(gateway.name), str(e) or None) from e
