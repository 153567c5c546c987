"""ProviderGateway implementations backed by yt-dlp."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import re
import time
from typing import Any, ClassVar, Final, cast
from urllib.parse import urlparse

from yt_dlp import YoutubeDL

from chat_jukebox.application.interfaces.provider_gateway import ProviderGateway
from chat_jukebox.config.settings import ProviderSettings
from chat_jukebox.domain.music.entities import Song
from chat_jukebox.domain.music.value_objects import ProviderName, SongKind
from chat_jukebox.domain.shared.exceptions import DomainError, ProviderError, SongNotFoundError
from chat_jukebox.domain.shared.messages import LogTemplates
from chat_jukebox.infrastructure.providers.models import (
    CACHE_MAX_SIZE,
    CACHE_TTL,
    HASH_ID_LENGTH,
    LOG_URL_TRUNCATE,
    MAX_DURATION_SECONDS,
    MAX_NAME_LENGTH,
    CacheEntry,
    YtDlpOpts,
    YtDlpSongInfo,
)

logger = logging.getLogger(__name__)

# ── Module-level state and patterns ────────────────────────────────────

_info_cache: dict[str, CacheEntry] = {}

PLAYLIST_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"[?&]list="),
    re.compile(r"/playlist\?"),
    re.compile(r"/sets/"),
]

HTTP_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?://", re.IGNORECASE)


def _generate_song_id(url: str) -> str:
    return hashlib.sha256(url.encode()).hexdigest()[:HASH_ID_LENGTH]


def _host_of(url: str) -> str:
    if not HTTP_URL_PATTERN.match(url):
        url = f"https://{url}"
    host = (urlparse(url).hostname or "").lower()
    for prefix in ("www.", "m."):
        if host.startswith(prefix):
            host = host[len(prefix):]
    return host


def clear_info_cache() -> None:
    _info_cache.clear()


class YtDlpGateway(ProviderGateway):
    """Shared yt-dlp plumbing; subclasses name the provider, hosts and search prefix."""

    provider: ClassVar[ProviderName]
    hosts: ClassVar[tuple[str, ...]]
    search_prefix: ClassVar[str]

    def __init__(self, settings: ProviderSettings | None = None) -> None:
        self._settings = settings or ProviderSettings()
        self._base_opts = YtDlpOpts(format=self._settings.ytdlp_format)

    @property
    def name(self) -> ProviderName:
        return self.provider

    def handles(self, url: str) -> bool:
        host = _host_of(url)
        return any(host == h or host.endswith(f".{h}") for h in self.hosts)

    def is_playlist(self, url: str) -> bool:
        return any(pattern.search(url) for pattern in PLAYLIST_PATTERNS)

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(noplaylist=False, extract_flat="in_playlist")

    # === Conversion ===

    def _info_to_song(self, info: YtDlpSongInfo, fallback_url: str | None = None) -> Song | None:
        url = info.webpage_url or info.url or fallback_url
        if not url or not HTTP_URL_PATTERN.match(url):
            return None
        if not info.title:
            return None

        # Unknown length has no natural end, same as a live stream
        if info.is_livestream or not info.duration:
            kind, duration = SongKind.LIVESTREAM, 0
        else:
            kind, duration = SongKind.TRACK, min(info.duration or 0, MAX_DURATION_SECONDS)

        return Song(
            identifier=info.id or _generate_song_id(url),
            provider=self.provider,
            name=info.title[:MAX_NAME_LENGTH],
            artist=info.performer,
            duration_seconds=duration,
            kind=kind,
            source_url=url,
        )

    @staticmethod
    def _parse_info(data: dict[str, Any]) -> YtDlpSongInfo:
        return YtDlpSongInfo.model_validate(data)

    @staticmethod
    def _parse_entries(data: Any) -> list[YtDlpSongInfo]:
        if not isinstance(data, dict):
            return []
        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return []
        return [YtDlpGateway._parse_info(dict(e)) for e in entries if isinstance(e, dict)]

    # === Blocking yt-dlp calls (run in a worker thread) ===

    def _extract_info_sync(self, url: str) -> YtDlpSongInfo | None:
        now = time.time()
        cached = _info_cache.get(url)
        if cached is not None:
            if now - cached.cached_at < CACHE_TTL:
                logger.debug(LogTemplates.CACHE_HIT_URL, url[:LOG_URL_TRUNCATE])
                return cached.info
            _info_cache.pop(url, None)

        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as e:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise ProviderError(str(self.provider), str(e) or None) from e

        result = self._parse_info(dict(data)) if isinstance(data, dict) else None
        _info_cache[url] = CacheEntry(info=result, cached_at=now)

        if len(_info_cache) > CACHE_MAX_SIZE:
            expired = [k for k, entry in _info_cache.items() if now - entry.cached_at >= CACHE_TTL]
            for k in expired:
                _info_cache.pop(k, None)
            if expired:
                logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))

        return result

    def _search_sync(self, query: str, limit: int) -> list[YtDlpSongInfo]:
        search_query = f"{self.search_prefix}{limit}:{query}"
        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(search_query, download=False)
        except Exception as e:
            logger.warning(LogTemplates.YTDLP_FAILED_SEARCH, query)
            raise ProviderError(str(self.provider), str(e) or None) from e
        return self._parse_entries(data)

    def _extract_playlist_sync(self, url: str) -> list[YtDlpSongInfo]:
        try:
            with YoutubeDL(params=cast(Any, self._get_playlist_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as e:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_PLAYLIST, url[:LOG_URL_TRUNCATE])
            raise ProviderError(str(self.provider), str(e) or None) from e
        return self._parse_entries(data)

    # === ProviderGateway ===

    async def resolve_url(self, url: str) -> Song:
        info = await asyncio.to_thread(self._extract_info_sync, url)
        song = self._info_to_song(info, fallback_url=url) if info is not None else None
        if song is None:
            raise SongNotFoundError(url)
        return song

    async def resolve_playlist(self, url: str) -> list[Song]:
        """Resolve a playlist, skipping entries that cannot be resolved.

        Flat entries that already carry a title are converted directly; the
        rest are resolved one by one.
        """
        entries = await asyncio.to_thread(self._extract_playlist_sync, url)

        songs: list[Song] = []
        for entry in entries:
            entry_url = entry.webpage_url or entry.url
            if not entry_url:
                continue
            song = self._info_to_song(entry)
            if song is None:
                try:
                    song = await self.resolve_url(entry_url)
                except DomainError as e:
                    logger.info(LogTemplates.PROVIDER_PLAYLIST_ENTRY_SKIPPED, entry_url, e.message)
                    continue
            songs.append(song)

        return songs

    async def search(self, query: str, limit: int = 5) -> list[Song]:
        results = await asyncio.to_thread(self._search_sync, query, limit)

        songs: list[Song] = []
        for info in results:
            song = self._info_to_song(info)
            if song is not None:
                songs.append(song)
        return songs


class YouTubeGateway(YtDlpGateway):
    provider = ProviderName.YOUTUBE
    hosts = ("youtube.com", "youtu.be", "music.youtube.com")
    search_prefix = "ytsearch"


class SoundCloudGateway(YtDlpGateway):
    provider = ProviderName.SOUNDCLOUD
    hosts = ("soundcloud.com",)
    search_prefix = "scsearch"


GATEWAY_TYPES: Final[dict[ProviderName, type[YtDlpGateway]]] = {
    ProviderName.YOUTUBE: YouTubeGateway,
    ProviderName.SOUNDCLOUD: SoundCloudGateway,
}


def create_gateways(settings: ProviderSettings) -> list[ProviderGateway]:
    """Instantiate the enabled gateways in configuration order."""
    return [GATEWAY_TYPES[name](settings) for name in dict.fromkeys(settings.enabled)]
