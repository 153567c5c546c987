"""Whitelist gate for master-only operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from chat_jukebox.domain.shared.exceptions import (
    AlreadyPresentError,
    NotPresentError,
    UnauthorizedError,
)
from chat_jukebox.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return name.strip()


class Whitelist:
    """Set of identities allowed to run privileged commands.

    Matching is exact on the trimmed identity string.
    """

    def __init__(self, members: Iterable[str] = ()) -> None:
        self._members: set[str] = {_normalize(m) for m in members if _normalize(m)}
        self._lock = asyncio.Lock()

    async def contains(self, name: str) -> bool:
        async with self._lock:
            return _normalize(name) in self._members

    async def add(self, name: str) -> None:
        name = _normalize(name)
        async with self._lock:
            if name in self._members:
                raise AlreadyPresentError(name)
            self._members.add(name)
        logger.info(LogTemplates.WHITELIST_ADDED, name)

    async def remove(self, name: str) -> None:
        name = _normalize(name)
        async with self._lock:
            if name not in self._members:
                raise NotPresentError(name)
            self._members.remove(name)
        logger.info(LogTemplates.WHITELIST_REMOVED, name)

    async def members(self) -> list[str]:
        async with self._lock:
            return sorted(self._members)

    async def require(self, name: str, operation: str) -> None:
        if not await self.contains(name):
            logger.warning(LogTemplates.WHITELIST_DENIED, name, operation)
            raise UnauthorizedError(name, operation)
