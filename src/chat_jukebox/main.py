#!/usr/bin/env python3
"""Main entry point for chat-jukebox.

Runs the HTTP API, the Discord chat adapter and the auto-advance ticker in a
single event loop, all sharing one jukebox.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

import uvicorn

from chat_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from chat_jukebox.utils.logging import setup_logging

if TYPE_CHECKING:
    from chat_jukebox.config.container import Container
    from chat_jukebox.config.settings import Settings

logger = logging.getLogger(__name__)


async def serve_http(container: Container, settings: Settings) -> None:
    config = uvicorn.Config(
        container.create_http_app(),
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    logger.info(LogTemplates.HTTP_STARTING, settings.api.host, settings.api.port)
    await server.serve()


async def run_bot(container: Container, settings: Settings) -> None:
    from chat_jukebox.infrastructure.discord.bot import create_bot

    bot = create_bot(container, settings)
    async with bot:
        await bot.start(settings.discord.token.get_secret_value())


async def run(settings: Settings) -> None:
    from chat_jukebox.config.container import create_container

    container = create_container(settings)
    await container.initialize()
    try:
        async with asyncio.TaskGroup() as tg:
            if settings.api.enabled:
                tg.create_task(serve_http(container, settings))
            if settings.discord.enabled:
                tg.create_task(run_bot(container, settings))
    finally:
        await container.shutdown()


def main() -> int:
    from chat_jukebox.config.settings import get_settings

    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    if not settings.api.enabled and not settings.discord.enabled:
        logger.error(ErrorMessages.NOTHING_TO_RUN)
        return 1

    if settings.discord.enabled and not settings.discord.token.get_secret_value():
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.APP_STARTING, settings.environment)

    try:
        asyncio.run(run(settings))
        logger.info(LogTemplates.APP_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.APP_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
