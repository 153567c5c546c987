"""Discord chat adapter: turns prefixed messages into jukebox commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from chat_jukebox.application.commands.router import InboundMessage
from chat_jukebox.domain.shared.events import QueueExhausted, SongStarted
from chat_jukebox.domain.shared.messages import LogTemplates, ReplyMessages

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

# Discord rejects messages longer than this.
MAX_MESSAGE_LENGTH = 2000


def extract_command_text(content: str, prefix: str) -> str | None:
    """Return the text after the command prefix, or None when the message is not for us."""
    content = content.strip()
    if not content.startswith(prefix):
        return None
    rest = content[len(prefix):]
    if rest and not rest[0].isspace():
        return None
    return rest.strip()


class JukeboxBot(commands.Bot):
    def __init__(
        self,
        container: Container,
        settings: Settings,
        **kwargs,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True

        super().__init__(
            command_prefix=settings.discord.command_prefix,
            intents=intents,
            help_command=None,
            **kwargs,
        )

        self.container = container
        self.settings = settings

    async def setup_hook(self) -> None:
        bus = self.container.event_bus
        bus.subscribe(SongStarted, self._on_song_started)
        bus.subscribe(QueueExhausted, self._on_queue_exhausted)

    async def on_ready(self) -> None:
        logger.info(
            LogTemplates.CHAT_READY,
            self.user,  # type: ignore
            self.user.id,  # type: ignore
        )
        activity = discord.Activity(
            type=discord.ActivityType.listening,
            name=f"{self.settings.discord.command_prefix} help",
        )
        await self.change_presence(activity=activity)

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        text = extract_command_text(message.content, self.settings.discord.command_prefix)
        if text is None:
            return

        inbound = InboundMessage(
            sender=message.author.display_name,
            text=text,
            is_private=message.guild is None,
        )
        result = await self.container.command_router.dispatch(inbound)

        for reply in result.replies:
            await self._send(message.channel, reply)
        for line in result.broadcasts:
            await self.broadcast(line)

    async def broadcast(self, text: str) -> None:
        """Send a line to the shared announce channel, if one is configured."""
        channel_id = self.settings.discord.announce_channel_id
        if channel_id is None:
            logger.debug(LogTemplates.CHAT_NO_ANNOUNCE_CHANNEL, text)
            return

        channel = self.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self.fetch_channel(channel_id)
            except discord.HTTPException as e:
                logger.warning(LogTemplates.CHAT_SEND_FAILED, e)
                return

        await self._send(channel, text)

    async def _send(self, channel, text: str) -> None:
        try:
            await channel.send(text[:MAX_MESSAGE_LENGTH])
        except discord.HTTPException as e:
            logger.warning(LogTemplates.CHAT_SEND_FAILED, e)

    async def _on_song_started(self, event: SongStarted) -> None:
        if event.automatic:
            await self.broadcast(ReplyMessages.NOW_PLAYING.format(song=event.song.display_name))

    async def _on_queue_exhausted(self, event: QueueExhausted) -> None:
        if event.automatic:
            await self.broadcast(ReplyMessages.QUEUE_EXHAUSTED)

    async def close(self) -> None:
        bus = self.container.event_bus
        bus.unsubscribe(SongStarted, self._on_song_started)
        bus.unsubscribe(QueueExhausted, self._on_queue_exhausted)
        await super().close()


def create_bot(container: Container, settings: Settings) -> JukeboxBot:
    return JukeboxBot(container=container, settings=settings)
