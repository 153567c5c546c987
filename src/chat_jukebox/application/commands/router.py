"""Chat command registry and dispatcher.

The set of commands is closed: every name is a :class:`CommandName` member and
the registry mapping names to handlers is built once at startup and is
read-only afterwards.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from importlib.metadata import PackageNotFoundError, version
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...domain.shared.exceptions import (
    DomainError,
    InvalidVolumeError,
    NoSongAvailableError,
    SongNotFoundError,
    UnauthorizedError,
)
from ...domain.shared.messages import LogTemplates, ReplyMessages
from ...domain.shared.types import NonEmptyStr
from ...utils.reply import format_duration, truncate

if TYPE_CHECKING:
    from ...config.settings import Settings
    from ...domain.auth.whitelist import Whitelist
    from ..services.jukebox_service import JukeboxService

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "chat-jukebox"


class CommandName(StrEnum):
    HELP = "help"
    ADD = "add"
    SEARCH = "search"
    SEARCH_ADD = "search-add"
    NEXT = "next"
    PAUSE = "pause"
    PLAY = "play"
    CURRENT = "current"
    QUEUE = "queue"
    FLUSH = "flush"
    SHUFFLE = "shuffle"
    VOL = "vol"
    WHITELIST = "whitelist"
    ABOUT = "about"


class InboundMessage(BaseModel):
    """A chat message with the command prefix already removed."""

    model_config = ConfigDict(frozen=True)

    sender: NonEmptyStr
    text: str
    is_private: bool = False


class CommandResult(BaseModel):
    """Lines to send back to the sender and lines for the shared channel."""

    replies: list[str] = Field(default_factory=list)
    broadcasts: list[str] = Field(default_factory=list)

    @classmethod
    def reply(cls, *lines: str) -> CommandResult:
        return cls(replies=list(lines))


Handler = Callable[[InboundMessage, str], Awaitable[CommandResult]]


@dataclass(frozen=True)
class Command:
    name: CommandName
    handler: Handler
    master_only: bool = False
    usage: str = ""


def _package_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


def _announce(message: InboundMessage, result: CommandResult, line: str) -> CommandResult:
    """Add a broadcast line when the command came from a shared channel."""
    if not message.is_private:
        result.broadcasts.append(line)
    return result


class _CommandHandlers:
    """Handlers for each chat command, bound to one jukebox."""

    def __init__(self, jukebox: JukeboxService, settings: Settings) -> None:
        self._jukebox = jukebox
        self._settings = settings
        self._registry: Mapping[CommandName, Command] = MappingProxyType({})

    def bind(self, registry: Mapping[CommandName, Command]) -> None:
        self._registry = registry

    async def help(self, message: InboundMessage, args: str) -> CommandResult:
        names = " ".join(str(name) for name in self._registry)
        return CommandResult.reply(ReplyMessages.HELP.format(commands=names))

    async def add(self, message: InboundMessage, args: str) -> CommandResult:
        if not args.strip():
            return CommandResult.reply(ReplyMessages.NO_SONG_PROVIDED)

        try:
            songs = await self._jukebox.add(args, requested_by=message.sender)
        except SongNotFoundError as e:
            return CommandResult.reply(e.message)

        if len(songs) == 1:
            song = songs[0].display_name
            result = CommandResult.reply(ReplyMessages.SONG_ADDED.format(song=song))
            return _announce(
                message, result, ReplyMessages.SONG_ADDED_BY.format(song=song, sender=message.sender)
            )

        result = CommandResult.reply(ReplyMessages.SONGS_ADDED.format(count=len(songs)))
        return _announce(
            message,
            result,
            ReplyMessages.SONGS_ADDED_BY.format(count=len(songs), sender=message.sender),
        )

    async def search(self, message: InboundMessage, args: str) -> CommandResult:
        if not args.strip():
            return CommandResult.reply(ReplyMessages.NO_SONG_PROVIDED)

        songs = await self._jukebox.search(args, limit=self._settings.player.search_limit)
        if not songs:
            return CommandResult.reply(ReplyMessages.NO_SONG_FOUND)

        lines = [
            ReplyMessages.SEARCH_RESULT.format(
                index=number, song=truncate(song.display_name), duration=song.duration_formatted
            )
            for number, song in enumerate(songs, start=1)
        ]
        return CommandResult.reply("\n".join(lines))

    async def search_add(self, message: InboundMessage, args: str) -> CommandResult:
        if not args.strip():
            return CommandResult.reply(ReplyMessages.NO_SONG_PROVIDED)

        try:
            song = await self._jukebox.search_add(args, requested_by=message.sender)
        except SongNotFoundError:
            return CommandResult.reply(ReplyMessages.NO_SONG_FOUND)

        name = song.display_name
        result = CommandResult.reply(ReplyMessages.SONG_ADDED.format(song=name))
        return _announce(
            message, result, ReplyMessages.SONG_ADDED_BY.format(song=name, sender=message.sender)
        )

    async def next(self, message: InboundMessage, args: str) -> CommandResult:
        try:
            await self._jukebox.next()
        except NoSongAvailableError as e:
            return CommandResult.reply(ReplyMessages.SKIP_FAILED.format(error=e.message))

        result = CommandResult.reply(ReplyMessages.SKIPPING)
        return _announce(message, result, ReplyMessages.SKIPPED_BY.format(sender=message.sender))

    async def pause(self, message: InboundMessage, args: str) -> CommandResult:
        await self._jukebox.pause()
        result = CommandResult.reply(ReplyMessages.PAUSED)
        return _announce(message, result, ReplyMessages.PAUSED_BY.format(sender=message.sender))

    async def play(self, message: InboundMessage, args: str) -> CommandResult:
        await self._jukebox.play()
        result = CommandResult.reply(ReplyMessages.RESUMED)
        return _announce(message, result, ReplyMessages.RESUMED_BY.format(sender=message.sender))

    async def current(self, message: InboundMessage, args: str) -> CommandResult:
        current = await self._jukebox.current()
        song = current.song
        if song is None:
            return CommandResult.reply(ReplyMessages.NOTHING_PLAYING)

        if song.is_unbounded:
            return CommandResult.reply(ReplyMessages.CURRENT_LIVESTREAM.format(song=song.display_name))

        line = ReplyMessages.CURRENT_SONG.format(
            song=song.display_name,
            remaining=format_duration(int(current.remaining_seconds or 0)),
            duration=song.duration_formatted,
        )
        if not current.is_playing:
            line += ReplyMessages.CURRENT_PAUSED_SUFFIX
        return CommandResult.reply(line)

    async def queue(self, message: InboundMessage, args: str) -> CommandResult:
        info = await self._jukebox.queue_info()
        lines = [
            ReplyMessages.QUEUE_SUMMARY.format(
                count=info.length, duration=format_duration(info.total_duration_seconds)
            )
        ]
        lines.extend(
            ReplyMessages.QUEUE_ENTRY.format(
                index=index, song=truncate(song.display_name), duration=song.duration_formatted
            )
            for index, song in enumerate(info.upcoming, start=1)
        )
        if info.remaining_count > 0:
            lines.append(ReplyMessages.QUEUE_MORE.format(count=info.remaining_count))
        return CommandResult(replies=lines)

    async def flush(self, message: InboundMessage, args: str) -> CommandResult:
        await self._jukebox.flush()
        result = CommandResult.reply(ReplyMessages.QUEUE_FLUSHED)
        return _announce(
            message, result, ReplyMessages.QUEUE_FLUSHED_BY.format(sender=message.sender)
        )

    async def shuffle(self, message: InboundMessage, args: str) -> CommandResult:
        await self._jukebox.shuffle()
        result = CommandResult.reply(ReplyMessages.QUEUE_SHUFFLED)
        return _announce(
            message, result, ReplyMessages.QUEUE_SHUFFLED_BY.format(sender=message.sender)
        )

    async def vol(self, message: InboundMessage, args: str) -> CommandResult:
        value = args.strip()
        if not value:
            volume = await self._jukebox.get_volume()
            return CommandResult.reply(ReplyMessages.VOLUME_CURRENT.format(volume=volume))

        if value == "++":
            volume = await self._jukebox.increase_volume()
        elif value == "--":
            volume = await self._jukebox.decrease_volume()
        else:
            try:
                requested = int(value)
            except ValueError:
                return CommandResult.reply(ReplyMessages.VOLUME_NOT_A_NUMBER.format(value=value))
            try:
                volume = await self._jukebox.set_volume(requested)
            except InvalidVolumeError:
                return CommandResult.reply(ReplyMessages.VOLUME_INVALID.format(value=value))

        result = CommandResult.reply(ReplyMessages.VOLUME_SET.format(volume=volume))
        return _announce(
            message,
            result,
            ReplyMessages.VOLUME_SET_BY.format(volume=volume, sender=message.sender),
        )

    async def whitelist(self, message: InboundMessage, args: str) -> CommandResult:
        parts = args.split(maxsplit=1)
        if len(parts) < 2 or not parts[1].strip():
            return CommandResult.reply(ReplyMessages.WHITELIST_USAGE)

        action, name = parts[0].lower(), parts[1].strip()
        if action == "add":
            await self._jukebox.whitelist_add(message.sender, name)
            return CommandResult.reply(ReplyMessages.WHITELIST_ADDED.format(name=name))
        if action == "remove":
            await self._jukebox.whitelist_remove(message.sender, name)
            return CommandResult.reply(ReplyMessages.WHITELIST_REMOVED.format(name=name))
        return CommandResult.reply(ReplyMessages.WHITELIST_USAGE)

    async def about(self, message: InboundMessage, args: str) -> CommandResult:
        return CommandResult.reply(
            ReplyMessages.ABOUT_NAME,
            ReplyMessages.ABOUT_VERSION.format(version=_package_version()),
            ReplyMessages.ABOUT_PYTHON.format(python=platform.python_version()),
        )


def build_command_registry(
    jukebox: JukeboxService, settings: Settings
) -> Mapping[CommandName, Command]:
    """Build the read-only name to command mapping used by the router."""
    handlers = _CommandHandlers(jukebox, settings)
    commands = [
        Command(CommandName.HELP, handlers.help, usage="help"),
        Command(CommandName.ADD, handlers.add, usage="add <url|query>"),
        Command(CommandName.SEARCH, handlers.search, usage="search <query>"),
        Command(CommandName.SEARCH_ADD, handlers.search_add, usage="search-add <query>"),
        Command(CommandName.NEXT, handlers.next, usage="next"),
        Command(CommandName.PAUSE, handlers.pause, usage="pause"),
        Command(CommandName.PLAY, handlers.play, usage="play"),
        Command(CommandName.CURRENT, handlers.current, usage="current"),
        Command(CommandName.QUEUE, handlers.queue, usage="queue"),
        Command(CommandName.FLUSH, handlers.flush, usage="flush"),
        Command(CommandName.SHUFFLE, handlers.shuffle, usage="shuffle"),
        Command(CommandName.VOL, handlers.vol, usage="vol [<0-100>|++|--]"),
        Command(
            CommandName.WHITELIST,
            handlers.whitelist,
            master_only=True,
            usage=ReplyMessages.WHITELIST_USAGE,
        ),
        Command(CommandName.ABOUT, handlers.about, usage="about"),
    ]
    registry = MappingProxyType({command.name: command for command in commands})
    handlers.bind(registry)
    return registry


class CommandRouter:
    """Parses the command word and runs the matching handler."""

    def __init__(self, registry: Mapping[CommandName, Command], whitelist: Whitelist) -> None:
        self._registry = registry
        self._whitelist = whitelist

    @property
    def registry(self) -> Mapping[CommandName, Command]:
        return self._registry

    async def dispatch(self, message: InboundMessage) -> CommandResult:
        word, _, args = message.text.strip().partition(" ")
        word = word.lower() or CommandName.HELP.value

        try:
            command = self._registry[CommandName(word)]
        except (ValueError, KeyError):
            logger.info(LogTemplates.COMMAND_UNKNOWN, word, message.sender)
            return CommandResult.reply(ReplyMessages.UNKNOWN_COMMAND.format(name=word))

        logger.debug(LogTemplates.COMMAND_RECEIVED, command.name, message.sender, message.is_private)

        try:
            if command.master_only:
                await self._whitelist.require(message.sender, command.name)
            return await command.handler(message, args.strip())
        except UnauthorizedError as e:
            return CommandResult.reply(e.message)
        except DomainError as e:
            logger.warning(LogTemplates.COMMAND_FAILED, command.name, e.message)
            return CommandResult.reply(ReplyMessages.ERROR.format(error=e.message))


def create_command_router(jukebox: JukeboxService, settings: Settings) -> CommandRouter:
    return CommandRouter(build_command_registry(jukebox, settings), jukebox.whitelist)
