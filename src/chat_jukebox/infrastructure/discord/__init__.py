"""Discord chat adapter."""

from chat_jukebox.infrastructure.discord.bot import JukeboxBot, create_bot

__all__ = ["JukeboxBot", "create_bot"]
