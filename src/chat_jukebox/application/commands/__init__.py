"""
Application Commands

The closed set of chat commands, their registry and the router that
dispatches inbound messages to them.
"""

from chat_jukebox.application.commands.router import (
    Command,
    CommandName,
    CommandResult,
    CommandRouter,
    InboundMessage,
    build_command_registry,
    create_command_router,
)

__all__ = [
    "Command",
    "CommandName",
    "CommandResult",
    "CommandRouter",
    "InboundMessage",
    "build_command_registry",
    "create_command_router",
]
