"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Exceptions, events, message constants and validated types
- music/: Song, queue, playback state machine and volume
- auth/: Whitelist gate for master-only commands
"""

from chat_jukebox.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
