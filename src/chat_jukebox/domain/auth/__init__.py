"""
Auth Bounded Context

Whitelist of identities allowed to run master-only commands.
"""

from chat_jukebox.domain.auth.whitelist import Whitelist

__all__ = [
    "Whitelist",
]
