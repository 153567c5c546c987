"""
Shared Domain Kernel

Contains exceptions, events and constants shared across all bounded contexts.
"""

from chat_jukebox.domain.shared.exceptions import (
    AlreadyPresentError,
    DomainError,
    InvalidTransitionError,
    InvalidVolumeError,
    NoSongAvailableError,
    NotPresentError,
    ProviderError,
    SongNotFoundError,
    UnauthorizedError,
)

__all__ = [
    "DomainError",
    "NoSongAvailableError",
    "InvalidTransitionError",
    "InvalidVolumeError",
    "UnauthorizedError",
    "AlreadyPresentError",
    "NotPresentError",
    "ProviderError",
    "SongNotFoundError",
]
