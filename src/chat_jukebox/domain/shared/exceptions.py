"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NoSongAvailableError(DomainError):
    """Raised when Play/Next needs a song and the queue is empty."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "No song available in the queue", code="NO_SONG_AVAILABLE")


class InvalidTransitionError(DomainError):
    """Raised when a playback transition is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot {operation} while {current_state}"
        super().__init__(msg, code="INVALID_TRANSITION")
        self.operation = operation
        self.current_state = current_state


class InvalidVolumeError(DomainError):
    """Raised when an absolute volume falls outside the allowed range."""

    def __init__(self, value: int, minimum: int = 0, maximum: int = 100) -> None:
        super().__init__(
            f"{value} is not a valid volume (must be between {minimum} and {maximum})",
            code="INVALID_VOLUME",
        )
        self.value = value


class UnauthorizedError(DomainError):
    """Raised when a non-whitelisted identity invokes a privileged operation."""

    def __init__(self, identity: str, operation: str) -> None:
        super().__init__(
            f"Unauthorized: {identity} is not allowed to use {operation}",
            code="UNAUTHORIZED",
        )
        self.identity = identity
        self.operation = operation


class AlreadyPresentError(DomainError):
    """Raised when adding a name that is already whitelisted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is already on the whitelist", code="ALREADY_PRESENT")
        self.name = name


class NotPresentError(DomainError):
    """Raised when removing a name that is not whitelisted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not on the whitelist", code="NOT_PRESENT")
        self.name = name


class ProviderError(DomainError):
    """Opaque failure from an external metadata provider."""

    def __init__(self, provider: str, message: str | None = None) -> None:
        msg = message or f"Provider '{provider}' failed"
        super().__init__(msg, code="PROVIDER_ERROR")
        self.provider = provider


class SongNotFoundError(DomainError):
    """Raised when a URL or query yields no resolvable song."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(message or "No song found", code="NOT_FOUND")
        self.query = query
