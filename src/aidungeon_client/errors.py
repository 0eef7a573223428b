"""Typed exceptions raised by the AI Dungeon client.

Every failure the client can surface is one of the classes below. The
hierarchy is closed: callers can catch :class:`AIDungeonError` to handle
everything, or one of the concrete kinds for the business-rule
conflicts that are worth recovering from.

Design intent:
    - The two account conflicts (email taken, username taken) get their
      own classes so a UI can re-prompt instead of bailing out.
    - Transport and decode failures always carry the underlying
      exception, both as ``cause`` and via exception chaining.
    - Anything else becomes :class:`UnexpectedError` with the observed
      HTTP status code when there is one.
"""

from __future__ import annotations


class AIDungeonError(Exception):
    """Base exception for all client failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message or self.__class__.__name__


class EmailAlreadyExistsError(AIDungeonError):
    """Registration found an account already using this email."""

    def __init__(self, message: str = "An account with this email already exists") -> None:
        super().__init__(message)


class UsernameAlreadyExistsError(AIDungeonError):
    """Registration completion rejected the chosen username."""

    def __init__(self, message: str = "This username is already taken") -> None:
        super().__init__(message)


class InvalidPasswordError(AIDungeonError):
    """Credentials were rejected.

    No server status is currently mapped to this error; it exists so
    callers can already catch it once the service documents one.
    """

    def __init__(self, message: str = "Invalid password") -> None:
        super().__init__(message)


class TransportError(AIDungeonError):
    """The HTTP request itself failed (DNS, connection, TLS, timeout).

    Attributes:
        cause: The exception raised by the transport.
    """

    def __init__(self, message: str, *, cause: Exception) -> None:
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class DecodeError(AIDungeonError):
    """A response body did not parse into the expected schema.

    Attributes:
        cause: The parse or validation error.
    """

    def __init__(self, message: str, *, cause: Exception) -> None:
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class UnexpectedError(AIDungeonError):
    """Catch-all for unmapped status codes and misuse of the client.

    Attributes:
        status_code: HTTP status observed, or ``None`` when the error was
            raised before or without a response.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "AIDungeonError",
    "DecodeError",
    "EmailAlreadyExistsError",
    "InvalidPasswordError",
    "TransportError",
    "UnexpectedError",
    "UsernameAlreadyExistsError",
]
