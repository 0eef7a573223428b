"""AI Dungeon client.

A synchronous client for the AI Dungeon interactive-fiction API: register
or log in, start a story, send replies, and browse the premade story
catalog. Every operation issues its requests immediately and raises a
subclass of :class:`~aidungeon_client.errors.AIDungeonError` on failure.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from aidungeon_client.api import AIDungeonClient, StorySession, login, register
from aidungeon_client.config import Config
from aidungeon_client.errors import (
    AIDungeonError,
    DecodeError,
    EmailAlreadyExistsError,
    InvalidPasswordError,
    TransportError,
    UnexpectedError,
    UsernameAlreadyExistsError,
)
from aidungeon_client.models import NarrativeEvent, StartOptions

try:
    __version__: str = version("aidungeon_client")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "AIDungeonClient",
    "AIDungeonError",
    "Config",
    "DecodeError",
    "EmailAlreadyExistsError",
    "InvalidPasswordError",
    "NarrativeEvent",
    "StartOptions",
    "StorySession",
    "TransportError",
    "UnexpectedError",
    "UsernameAlreadyExistsError",
    "__version__",
    "login",
    "register",
]
