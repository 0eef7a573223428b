"""
HTTP API layer for the AI Dungeon client.

This package contains the protocol flows, all built on the ``httpx``
client produced by ``transport.bind``:

Modules:
    transport: client binding, request sending, error mapping helpers
    auth: registration and login
    client: the authenticated handle returned by auth
    session: story session start and replies
    catalog: recommended story starts

Example:
    from aidungeon_client.api import login

    with login("a@b.com", "secret") as client:
        print(client.start_story("You wake up...", "custom"))
"""

from aidungeon_client.api.auth import login, register
from aidungeon_client.api.client import AIDungeonClient
from aidungeon_client.api.session import StorySession
from aidungeon_client.api.transport import bind

__all__ = [
    "AIDungeonClient",
    "StorySession",
    "bind",
    "login",
    "register",
]
