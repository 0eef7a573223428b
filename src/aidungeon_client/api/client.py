"""
Authenticated handle for the AI Dungeon API.

``AIDungeonClient`` is what :func:`~aidungeon_client.api.auth.login` and
:func:`~aidungeon_client.api.auth.register` return. It owns the bound
HTTP client and remembers the story session started through it, so
callers that only need one story at a time can simply do:

    with login(email, password) as client:
        client.start_story("You wake up...", "custom")
        events = client.send_reply("open the door")

Callers that prefer the session object can use ``start_session`` and
keep the returned :class:`StorySession`.
"""

from __future__ import annotations

import threading
from typing import Any

import httpx

from aidungeon_client.api import catalog, session
from aidungeon_client.api.session import StorySession
from aidungeon_client.api.transport import ACCESS_TOKEN_HEADER
from aidungeon_client.errors import UnexpectedError
from aidungeon_client.models import NarrativeEvent, RecommendedStartCatalog, StartOptions


class AIDungeonClient:
    """
    Client handle bound to one user's access token.

    The handle holds at most one current story. Starting a story replaces
    it; replies go to it. The current story is guarded by a lock, so the
    handle can be shared between threads, but replies from different
    threads are not ordered relative to each other.

    Attributes:
        http_client: The underlying ``httpx.Client``.
    """

    def __init__(self, http_client: httpx.Client) -> None:
        self.http_client = http_client
        self._lock = threading.Lock()
        self._story: StorySession | None = None

    def __repr__(self) -> str:
        return f"AIDungeonClient(session_id={self.session_id})"

    # -------------------------------------------------------------------------
    # Context Manager Protocol
    # -------------------------------------------------------------------------

    def __enter__(self) -> AIDungeonClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def access_token(self) -> str | None:
        """Token sent with every request, or None if unauthenticated."""
        return self.http_client.headers.get(ACCESS_TOKEN_HEADER)

    @property
    def current_session(self) -> StorySession | None:
        with self._lock:
            return self._story

    @property
    def session_id(self) -> int | None:
        """Identifier of the current story, or None before the first start."""
        story = self.current_session
        return story.session_id if story is not None else None

    # -------------------------------------------------------------------------
    # Story Methods
    # -------------------------------------------------------------------------

    def start_session(self, options: StartOptions) -> StorySession:
        """
        Start a new story and make it the current one.

        The current story is only replaced once the server has accepted
        the new one; on failure the handle keeps its previous state.
        """
        story = session.start_session(self.http_client, options)
        with self._lock:
            self._story = story
        return story

    def start_story(
        self,
        custom_prompt: str | None,
        story_mode: str,
        name: str | None = None,
        character_type: str | None = None,
    ) -> list[NarrativeEvent]:
        """
        Start a new story and return its opening transcript.

        For ``story_mode="custom"`` only ``custom_prompt`` may be set;
        for any other mode ``name`` and ``character_type`` are required
        and ``custom_prompt`` must be omitted.

        Raises:
            pydantic.ValidationError: If the arguments break that rule.
            UnexpectedError: If the server answers with a non-200 status.
            DecodeError: If the answer cannot be decoded.
            TransportError: If the request could not be sent.
        """
        options = StartOptions(
            story_mode=story_mode,
            custom_prompt=custom_prompt,
            name=name,
            character_type=character_type,
        )
        return self.start_session(options).initial_transcript

    def send_reply(self, text: str) -> list[NarrativeEvent]:
        """
        Send player text to the current story.

        Raises:
            UnexpectedError: If no story was started on this handle (no
                request is made), or the server answers with a non-200
                status.
            DecodeError: If the answer cannot be decoded.
            TransportError: If the request could not be sent.
        """
        story = self.current_session
        if story is None:
            raise UnexpectedError("There is no running story, but tried to send reply.")
        return story.send_reply(text)

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def get_recommended_story(self) -> RecommendedStartCatalog:
        """Return the server's premade story configurations."""
        return catalog.get_recommended_story(self.http_client)
