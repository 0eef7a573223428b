"""
Story session lifecycle.

A story moves through two states::

    Idle --start--> Active(id) --reply--> Active(id)

``start_session`` is the only transition out of Idle and returns a
:class:`StorySession`, which is the Active state. Replies can only be
sent through a ``StorySession``, so a reply without a started story
cannot be expressed with these types. There is no transition back to
Idle; start a new session instead.
"""

from __future__ import annotations

import logging

import httpx

from aidungeon_client.api.transport import (
    SESSIONS_PATH,
    decode,
    send,
    session_inputs_path,
    unexpected_status,
)
from aidungeon_client.models import (
    SESSION_START,
    TRANSCRIPT,
    NarrativeEvent,
    ReplyInput,
    StartOptions,
)

logger = logging.getLogger(__name__)


class StorySession:
    """
    A running story on the server.

    Attributes:
        session_id: Server-issued identifier. Never changes.
        initial_transcript: Events returned when the story was started.
    """

    def __init__(
        self,
        http: httpx.Client,
        session_id: int,
        initial_transcript: list[NarrativeEvent],
    ) -> None:
        self._http = http
        self.session_id = session_id
        self.initial_transcript = initial_transcript

    def __repr__(self) -> str:
        return f"StorySession(session_id={self.session_id})"

    def send_reply(self, text: str) -> list[NarrativeEvent]:
        """
        Send player text and return the events the server answers with.

        The returned sequence is passed through unchanged; whether it is
        the whole transcript so far or only the latest turn is up to the
        server.

        Raises:
            UnexpectedError: If the server answers with a non-200 status.
            DecodeError: If the answer is not a list of narrative events.
            TransportError: If the request could not be sent.
        """
        action = "sending reply"
        response = send(
            self._http,
            "POST",
            session_inputs_path(self.session_id),
            action=action,
            payload=ReplyInput(text=text).to_payload(),
        )

        if response.status_code != httpx.codes.OK:
            raise unexpected_status(response, action=action)

        return decode(TRANSCRIPT, response, action=action)


def start_session(http: httpx.Client, options: StartOptions) -> StorySession:
    """
    Create a new story session.

    Args:
        http: Authenticated client.
        options: Validated start options.

    Raises:
        UnexpectedError: If the server answers with a non-200 status.
        DecodeError: If the answer is not a session-start object.
        TransportError: If the request could not be sent.
    """
    action = "starting story"
    response = send(http, "POST", SESSIONS_PATH, action=action, payload=options.to_payload())

    if response.status_code != httpx.codes.OK:
        raise unexpected_status(response, action=action)

    result = decode(SESSION_START, response, action=action)
    logger.info("Started story session %d (mode=%s)", result.id, options.story_mode)
    return StorySession(http, result.id, result.story)
