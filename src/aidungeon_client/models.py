"""
Pydantic models for AI Dungeon API requests and responses.

Models are organized into two categories:
1. Request models: data sent FROM the client TO the server
2. Response models: data sent FROM the server TO the client

Field names follow the server's camelCase wire format through aliases,
while Python code uses snake_case attributes. Request models are always
serialized with ``to_payload()`` so absent optional fields are omitted
from the JSON body rather than sent as ``null``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

# Story mode value that selects a fully user-authored opening prompt.
CUSTOM_STORY_MODE = "custom"


class _RequestModel(BaseModel):
    """Base for request bodies: camelCase on the wire, ``None`` omitted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready request body."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class Credentials(_RequestModel):
    """
    Sparse credential set sent to the user endpoints.

    Which fields are populated depends on the step:
        - registration existence check: ``email`` only
        - registration completion: ``username`` and ``password``
        - login: ``email`` and ``password``
    """

    email: str | None = None
    username: str | None = None
    password: str | None = None


class StartOptions(_RequestModel):
    """
    Options for starting a new story session.

    A custom story carries only a prompt; a premade story carries the
    character name and type instead. Mixing the two is rejected when the
    model is built, so prefer the :meth:`custom` and :meth:`premade`
    constructors.

    Attributes:
        story_mode: Server-defined story category, or ``"custom"``.
        custom_prompt: Opening prompt for custom stories.
        name: Character name for premade stories.
        character_type: Character class for premade stories.
    """

    story_mode: str = Field(alias="storyMode", min_length=1)
    custom_prompt: str | None = Field(default=None, alias="customPrompt")
    name: str | None = None
    character_type: str | None = Field(default=None, alias="characterType")

    @model_validator(mode="after")
    def _check_mode_fields(self) -> StartOptions:
        if self.is_custom:
            if self.name is not None or self.character_type is not None:
                raise ValueError("custom stories must not set name or characterType")
        else:
            if self.custom_prompt is not None:
                raise ValueError("customPrompt is only allowed for custom stories")
            if self.name is None or self.character_type is None:
                raise ValueError(
                    f"story mode {self.story_mode!r} requires both name and characterType"
                )
        return self

    @property
    def is_custom(self) -> bool:
        return self.story_mode == CUSTOM_STORY_MODE

    @classmethod
    def custom(cls, prompt: str | None = None) -> StartOptions:
        """Build options for a story opened with a user-written prompt."""
        return cls(story_mode=CUSTOM_STORY_MODE, custom_prompt=prompt)

    @classmethod
    def premade(cls, story_mode: str, name: str, character_type: str) -> StartOptions:
        """Build options for one of the server's premade story modes."""
        return cls(story_mode=story_mode, name=name, character_type=character_type)


class ReplyInput(_RequestModel):
    """Player text sent to advance a running session."""

    text: str


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class UserRecord(BaseModel):
    """
    Account information returned by the user endpoints.

    Only ``access_token`` is validated. The remaining fields are opaque
    server data kept as-is for callers that want them; unknown fields are
    preserved too.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    access_token: str = Field(alias="accessToken")
    id: Any = None
    username: Any = None
    password: Any = None


class NarrativeEvent(BaseModel):
    """
    One entry of a story transcript.

    Attributes:
        kind: ``"input"`` for player text, ``"output"`` for generated text.
        value: The text itself.
        conclusion: ``"win"`` or ``"lose"`` on the event that ends a story.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["input", "output"] = Field(validation_alias=AliasChoices("kind", "type"))
    value: str
    conclusion: Literal["win", "lose"] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.conclusion is not None


class SessionStartResult(BaseModel):
    """Response to a session-creation request."""

    id: int = Field(gt=0)
    story: list[NarrativeEvent]


# Opaque server catalog of premade story starts. Passed through untouched.
RecommendedStartCatalog = dict[str, Any]


# ============================================================================
# DECODERS
# ============================================================================

USER_RECORD = TypeAdapter(UserRecord)
SESSION_START = TypeAdapter(SessionStartResult)
TRANSCRIPT: TypeAdapter[list[NarrativeEvent]] = TypeAdapter(list[NarrativeEvent])
CATALOG: TypeAdapter[RecommendedStartCatalog] = TypeAdapter(RecommendedStartCatalog)
