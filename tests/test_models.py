"""
Tests for the wire models.

Focus is on the StartOptions mode rules and what ends up in request
payloads, plus the tolerant parts of response decoding.
"""

import pytest
from pydantic import ValidationError

from aidungeon_client.models import (
    SESSION_START,
    TRANSCRIPT,
    USER_RECORD,
    Credentials,
    NarrativeEvent,
    ReplyInput,
    StartOptions,
)

# ============================================================================
# START OPTIONS
# ============================================================================


@pytest.mark.unit
class TestStartOptions:
    """Tests for StartOptions construction and encoding."""

    def test_custom_payload_omits_character_fields(self):
        """Test custom mode sends only storyMode and customPrompt."""
        options = StartOptions.custom("You wake up...")

        assert options.to_payload() == {"storyMode": "custom", "customPrompt": "You wake up..."}

    def test_custom_without_prompt(self):
        """Test custom mode allows leaving the prompt to the server."""
        assert StartOptions.custom().to_payload() == {"storyMode": "custom"}

    def test_premade_payload_omits_prompt(self):
        """Test premade mode sends name and characterType but no prompt."""
        options = StartOptions.premade("fantasy", "Ada", "knight")

        assert options.to_payload() == {
            "storyMode": "fantasy",
            "name": "Ada",
            "characterType": "knight",
        }

    def test_alias_construction(self):
        """Test the camelCase wire names are accepted as input too."""
        options = StartOptions(storyMode="fantasy", name="Ada", characterType="knight")
        assert options.character_type == "knight"
        assert options.is_custom is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"story_mode": "custom", "name": "Ada"},
            {"story_mode": "custom", "character_type": "knight"},
            {"story_mode": "custom", "custom_prompt": "x", "name": "Ada", "character_type": "k"},
        ],
    )
    def test_custom_rejects_character_fields(self, kwargs):
        """Test custom mode rejects name and characterType."""
        with pytest.raises(ValidationError, match="custom stories"):
            StartOptions(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"story_mode": "fantasy", "custom_prompt": "x", "name": "Ada", "character_type": "k"},
            {"story_mode": "fantasy", "name": "Ada"},
            {"story_mode": "fantasy", "character_type": "knight"},
            {"story_mode": "fantasy"},
        ],
    )
    def test_premade_requires_character_fields(self, kwargs):
        """Test premade modes need both character fields and no prompt."""
        with pytest.raises(ValidationError):
            StartOptions(**kwargs)

    def test_empty_story_mode_rejected(self):
        """Test the story mode must not be empty."""
        with pytest.raises(ValidationError):
            StartOptions(story_mode="", name="Ada", character_type="knight")

    def test_options_are_immutable(self):
        """Test options cannot be changed into an invalid combination later."""
        options = StartOptions.custom("x")
        with pytest.raises(ValidationError):
            options.name = "Ada"


# ============================================================================
# OTHER REQUEST MODELS
# ============================================================================


@pytest.mark.unit
def test_credentials_omit_absent_fields():
    """Test each auth step only sends the fields it sets."""
    assert Credentials(email="a@b.com").to_payload() == {"email": "a@b.com"}
    assert Credentials(username="ada", password="pw").to_payload() == {
        "username": "ada",
        "password": "pw",
    }
    assert Credentials().to_payload() == {}


@pytest.mark.unit
def test_reply_input_payload():
    """Test the reply body."""
    assert ReplyInput(text="open the door").to_payload() == {"text": "open the door"}


# ============================================================================
# RESPONSE MODELS
# ============================================================================


@pytest.mark.unit
class TestResponseModels:
    """Tests for decoding server responses."""

    def test_user_record_keeps_extra_fields(self):
        """Test unknown user fields are preserved as pass-through data."""
        user = USER_RECORD.validate_json(
            b'{"accessToken": "tok", "id": 1, "gameSafeMode": true}'
        )
        assert user.access_token == "tok"
        assert user.id == 1
        assert user.model_extra == {"gameSafeMode": True}

    def test_user_record_opaque_fields_any_type(self):
        """Test id, username and password are passed through without typing."""
        record = USER_RECORD.validate_json(
            b'{"accessToken": "tok123", "id": "5e9f0c1a", "username": null, "password": 3}'
        )

        assert record.access_token == "tok123"
        assert record.id == "5e9f0c1a"
        assert record.username is None
        assert record.password == 3

    def test_user_record_requires_token(self):
        """Test a record without accessToken is rejected."""
        with pytest.raises(ValidationError):
            USER_RECORD.validate_json(b'{"id": 1}')

    def test_event_accepts_type_field(self):
        """Test events named with ``type`` decode the same as ``kind``."""
        events = TRANSCRIPT.validate_json(
            b'[{"type": "input", "value": "hi"}, {"kind": "output", "value": "hello"}]'
        )
        assert [event.kind for event in events] == ["input", "output"]

    def test_event_conclusion(self):
        """Test only win/lose are valid conclusions."""
        event = NarrativeEvent(kind="output", value="The end.", conclusion="lose")
        assert event.is_terminal is True

        with pytest.raises(ValidationError):
            NarrativeEvent(kind="output", value="The end.", conclusion="draw")

    def test_event_without_conclusion_is_not_terminal(self):
        """Test ordinary events are not terminal."""
        assert NarrativeEvent(kind="output", value="...").is_terminal is False

    def test_session_start_requires_positive_id(self):
        """Test session ids must be positive integers."""
        result = SESSION_START.validate_json(b'{"id": 42, "story": []}')
        assert result.id == 42

        with pytest.raises(ValidationError):
            SESSION_START.validate_json(b'{"id": -1, "story": []}')
