"""
Tests for transport binding and the request helpers.

This module tests:
- Header configuration produced by bind()
- Access token header validation
- send() wrapping of transport errors
- decode() wrapping of parse errors
- Structured session paths
"""

import httpx
import pytest
import respx
from httpx import Response
from pydantic import TypeAdapter

from aidungeon_client.api.transport import (
    ACCESS_TOKEN_HEADER,
    bind,
    decode,
    send,
    session_inputs_path,
    unexpected_status,
)
from aidungeon_client.config import Config
from aidungeon_client.errors import DecodeError, TransportError, UnexpectedError
from tests.constants import BASE_URL


@pytest.mark.unit
class TestBind:
    """Tests for bind()."""

    def test_unauthenticated_client(self, config: Config):
        """Test the identification header is set and no token header."""
        with bind(config=config) as http:
            assert http.headers["User-Agent"] == config.user_agent
            assert ACCESS_TOKEN_HEADER not in http.headers
            assert str(http.base_url).rstrip("/") == BASE_URL
            assert http.timeout.read == config.timeout

    def test_authenticated_client(self, config: Config):
        """Test the token header is attached when a token is given."""
        with bind("tok123", config=config) as http:
            assert http.headers[ACCESS_TOKEN_HEADER] == "tok123"
            assert http.headers["User-Agent"] == config.user_agent

    def test_custom_user_agent(self):
        """Test the configured identification header is used."""
        config = Config(base_url=BASE_URL, user_agent="my-frontend/2.0")
        with bind(config=config) as http:
            assert http.headers["User-Agent"] == "my-frontend/2.0"

    def test_default_config_from_env(self, monkeypatch):
        """Test bind() falls back to the environment configuration."""
        monkeypatch.setenv("AIDUNGEON_API_URL", "http://env-server:9000/")
        with bind() as http:
            assert str(http.base_url).startswith("http://env-server:9000")

    @pytest.mark.parametrize(
        "token",
        ["line\nbreak", "carriage\rreturn", "nul\x00", "del\x7f", "café"],
    )
    def test_invalid_token_rejected(self, config: Config, token: str):
        """Test tokens that cannot be header values raise UnexpectedError."""
        with pytest.raises(UnexpectedError, match="Bad access token"):
            bind(token, config=config)

    @pytest.mark.parametrize("token", ["", "a b", "tab\tok", "eyJhbGciOi.J9~_-+/="])
    def test_valid_tokens_accepted(self, config: Config, token: str):
        """Test visible ASCII, space and tab are accepted."""
        with bind(token, config=config) as http:
            assert http.headers[ACCESS_TOKEN_HEADER] == token


@pytest.mark.api
class TestSend:
    """Tests for send()."""

    @respx.mock
    def test_send_returns_response(self, config: Config):
        """Test any status is returned untouched for the caller to map."""
        respx.post(f"{BASE_URL}/things").mock(return_value=Response(418, json={}))

        with bind(config=config) as http:
            response = send(http, "POST", "/things", action="testing", payload={"a": 1})

        assert response.status_code == 418

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            httpx.RemoteProtocolError("garbage"),
        ],
    )
    @respx.mock
    def test_send_wraps_transport_errors(self, config: Config, error: Exception):
        """Test transport exceptions become TransportError with the cause kept."""
        respx.get(f"{BASE_URL}/things").mock(side_effect=error)

        with bind(config=config) as http:
            with pytest.raises(TransportError, match="while testing") as exc_info:
                send(http, "GET", "/things", action="testing")

        assert isinstance(exc_info.value.cause, type(error))
        assert exc_info.value.__cause__ is exc_info.value.cause


@pytest.mark.unit
class TestDecode:
    """Tests for decode() and unexpected_status()."""

    def test_decode_valid(self):
        """Test a matching body is returned as the adapter type."""
        response = Response(200, json=[1, 2, 3])
        assert decode(TypeAdapter(list[int]), response, action="testing") == [1, 2, 3]

    def test_decode_malformed_json(self):
        """Test invalid JSON raises DecodeError."""
        response = Response(200, content=b"{not json")
        with pytest.raises(DecodeError, match="while testing") as exc_info:
            decode(TypeAdapter(list[int]), response, action="testing")
        assert exc_info.value.cause is exc_info.value.__cause__

    def test_decode_schema_mismatch(self):
        """Test well-formed JSON of the wrong shape raises DecodeError."""
        response = Response(200, json={"a": 1})
        with pytest.raises(DecodeError):
            decode(TypeAdapter(list[int]), response, action="testing")

    def test_unexpected_status_message(self):
        """Test the numeric status is included in the message."""
        error = unexpected_status(Response(503), action="testing")
        assert isinstance(error, UnexpectedError)
        assert error.status_code == 503
        assert str(error) == "Unexpected status code while testing: 503"


@pytest.mark.unit
def test_session_inputs_path():
    """Test the reply path is built from the session id segment."""
    assert session_inputs_path(42) == "/sessions/42/inputs"
    assert session_inputs_path(9007199254740993) == "/sessions/9007199254740993/inputs"
