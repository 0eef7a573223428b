"""
Transport binding and request helpers.

``bind`` builds the ``httpx.Client`` every other module sends through. It
always carries the client identification header and, once the user has
authenticated, the ``x-access-token`` header. It performs no network
I/O itself.

The helpers below keep the status/decode/transport error mapping in one
place so the flows in ``auth``, ``session`` and ``catalog`` read as a
plain sequence of requests.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from aidungeon_client.config import Config
from aidungeon_client.errors import DecodeError, TransportError, UnexpectedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCESS_TOKEN_HEADER = "x-access-token"

# API paths, relative to Config.base_url
USERS_PATH = "/users"
CURRENT_USER_PATH = "/users/@me"
SESSIONS_PATH = "/sessions"
START_CONFIG_PATH = "/sessions/*/config"


def _invalid_header_reason(value: str) -> str | None:
    """Return why ``value`` cannot be sent as a header, or None if it can."""
    for index, char in enumerate(value):
        code = ord(char)
        if char == "\t":
            continue
        if code < 0x20 or code == 0x7F:
            return f"control character {code:#04x} at position {index}"
        if code > 0x7E:
            return f"non-ASCII character at position {index}"
    return None


def bind(access_token: str | None = None, *, config: Config | None = None) -> httpx.Client:
    """
    Build an HTTP client preconfigured for the API.

    Args:
        access_token: Token to attach as ``x-access-token``; omitted when None.
        config: Connection settings. Defaults to ``Config.from_env()``.

    Returns:
        An ``httpx.Client``; the caller owns it and must close it.

    Raises:
        UnexpectedError: If ``access_token`` is not a valid header value.
    """
    config = config or Config.from_env()
    headers = {"User-Agent": config.user_agent}

    if access_token is not None:
        reason = _invalid_header_reason(access_token)
        if reason is not None:
            raise UnexpectedError(f"Bad access token received from server: {reason}")
        headers[ACCESS_TOKEN_HEADER] = access_token

    return httpx.Client(
        base_url=config.base_url,
        headers=headers,
        timeout=config.timeout,
    )


def send(
    http: httpx.Client,
    method: str,
    path: str,
    *,
    action: str,
    payload: dict[str, Any] | None = None,
) -> httpx.Response:
    """
    Issue exactly one request.

    Args:
        http: Client from :func:`bind`.
        method: HTTP method.
        path: Path relative to the bound base URL.
        action: Short description used in log and error messages,
            e.g. ``"checking whether the account exists"``.
        payload: JSON body, if any.

    Raises:
        TransportError: If the request could not be completed.
    """
    logger.debug("%s %s (%s)", method, path, action)
    try:
        response = http.request(method, path, json=payload)
    except httpx.HTTPError as exc:
        logger.warning("Request failed while %s: %s", action, exc)
        raise TransportError(f"Request failed while {action}", cause=exc) from exc

    logger.debug("%s %s -> %d", method, path, response.status_code)
    return response


def decode(adapter: TypeAdapter[T], response: httpx.Response, *, action: str) -> T:
    """
    Parse ``response`` into the adapter's type.

    Raises:
        DecodeError: If the body is not JSON or does not match the schema.
    """
    try:
        return adapter.validate_json(response.content)
    except ValidationError as exc:
        logger.warning("Invalid response from server while %s", action)
        raise DecodeError(f"Invalid response from server while {action}", cause=exc) from exc


def unexpected_status(response: httpx.Response, *, action: str) -> UnexpectedError:
    """Build the catch-all error for a status the current step does not expect."""
    return UnexpectedError(
        f"Unexpected status code while {action}: {response.status_code}",
        status_code=response.status_code,
    )


def session_inputs_path(session_id: int) -> str:
    """Return the path that advances session ``session_id``."""
    segment = quote(str(session_id), safe="")
    return f"{SESSIONS_PATH}/{segment}/inputs"
