"""
Account registration and login.

Both flows start unauthenticated, obtain an access token from ``/users``
and rebind the transport with it. Registration then claims a username
with a second, authenticated request; login stops after the token.

Registration:
    1. POST /users {email}
         406 -> EmailAlreadyExistsError
         200 -> user record with access token
    2. bind(access_token)
    3. PATCH /users/@me {username, password}
         400 -> UsernameAlreadyExistsError
         200 -> done

Login:
    1. POST /users {email, password}
         200 -> user record with access token
    2. bind(access_token)

Any other status aborts the flow with UnexpectedError. Nothing is rolled
back; the server is the only source of truth.
"""

from __future__ import annotations

import logging

import httpx

from aidungeon_client.api.client import AIDungeonClient
from aidungeon_client.api.transport import (
    CURRENT_USER_PATH,
    USERS_PATH,
    bind,
    decode,
    send,
    unexpected_status,
)
from aidungeon_client.config import Config
from aidungeon_client.errors import EmailAlreadyExistsError, UsernameAlreadyExistsError
from aidungeon_client.models import USER_RECORD, Credentials, UserRecord

logger = logging.getLogger(__name__)


def _request_user(credentials: Credentials, *, action: str, config: Config) -> httpx.Response:
    with bind(config=config) as anonymous:
        return send(
            anonymous,
            "POST",
            USERS_PATH,
            action=action,
            payload=credentials.to_payload(),
        )


def register(
    email: str,
    username: str,
    password: str,
    *,
    config: Config | None = None,
) -> AIDungeonClient:
    """
    Create a new account and return a client authenticated as it.

    Args:
        email: Email address for the new account.
        username: Desired username.
        password: Plain text password.
        config: Connection settings. Defaults to ``Config.from_env()``.

    Returns:
        AIDungeonClient: Authenticated handle with no story running.

    Raises:
        EmailAlreadyExistsError: The email is already registered (406).
        UsernameAlreadyExistsError: The username is taken (400).
        UnexpectedError: Any other status, or an unusable access token.
        DecodeError: The user record could not be decoded.
        TransportError: A request could not be sent.
    """
    config = config or Config.from_env()

    action = "checking whether user account exists"
    response = _request_user(Credentials(email=email), action=action, config=config)

    if response.status_code == httpx.codes.NOT_ACCEPTABLE:
        logger.info("Registration refused: email already registered")
        raise EmailAlreadyExistsError()
    if response.status_code != httpx.codes.OK:
        raise unexpected_status(response, action=action)

    user: UserRecord = decode(USER_RECORD, response, action=action)

    http = bind(user.access_token, config=config)
    try:
        action = "trying to register user"
        response = send(
            http,
            "PATCH",
            CURRENT_USER_PATH,
            action=action,
            payload=Credentials(username=username, password=password).to_payload(),
        )

        if response.status_code == httpx.codes.BAD_REQUEST:
            logger.info("Registration refused: username %r already taken", username)
            raise UsernameAlreadyExistsError()
        if response.status_code != httpx.codes.OK:
            raise unexpected_status(response, action=action)
    except Exception:
        http.close()
        raise

    logger.info("Registered new user %r", username)
    return AIDungeonClient(http)


def login(email: str, password: str, *, config: Config | None = None) -> AIDungeonClient:
    """
    Log in to an existing account.

    Args:
        email: Account email.
        password: Plain text password.
        config: Connection settings. Defaults to ``Config.from_env()``.

    Returns:
        AIDungeonClient: Authenticated handle with no story running.

    Raises:
        UnexpectedError: Any non-200 status, or an unusable access token.
        DecodeError: The user record could not be decoded.
        TransportError: The request could not be sent.
    """
    config = config or Config.from_env()

    action = "trying to log in"
    response = _request_user(
        Credentials(email=email, password=password), action=action, config=config
    )

    if response.status_code != httpx.codes.OK:
        raise unexpected_status(response, action=action)

    user: UserRecord = decode(USER_RECORD, response, action=action)

    logger.info("Logged in as user %s", user.username or user.id or "<unknown>")
    return AIDungeonClient(bind(user.access_token, config=config))
