"""Fetch the server's recommended story starts."""

from __future__ import annotations

import httpx

from aidungeon_client.api.transport import START_CONFIG_PATH, decode, send, unexpected_status
from aidungeon_client.models import CATALOG, RecommendedStartCatalog


def get_recommended_story(http: httpx.Client) -> RecommendedStartCatalog:
    """
    Return the catalog of premade story configurations.

    Needs only an authenticated client; no story session is involved.

    Raises:
        UnexpectedError: If the server answers with a non-200 status.
        DecodeError: If the answer is not a JSON object.
        TransportError: If the request could not be sent.
    """
    action = "fetching premade stories"
    response = send(http, "GET", START_CONFIG_PATH, action=action)

    if response.status_code != httpx.codes.OK:
        raise unexpected_status(response, action=action)

    return decode(CATALOG, response, action=action)
