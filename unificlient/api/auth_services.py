"""This module is responsible for exposing the `/login` service of the UNIFI API."""

import json
from typing import TYPE_CHECKING, Optional

from unificlient.core.exceptions import (
    UnifiAuthenticationError,
    UnifiMalformedResponseError,
)

if TYPE_CHECKING:
    from unificlient import Unifi


async def post_login(
    username: str,
    password: str,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> str:
    """
    Retrieve an access token using basic authentication by passing a UNIFI username
    and password.

    Arguments:
        username: UNIFI username
        password: UNIFI password
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        The access token. Pass it to
        [UnifiBearerTokenCredentials][unificlient.core.credentials.cred_data.UnifiBearerTokenCredentials].

    Raises:
        UnifiAuthenticationError: If the response does not carry an `access_token`.
    """
    from unificlient import Unifi

    client = Unifi.get_client(unifi_client=unifi_client)

    request_body = {"username": username, "password": password}

    try:
        response = await client.rest_post_async(
            uri="/login", body=json.dumps(request_body), auth=None
        )
    except UnifiMalformedResponseError as ex:
        raise UnifiAuthenticationError(
            f"Login response was not valid JSON: {ex.body}"
        ) from ex

    token = response.get("access_token") if isinstance(response, dict) else None
    if not token or not isinstance(token, str):
        raise UnifiAuthenticationError(
            "Login response did not contain an access_token"
        )
    return token
