"""This module is responsible for exposing the `/libraries` service of the UNIFI API."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from unificlient.api.api_client import expect_json_list

if TYPE_CHECKING:
    from unificlient import Unifi


async def get_libraries(
    *,
    unifi_client: Optional["Unifi"] = None,
) -> List[Dict[str, Any]]:
    """
    Get a list of libraries within the UNIFI Content Management System that the
    authenticated user can access.

    Arguments:
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        List of dictionaries representing libraries, in the order the service
        returned them.

    Raises:
        UnifiHTTPError: If the service answers with a non-2xx status.
        UnifiMalformedResponseError: If the body is not a JSON array.
    """
    from unificlient import Unifi

    client = Unifi.get_client(unifi_client=unifi_client)

    response = await client.rest_get_async(uri="/libraries")
    return expect_json_list(response, uri="/libraries")
