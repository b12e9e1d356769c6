"""This module is responsible for exposing the `/search` service of the UNIFI API.

Every search asks for content `with-parameters` so the returned items carry the
Revit parameters the models derive Manufacturer, Model and family types from.
"""

import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from unificlient.api.api_client import expect_json_list

if TYPE_CHECKING:
    from unificlient import Unifi

WILDCARD_TERMS = "*"
RETURN_WITH_PARAMETERS = "with-parameters"
DEFAULT_PAGE_SIZE = 20


async def post_search(
    request_body: Dict[str, Any],
    *,
    unifi_client: Optional["Unifi"] = None,
) -> List[Dict[str, Any]]:
    """
    Search UNIFI content.

    Arguments:
        request_body: The search request, e.g.
            `{"terms": "*", "libraries": ["<id>"], "return": "with-parameters"}`
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        List of dictionaries representing content. An empty list is only returned
        when the service explicitly answers with one.

    Raises:
        UnifiHTTPError: If the service answers with a non-2xx status.
        UnifiMalformedResponseError: If the body is not a JSON array. The raw body
            is attached to the exception.
    """
    from unificlient import Unifi

    client = Unifi.get_client(unifi_client=unifi_client)

    response = await client.rest_post_async(
        uri="/search", body=json.dumps(request_body)
    )
    return expect_json_list(response, uri="/search")


async def search_library_content(
    library_id: str,
    size: int = DEFAULT_PAGE_SIZE,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> List[Dict[str, Any]]:
    """
    Retrieves a page of content from a specific library.

    Arguments:
        library_id: The library ID to search.
        size: How many items to return. Defaults to 20.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        List of dictionaries representing content.
    """
    request_body = {
        "terms": WILDCARD_TERMS,
        "libraries": [str(library_id)],
        "return": RETURN_WITH_PARAMETERS,
        "size": size,
    }
    return await post_search(request_body, unifi_client=unifi_client)


async def search_content_by_name(
    name: str,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> List[Dict[str, Any]]:
    """
    Free text search for content by its name.

    Arguments:
        name: The name of the content to search for.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        List of dictionaries representing every matching piece of content.
    """
    request_body = {"terms": name, "return": RETURN_WITH_PARAMETERS}
    return await post_search(request_body, unifi_client=unifi_client)


async def search_content_by_revision_id(
    revision_id: str,
    library_id: str,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> List[Dict[str, Any]]:
    """
    Search for content by one of its FileRevisionIds within a library.

    Arguments:
        revision_id: The FileRevisionId of the content.
        library_id: The ID of a library the content belongs to.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        List of dictionaries representing every matching piece of content.
    """
    request_body = {
        "terms": WILDCARD_TERMS,
        "parameters": [{"FileRevisionId": str(revision_id)}],
        "libraries": [str(library_id)],
        "return": RETURN_WITH_PARAMETERS,
    }
    return await post_search(request_body, unifi_client=unifi_client)
