from typing import Any, Dict, List

from unificlient.core.exceptions import UnifiMalformedResponseError
from unificlient.core.utils import raw_body


def expect_json_list(response: Any, uri: str) -> List[Dict[str, Any]]:
    """
    Ensure a decoded response body is a JSON array of objects.

    Arguments:
        response: The decoded body returned by one of the `rest_*_async` methods.
        uri: The URI that was called, used in the error message.

    Returns:
        The response, unchanged.

    Raises:
        UnifiMalformedResponseError: If the body is anything other than an array, or
            holds anything other than objects. An explicitly empty array is
            returned as is.
    """
    if not isinstance(response, list):
        raise UnifiMalformedResponseError(
            f"Expected a JSON array from {uri} but got: {raw_body(response)}",
            body=raw_body(response),
        )
    for item in response:
        if not isinstance(item, dict):
            raise UnifiMalformedResponseError(
                f"Expected an array of JSON objects from {uri} but got: "
                f"{raw_body(response)}",
                body=raw_body(response),
            )
    return response


def expect_json_object(response: Any, uri: str) -> Dict[str, Any]:
    """
    Ensure a decoded response body is a JSON object.

    Arguments:
        response: The decoded body returned by one of the `rest_*_async` methods.
        uri: The URI that was called, used in the error message.

    Returns:
        The response, unchanged.

    Raises:
        UnifiMalformedResponseError: If the body is anything other than an object.
    """
    if not isinstance(response, dict):
        raise UnifiMalformedResponseError(
            f"Expected a JSON object from {uri} but got: {raw_body(response)}",
            body=raw_body(response),
        )
    return response
