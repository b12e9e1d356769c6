"""This module is responsible for exposing the `/batch` services of the UNIFI API.

A batch is a remote mutation job. Posting one returns its `BatchId` straight away;
the work itself happens later and its progress is read from `/batch/{batchId}`.
"""

import json
from typing import TYPE_CHECKING, Any, Dict, Optional

from unificlient.api.api_client import expect_json_object
from unificlient.core.exceptions import UnifiRemoteError
from unificlient.core.utils import get_value

if TYPE_CHECKING:
    from unificlient import Unifi

SET_TYPE_VALUES_OPERATION = "SetTypeValues"


def build_set_type_values_request(
    repository_file_id: str,
    type_name: str,
    parameter_name: str,
    parameter_value: str,
    data_type: str,
    revit_year: int,
) -> Dict[str, Any]:
    """
    Build the body of a batch that sets one type parameter on one family type.

    Arguments:
        repository_file_id: The RepositoryFileId of the content to modify.
        type_name: The Revit family type name.
        parameter_name: The name of the type parameter to modify.
        parameter_value: The new value of the type parameter.
        data_type: The data type of the type parameter, e.g. `TEXT`.
        revit_year: The Revit year of the family to modify.

    Returns:
        The request as a dictionary, ready for `json.dumps`.
    """
    return {
        "Requests": [
            {
                "ObjectId": str(repository_file_id),
                "Operation": SET_TYPE_VALUES_OPERATION,
                "ExistingName": parameter_name,
                "Type": data_type,
                "RevitYear": int(revit_year),
                "Values": [{"TypeName": type_name, "Value": parameter_value}],
            }
        ]
    }


async def post_batch(
    request_body: Dict[str, Any],
    *,
    unifi_client: Optional["Unifi"] = None,
) -> Dict[str, Any]:
    """
    Submit a batch of operations.

    Arguments:
        request_body: The batch, see `build_set_type_values_request`.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        Dictionary representing the created batch, including its `BatchId`.

    Raises:
        UnifiRemoteError: If the batch was rejected.
    """
    from unificlient import Unifi

    client = Unifi.get_client(unifi_client=unifi_client)

    response = await client.rest_post_async(uri="/batch", body=json.dumps(request_body))
    batch = expect_json_object(response, uri="/batch")
    if not get_value(batch, "BatchId"):
        raise UnifiRemoteError(
            f"The batch was rejected: {json.dumps(batch)}", body=json.dumps(batch)
        )
    return batch


async def set_type_parameter_value(
    repository_file_id: str,
    type_name: str,
    parameter_name: str,
    parameter_value: str,
    data_type: str,
    revit_year: int,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> Dict[str, Any]:
    """
    Set the value of a Revit family type parameter. Each call submits its own batch;
    changing two parameters takes two calls and the batches are independent.

    Arguments:
        repository_file_id: The RepositoryFileId of the content to modify.
        type_name: The Revit family type name.
        parameter_name: The name of the type parameter to modify.
        parameter_value: The new value of the type parameter.
        data_type: The data type of the type parameter, e.g. `TEXT`.
        revit_year: The Revit year of the family to modify.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        Dictionary representing the created batch.
    """
    request_body = build_set_type_values_request(
        repository_file_id=repository_file_id,
        type_name=type_name,
        parameter_name=parameter_name,
        parameter_value=parameter_value,
        data_type=data_type,
        revit_year=revit_year,
    )
    return await post_batch(request_body, unifi_client=unifi_client)


async def get_batch_status(
    batch_id: str,
    *,
    unifi_client: Optional["Unifi"] = None,
) -> Dict[str, Any]:
    """
    Get the status of a batch from its ID.

    Arguments:
        batch_id: The ID of the batch.
        unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

    Returns:
        Dictionary representing the batch status counters.

    Raises:
        UnifiHTTPError: If the batch ID is unknown to the service.
        UnifiMalformedResponseError: If the body is not a JSON object.
    """
    from unificlient import Unifi

    client = Unifi.get_client(unifi_client=unifi_client)

    uri = f"/batch/{batch_id}"
    response = await client.rest_get_async(uri=uri)
    return expect_json_object(response, uri=uri)
