import logging

import httpx
import pytest

from unificlient.core.exceptions import (
    UnifiHTTPError,
    UnifiRemoteError,
    _raise_for_status_httpx,
)

logger = logging.getLogger(__name__)


def _response(status_code: int, **kwargs) -> httpx.Response:
    request = httpx.Request(
        "GET",
        "https://api.unifilabs.com/libraries",
        headers={"Authorization": "secret-key"},
    )
    return httpx.Response(status_code, request=request, **kwargs)


def test_success_does_not_raise() -> None:
    _raise_for_status_httpx(_response(200, json=[]), logger=logger)


def test_client_error_uses_json_message() -> None:
    # GIVEN a 404 with a JSON message
    response = _response(404, json={"Message": "Batch not found"})

    # WHEN the status is checked
    # THEN the error carries the message, the status and the body
    with pytest.raises(UnifiHTTPError) as ex:
        _raise_for_status_httpx(response, logger=logger)
    assert str(ex.value) == "404 Client Error: Batch not found"
    assert ex.value.status_code == 404
    assert ex.value.body == response.text
    assert isinstance(ex.value, UnifiRemoteError)


def test_server_error_uses_text() -> None:
    # GIVEN a 502 with a plain text body
    response = _response(502, text="Bad gateway")

    # WHEN the status is checked
    # THEN the text is used as the message
    with pytest.raises(UnifiHTTPError) as ex:
        _raise_for_status_httpx(response, logger=logger)
    assert str(ex.value) == "502 Server Error: Bad gateway"


def test_verbose_redacts_authorization() -> None:
    # GIVEN a failing request that carried an API key
    response = _response(400, text="Bad request")

    # WHEN the status is checked verbosely
    with pytest.raises(UnifiHTTPError) as ex:
        _raise_for_status_httpx(response, logger=logger, verbose=True)

    # THEN the request is described without the key
    assert "/libraries" in str(ex.value)
    assert "secret-key" not in str(ex.value)
    assert "<redacted>" in str(ex.value)
