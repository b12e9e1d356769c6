"""Contains all of the exceptions that can be thrown within this Python client as well
as handling error cases for HTTP requests."""

import logging
from typing import Optional, Union

import httpx

from unificlient.core import utils


class UnifiError(Exception):
    """Generic exception thrown by the client."""


class UnifiAuthenticationError(UnifiError):
    """Authentication errors."""


class UnifiNoCredentialsError(UnifiAuthenticationError):
    """No credentials for authentication"""


class UnifiNotFoundError(UnifiError):
    """Error thrown when a requested resource is not found in UNIFI."""


class UnifiRemoteError(UnifiError):
    """Error thrown when the UNIFI service could not be reached or answered with
    something this client can not use.

    Attributes:
        response: The HTTPX response, when one was received.
        body: The raw response body, kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        response: Optional[httpx.Response] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.response = response
        self.body = body


class UnifiHTTPError(UnifiRemoteError):
    """Wraps non-2xx HTTP responses from the UNIFI service."""

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class UnifiMalformedResponseError(UnifiRemoteError):
    """The response body was not the JSON shape that was expected."""


class UnifiConnectionError(UnifiRemoteError):
    """The request never got a response: connection refused, reset, DNS, ..."""


class UnifiTimeoutError(UnifiConnectionError):
    """Timed out waiting for response from UNIFI."""


class UnifiAmbiguousResultWarning(UserWarning):
    """More than one piece of content matched a query that expects exactly one."""


def _get_message(response: httpx.Response, logger: logging.Logger) -> Union[str, None]:
    """Extracts the message body or a response object by checking for a json response
    and returning the message otherwise getting body.
    """
    if utils.is_json(response.headers.get("content-type", None)):
        try:
            json = response.json()
        except ValueError:
            logger.debug("Error response declared JSON but could not be parsed")
            return response.text
        if isinstance(json, dict):
            return json.get("Message", json.get("message", response.text))
        return response.text
    else:
        # if the response is not JSON, return the text content
        return response.text


CLIENT_ERROR = "Client Error:"
SERVER_ERROR = "Server Error:"
RESPONSE_PREFIX = ">>>>>> Response <<<<<<"
REQUEST_PREFIX = ">>>>>> Request <<<<<<"
HEADERS_PREFIX = ">>> Headers: "
BODY_PREFIX = ">>> Body: "
UNABLE_TO_APPEND_REQUEST = "Could not append all request info"
UNABLE_TO_APPEND_RESPONSE = "Could not append all response info"


def _raise_for_status_httpx(
    response: httpx.Response,
    logger: logging.Logger,
    verbose: bool = False,
) -> None:
    """
    Replacement for httpx.Response.raise_for_status().
    Catches and wraps any UNIFI HTTP errors with appropriate text.

    Arguments:
        response: The response object from the HTTPX request.
        logger: The logger object to log any exceptions.
        verbose: If True, the request and response information will be appended to the
            error message.

    Raises:
        UnifiHTTPError: For any 4xx or 5xx status code.
    """

    message = None

    if 400 <= response.status_code < 500:
        message_body = _get_message(response, logger)
        message = f"{response.status_code} {CLIENT_ERROR} {message_body}"

    elif 500 <= response.status_code < 600:
        message_body = _get_message(response, logger)
        message = f"{response.status_code} {SERVER_ERROR} {message_body}"

    if message is not None:
        if verbose:
            try:
                # Append the request sent
                message += f"\n\n{REQUEST_PREFIX}\n{response.request.url} {response.request.method}"
                message += f"\n{HEADERS_PREFIX}{_redact_headers(response.request.headers)}"
                message += f"\n{BODY_PREFIX}{response.request.content}"
            except Exception:  # noqa
                logger.exception(UNABLE_TO_APPEND_REQUEST)
                message += f"\n{UNABLE_TO_APPEND_REQUEST}"

            try:
                # Append the response received
                message += f"\n\n{RESPONSE_PREFIX}\n{str(response)}"
                message += f"\n{HEADERS_PREFIX}{response.headers}"
                message += f"\n{BODY_PREFIX}{message_body}\n\n"
            except Exception:  # noqa
                logger.exception(UNABLE_TO_APPEND_RESPONSE)
                message += f"\n{UNABLE_TO_APPEND_RESPONSE}"

        raise UnifiHTTPError(message, response=response, body=response.text)


def _redact_headers(headers: httpx.Headers) -> dict:
    """The Authorization header carries the token or API key."""
    return {
        key: ("<redacted>" if key.lower() == "authorization" else value)
        for key, value in headers.items()
    }
