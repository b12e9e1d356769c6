"""
The `Unifi` object encapsulates a connection to the UNIFI content management service
and is used for browsing libraries, searching content and submitting batches.
"""
import asyncio
import json
import logging
import os
import typing
import urllib.parse as urllib_urlparse
from typing import Any, Dict, Optional, Tuple, Union

import asyncio_atexit
import httpx
from opentelemetry import trace
from opentelemetry.trace import SpanKind

import unificlient
from unificlient.api import get_config_file, get_endpoint_config, get_http_config
from unificlient.core import exceptions
from unificlient.core.async_utils import wrap_async_to_sync
from unificlient.core.constants import config_file_constants
from unificlient.core.credentials import (
    UnifiCredentials,
    UnifiCredentialsProvider,
    UnifiCredentialsProviderChain,
    UserLoginArgs,
    get_default_credential_chain,
)
from unificlient.core.exceptions import (
    UnifiAuthenticationError,
    UnifiConnectionError,
    UnifiError,
    UnifiMalformedResponseError,
    UnifiNoCredentialsError,
    UnifiTimeoutError,
)
from unificlient.core.logging_setup import (
    DEBUG_LOGGER_NAME,
    DEFAULT_LOGGER_NAME,
    SILENT_LOGGER_NAME,
)

tracer = trace.get_tracer("unificlient")

PRODUCTION_ENDPOINT = "https://api.unifilabs.com"

CONFIG_FILE = os.path.join(os.path.expanduser("~"), ".unifiConfig")
DEBUG_DEFAULT = False
MAX_CONNECTIONS = 10


def login(*args, **kwargs) -> "Unifi":
    """
    Convenience method to create a Unifi object and login.

    See `unificlient.Unifi.login` for arguments and usage.

    Example: Getting started
        Logging in to UNIFI using an API key

            import unificlient
            unifi = unificlient.login(api_key="my-api-key")

        Using environment variables or `.unifiConfig`

            import unificlient
            unifi = unificlient.login()
    """

    unifi = Unifi()
    unifi.login(*args, **kwargs)
    return unifi


class Unifi(object):
    """
    Constructs a Python client object for the UNIFI content management service

    Attributes:
        endpoint:       Location of the UNIFI API
        timeout:        Seconds to wait for a response before raising
                        `UnifiTimeoutError`
        debug:          Print debugging messages if True
        configPath:     Path to config File with setting for UNIFI. Defaults to
                        ~/.unifiConfig
        silent:         Defaults to False.

    Example: Getting started
        Logging in to UNIFI using an API key

            import unificlient
            unifi = unificlient.login(api_key="my-api-key")

        Using a username and password, which are exchanged for an access token

            import unificlient
            unifi = unificlient.login(username="me@example.com", password="secret")

    """

    _unifi_client = None
    _allow_client_caching = True

    def __init__(
        self,
        endpoint: str = None,
        debug: bool = None,
        configPath: str = CONFIG_FILE,
        silent: bool = None,
        timeout: float = None,
        credential_provider: Union[
            UnifiCredentialsProvider, UnifiCredentialsProviderChain
        ] = None,
        requests_session_async_unifi: httpx.AsyncClient = None,
        asyncio_event_loop: asyncio.AbstractEventLoop = None,
        cache_client: bool = True,
    ) -> None:
        """
        Initialize Unifi object

        Arguments:
            endpoint:           Location of the UNIFI API.
            debug:              Print debugging messages if True.
            configPath:         Path to config File with setting for UNIFI.
            silent:             Suppresses message.
            timeout:            Seconds to wait for each request. Defaults to the
                                `[http] timeout` config setting, or 70.
            credential_provider: Where `login` looks up credentials. Either a single
                                provider or a chain. Defaults to
                                `get_default_credential_chain()`.
            requests_session_async_unifi: The HTTPX Async client for interacting with
                UNIFI services.
            asyncio_event_loop: The event loop that is going to be used while executing
                this code. This is optional and only used when you are manually
                specifying an async HTTPX client.
            cache_client: Whether to cache the Unifi client object in the Unifi module.
                Defaults to True. When set to True anywhere a `Unifi` object is
                optional you do not need to pass an instance of `Unifi` to that
                function, method, or class.

        Raises:
            ValueError: Warn for non-boolean debug value.
        """
        # `requests_session_async_unifi` is stored in a dict based on the current
        # running event loop. httpx connection pools can not be shared across
        # event loops.
        if requests_session_async_unifi and asyncio_event_loop:
            self._requests_session_async_unifi = {
                asyncio_event_loop: requests_session_async_unifi
            }
        else:
            self._requests_session_async_unifi = {}
        self._injected_session_async_unifi = (
            requests_session_async_unifi if not asyncio_event_loop else None
        )

        config_debug = None
        # Check for a config file
        self.configPath = configPath
        if os.path.isfile(configPath):
            config = get_config_file(configPath)
            if config.has_section(config_file_constants.DEBUG_SECTION_NAME):
                config_debug = True

        if debug is None:
            debug = config_debug if config_debug is not None else DEBUG_DEFAULT

        if not isinstance(debug, bool):
            raise ValueError("debug must be set to a bool (either True or False)")
        self.debug = debug

        self.endpoint = (
            endpoint
            or get_endpoint_config(config_path=self.configPath).get("base")
            or PRODUCTION_ENDPOINT
        ).rstrip("/")

        self.timeout = (
            timeout
            if timeout is not None
            else get_http_config(config_path=self.configPath)["timeout"]
        )

        self.default_headers = {
            "content-type": "application/json; charset=UTF-8",
            "Accept": "application/json; charset=UTF-8",
            "cache-control": "no-cache",
        }
        self.credentials: Optional[UnifiCredentials] = None
        self.credential_provider = credential_provider or get_default_credential_chain()

        self.silent = silent
        self._init_logger()  # initializes self.logger

        if cache_client and Unifi._allow_client_caching:
            Unifi.set_client(unifi_client=self)

    def _get_requests_session_async_unifi(
        self, asyncio_event_loop: asyncio.AbstractEventLoop
    ) -> httpx.AsyncClient:
        """
        httpx.AsyncClient can only use connection pooling within the same event loop.
        As a result an `atexit` handler is used to close the connection when the event
        loop is closed. It will also delete the attribute from the object to prevent
        it from being reused in the future.

        Further documentation can be found here:
        <https://github.com/encode/httpx/discussions/2959>

        This is expected to be called from within an AsyncIO loop.
        """
        if self._injected_session_async_unifi is not None:
            return self._injected_session_async_unifi

        if (
            asyncio_event_loop in self._requests_session_async_unifi
            and self._requests_session_async_unifi[asyncio_event_loop] is not None
        ):
            return self._requests_session_async_unifi[asyncio_event_loop]

        async def close_connection() -> None:
            """Close connection when event loop exits"""
            await self._requests_session_async_unifi[asyncio_event_loop].aclose()
            del self._requests_session_async_unifi[asyncio_event_loop]

        httpx_timeout = httpx.Timeout(self.timeout, pool=None)
        span_dict: Dict[httpx.Request, trace.Span] = {}

        async def log_request(request: httpx.Request) -> None:
            """
            Log the HTTPX request to an otel span.

            Arguments:
                request: The HTTPX request object.
            """
            current_span = trace.get_current_span()
            if current_span.is_recording():
                span = tracer.start_span(
                    f"{request.method} {request.url}", kind=SpanKind.CLIENT
                )
                span.set_attributes(
                    {"url": str(request.url), "http.method": request.method}
                )
                span_dict.update({request: span})

        async def log_response(response: httpx.Response) -> None:
            """
            Log the HTTPX response to an otel span.

            Arguments:
                response: The HTTPX response object.
            """
            span = span_dict.pop(response.request, None)
            if span and span.is_recording():
                span.set_attribute("http.response.status_code", response.status_code)
                span.end()

        event_hooks = {"request": [log_request], "response": [log_response]}
        self._requests_session_async_unifi.update(
            {
                asyncio_event_loop: httpx.AsyncClient(
                    limits=httpx.Limits(max_connections=MAX_CONNECTIONS),
                    timeout=httpx_timeout,
                    event_hooks=event_hooks,
                )
            }
        )

        asyncio_atexit.register(close_connection)
        return self._requests_session_async_unifi[asyncio_event_loop]

    # initialize logging
    def _init_logger(self):
        """
        Initialize logging
        """
        logger_name = (
            SILENT_LOGGER_NAME
            if self.silent
            else DEBUG_LOGGER_NAME
            if self.debug
            else DEFAULT_LOGGER_NAME
        )
        self.logger = logging.getLogger(logger_name)
        logging.getLogger("py.warnings").handlers = self.logger.handlers

    @classmethod
    def get_client(cls, unifi_client: typing.Union[None, "Unifi"]) -> "Unifi":
        """
        Convience function to get an instance of 'Unifi'. The latest instance created
        by 'login()' or set via `set_client` will be returned.

        Arguments:
            unifi_client: An instance of 'Unifi' or None. This is used to simplify
                logical checks in cases where unifi is passed into them.

        Returns:
            An instance of 'Unifi'.

        Raises:
            UnifiError: No instance has been created - Please use login() first
        """
        if unifi_client:
            return unifi_client

        if not cls._unifi_client:
            raise UnifiError("No instance has been created - Please use login() first")
        return cls._unifi_client

    @classmethod
    def set_client(cls, unifi_client) -> None:
        cls._unifi_client = unifi_client

    @classmethod
    def allow_client_caching(cls, allow_client_caching: bool) -> None:
        """
        Control whether new instances are remembered by `get_client`. Tests and
        applications that juggle several clients turn this off and pass
        `unifi_client` explicitly.

        Arguments:
            allow_client_caching: True to cache new instances.
        """
        cls._allow_client_caching = allow_client_caching
        if not allow_client_caching:
            cls._unifi_client = None

    @property
    def username(self) -> Union[str, None]:
        return self.credentials.username if self.credentials is not None else None

    async def login_async(
        self,
        username: str = None,
        password: str = None,
        api_key: str = None,
        auth_token: str = None,
        profile: str = None,
        silent: bool = False,
    ) -> None:
        """
        Valid combinations of login() arguments:

        - api_key
        - auth_token
        - username and password

        If no login arguments are provided, login() will attempt to log in using
        information from these sources (in order of preference):

        1. User defined arguments
        2. .unifiConfig file (in user home folder unless configured otherwise)
        3. Environment variables: UNIFI_API_KEY, UNIFI_AUTH_TOKEN or
           UNIFI_USERNAME and UNIFI_PASSWORD

        An API key is sent as `Authorization: <apiKey>`. A username and password are
        exchanged for an access token through `/login`, which is then sent as
        `Authorization: Bearer <token>`.

        Arguments:
            username: UNIFI username.
            password: UNIFI password.
            api_key: A pre-issued UNIFI API key.
            auth_token: An access token obtained earlier from `/login`.
            profile: The profile of the config file to read.
            silent: Defaults to False. Suppresses the "Logged in ..." message.

        Raises:
            UnifiNoCredentialsError: If no source provided any credentials.
            UnifiAuthenticationError: If the username and password were refused.
        """
        # Make sure to invalidate the existing session
        self.logout()

        user_login_args = UserLoginArgs(
            profile=profile,
            username=username,
            password=password,
            api_key=api_key,
            auth_token=auth_token,
        )
        if isinstance(self.credential_provider, UnifiCredentialsProviderChain):
            credentials = await self.credential_provider.get_credentials(
                self, user_login_args
            )
        else:
            credentials = await self.credential_provider.get_unifi_credentials(
                self, user_login_args
            )

        # Final check on login success
        if not credentials:
            raise UnifiNoCredentialsError("No credentials provided.")
        self.credentials = credentials

        if not silent:
            self.logger.info(
                f"Logged in to UNIFI as {self.credentials.username or 'API key user'}"
            )

    def login(self, *args, **kwargs) -> None:
        """Synchronous version of `login_async`, see it for arguments."""
        return wrap_async_to_sync(self.login_async(*args, **kwargs))

    def logout(self) -> None:
        """
        Removes authentication information from the Unifi client.

        Returns:
            None
        """
        self.credentials = None

    ############################################################
    #                   Low level Rest calls                   #
    ############################################################

    def _generate_headers(self, headers: Dict[str, str] = None) -> Dict[str, str]:
        """
        Generate headers (auth headers produced separately by credentials object)

        """
        if headers is None:
            headers = dict(self.default_headers)
        headers.update(unificlient.USER_AGENT)

        return headers

    def _build_uri_and_headers(
        self, uri: str, endpoint: str = None, headers: Dict[str, str] = None
    ) -> Tuple[str, Dict[str, str]]:
        """Returns a tuple of the URI and headers to request with."""

        if endpoint is None:
            endpoint = self.endpoint

        trace.get_current_span().set_attributes({"server.address": endpoint})

        # Check to see if the URI is incomplete (i.e. a UNIFI path)
        # In that case, append the UNIFI endpoint to the URI
        parsedURL = urllib_urlparse.urlparse(uri)
        if parsedURL.netloc == "":
            uri = endpoint + uri

        if headers is None:
            headers = self._generate_headers()
        return uri, headers

    def _handle_httpx_unifi_http_error(self, response: httpx.Response) -> None:
        """Raise errors as appropriate for the HTTPX library returned UNIFI http
        status codes

        Arguments:
            response: The HTTPX response object
        """

        try:
            exceptions._raise_for_status_httpx(
                response=response, verbose=self.debug, logger=self.logger
            )
        except exceptions.UnifiHTTPError as ex:
            # if we get a unauthenticated or forbidden error and the user is not logged in
            # then we raise it as an authentication error.
            if response.status_code in (401, 403) and not self.credentials:
                raise UnifiAuthenticationError(
                    "You are not logged in and do not have access to a requested resource."
                ) from ex

            raise

    def _return_rest_body(self, response: httpx.Response) -> Any:
        """
        Decodes the JSON body of the response. The service does not reliably label
        its responses as JSON so every non-empty body is decoded.

        Raises:
            UnifiMalformedResponseError: The body is not valid JSON. The raw body is
                attached for diagnostics.
        """
        trace.get_current_span().set_attributes(
            {"http.response.status_code": response.status_code}
        )
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as ex:
            self.logger.debug(f"Malformed response body: {response.text}")
            raise UnifiMalformedResponseError(
                f"Response from {response.request.url} was not valid JSON: {response.text}",
                response=response,
                body=response.text,
            ) from ex

    async def _rest_call_async(
        self,
        method: str,
        uri: str,
        data: Any,
        endpoint: str,
        headers: Dict[str, str],
        requests_session_async_unifi: httpx.AsyncClient,
        **kwargs,
    ) -> httpx.Response:
        """
        Sends an HTTP request to the UNIFI server.

        Arguments:
            method: The method to implement Create, Read, Update, Delete operations.
                Should be post, get, put, delete.
            uri: URI on which the method is performed.
            data: The payload to be delivered.
            endpoint: Server endpoint, defaults to self.endpoint
            headers: Dictionary of headers to use.
            requests_session_async_unifi: The async client to use when making this
                specific call.
            kwargs: Any other arguments taken by a
                [request](https://www.python-httpx.org/api/) method

        Returns:
            The HTTPX response

        Raises:
            UnifiTimeoutError: No response within the configured timeout.
            UnifiConnectionError: The request could not be sent or the connection
                dropped.
            UnifiHTTPError: The service answered with a non-2xx status.
        """
        uri, headers = self._build_uri_and_headers(
            uri, endpoint=endpoint, headers=headers
        )

        requests_session = (
            requests_session_async_unifi
            or self._get_requests_session_async_unifi(
                asyncio_event_loop=asyncio.get_running_loop()
            )
        )

        auth = kwargs.pop("auth", self.credentials)
        requests_method_fn = getattr(requests_session, method)
        if self.debug:
            self.logger.debug(f"{method.upper()} {uri}")
        try:
            if data:
                response = await requests_method_fn(
                    uri,
                    content=data,
                    headers=headers,
                    auth=auth,
                    **kwargs,
                )
            else:
                response = await requests_method_fn(
                    uri,
                    headers=headers,
                    auth=auth,
                    **kwargs,
                )
        except httpx.TimeoutException as ex:
            raise UnifiTimeoutError(
                f"Timed out after {self.timeout}s waiting for {method.upper()} {uri}"
            ) from ex
        except httpx.TransportError as ex:
            raise UnifiConnectionError(
                f"Could not complete {method.upper()} {uri}: {ex}"
            ) from ex

        self._handle_httpx_unifi_http_error(response)

        return response

    async def rest_get_async(
        self,
        uri: str,
        endpoint: str = None,
        headers: httpx.Headers = None,
        requests_session_async_unifi: httpx.AsyncClient = None,
        **kwargs,
    ) -> Any:
        """
        Sends an HTTP GET request to the UNIFI server.

        Arguments:
            uri: URI on which get is performed
            endpoint: Server endpoint, defaults to self.endpoint
            headers: Dictionary of headers to use.
            requests_session_async_unifi: The async client to use when making this
                specific call.
            kwargs: Any other arguments taken by a
                [request](https://www.python-httpx.org/api/) method

        Returns:
            JSON encoding of response
        """
        response = await self._rest_call_async(
            "get",
            uri,
            None,
            endpoint,
            headers,
            requests_session_async_unifi,
            **kwargs,
        )
        return self._return_rest_body(response)

    async def rest_post_async(
        self,
        uri: str,
        body: Any = None,
        endpoint: str = None,
        headers: httpx.Headers = None,
        requests_session_async_unifi: httpx.AsyncClient = None,
        **kwargs,
    ) -> Any:
        """
        Sends an HTTP POST request to the UNIFI server.

        Arguments:
            uri: URI on which get is performed
            body: The payload to be delivered
            endpoint: Server endpoint, defaults to self.endpoint
            headers: Dictionary of headers to use.
            requests_session_async_unifi: The async client to use when making this
                specific call.
            kwargs: Any other arguments taken by a
                [request](https://www.python-httpx.org/api/) method

        Returns:
            JSON encoding of response
        """
        if body is not None and not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        response = await self._rest_call_async(
            "post",
            uri,
            body,
            endpoint,
            headers,
            requests_session_async_unifi,
            **kwargs,
        )
        return self._return_rest_body(response)
