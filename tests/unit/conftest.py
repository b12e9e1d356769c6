"""
pytest unit test session level fixtures
"""

import logging
import os
import platform
import urllib.request
from typing import Callable

import httpx
import pytest
from pytest_socket import SocketBlockedError, disable_socket

from unificlient import Unifi
from unificlient.core.logging_setup import SILENT_LOGGER_NAME

Unifi.allow_client_caching(False)

MISSING_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__), "does-not-exist", ".unifiConfig"
)


def pytest_runtest_setup():
    """Disable socket connections during unit tests.

    This uses the https://pypi.org/project/pytest-socket/ library for this functionality.

    allow_unix_socket=True is required for async to work.
    """
    # This is a work-around because of https://github.com/python/cpython/issues/77589
    if platform.system() != "Windows":
        disable_socket(allow_unix_socket=True)


def test_confirm_connections_blocked():
    """Confirm that socket connections are blocked during unit tests."""
    if platform.system() != "Windows":
        with pytest.raises(SocketBlockedError) as cm_ex:
            urllib.request.urlopen("http://example.com")
        assert "A test tried to use socket.socket." == str(cm_ex.value)


@pytest.fixture(scope="session")
def unifi():
    """
    Create a Unifi instance that can be shared by all tests in the session.
    """
    unifi = Unifi(debug=False, configPath=MISSING_CONFIG_PATH, cache_client=False)
    unifi.logger = logging.getLogger(SILENT_LOGGER_NAME)
    Unifi.set_client(unifi)
    return unifi


@pytest.fixture
def unifi_with_transport() -> Callable[..., Unifi]:
    """
    Build a Unifi instance whose requests are answered by `handler` instead of the
    network. `handler` receives the `httpx.Request` and returns an `httpx.Response`.
    """

    def _build(handler, **kwargs) -> Unifi:
        kwargs.setdefault("configPath", MISSING_CONFIG_PATH)
        kwargs.setdefault("silent", True)
        return Unifi(
            requests_session_async_unifi=httpx.AsyncClient(
                transport=httpx.MockTransport(handler)
            ),
            cache_client=False,
            **kwargs,
        )

    return _build
