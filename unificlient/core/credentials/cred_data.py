import abc
import typing
from dataclasses import dataclass, field
from typing import Generator, Optional

import httpx


class UnifiCredentials(httpx.Auth, abc.ABC):
    """Attaches the UNIFI `Authorization` header to every outgoing request."""

    @property
    @abc.abstractmethod
    def secret(self) -> str:
        """The secret associated with these credentials."""

    @property
    @abc.abstractmethod
    def authorization_header(self) -> str:
        """The value sent in the `Authorization` header."""

    @property
    def username(self) -> Optional[str]:
        """The username associated with these credentials. May be None."""
        return self._username

    @username.setter
    def username(self, username: Optional[str]) -> None:
        self._username = username

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        if self.secret:
            request.headers["Authorization"] = self.authorization_header
        yield request


class UnifiBearerTokenCredentials(UnifiCredentials):
    """Access token returned by `/login`, sent as `Authorization: Bearer <token>`."""

    @classmethod
    def get_auth_style(cls) -> typing.Literal["bearer"]:
        return "bearer"

    def __init__(self, token: str, username: str = None) -> None:
        self._token = token
        self.username = username

    @property
    def secret(self) -> str:
        """The bearer token."""
        return self._token

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.secret}"

    def __repr__(self):
        return (
            f"UnifiBearerTokenCredentials("
            f"username='{self.username}', "
            f"token='<redacted>')"
        )


class UnifiApiKeyCredentials(UnifiCredentials):
    """Pre-issued API key, sent verbatim as `Authorization: <apiKey>`."""

    @classmethod
    def get_auth_style(cls) -> typing.Literal["api_key"]:
        return "api_key"

    def __init__(self, api_key: str, username: str = None) -> None:
        self._api_key = api_key
        self.username = username

    @property
    def secret(self) -> str:
        """The API key."""
        return self._api_key

    @property
    def authorization_header(self) -> str:
        return self.secret

    def __repr__(self):
        return (
            f"UnifiApiKeyCredentials("
            f"username='{self.username}', "
            f"api_key='<redacted>')"
        )


@dataclass
class UserLoginArgs:
    """
    Data class representing user login arguments for authentication.

    Attributes:
        profile: The profile name to use for authentication. Defaults to "default".
        username: The UNIFI username. Used with `password` to obtain an access token.
        password: The UNIFI password. Hidden from debug logs.
        api_key: A pre-issued API key. Hidden from debug logs.
        auth_token: An access token obtained earlier from `/login`. Hidden from
            debug logs.
    """

    profile: Optional[str] = field(default="default")
    username: Optional[str] = field(default=None)
    password: Optional[str] = field(default=None, repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    auth_token: Optional[str] = field(default=None, repr=False)
