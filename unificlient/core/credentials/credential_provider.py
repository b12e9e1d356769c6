"""
This module contains classes that are responsible for retrieving UNIFI authentication
information from various sources such as:

- User-provided login arguments
- UNIFI configuration file (`~/.unifiConfig`)
- Environment variables

The retrieved information is turned into either API key credentials or bearer token
credentials. A username and password are exchanged for an access token through the
`/login` endpoint.
"""

import abc
import os
from typing import TYPE_CHECKING, Iterable, Optional, Union

from opentelemetry import trace

from unificlient.api import get_config_authentication, post_login
from unificlient.core.credentials.cred_data import (
    UnifiApiKeyCredentials,
    UnifiBearerTokenCredentials,
    UnifiCredentials,
    UserLoginArgs,
)
from unificlient.core.exceptions import UnifiAuthenticationError

if TYPE_CHECKING:
    from unificlient import Unifi


class UnifiCredentialsProvider(metaclass=abc.ABCMeta):
    """
    A credential provider is responsible for retrieving UNIFI authentication
    information (an API key, an access token or a username and password) from a
    source (e.g. login args, config file), and use them to return a
    [UnifiCredentials][unificlient.core.credentials.cred_data.UnifiCredentials]
    instance.
    """

    @abc.abstractmethod
    def _get_auth_info(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> UserLoginArgs:
        """
        Subclasses must implement this to decide how to obtain authentication
        information. Fields that are not available are left as None.

        Arguments:
            unifi: Unifi client instance
            user_login_args: arguments passed during unifi.login()

        Returns:
            A UserLoginArgs holding whatever this source knows about.
        """

    async def get_unifi_credentials(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> Union[UnifiCredentials, None]:
        auth_info = self._get_auth_info(unifi, user_login_args)
        return await self._create_unifi_credential(unifi, auth_info)

    async def _create_unifi_credential(
        self, unifi: "Unifi", auth_info: UserLoginArgs
    ) -> Union[UnifiCredentials, None]:
        if auth_info.api_key:
            credentials = UnifiApiKeyCredentials(
                auth_info.api_key, username=auth_info.username
            )
        elif auth_info.auth_token:
            credentials = UnifiBearerTokenCredentials(
                auth_info.auth_token, username=auth_info.username
            )
        elif auth_info.username and auth_info.password:
            token = await post_login(
                username=auth_info.username,
                password=auth_info.password,
                unifi_client=unifi,
            )
            credentials = UnifiBearerTokenCredentials(
                token, username=auth_info.username
            )
        else:
            return None

        current_span = trace.get_current_span()
        if current_span.is_recording():
            current_span.set_attribute(
                "unifi.auth_style", credentials.get_auth_style()
            )
        return credentials


class UserArgsCredentialsProvider(UnifiCredentialsProvider):
    """Retrieves authentication information from the arguments passed to login."""

    def _get_auth_info(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> UserLoginArgs:
        return UserLoginArgs(
            profile=None,
            username=user_login_args.username,
            password=user_login_args.password,
            api_key=user_login_args.api_key,
            auth_token=user_login_args.auth_token,
        )


class ConfigFileCredentialsProvider(UnifiCredentialsProvider):
    """
    Retrieves auth info from the `~/.unifiConfig` file
    """

    def _get_auth_info(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> UserLoginArgs:
        """
        Retrieves authentication information from the UNIFI configuration file for
        the selected profile. A username given to login must match the profile's.

        Raises:
            UnifiAuthenticationError: If the login username and the profile username
                disagree.
        """
        profile = user_login_args.profile or "default"
        auth_profile = get_config_authentication(
            config_path=unifi.configPath, profile=profile
        )
        config_username = auth_profile.get("username")

        if (
            user_login_args.username
            and config_username
            and user_login_args.username != config_username
        ):
            raise UnifiAuthenticationError(
                f"username '{user_login_args.username}' does not match the username "
                f"of profile '{profile}' in {unifi.configPath}"
            )

        return UserLoginArgs(
            profile=profile,
            username=config_username or user_login_args.username,
            password=auth_profile.get("password"),
            api_key=auth_profile.get("api_key"),
            auth_token=auth_profile.get("auth_token"),
        )


class EnvironmentVariableCredentialsProvider(UnifiCredentialsProvider):
    """
    Retrieves the user's authentication information from environment variables
    """

    API_KEY_VAR_NAME = "UNIFI_API_KEY"
    AUTH_TOKEN_VAR_NAME = "UNIFI_AUTH_TOKEN"
    USERNAME_VAR_NAME = "UNIFI_USERNAME"
    PASSWORD_VAR_NAME = "UNIFI_PASSWORD"

    def _get_auth_info(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> UserLoginArgs:
        return UserLoginArgs(
            profile=None,
            username=os.environ.get(self.USERNAME_VAR_NAME, user_login_args.username),
            password=os.environ.get(self.PASSWORD_VAR_NAME),
            api_key=os.environ.get(self.API_KEY_VAR_NAME),
            auth_token=os.environ.get(self.AUTH_TOKEN_VAR_NAME),
        )


class UnifiCredentialsProviderChain(object):
    """
    Class that has a list of
    [UnifiCredentialsProvider][unificlient.core.credentials.credential_provider.UnifiCredentialsProvider]
    from which this class attempts to retrieve
    [UnifiCredentials][unificlient.core.credentials.cred_data.UnifiCredentials].


    By default this class uses the following providers in this order:

    1. [UserArgsCredentialsProvider][unificlient.core.credentials.credential_provider.UserArgsCredentialsProvider]
    2. [ConfigFileCredentialsProvider][unificlient.core.credentials.credential_provider.ConfigFileCredentialsProvider]
    3. [EnvironmentVariableCredentialsProvider][unificlient.core.credentials.credential_provider.EnvironmentVariableCredentialsProvider]

    Attributes:
        cred_providers: list of credential providers
    """

    def __init__(self, cred_providers: Iterable[UnifiCredentialsProvider]) -> None:
        self.cred_providers = list(cred_providers)

    async def get_credentials(
        self, unifi: "Unifi", user_login_args: UserLoginArgs
    ) -> Union[UnifiCredentials, None]:
        selected_profile = user_login_args.profile or os.getenv("UNIFI_PROFILE")

        for provider in self.cred_providers:
            creds = await provider.get_unifi_credentials(
                unifi,
                UserLoginArgs(
                    profile=selected_profile,
                    username=user_login_args.username,
                    password=user_login_args.password,
                    api_key=user_login_args.api_key,
                    auth_token=user_login_args.auth_token,
                ),
            )
            if creds is not None:
                return creds
        return None


# NOTE: If you change the order of this list, please also change the documentation
# in Unifi.login_async() that describes the order

DEFAULT_CREDENTIAL_PROVIDER_CHAIN = UnifiCredentialsProviderChain(
    cred_providers=[
        UserArgsCredentialsProvider(),
        ConfigFileCredentialsProvider(),
        EnvironmentVariableCredentialsProvider(),
    ]
)


def get_default_credential_chain() -> UnifiCredentialsProviderChain:
    """
    Creates and uses a default credential chain to retrieve
    [UnifiCredentials][unificlient.core.credentials.cred_data.UnifiCredentials].
    The order this is returned is the order in which the credential providers
    are attempted.

    Returns:
        credential chain
    """
    return DEFAULT_CREDENTIAL_PROVIDER_CHAIN
