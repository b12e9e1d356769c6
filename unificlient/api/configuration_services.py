"""This module is responsible for exposing access to any configuration either through
file, environment variables, or other means.
"""

import configparser
import functools
from typing import Dict, Union

from unificlient.core.constants import config_file_constants


@functools.lru_cache()
def get_config_file(config_path: str) -> configparser.RawConfigParser:
    """
    Retrieves the client configuration information.

    Arguments:
        config_path:  Path to configuration file on local file system

    Returns:
        A RawConfigParser populated with properties from the user's configuration file.
    """

    try:
        config = configparser.RawConfigParser()
        config.read(config_path)  # Does not fail if the file does not exist
        return config
    except configparser.Error as ex:
        raise ValueError(f"Error parsing UNIFI config file: {config_path}") from ex


def get_config_section_dict(
    section_name: str,
    config_path: str,
) -> Dict[str, str]:
    """
    Get a profile section in the configuration file with the section name.

    Arguments:
        section_name: The name of the profile section in the configuration file
        config_path:  Path to configuration file on local file system

    Returns:
        A dictionary containing the configuration profile section content. If the
        section does not exist, an empty dictionary is returned.
    """
    config = get_config_file(config_path)
    try:
        return dict(config.items(section_name))
    except configparser.NoSectionError:
        # section not present
        return {}


def get_config_authentication(
    config_path: str,
    profile: str = "default",
) -> Dict[str, str]:
    """
    Get the authentication values of a profile in the configuration file.

    The `default` profile is read from a `[default]` section when there is one and
    from the `[authentication]` section otherwise. Any other profile is read from a
    `[profile <name>]` section.

    Arguments:
        config_path:  Path to configuration file on local file system
        profile: The name of the profile to read.

    Returns:
        The profile's keys (`username`, `password`, `api_key`, `auth_token`), empty
        when the profile does not exist.
    """
    if profile in (None, "", "default"):
        section = get_config_section_dict(
            section_name="default", config_path=config_path
        )
        if not section:
            section = get_config_section_dict(
                section_name=config_file_constants.AUTHENTICATION_SECTION_NAME,
                config_path=config_path,
            )
        return section

    return get_config_section_dict(
        section_name=f"{config_file_constants.PROFILE_SECTION_PREFIX}{profile}",
        config_path=config_path,
    )


def get_endpoint_config(config_path: str) -> Dict[str, str]:
    """
    Get the endpoints section of the configuration file.

    Arguments:
        config_path:  Path to configuration file on local file system

    Returns:
        The endpoints section, e.g. `{"base": "https://api.unifilabs.com"}`
    """
    return get_config_section_dict(
        section_name=config_file_constants.ENDPOINTS_SECTION_NAME,
        config_path=config_path,
    )


def get_http_config(
    config_path: str,
) -> Dict[str, Union[float, None]]:
    """
    Get the HTTP settings from the configuration file.

    Arguments:
        config_path:  Path to configuration file on local file system

    Raises:
        ValueError: Invalid timeout value. Should be a positive number of seconds.

    Returns:
        The HTTP settings
    """
    # defaults
    http_config = {"timeout": config_file_constants.DEFAULT_TIMEOUT_SECONDS}

    for k, v in get_config_section_dict(
        section_name=config_file_constants.HTTP_SECTION_NAME, config_path=config_path
    ).items():
        if v and k == "timeout":
            try:
                timeout = float(v)
            except ValueError as cause:
                raise ValueError(f"Invalid http.timeout config setting {v}") from cause
            if timeout <= 0:
                raise ValueError(f"Invalid http.timeout config setting {v}")
            http_config["timeout"] = timeout

    return http_config
