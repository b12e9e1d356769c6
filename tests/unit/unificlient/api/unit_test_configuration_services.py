"""Unit tests for reading the ~/.unifiConfig file."""
import pytest

from unificlient.api import configuration_services

CONFIG = """
[authentication]
api_key = key-from-authentication

[profile work]
username = worker
password = hunter2

[endpoints]
base = https://unifi.example.com

[http]
timeout = 15
"""


@pytest.fixture
def config_path(tmp_path) -> str:
    path = tmp_path / ".unifiConfig"
    path.write_text(CONFIG)
    return str(path)


def test_default_profile_reads_authentication_section(config_path) -> None:
    # GIVEN a config file without a [default] section
    # WHEN I read the default profile
    auth = configuration_services.get_config_authentication(config_path=config_path)

    # THEN the [authentication] section is used
    assert auth == {"api_key": "key-from-authentication"}


def test_default_section_wins(tmp_path) -> None:
    # GIVEN a config file with both [default] and [authentication]
    path = tmp_path / ".unifiConfig"
    path.write_text("[default]\nauth_token = t\n\n[authentication]\napi_key = k\n")

    # WHEN I read the default profile
    auth = configuration_services.get_config_authentication(config_path=str(path))

    # THEN the [default] section is used
    assert auth == {"auth_token": "t"}


def test_named_profile(config_path) -> None:
    # GIVEN a config file with a named profile
    # WHEN I read that profile
    auth = configuration_services.get_config_authentication(
        config_path=config_path, profile="work"
    )

    # THEN its section is returned
    assert auth == {"username": "worker", "password": "hunter2"}


def test_missing_profile(config_path) -> None:
    # GIVEN a profile that is not in the file
    # WHEN I read it
    # THEN nothing is returned
    assert (
        configuration_services.get_config_authentication(
            config_path=config_path, profile="nope"
        )
        == {}
    )


def test_endpoint_and_http(config_path) -> None:
    # GIVEN a config file with endpoints and http sections
    # WHEN I read them
    # THEN the values are returned
    assert configuration_services.get_endpoint_config(config_path) == {
        "base": "https://unifi.example.com"
    }
    assert configuration_services.get_http_config(config_path) == {"timeout": 15.0}


def test_http_defaults(tmp_path) -> None:
    # GIVEN no config file
    # WHEN I read the http settings
    # THEN the default timeout is returned
    assert configuration_services.get_http_config(
        str(tmp_path / "missing")
    ) == {"timeout": 70}


@pytest.mark.parametrize("timeout", ["soon", "0", "-5"])
def test_invalid_timeout(tmp_path, timeout) -> None:
    # GIVEN a config file with an invalid timeout
    path = tmp_path / ".unifiConfig"
    path.write_text(f"[http]\ntimeout = {timeout}\n")

    # WHEN I read the http settings
    # THEN a ValueError is raised
    with pytest.raises(ValueError):
        configuration_services.get_http_config(str(path))
