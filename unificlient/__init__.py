import importlib.resources
import json

import httpx

# public APIs
from .client import PRODUCTION_ENDPOINT, Unifi, login

ref = importlib.resources.files(__name__).joinpath("unifiPythonClient")
with ref.open("r") as fp:
    __version__ = json.load(fp)["latestVersion"]

__all__ = [
    # objects
    "Unifi",
    # functions
    "login",
    # constants
    "PRODUCTION_ENDPOINT",
]

USER_AGENT = {
    "User-Agent": "unificlient/%s python-httpx/%s" % (__version__, httpx.__version__)
}

# patch logging
from .core import logging_setup  # noqa
