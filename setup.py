# Installation script for the UNIFI Client for Python
############################################################
import json

from setuptools import setup

# figure out the version
with open("unificlient/unifiPythonClient") as config:
    __version__ = json.load(config)["latestVersion"]

setup(version=__version__)
