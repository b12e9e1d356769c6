# These are exposed functions and objects from the `unificlient.core.constants` package.
# However, these functions and objects are not public APIs for the UNIFI Python client.
# Their signatures and implementations may change at any time.
# Please use them at your own risk.

from . import config_file_constants
