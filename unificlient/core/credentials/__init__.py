# These are exposed functions and objects from the `unificlient.core.credentials` package.
# However, these functions and objects are not public APIs for the UNIFI Python client.
# Their signatures and implementations may change at any time.
# Please use them at your own risk.

from .cred_data import (
    UnifiApiKeyCredentials,
    UnifiBearerTokenCredentials,
    UnifiCredentials,
    UserLoginArgs,
)
from .credential_provider import (
    UnifiCredentialsProvider,
    UnifiCredentialsProviderChain,
    get_default_credential_chain,
)
