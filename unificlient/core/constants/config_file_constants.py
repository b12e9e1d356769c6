AUTHENTICATION_SECTION_NAME = "authentication"
PROFILE_SECTION_PREFIX = "profile "
ENDPOINTS_SECTION_NAME = "endpoints"
HTTP_SECTION_NAME = "http"
DEBUG_SECTION_NAME = "debug"

DEFAULT_TIMEOUT_SECONDS = 70
