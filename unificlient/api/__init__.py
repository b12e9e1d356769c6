# These are all of the REST services that are used by the UNIFI client.
from .api_client import expect_json_list, expect_json_object
from .auth_services import post_login
from .batch_services import (
    build_set_type_values_request,
    get_batch_status,
    post_batch,
    set_type_parameter_value,
)
from .configuration_services import (
    get_config_authentication,
    get_config_file,
    get_config_section_dict,
    get_endpoint_config,
    get_http_config,
)
from .library_services import get_libraries
from .search_services import (
    post_search,
    search_content_by_name,
    search_content_by_revision_id,
    search_library_content,
)

__all__ = [
    # api client
    "expect_json_list",
    "expect_json_object",
    # auth_services
    "post_login",
    # batch_services
    "build_set_type_values_request",
    "get_batch_status",
    "post_batch",
    "set_type_parameter_value",
    # configuration_services
    "get_config_file",
    "get_config_section_dict",
    "get_config_authentication",
    "get_endpoint_config",
    "get_http_config",
    # library_services
    "get_libraries",
    # search_services
    "post_search",
    "search_library_content",
    "search_content_by_name",
    "search_content_by_revision_id",
]
