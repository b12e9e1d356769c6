from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from opentelemetry import trace

from unificlient import Unifi
from unificlient.api import get_libraries
from unificlient.core.async_utils import async_to_sync, otel_trace_method
from unificlient.core.utils import get_value
from unificlient.models.protocols.library_protocol import LibrarySynchronousProtocol


@dataclass
@async_to_sync
class Library(LibrarySynchronousProtocol):
    """
    A UNIFI library: a named collection of content owned by a company.

    Attributes:
        id: The ID of the library. Read from `id`, falling back to `LibraryId`.
        name: The name of the library. Read from `name`, falling back to `Name`.
        company_id: The ID of the company that owns the library.
        company_name: The name of the company that owns the library.
        repository_id: The ID of the repository backing the library.
        library_type: The numeric kind of library.
        is_protected: Whether the library is protected.
        date_created: When the library was created.
        accessible_users: Passed through unchanged.
        accessible_user_groups: Passed through unchanged.
        admin_users: Passed through unchanged.
        admin_user_groups: Passed through unchanged.

    Example: Listing libraries
        &nbsp;

            import unificlient
            from unificlient.models import Library

            unificlient.login()
            for library in Library.list():
                print(library.name)
    """

    id: Optional[str] = None
    """The ID of the library"""

    name: Optional[str] = None
    """The name of the library"""

    company_id: Optional[str] = None
    """The ID of the company that owns the library"""

    company_name: Optional[str] = None
    """The name of the company that owns the library"""

    repository_id: Optional[str] = None
    """The ID of the repository backing the library"""

    library_type: Optional[int] = None
    """The numeric kind of library"""

    is_protected: Optional[bool] = None
    """Whether the library is protected"""

    date_created: Optional[str] = None
    """When the library was created"""

    accessible_users: Optional[List[Any]] = None
    accessible_user_groups: Optional[List[Any]] = None
    admin_users: Optional[List[Any]] = None
    admin_user_groups: Optional[List[Any]] = None

    def fill_from_dict(self, unifi_library: Dict[str, Any]) -> "Library":
        """
        Converts a response from the REST API into this dataclass.

        Arguments:
            unifi_library: The response from the REST API.

        Returns:
            The Library object.
        """
        unifi_library = unifi_library or {}
        self.id = get_value(unifi_library, "id") or get_value(
            unifi_library, "LibraryId"
        )
        self.name = get_value(unifi_library, "name")
        self.company_id = get_value(unifi_library, "CompanyId")
        self.company_name = get_value(unifi_library, "CompanyName")
        self.repository_id = get_value(unifi_library, "RepositoryId")
        self.library_type = get_value(unifi_library, "LibraryType")
        self.is_protected = get_value(unifi_library, "IsProtected")
        self.date_created = get_value(unifi_library, "DateCreated")
        self.accessible_users = get_value(unifi_library, "AccessibleUsers")
        self.accessible_user_groups = get_value(unifi_library, "AccessibleUserGroups")
        self.admin_users = get_value(unifi_library, "AdminUsers")
        self.admin_user_groups = get_value(unifi_library, "AdminUserGroups")
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        """Converts this dataclass back into the shape the REST API uses."""
        return {
            "id": self.id,
            "name": self.name,
            "CompanyId": self.company_id,
            "CompanyName": self.company_name,
            "RepositoryId": self.repository_id,
            "LibraryType": self.library_type,
            "IsProtected": self.is_protected,
            "DateCreated": self.date_created,
            "AccessibleUsers": self.accessible_users,
            "AccessibleUserGroups": self.accessible_user_groups,
            "AdminUsers": self.admin_users,
            "AdminUserGroups": self.admin_user_groups,
        }

    @classmethod
    @otel_trace_method(method_to_trace_name=lambda cls, **kwargs: "Library_List")
    async def list_async(
        cls,
        sort_by_name: bool = True,
        *,
        unifi_client: Optional[Unifi] = None,
    ) -> List["Library"]:
        """
        Get every library the authenticated user can access.

        Arguments:
            sort_by_name: Sort ascending by name. Libraries without a name go last.
                When False the order the service returned is kept.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Returns:
            The libraries.
        """
        response = await get_libraries(unifi_client=unifi_client)
        libraries = [cls().fill_from_dict(item) for item in response]
        trace.get_current_span().set_attributes(
            {"unifi.library_count": len(libraries)}
        )
        if sort_by_name:
            libraries.sort(key=lambda library: (library.name is None, library.name or ""))
        return libraries
