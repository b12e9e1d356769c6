"""Protocol for the specific methods of this class that have synchronous counterparts
generated at runtime."""

from typing import TYPE_CHECKING, List, Optional, Protocol

from unificlient import Unifi

if TYPE_CHECKING:
    from unificlient.models import Library


class LibrarySynchronousProtocol(Protocol):
    """
    The protocol for methods that are asynchronous but also
    have a synchronous counterpart that may also be called.
    """

    @classmethod
    def list(
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
        return []
