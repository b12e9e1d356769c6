"""Protocol for the specific methods of this class that have synchronous counterparts
generated at runtime."""

from typing import TYPE_CHECKING, List, Optional, Protocol

from unificlient import Unifi

if TYPE_CHECKING:
    from unificlient.models import Batch, Content


class ContentSynchronousProtocol(Protocol):
    """
    The protocol for methods that are asynchronous but also
    have a synchronous counterpart that may also be called.
    """

    @classmethod
    def from_library(
        cls,
        library_id: str,
        size: int = 20,
        *,
        unifi_client: Optional[Unifi] = None,
    ) -> List["Content"]:
        """
        Get a page of content from a library, with manufacturer and model filled in.

        Arguments:
            library_id: The ID of the library.
            size: How many items to return.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Returns:
            The content in the order the service returned it.
        """
        return []

    @classmethod
    def from_name(cls, name: str, *, unifi_client: Optional[Unifi] = None) -> "Content":
        """
        Get a piece of content by its name. When several match, a
        `UnifiAmbiguousResultWarning` is issued and the first is used.

        Arguments:
            name: The name of the content.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Raises:
            UnifiNotFoundError: If nothing matches.

        Returns:
            The content.
        """
        return cls()

    @classmethod
    def from_revision_id(
        cls,
        revision_id: str,
        library_id: str,
        *,
        unifi_client: Optional[Unifi] = None,
    ) -> "Content":
        """
        Get a piece of content by one of its FileRevisionIds. When several match, a
        `UnifiAmbiguousResultWarning` is issued and the first is used.

        Arguments:
            revision_id: The FileRevisionId of the content.
            library_id: The ID of a library the content belongs to.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Raises:
            UnifiNotFoundError: If nothing matches.

        Returns:
            The content.
        """
        return cls()

    def set_type_parameter_value(
        self,
        type_name: str,
        parameter_name: str,
        value: str,
        data_type: str = "TEXT",
        revit_year: int = 2016,
        *,
        unifi_client: Optional[Unifi] = None,
    ) -> "Batch":
        """
        Submit a batch that sets one type parameter of one family type of this
        content.

        Arguments:
            type_name: The Revit family type name.
            parameter_name: The name of the type parameter.
            value: The new value.
            data_type: The data type of the parameter. Defaults to `TEXT`.
            revit_year: The Revit year of the family. Defaults to 2016.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Returns:
            The submitted batch.
        """
        return None
