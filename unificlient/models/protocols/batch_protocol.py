"""Protocol for the specific methods of this class that have synchronous counterparts
generated at runtime."""

from typing import TYPE_CHECKING, Optional, Protocol

from unificlient import Unifi

if TYPE_CHECKING:
    from unificlient.models import BatchStatus


class BatchSynchronousProtocol(Protocol):
    """
    The protocol for methods that are asynchronous but also
    have a synchronous counterpart that may also be called.
    """

    def get_status(self, *, unifi_client: Optional[Unifi] = None) -> "BatchStatus":
        """
        Fetch the current status of this batch once.

        Arguments:
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Returns:
            The status of the batch.
        """
        return None


class BatchStatusSynchronousProtocol(Protocol):
    """
    The protocol for methods that are asynchronous but also
    have a synchronous counterpart that may also be called.
    """

    def get(self, *, unifi_client: Optional[Unifi] = None) -> "BatchStatus":
        """
        Fetch the status of the batch identified by `batch_id`.

        Arguments:
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Raises:
            ValueError: If `batch_id` is not set.

        Returns:
            This object, filled in.
        """
        return self
