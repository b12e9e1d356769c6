"""Batches are remote mutation jobs. Submitting one only queues the work, its progress
is read afterwards as a `BatchStatus`."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from opentelemetry import trace

from unificlient import Unifi
from unificlient.api import get_batch_status
from unificlient.core.async_utils import async_to_sync, otel_trace_method
from unificlient.core.exceptions import UnifiMalformedResponseError
from unificlient.core.utils import get_int, get_value, raw_body
from unificlient.models.protocols.batch_protocol import (
    BatchStatusSynchronousProtocol,
    BatchSynchronousProtocol,
)


class BatchState(str, Enum):
    """
    How far along a batch is, as shown to a user.

    When the counters overlap, FAILED wins over PENDING, which wins over COMPLETE.
    """

    FAILED = "Failed"
    """At least one file failed."""

    PENDING = "Pending"
    """Some files are still waiting to be processed."""

    COMPLETE = "Complete"
    """Nothing is pending and every file succeeded."""

    UNKNOWN = "Unknown"
    """The counters do not fit any of the other states."""


@dataclass
@async_to_sync
class BatchStatus(BatchStatusSynchronousProtocol):
    """
    A snapshot of the progress of a batch. Until the batch is complete,
    `ok_files + pending_files + failed_files` may be less than `total_files`.

    Attributes:
        batch_id: The ID the status was fetched with. Not part of the response.
        total_files: Files the batch touches.
        ok_files: Files processed successfully.
        pending_files: Files waiting to be processed.
        failed_files: Files that could not be processed.
        total_operations: Operations in the batch.
        completed_operations: Operations done so far.
        result_details: Free text details from the service.
        error: The error reported by the service, if any.

    Example: Checking on a batch
        &nbsp;

            from unificlient.models import BatchStatus

            status = BatchStatus(batch_id="7a3e...").get()
            print(status.state)
    """

    batch_id: Optional[str] = None
    """The ID the status was fetched with"""

    total_files: Optional[int] = None
    ok_files: Optional[int] = None
    pending_files: Optional[int] = None
    failed_files: Optional[int] = None
    total_operations: Optional[int] = None
    completed_operations: Optional[int] = None
    result_details: Optional[str] = None
    error: Optional[str] = None

    @property
    def state(self) -> BatchState:
        """Classify the counters, treating missing ones as 0."""
        total = self.total_files or 0
        ok = self.ok_files or 0
        pending = self.pending_files or 0
        failed = self.failed_files or 0

        if failed >= 1:
            return BatchState.FAILED
        if pending > 0:
            return BatchState.PENDING
        if pending == 0 and ok == total:
            return BatchState.COMPLETE
        return BatchState.UNKNOWN

    @property
    def summary(self) -> str:
        """The counters on one line, e.g. `10 Files | 3 Pending | 7 Complete | 0 Failed`."""
        return (
            f"{self.total_files or 0} Files | {self.pending_files or 0} Pending | "
            f"{self.ok_files or 0} Complete | {self.failed_files or 0} Failed"
        )

    def fill_from_dict(self, unifi_batch_status: Dict[str, Any]) -> "BatchStatus":
        """
        Converts a response from the REST API into this dataclass.

        Arguments:
            unifi_batch_status: The response from the REST API.

        Returns:
            The BatchStatus object.

        Raises:
            UnifiMalformedResponseError: If a counter is not an integer. Integral
                numbers sent as strings or floats are accepted.
        """
        unifi_batch_status = unifi_batch_status or {}
        try:
            self.total_files = get_int(unifi_batch_status, "TotalFiles")
            self.ok_files = get_int(unifi_batch_status, "OkFiles")
            self.pending_files = get_int(unifi_batch_status, "PendingFiles")
            self.failed_files = get_int(unifi_batch_status, "FailedFiles")
            self.total_operations = get_int(unifi_batch_status, "TotalOperations")
            self.completed_operations = get_int(
                unifi_batch_status, "CompletedOperations"
            )
        except UnifiMalformedResponseError as ex:
            raise UnifiMalformedResponseError(
                f"Malformed batch status {self.batch_id}: {ex}",
                body=raw_body(unifi_batch_status),
            ) from ex
        self.result_details = get_value(unifi_batch_status, "resultDetails")
        self.error = get_value(unifi_batch_status, "Error")
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        return {
            "TotalFiles": self.total_files,
            "OkFiles": self.ok_files,
            "PendingFiles": self.pending_files,
            "FailedFiles": self.failed_files,
            "TotalOperations": self.total_operations,
            "CompletedOperations": self.completed_operations,
            "resultDetails": self.result_details,
            "Error": self.error,
        }

    @otel_trace_method(
        method_to_trace_name=lambda self, **kwargs: f"Batch_Status_Get: {self.batch_id}"
    )
    async def get_async(self, *, unifi_client: Optional[Unifi] = None) -> "BatchStatus":
        """
        Fetch the status of the batch identified by `batch_id`. One request is made
        per call, there is no retry or polling loop.

        Arguments:
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Raises:
            ValueError: If `batch_id` is not set.
            UnifiRemoteError: If the status could not be fetched.

        Returns:
            This object, filled in.
        """
        if not self.batch_id:
            raise ValueError("BatchStatus must have a batch_id")
        response = await get_batch_status(
            batch_id=self.batch_id, unifi_client=unifi_client
        )
        self.fill_from_dict(response)
        trace.get_current_span().set_attributes(
            {"unifi.batch_id": self.batch_id, "unifi.batch_state": self.state.value}
        )
        return self


@dataclass
@async_to_sync
class Batch(BatchSynchronousProtocol):
    """
    A submitted batch.

    Attributes:
        batch_id: The ID of the batch, used to fetch its status.
        details: Passed through unchanged.
    """

    batch_id: Optional[str] = None
    """The ID of the batch"""

    details: Optional[List[Any]] = None

    def fill_from_dict(self, unifi_batch: Dict[str, Any]) -> "Batch":
        """
        Converts a response from the REST API into this dataclass.

        Arguments:
            unifi_batch: The response from the REST API.

        Returns:
            The Batch object.
        """
        unifi_batch = unifi_batch or {}
        self.batch_id = get_value(unifi_batch, "BatchId")
        self.details = get_value(unifi_batch, "Details")
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        return {"BatchId": self.batch_id, "Details": self.details}

    @otel_trace_method(
        method_to_trace_name=lambda self, **kwargs: f"Batch_Get_Status: {self.batch_id}"
    )
    async def get_status_async(
        self, *, unifi_client: Optional[Unifi] = None
    ) -> BatchStatus:
        """
        Fetch the current status of this batch once.

        Arguments:
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Returns:
            The status of the batch.
        """
        return await BatchStatus(batch_id=self.batch_id).get_async(
            unifi_client=unifi_client
        )
