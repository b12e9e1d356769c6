# These are all of the models that are used by the UNIFI client.
from unificlient.models.batch import Batch, BatchState, BatchStatus
from unificlient.models.content import (
    BaseFileVersion,
    Content,
    Parameter,
    Revision,
    Tag,
)
from unificlient.models.content_manager import ContentManagerState, EditForm
from unificlient.models.library import Library

__all__ = [
    "Batch",
    "BatchState",
    "BatchStatus",
    "BaseFileVersion",
    "Content",
    "Parameter",
    "Revision",
    "Tag",
    "Library",
    "ContentManagerState",
    "EditForm",
]
