"""
The logic behind a content manager screen: pick a library, browse its content, edit
the Manufacturer and Model of a family type and keep an eye on the resulting batches.

Everything a screen would keep on its widgets lives on an explicit
`ContentManagerState`, and each user action is a function over that state. A user
interface binds its widgets to the state and calls these functions from its event
handlers.

Example: Editing a family the way the screen does
    &nbsp;

        import unificlient
        from unificlient.models.content_manager import (
            ContentManagerState,
            load_libraries,
            open_edit_form,
            refresh_batch_status,
            save_edit_form,
            select_content,
            select_library,
        )

        unificlient.login()
        state = ContentManagerState()
        libraries = load_libraries(state)
        select_library(state, libraries[0])
        select_content(state, state.contents[:1])
        form = open_edit_form(state)
        form.manufacturer = "ACME"
        save_edit_form(state, form)
        refresh_batch_status(state)
        print(state.batch_log)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from unificlient import Unifi
from unificlient.core.async_utils import wrap_async_to_sync
from unificlient.core.exceptions import UnifiError
from unificlient.models.batch import Batch, BatchStatus
from unificlient.models.content import DEFAULT_DATA_TYPE, DEFAULT_REVIT_YEAR, Content
from unificlient.models.library import Library
from unificlient.models.services.parameter_mapping import (
    MANUFACTURER_PARAMETER,
    MODEL_PARAMETER,
)

MULTIPLE_SELECTION_MESSAGE = (
    "Multiple items selected. Select an individual row to review object ID's."
)
BATCH_LOG_SEPARATOR = "\n---\n"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class EditForm:
    """
    The values of the edit form for one piece of content.

    Attributes:
        content: The content being edited.
        manufacturer: Prefilled with the current manufacturer.
        model: Prefilled with the current model.
        family_types: The family types the values can be written to.
        selected_family_type: The family type the values are written to. The first
            family type when the form opens.
    """

    content: Content
    manufacturer: str = ""
    model: str = ""
    family_types: List[str] = field(default_factory=list)
    selected_family_type: Optional[str] = None


@dataclass
class ContentManagerState:
    """
    Everything the content manager screen shows.

    Attributes:
        libraries: The libraries to choose from, sorted by name.
        selected_library: The library whose content is listed.
        contents: The content of the selected library.
        selected: The selected rows of `contents`.
        status_text: The status line.
        edit_enabled: Whether editing is possible, i.e. something is selected.
        edit_form: The open edit form. None when the form is closed.
        batch_ids: Every batch submitted, oldest first.
        batch_log: The batch monitor text.
    """

    libraries: List[Library] = field(default_factory=list)
    selected_library: Optional[Library] = None
    contents: List[Content] = field(default_factory=list)
    selected: List[Content] = field(default_factory=list)
    status_text: str = ""
    edit_enabled: bool = False
    edit_form: Optional[EditForm] = None
    batch_ids: List[str] = field(default_factory=list)
    batch_log: str = ""


async def load_libraries_async(
    state: ContentManagerState, *, unifi_client: Optional[Unifi] = None
) -> List[Library]:
    """
    Load the libraries to choose from.

    Arguments:
        state: The screen state to update.
        unifi_client: If not passed in and caching was not disabled by
            `Unifi.allow_client_caching(False)` this will use the last created
            instance from the Unifi class constructor.

    Returns:
        The libraries, sorted by name.
    """
    state.libraries = await Library.list_async(
        sort_by_name=True, unifi_client=unifi_client
    )
    return state.libraries


async def select_library_async(
    state: ContentManagerState,
    library: Library,
    *,
    unifi_client: Optional[Unifi] = None,
) -> List[Content]:
    """
    List the content of a library. The selection is cleared and the status line
    shows the library name and how many items were loaded.

    Arguments:
        state: The screen state to update.
        library: The library to list.
        unifi_client: If not passed in and caching was not disabled by
            `Unifi.allow_client_caching(False)` this will use the last created
            instance from the Unifi class constructor.

    Returns:
        The content, with manufacturer and model filled in.
    """
    contents = await Content.from_library_async(
        library_id=library.id, unifi_client=unifi_client
    )
    state.selected_library = library
    state.contents = contents
    state.selected = []
    state.edit_enabled = False
    state.status_text = f"{library.name}: {len(contents)}"
    return contents


def select_content(state: ContentManagerState, selected: Sequence[Content]) -> str:
    """
    Change the selected rows. One row shows its IDs on the status line, several
    show a hint instead, and none leaves the status line as it was.

    Arguments:
        state: The screen state to update.
        selected: The selected content.

    Returns:
        The status line.
    """
    state.selected = list(selected)
    state.edit_enabled = len(state.selected) > 0

    if len(state.selected) == 1:
        content = state.selected[0]
        state.status_text = (
            f"RepositoryFileId: {content.repository_file_id} | "
            f"ActiveRevisionId: {content.active_revision_id}"
        )
    elif len(state.selected) > 1:
        state.status_text = MULTIPLE_SELECTION_MESSAGE
    return state.status_text


def open_edit_form(state: ContentManagerState) -> Optional[EditForm]:
    """
    Open the edit form for the first selected row.

    Arguments:
        state: The screen state to update.

    Returns:
        The form, or None when nothing is selected.
    """
    if not state.selected:
        return None

    content = state.selected[0]
    family_types = content.load_family_types()
    state.edit_form = EditForm(
        content=content,
        manufacturer=content.manufacturer or "",
        model=content.model or "",
        family_types=list(family_types),
        selected_family_type=family_types[0] if family_types else None,
    )
    return state.edit_form


def close_edit_form(state: ContentManagerState) -> None:
    """Close the edit form, discarding its values."""
    state.edit_form = None


async def save_edit_form_async(
    state: ContentManagerState,
    form: Optional[EditForm] = None,
    *,
    data_type: str = DEFAULT_DATA_TYPE,
    revit_year: int = DEFAULT_REVIT_YEAR,
    unifi_client: Optional[Unifi] = None,
) -> List[Batch]:
    """
    Write the form values to UNIFI as two batches, Manufacturer first and then
    Model. The batches are independent: if the second is rejected the first one
    stays submitted. The form is closed either way.

    Arguments:
        state: The screen state to update.
        form: The form to save. Defaults to the open form.
        data_type: The data type of both parameters.
        revit_year: The Revit year of the family.
        unifi_client: If not passed in and caching was not disabled by
            `Unifi.allow_client_caching(False)` this will use the last created
            instance from the Unifi class constructor.

    Raises:
        ValueError: If there is no form, or it has no family type selected.
        UnifiError: If a batch was rejected. It is logged before being raised.

    Returns:
        The submitted batches.
    """
    form = form or state.edit_form
    if form is None:
        raise ValueError("There is no edit form to save")
    if not form.selected_family_type:
        raise ValueError("A family type must be selected")

    client = Unifi.get_client(unifi_client=unifi_client)
    batches = []
    try:
        for parameter_name, value in (
            (MANUFACTURER_PARAMETER, form.manufacturer),
            (MODEL_PARAMETER, form.model),
        ):
            try:
                batch = await form.content.set_type_parameter_value_async(
                    type_name=form.selected_family_type,
                    parameter_name=parameter_name,
                    value=value,
                    data_type=data_type,
                    revit_year=revit_year,
                    unifi_client=client,
                )
            except UnifiError:
                client.logger.exception(
                    f"Could not set {parameter_name} on {form.content.repository_file_id}"
                )
                raise
            batches.append(batch)
            state.batch_ids.append(batch.batch_id)
    finally:
        close_edit_form(state)
    return batches


async def refresh_batch_status_async(
    state: ContentManagerState,
    batch_id: Optional[str] = None,
    *,
    unifi_client: Optional[Unifi] = None,
) -> BatchStatus:
    """
    Fetch the status of a batch once and add it to the batch monitor as
    `[<local time>]<batch id>: <state>` followed by a `---` line.

    Arguments:
        state: The screen state to update.
        batch_id: The batch to check. Defaults to the most recent one.
        unifi_client: If not passed in and caching was not disabled by
            `Unifi.allow_client_caching(False)` this will use the last created
            instance from the Unifi class constructor.

    Raises:
        ValueError: If no batch was given and none has been submitted.

    Returns:
        The status of the batch.
    """
    if batch_id is None:
        if not state.batch_ids:
            raise ValueError("No batch has been submitted")
        batch_id = state.batch_ids[-1]

    status = await BatchStatus(batch_id=batch_id).get_async(unifi_client=unifi_client)
    timestamp = datetime.now().astimezone().strftime(TIMESTAMP_FORMAT)
    state.batch_log += f"[{timestamp}]{batch_id}: {status.state.value}{BATCH_LOG_SEPARATOR}"
    return status


def clear_batch_log(state: ContentManagerState) -> None:
    """Empty the batch monitor."""
    state.batch_log = ""


def load_libraries(
    state: ContentManagerState, *, unifi_client: Optional[Unifi] = None
) -> List[Library]:
    """Synchronous version of `load_libraries_async`."""
    return wrap_async_to_sync(load_libraries_async(state, unifi_client=unifi_client))


def select_library(
    state: ContentManagerState,
    library: Library,
    *,
    unifi_client: Optional[Unifi] = None,
) -> List[Content]:
    """Synchronous version of `select_library_async`."""
    return wrap_async_to_sync(
        select_library_async(state, library, unifi_client=unifi_client)
    )


def save_edit_form(
    state: ContentManagerState, form: Optional[EditForm] = None, **kwargs
) -> List[Batch]:
    """Synchronous version of `save_edit_form_async`."""
    return wrap_async_to_sync(save_edit_form_async(state, form, **kwargs))


def refresh_batch_status(
    state: ContentManagerState, batch_id: Optional[str] = None, **kwargs
) -> BatchStatus:
    """Synchronous version of `refresh_batch_status_async`."""
    return wrap_async_to_sync(refresh_batch_status_async(state, batch_id, **kwargs))
