"""Content is the UNIFI name for a Revit family and the records nested inside it."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from opentelemetry import trace

from unificlient import Unifi
from unificlient.api import (
    search_content_by_name,
    search_content_by_revision_id,
    search_library_content,
    set_type_parameter_value,
)
from unificlient.api.search_services import DEFAULT_PAGE_SIZE
from unificlient.core.async_utils import async_to_sync, otel_trace_method
from unificlient.core.exceptions import UnifiMalformedResponseError
from unificlient.core.utils import get_object_list, get_value, raw_body
from unificlient.models.batch import Batch
from unificlient.models.library import Library
from unificlient.models.protocols.content_protocol import ContentSynchronousProtocol
from unificlient.models.services.parameter_mapping import (
    fill_manufacturer_and_model,
    get_family_types,
)
from unificlient.models.services.search import resolve_single_result

DEFAULT_DATA_TYPE = "TEXT"
DEFAULT_REVIT_YEAR = 2016

# attribute name -> key used by the REST API
PARAMETER_KEYS = {
    "name": "Name",
    "type_name": "TypeName",
    "value": "Value",
    "numeric_value": "NumericValue",
    "guid": "GUID",
    "parameter_group": "ParameterGroup",
    "storage_type": "StorageType",
    "parameter_type": "ParameterType",
    "display_unit_type": "DisplayUnitType",
    "is_read_only": "IsReadOnly",
    "is_reporting": "IsReporting",
    "is_instance": "IsInstance",
    "visible": "Visible",
    "built_in_parameter": "BuiltInParameter",
    "is_determined_by_formula": "IsDeterminedByFormula",
    "can_assign_formula": "CanAssignFormula",
    "is_base_version": "IsBaseVersion",
    "set_by_type_catalog": "SetByTypeCatalog",
    "family_category": "FamilyCategory",
    "revit_year": "RevitYear",
    "element_id": "ElementId",
    "file_id": "FileId",
    "file_revision_id": "FileRevisionId",
    "file_version_id": "FileVersionId",
}

BASE_FILE_VERSION_KEYS = {
    "file_version_id": "FileVersionId",
    "is_base_version": "IsBaseVersion",
    "original_filename": "OriginalFilename",
    "repository_number": "RepositoryNumber",
    "revit_year": "RevitYear",
    "fill_pattern_type": "FillPatternType",
    "material_class": "MaterialClass",
}

REVISION_KEYS = {
    "file_revision_id": "FileRevisionId",
    "revision_number": "RevisionNumber",
    "status": "Status",
    "username": "Username",
    "notes": "Notes",
    "created": "Created",
    "fill_pattern_type": "FillPatternType",
    "material_class": "MaterialClass",
}

TAG_KEYS = {
    "tag_id": "TagId",
    "tag_string": "TagString",
    "repository_number": "RepositoryNumber",
}

CONTENT_KEYS = {
    "repository_file_id": "RepositoryFileId",
    "active_revision_id": "ActiveRevisionId",
    "current_revision_id": "CurrentRevisionId",
    "approved_revision_id": "ApprovedRevisionId",
    "title": "Title",
    "filename": "Filename",
    "category": "Category",
    "revit_year": "RevitYear",
    "file_type": "FileType",
    "size": "Size",
    "downloads": "Downloads",
    "approval_status": "ApprovalStatus",
    "parse_status": "ParseStatus",
    "measurement_system": "MeasurementSystem",
    "user_rating": "UserRating",
    "has_custom_preview_image": "HasCustomPreviewImage",
    "has_type_catalog": "HasTypeCatalog",
    "created_date": "CreatedDate",
    "last_modified_date": "LastModifiedDate",
    "original_date_added": "OriginalDateAdded",
    "creator_username": "CreatorUsername",
    "preview_image_url": "PreviewImageUrl",
    "aggregate_rating": "AggregateRating",
    "brands": "Brands",
    "channels": "Channels",
    "favorites": "Favorites",
    "file_image_bytes": "FileImageBytes",
    "fill_pattern_type": "FillPatternType",
    "local_path": "LocalPath",
    "material_class": "MaterialClass",
    "measurements": "Measurements",
    "next_revision_number": "NextRevisionNumber",
    "ratings": "Ratings",
    "repository_number": "RepositoryNumber",
    "revision_number": "RevisionNumber",
    "type_catalog_bytes": "TypeCatalogBytes",
}


def _fill_fields(target: Any, keys: Dict[str, str], data: Dict[str, Any]) -> None:
    for attribute, key in keys.items():
        setattr(target, attribute, get_value(data, key))


def _to_request(source: Any, keys: Dict[str, str]) -> Dict[str, Any]:
    return {key: getattr(source, attribute) for attribute, key in keys.items()}


@dataclass
class Parameter:
    """
    A single Revit parameter of a piece of content. Type parameters are repeated once
    per family type, with `type_name` telling them apart.

    Attributes:
        name: The name of the parameter, e.g. `Manufacturer`.
        type_name: The family type this value belongs to. Empty for instance or
            family level parameters.
        value: The value as text.
        numeric_value: The numeric value as text, when the parameter is numeric.
        display_unit_type: The display unit. May be null.
    """

    name: Optional[str] = None
    type_name: Optional[str] = None
    value: Optional[str] = None
    numeric_value: Optional[str] = None
    guid: Optional[str] = None
    parameter_group: Optional[int] = None
    storage_type: Optional[int] = None
    parameter_type: Optional[int] = None
    display_unit_type: Optional[int] = None
    is_read_only: Optional[bool] = None
    is_reporting: Optional[bool] = None
    is_instance: Optional[bool] = None
    visible: Optional[bool] = None
    built_in_parameter: Optional[int] = None
    is_determined_by_formula: Optional[bool] = None
    can_assign_formula: Optional[bool] = None
    is_base_version: Optional[bool] = None
    set_by_type_catalog: Optional[bool] = None
    family_category: Optional[str] = None
    revit_year: Optional[int] = None
    element_id: Optional[int] = None
    file_id: Optional[str] = None
    file_revision_id: Optional[str] = None
    file_version_id: Optional[str] = None

    def fill_from_dict(self, unifi_parameter: Dict[str, Any]) -> "Parameter":
        """
        Converts a response from the REST API into this dataclass.

        Arguments:
            unifi_parameter: The response from the REST API.

        Returns:
            The Parameter object.
        """
        _fill_fields(self, PARAMETER_KEYS, unifi_parameter or {})
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        return _to_request(self, PARAMETER_KEYS)


@dataclass
class BaseFileVersion:
    """One Revit year version of a revision."""

    file_version_id: Optional[str] = None
    is_base_version: Optional[bool] = None
    original_filename: Optional[str] = None
    repository_number: Optional[int] = None
    revit_year: Optional[int] = None
    fill_pattern_type: Any = None
    material_class: Any = None

    def fill_from_dict(self, unifi_version: Dict[str, Any]) -> "BaseFileVersion":
        _fill_fields(self, BASE_FILE_VERSION_KEYS, unifi_version or {})
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        return _to_request(self, BASE_FILE_VERSION_KEYS)


@dataclass
class Revision:
    """A revision in the history of a piece of content."""

    file_revision_id: Optional[str] = None
    revision_number: Optional[int] = None
    status: Optional[int] = None
    username: Optional[str] = None
    notes: Optional[str] = None
    created: Optional[str] = None
    base_file_versions: List[BaseFileVersion] = field(default_factory=list)
    fill_pattern_type: Any = None
    material_class: Any = None

    def fill_from_dict(self, unifi_revision: Dict[str, Any]) -> "Revision":
        unifi_revision = unifi_revision or {}
        _fill_fields(self, REVISION_KEYS, unifi_revision)
        self.base_file_versions = [
            BaseFileVersion().fill_from_dict(version)
            for version in get_object_list(unifi_revision, "BaseFileVersions")
        ]
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        request = _to_request(self, REVISION_KEYS)
        request["BaseFileVersions"] = [
            version.to_unifi_request() for version in self.base_file_versions
        ]
        return request


@dataclass
class Tag:
    tag_id: Optional[str] = None
    tag_string: Optional[str] = None
    repository_number: Optional[int] = None

    def fill_from_dict(self, unifi_tag: Dict[str, Any]) -> "Tag":
        _fill_fields(self, TAG_KEYS, unifi_tag or {})
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        return _to_request(self, TAG_KEYS)


@dataclass
@async_to_sync
class Content(ContentSynchronousProtocol):
    """
    A piece of UNIFI content, typically a Revit family, as returned by `/search` with
    parameters.

    Attributes:
        repository_file_id: The ID of the content. Used as `ObjectId` in batches.
        active_revision_id: The ID of the active revision.
        current_revision_id: The ID of the current revision.
        approved_revision_id: The ID of the approved revision.
        title: The display name of the content.
        filename: The file name of the content.
        category: The Revit category.
        revit_year: The Revit year the content was saved with.
        parameters: The Revit parameters of every family type.
        revisions: The revision history.
        tags: The tags on the content.
        libraries: The libraries the content belongs to.
        manufacturer: Derived from the `Manufacturer` parameter. Never sent to or
            read from UNIFI.
        model: Derived from the `Model` parameter. Never sent to or read from UNIFI.
        family_types: Derived from the parameters by `load_family_types`.

    The remaining attributes are kept as received so they survive a round trip
    through `to_unifi_request`.

    Example: Finding content and changing a type parameter
        &nbsp;

            import unificlient
            from unificlient.models import Content

            unificlient.login()
            content = Content.from_name(name="Desk")
            batch = content.set_type_parameter_value(
                type_name="60x30",
                parameter_name="Manufacturer",
                value="ACME",
            )
            print(batch.get_status().state)
    """

    repository_file_id: Optional[str] = None
    """The ID of the content"""

    active_revision_id: Optional[str] = None
    current_revision_id: Optional[str] = None
    approved_revision_id: Optional[str] = None
    title: Optional[str] = None
    filename: Optional[str] = None
    category: Optional[str] = None
    revit_year: Optional[int] = None
    file_type: Optional[int] = None
    size: Optional[int] = None
    downloads: Optional[int] = None
    approval_status: Optional[int] = None
    parse_status: Optional[int] = None
    measurement_system: Optional[int] = None
    user_rating: Optional[int] = None
    has_custom_preview_image: Optional[bool] = None
    has_type_catalog: Optional[bool] = None
    created_date: Optional[str] = None
    last_modified_date: Optional[str] = None
    original_date_added: Optional[str] = None
    creator_username: Optional[str] = None
    preview_image_url: Optional[str] = None

    parameters: List[Parameter] = field(default_factory=list)
    """The Revit parameters of every family type"""

    revisions: List[Revision] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    libraries: List[Library] = field(default_factory=list)

    aggregate_rating: Any = None
    brands: Any = None
    channels: Any = None
    favorites: Any = None
    file_image_bytes: Any = None
    fill_pattern_type: Any = None
    local_path: Any = None
    material_class: Any = None
    measurements: Any = None
    next_revision_number: Any = None
    ratings: Any = None
    repository_number: Any = None
    revision_number: Any = None
    type_catalog_bytes: Any = None

    manufacturer: Optional[str] = None
    """Value of the `Manufacturer` parameter"""

    model: Optional[str] = None
    """Value of the `Model` parameter"""

    family_types: List[str] = field(default_factory=list)
    """The family type names, filled by `load_family_types`"""

    def fill_from_dict(self, unifi_content: Dict[str, Any]) -> "Content":
        """
        Converts a response from the REST API into this dataclass. The derived
        fields are not read from the response, see `fill_manufacturer_and_model`.

        Arguments:
            unifi_content: The response from the REST API.

        Returns:
            The Content object.

        Raises:
            UnifiMalformedResponseError: If a field has the wrong JSON type. The
                error carries the whole record.
        """
        unifi_content = unifi_content or {}
        try:
            _fill_fields(self, CONTENT_KEYS, unifi_content)
            self.parameters = [
                Parameter().fill_from_dict(parameter)
                for parameter in get_object_list(unifi_content, "Parameters")
            ]
            self.revisions = [
                Revision().fill_from_dict(revision)
                for revision in get_object_list(unifi_content, "Revisions")
            ]
            self.tags = [
                Tag().fill_from_dict(tag)
                for tag in get_object_list(unifi_content, "Tags")
            ]
            self.libraries = [
                Library().fill_from_dict(library)
                for library in get_object_list(unifi_content, "Libraries")
            ]
        except UnifiMalformedResponseError as ex:
            raise UnifiMalformedResponseError(
                f"Malformed content in the response: {ex}",
                body=raw_body(unifi_content),
            ) from ex
        return self

    def to_unifi_request(self) -> Dict[str, Any]:
        """Converts this dataclass back into the shape the REST API uses."""
        request = _to_request(self, CONTENT_KEYS)
        request["Parameters"] = [p.to_unifi_request() for p in self.parameters]
        request["Revisions"] = [r.to_unifi_request() for r in self.revisions]
        request["Tags"] = [t.to_unifi_request() for t in self.tags]
        request["Libraries"] = [lib.to_unifi_request() for lib in self.libraries]
        return request

    @classmethod
    def _from_search_result(cls, unifi_content: Dict[str, Any]) -> "Content":
        return fill_manufacturer_and_model(cls().fill_from_dict(unifi_content))

    def load_family_types(self) -> List[str]:
        """
        Fill `family_types` from the parameters.

        Returns:
            The family type names.
        """
        self.family_types = get_family_types(self.parameters)
        return self.family_types

    @classmethod
    @otel_trace_method(
        method_to_trace_name=lambda cls, library_id, *args, **kwargs: f"Content_From_Library: {library_id}"
    )
    async def from_library_async(
        cls,
        library_id: str,
        size: int = DEFAULT_PAGE_SIZE,
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
        results = await search_library_content(
            library_id=library_id, size=size, unifi_client=unifi_client
        )
        trace.get_current_span().set_attributes({"unifi.result_count": len(results)})
        return [cls._from_search_result(item) for item in results]

    @classmethod
    @otel_trace_method(
        method_to_trace_name=lambda cls, name, **kwargs: f"Content_From_Name: {name}"
    )
    async def from_name_async(
        cls, name: str, *, unifi_client: Optional[Unifi] = None
    ) -> "Content":
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
        results = await search_content_by_name(name=name, unifi_client=unifi_client)
        return cls._from_search_result(
            resolve_single_result(results, query=f"name '{name}'")
        )

    @classmethod
    @otel_trace_method(
        method_to_trace_name=lambda cls, revision_id, *args, **kwargs: f"Content_From_Revision_Id: {revision_id}"
    )
    async def from_revision_id_async(
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
        results = await search_content_by_revision_id(
            revision_id=revision_id, library_id=library_id, unifi_client=unifi_client
        )
        return cls._from_search_result(
            resolve_single_result(
                results,
                query=f"FileRevisionId {revision_id} in library {library_id}",
            )
        )

    @otel_trace_method(
        method_to_trace_name=lambda self, *args, **kwargs: f"Content_Set_Type_Parameter_Value: {self.repository_file_id}"
    )
    async def set_type_parameter_value_async(
        self,
        type_name: str,
        parameter_name: str,
        value: str,
        data_type: str = DEFAULT_DATA_TYPE,
        revit_year: int = DEFAULT_REVIT_YEAR,
        *,
        unifi_client: Optional[Unifi] = None,
    ) -> Batch:
        """
        Submit a batch that sets one type parameter of one family type of this
        content. The change happens remotely some time later, follow it with
        `Batch.get_status`.

        Arguments:
            type_name: The Revit family type name.
            parameter_name: The name of the type parameter.
            value: The new value.
            data_type: The data type of the parameter. Defaults to `TEXT`.
            revit_year: The Revit year of the family. Defaults to 2016.
            unifi_client: If not passed in and caching was not disabled by
                `Unifi.allow_client_caching(False)` this will use the last created
                instance from the Unifi class constructor.

        Raises:
            ValueError: If this content has no `repository_file_id`.
            UnifiRemoteError: If the batch was rejected.

        Returns:
            The submitted batch.
        """
        if not self.repository_file_id:
            raise ValueError("Content must have a repository_file_id")
        batch = await set_type_parameter_value(
            repository_file_id=self.repository_file_id,
            type_name=type_name,
            parameter_name=parameter_name,
            parameter_value=value,
            data_type=data_type,
            revit_year=revit_year,
            unifi_client=unifi_client,
        )
        return Batch().fill_from_dict(batch)
