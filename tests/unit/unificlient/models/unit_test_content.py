import json
import warnings
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from unificlient.core.exceptions import (
    UnifiAmbiguousResultWarning,
    UnifiMalformedResponseError,
    UnifiNotFoundError,
)
from unificlient.models import Batch, Content, Library, Parameter

FILE_ID = "3b8f1a2c-4d5e-4f60-8a7b-9c0d1e2f3a4b"


def get_example_unifi_content(title: str = "Desk", file_id: str = FILE_ID):
    return {
        "RepositoryFileId": file_id,
        "ActiveRevisionId": "a1a1a1a1-0000-4000-8000-000000000001",
        "CurrentRevisionId": "a1a1a1a1-0000-4000-8000-000000000001",
        "ApprovedRevisionId": "a1a1a1a1-0000-4000-8000-000000000000",
        "Title": title,
        "Filename": f"{title}.rfa",
        "Category": "Furniture",
        "RevitYear": 2016,
        "FileType": 0,
        "Size": 1024,
        "Downloads": 3,
        "ApprovalStatus": 1,
        "ParseStatus": 2,
        "MeasurementSystem": 0,
        "UserRating": 4,
        "HasCustomPreviewImage": False,
        "HasTypeCatalog": True,
        "CreatedDate": "2019-02-03T04:05:06",
        "LastModifiedDate": "2019-02-04T04:05:06",
        "OriginalDateAdded": "2019-02-03T04:05:06",
        "CreatorUsername": "someone@example.com",
        "PreviewImageUrl": "https://example.com/desk.png",
        "AggregateRating": {"Average": 4.5},
        "Brands": [],
        "Channels": None,
        "Favorites": [],
        "FileImageBytes": None,
        "FillPatternType": None,
        "LocalPath": None,
        "MaterialClass": None,
        "Measurements": [],
        "NextRevisionNumber": None,
        "Ratings": [],
        "RepositoryNumber": None,
        "RevisionNumber": None,
        "TypeCatalogBytes": None,
        "Parameters": [
            {"Name": "Manufacturer", "TypeName": "60x30", "Value": "ACME"},
            {"Name": "Model", "TypeName": "60x30", "Value": "D-100"},
            {"Name": "Width", "TypeName": "72x36", "Value": "72", "DisplayUnitType": None},
            {"Name": "Description", "TypeName": "", "Value": "A desk"},
        ],
        "Revisions": [
            {
                "FileRevisionId": "a1a1a1a1-0000-4000-8000-000000000001",
                "RevisionNumber": 1,
                "Status": 1,
                "Username": "someone@example.com",
                "Notes": "Initial",
                "Created": "2019-02-03T04:05:06",
                "BaseFileVersions": [
                    {
                        "FileVersionId": "b2b2b2b2-0000-4000-8000-000000000001",
                        "IsBaseVersion": True,
                        "OriginalFilename": f"{title}.rfa",
                        "RepositoryNumber": 7,
                        "RevitYear": 2016,
                    }
                ],
            }
        ],
        "Tags": None,
        "Libraries": [{"LibraryId": "lib-1", "Name": "Furniture"}],
    }


class TestContent:
    def test_fill_from_dict(self) -> None:
        # GIVEN a blank content
        content = Content()

        # WHEN I fill it from a dictionary
        content.fill_from_dict(get_example_unifi_content())

        # THEN the content should be filled
        assert content.repository_file_id == FILE_ID
        assert content.active_revision_id == "a1a1a1a1-0000-4000-8000-000000000001"
        assert content.title == "Desk"
        assert content.revit_year == 2016
        assert content.has_type_catalog is True
        assert len(content.parameters) == 4
        assert content.parameters[0] == Parameter(
            name="Manufacturer", type_name="60x30", value="ACME"
        )
        assert content.parameters[2].display_unit_type is None
        assert content.revisions[0].base_file_versions[0].repository_number == 7
        assert content.tags == []
        assert content.libraries == [Library(id="lib-1", name="Furniture")]

        # AND the derived fields are not read from the response
        assert content.manufacturer is None
        assert content.family_types == []

    def test_fill_from_sparse_dict(self) -> None:
        # GIVEN a response with almost nothing in it
        content = Content().fill_from_dict({"RepositoryFileId": FILE_ID, "Parameters": None})

        # THEN missing values are None and lists are empty
        assert content.repository_file_id == FILE_ID
        assert content.title is None
        assert content.parameters == []
        assert content.revisions == []

    def test_to_unifi_request_keeps_opaque_fields(self) -> None:
        # GIVEN content filled from a response
        original = get_example_unifi_content()
        content = Content().fill_from_dict(original)

        # WHEN I convert it back
        request = content.to_unifi_request()

        # THEN opaque values come back unchanged
        assert request["AggregateRating"] == {"Average": 4.5}
        assert request["RepositoryFileId"] == FILE_ID
        assert request["Parameters"][0]["Value"] == "ACME"
        assert request["Revisions"][0]["BaseFileVersions"][0]["RepositoryNumber"] == 7
        assert "Manufacturer" not in request

        # AND it serializes as JSON
        assert json.loads(json.dumps(request))["Title"] == "Desk"

    def test_load_family_types(self) -> None:
        # GIVEN content with parameters on two family types
        content = Content().fill_from_dict(get_example_unifi_content())

        # WHEN I load the family types
        family_types = content.load_family_types()

        # THEN both appear once
        assert family_types == ["60x30", "72x36"]
        assert content.family_types == ["60x30", "72x36"]

    @patch("unificlient.models.content.search_library_content", new_callable=AsyncMock)
    async def test_from_library(self, mock_search, unifi) -> None:
        # GIVEN a library with two pieces of content
        mock_search.return_value = [
            get_example_unifi_content("Desk", "f1"),
            get_example_unifi_content("Chair", "f2"),
        ]

        # WHEN I list its content
        contents = await Content.from_library_async("lib-1", unifi_client=unifi)

        # THEN the content comes back with manufacturer and model filled
        assert [content.title for content in contents] == ["Desk", "Chair"]
        assert contents[0].manufacturer == "ACME"
        assert contents[0].model == "D-100"
        mock_search.assert_awaited_once_with(
            library_id="lib-1", size=20, unifi_client=unifi
        )

    @patch("unificlient.models.content.search_content_by_name", new_callable=AsyncMock)
    async def test_from_name(self, mock_search, unifi) -> None:
        # GIVEN one match
        mock_search.return_value = [get_example_unifi_content()]

        # WHEN I get content by name
        content = await Content.from_name_async(name="Desk", unifi_client=unifi)

        # THEN it is returned with the derived fields
        assert content.repository_file_id == FILE_ID
        assert content.manufacturer == "ACME"

    @patch("unificlient.models.content.search_content_by_name", new_callable=AsyncMock)
    async def test_from_name_not_found(self, mock_search, unifi) -> None:
        # GIVEN no match
        mock_search.return_value = []

        # WHEN I get content by name
        # THEN a not found error is raised
        with pytest.raises(UnifiNotFoundError):
            await Content.from_name_async(name="Desk", unifi_client=unifi)

    @patch("unificlient.models.content.search_content_by_name", new_callable=AsyncMock)
    async def test_from_name_ambiguous(self, mock_search, unifi) -> None:
        # GIVEN two matches
        mock_search.return_value = [
            get_example_unifi_content("Desk", "f1"),
            get_example_unifi_content("Desk", "f2"),
        ]

        # WHEN I get content by name
        # THEN the first is returned with a warning
        with pytest.warns(UnifiAmbiguousResultWarning):
            content = await Content.from_name_async(name="Desk", unifi_client=unifi)
        assert content.repository_file_id == "f1"

    @patch("unificlient.models.content.search_content_by_name", new_callable=AsyncMock)
    async def test_repeated_ambiguous_search_warns_each_time(
        self, mock_search, unifi
    ) -> None:
        # GIVEN a name that always matches two pieces of content
        mock_search.return_value = [
            get_example_unifi_content("Desk", "f1"),
            get_example_unifi_content("Desk", "f2"),
        ]

        # WHEN I search for it twice
        with warnings.catch_warnings(record=True) as caught:
            first = await Content.from_name_async(name="Desk", unifi_client=unifi)
            second = await Content.from_name_async(name="Desk", unifi_client=unifi)

        # THEN both searches returned the first match and both warned
        assert first.repository_file_id == second.repository_file_id == "f1"
        assert [w.category for w in caught].count(UnifiAmbiguousResultWarning) == 2

    @patch(
        "unificlient.models.content.search_content_by_revision_id",
        new_callable=AsyncMock,
    )
    async def test_from_revision_id(self, mock_search, unifi) -> None:
        # GIVEN one match
        mock_search.return_value = [get_example_unifi_content()]

        # WHEN I get content by revision
        content = await Content.from_revision_id_async(
            revision_id="rev-1", library_id="lib-1", unifi_client=unifi
        )

        # THEN it is returned
        assert content.repository_file_id == FILE_ID
        mock_search.assert_awaited_once_with(
            revision_id="rev-1", library_id="lib-1", unifi_client=unifi
        )

    @patch("unificlient.models.content.set_type_parameter_value", new_callable=AsyncMock)
    async def test_set_type_parameter_value(self, mock_set, unifi) -> None:
        # GIVEN content and a service accepting the batch
        mock_set.return_value = {"BatchId": "b1", "Details": [{"x": 1}]}
        content = Content(repository_file_id=FILE_ID)

        # WHEN I set a type parameter
        batch = await content.set_type_parameter_value_async(
            type_name="60x30",
            parameter_name="Manufacturer",
            value="ACME",
            unifi_client=unifi,
        )

        # THEN a batch is returned
        assert batch == Batch(batch_id="b1", details=[{"x": 1}])

        # AND the TEXT data type and Revit 2016 were used
        mock_set.assert_awaited_once_with(
            repository_file_id=FILE_ID,
            type_name="60x30",
            parameter_name="Manufacturer",
            parameter_value="ACME",
            data_type="TEXT",
            revit_year=2016,
            unifi_client=unifi,
        )

    async def test_set_type_parameter_value_requires_id(self, unifi) -> None:
        with pytest.raises(ValueError):
            await Content().set_type_parameter_value_async(
                type_name="A", parameter_name="Model", value="X", unifi_client=unifi
            )


class TestMalformedContent:
    @pytest.mark.parametrize(
        "body",
        [
            [{"RepositoryFileId": "f1", "Parameters": "abc"}],
            [{"RepositoryFileId": "f1", "Parameters": [1, 2]}],
            [{"RepositoryFileId": "f1", "Tags": {"TagId": "t1"}}],
            [{"RepositoryFileId": "f1", "Revisions": [{"BaseFileVersions": ["x"]}]}],
            ["oops"],
        ],
    )
    async def test_from_library_wrong_shape(self, body, unifi_with_transport) -> None:
        # GIVEN a service answering with valid JSON of the wrong shape
        unifi = unifi_with_transport(lambda request: httpx.Response(200, json=body))

        # WHEN I list the content of a library
        # THEN a malformed response error carrying the offending record is raised
        with pytest.raises(UnifiMalformedResponseError) as ex:
            await Content.from_library_async(library_id="lib-1", unifi_client=unifi)
        assert ex.value.body

    def test_nested_error_carries_whole_record(self) -> None:
        # GIVEN a record with parameters that are not objects
        record = {"RepositoryFileId": "f1", "Parameters": ["Manufacturer"]}

        # WHEN I fill content from it
        with pytest.raises(UnifiMalformedResponseError) as ex:
            Content().fill_from_dict(record)

        # THEN the error carries the whole record
        assert json.loads(ex.value.body) == record

    def test_guid_key(self) -> None:
        parameter = Parameter().fill_from_dict({"Name": "Width", "GUID": "g-1"})
        assert parameter.guid == "g-1"
        assert parameter.to_unifi_request()["GUID"] == "g-1"
        assert "Guid" not in parameter.to_unifi_request()
