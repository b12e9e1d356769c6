"""Unit tests for the /search and /libraries services."""
import json
from unittest.mock import AsyncMock, patch

import pytest

import unificlient.api.library_services as library_services
import unificlient.api.search_services as search_services
from unificlient.core.exceptions import UnifiMalformedResponseError


class TestGetLibraries:
    @patch("unificlient.Unifi")
    async def test_get_libraries(self, mock_unifi) -> None:
        # GIVEN a mock client that returns two libraries
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_get_async.return_value = [{"id": "2"}, {"id": "1"}]

        # WHEN I get the libraries
        result = await library_services.get_libraries()

        # THEN they come back in response order
        assert result == [{"id": "2"}, {"id": "1"}]
        mock_client.rest_get_async.assert_awaited_once_with(uri="/libraries")

    @patch("unificlient.Unifi")
    async def test_get_libraries_not_a_list(self, mock_unifi) -> None:
        # GIVEN a mock client that returns an object instead of an array
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_get_async.return_value = {"Message": "nope"}

        # WHEN I get the libraries
        # THEN a malformed response error with the body is raised
        with pytest.raises(UnifiMalformedResponseError) as ex:
            await library_services.get_libraries()
        assert json.loads(ex.value.body) == {"Message": "nope"}

    @pytest.mark.parametrize("body", [["oops"], [1, 2], [{"id": "1"}, [2]]])
    @patch("unificlient.Unifi")
    async def test_get_libraries_not_objects(self, mock_unifi, body) -> None:
        # GIVEN a mock client that returns an array holding non-objects
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_get_async.return_value = body

        # WHEN I get the libraries
        # THEN a malformed response error with the whole body is raised
        with pytest.raises(UnifiMalformedResponseError) as ex:
            await library_services.get_libraries()
        assert json.loads(ex.value.body) == body


class TestSearch:
    @patch("unificlient.Unifi")
    async def test_search_library_content(self, mock_unifi) -> None:
        # GIVEN a mock client
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_post_async.return_value = [{"RepositoryFileId": "f1"}]

        # WHEN I search a library
        result = await search_services.search_library_content(library_id="lib-1")

        # THEN the wildcard search is posted with parameters and page size
        assert result == [{"RepositoryFileId": "f1"}]
        kwargs = mock_client.rest_post_async.await_args.kwargs
        assert kwargs["uri"] == "/search"
        assert json.loads(kwargs["body"]) == {
            "terms": "*",
            "libraries": ["lib-1"],
            "return": "with-parameters",
            "size": 20,
        }

    @patch("unificlient.Unifi")
    async def test_search_content_by_name(self, mock_unifi) -> None:
        # GIVEN a mock client
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_post_async.return_value = []

        # WHEN I search by a name containing quotes
        result = await search_services.search_content_by_name(name='Desk "Large"')

        # THEN the name is escaped in the JSON body
        assert result == []
        body = mock_client.rest_post_async.await_args.kwargs["body"]
        assert json.loads(body) == {"terms": 'Desk "Large"', "return": "with-parameters"}

    @patch("unificlient.Unifi")
    async def test_search_content_by_revision_id(self, mock_unifi) -> None:
        # GIVEN a mock client
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_post_async.return_value = []

        # WHEN I search by revision
        await search_services.search_content_by_revision_id(
            revision_id="rev-1", library_id="lib-1"
        )

        # THEN the revision is passed as a parameter filter
        body = json.loads(mock_client.rest_post_async.await_args.kwargs["body"])
        assert body == {
            "terms": "*",
            "parameters": [{"FileRevisionId": "rev-1"}],
            "libraries": ["lib-1"],
            "return": "with-parameters",
        }

    @patch("unificlient.Unifi")
    async def test_search_malformed(self, mock_unifi) -> None:
        # GIVEN a mock client returning a string body
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_post_async.return_value = "Internal error"

        # WHEN I search
        # THEN a malformed response error carrying the raw text is raised
        with pytest.raises(UnifiMalformedResponseError) as ex:
            await search_services.search_content_by_name(name="Desk")
        assert ex.value.body == "Internal error"

    @patch("unificlient.Unifi")
    async def test_search_none_body(self, mock_unifi) -> None:
        # GIVEN a mock client returning no body at all
        mock_client = AsyncMock()
        mock_unifi.get_client.return_value = mock_client
        mock_client.rest_post_async.return_value = None

        # WHEN I search
        # THEN it is not mistaken for an empty result
        with pytest.raises(UnifiMalformedResponseError):
            await search_services.search_content_by_name(name="Desk")
