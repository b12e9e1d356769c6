import warnings

import pytest

from unificlient.core.exceptions import UnifiAmbiguousResultWarning, UnifiNotFoundError
from unificlient.models.services import resolve_single_result


def test_no_results() -> None:
    # GIVEN no results
    # WHEN I resolve them
    # THEN a not found error is raised
    with pytest.raises(UnifiNotFoundError):
        resolve_single_result([], query="name 'Desk'")


def test_single_result() -> None:
    # GIVEN one result
    with warnings.catch_warnings():
        warnings.simplefilter("error")

        # WHEN I resolve it
        # THEN it is returned without a warning
        assert resolve_single_result([{"Title": "Desk"}], query="q") == {"Title": "Desk"}


def test_several_results() -> None:
    # GIVEN several results
    results = [{"Title": "Desk 1"}, {"Title": "Desk 2"}]

    # WHEN I resolve them
    # THEN the first is returned with a warning
    with pytest.warns(UnifiAmbiguousResultWarning):
        assert resolve_single_result(results, query="q") == {"Title": "Desk 1"}


def test_several_results_warn_every_time() -> None:
    # GIVEN the same ambiguous results
    results = [{"Title": "Desk 1"}, {"Title": "Desk 2"}]

    # WHEN I resolve them three times from the same place
    with warnings.catch_warnings(record=True) as caught:
        for _ in range(3):
            resolve_single_result(results, query="name 'Desk'")

    # THEN each call issued a warning
    ambiguous = [w for w in caught if w.category is UnifiAmbiguousResultWarning]
    assert len(ambiguous) == 3
    assert "Query: name 'Desk'" in str(ambiguous[0].message)


def test_ambiguous_warning_can_be_silenced() -> None:
    # GIVEN a caller ignoring ambiguous results
    results = [{"Title": "Desk 1"}, {"Title": "Desk 2"}]
    with warnings.catch_warnings(record=True) as caught:
        warnings.filterwarnings("ignore", category=UnifiAmbiguousResultWarning)

        # WHEN I resolve them
        # THEN the first is returned without a warning
        assert resolve_single_result(results, query="q") == {"Title": "Desk 1"}
    assert not [w for w in caught if w.category is UnifiAmbiguousResultWarning]


def test_ambiguous_warning_can_be_an_error() -> None:
    results = [{"Title": "Desk 1"}, {"Title": "Desk 2"}]
    with warnings.catch_warnings():
        warnings.filterwarnings("error", category=UnifiAmbiguousResultWarning)
        with pytest.raises(UnifiAmbiguousResultWarning):
            resolve_single_result(results, query="q")
