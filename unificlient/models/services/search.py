"""Functional interface for narrowing UNIFI search results down to one item."""

import warnings
from typing import Any, Dict, List

from unificlient.core.exceptions import (
    UnifiAmbiguousResultWarning,
    UnifiNotFoundError,
)

AMBIGUOUS_RESULT_MESSAGE = (
    "Warning, more than one piece of content matches this query. Using the first of {count}."
)


def resolve_single_result(results: List[Dict[str, Any]], query: str) -> Dict[str, Any]:
    """
    Pick the one result a query is expected to produce.

    A `UnifiAmbiguousResultWarning` is issued every time a query matches more than
    one item, not only the first time. Filters installed by the caller for that
    category still apply, so it can be silenced or turned into an error.

    Arguments:
        results: The search results in the order the service returned them.
        query: Describes the query for error and warning messages.

    Returns:
        The first result.

    Raises:
        UnifiNotFoundError: If there are no results.
    """
    if not results:
        raise UnifiNotFoundError(f"No content matches {query}.")
    if len(results) > 1:
        with warnings.catch_warnings():
            # only reached when no earlier filter handles the category
            warnings.filterwarnings(
                "always", category=UnifiAmbiguousResultWarning, append=True
            )
            warnings.warn(
                f"{AMBIGUOUS_RESULT_MESSAGE.format(count=len(results))} Query: {query}",
                UnifiAmbiguousResultWarning,
                stacklevel=2,
            )
    return results[0]
