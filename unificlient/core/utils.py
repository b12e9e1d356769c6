"""Utility functions useful in the implementation and testing of the UNIFI client."""

import json
from typing import Any, Dict, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def is_json(content_type):
    """detect if a content-type is JSON"""
    # The value of Content-Type defined here:
    # http://www.w3.org/Protocols/rfc2616/rfc2616-sec3.html#sec3.7
    return (
        content_type.lower().strip().startswith("application/json")
        if content_type
        else False
    )


def raw_body(data: Any) -> str:
    """Re-serializes an already decoded body so it can be shown for diagnostics."""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return repr(data)


def _malformed(message: str, data: Any):
    from unificlient.core.exceptions import UnifiMalformedResponseError

    return UnifiMalformedResponseError(message, body=raw_body(data))


def get_value(data: Optional[Dict[str, Any]], key: str, default: Any = None) -> Any:
    """
    Look up a key in a JSON object the way the UNIFI service matches them: an exact
    match wins, otherwise the first key that matches ignoring case.

    Arguments:
        data: A decoded JSON object. None is treated as empty.
        key: The key to look for.
        default: Returned when no key matches.

    Returns:
        The value found, or `default`.

    Raises:
        UnifiMalformedResponseError: If `data` is not a JSON object.
    """
    if data is None:
        return default
    if not isinstance(data, dict):
        raise _malformed(f"Expected a JSON object while reading '{key}'", data)
    if key in data:
        return data[key]
    lowered = key.lower()
    for candidate, value in data.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    return default


def get_list(data: Optional[Dict[str, Any]], key: str) -> List[Any]:
    """
    Like `get_value` but a missing or null value becomes an empty list.

    Raises:
        UnifiMalformedResponseError: If the value is present but not a JSON array.
    """
    value = get_value(data, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _malformed(f"Expected a JSON array for '{key}'", value)
    return list(value)


def get_object_list(data: Optional[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    """
    Like `get_list` for arrays of nested records.

    Raises:
        UnifiMalformedResponseError: If the value is not an array of JSON objects.
    """
    items = get_list(data, key)
    for item in items:
        if not isinstance(item, dict):
            raise _malformed(f"Expected only JSON objects in '{key}'", items)
    return items


def get_int(data: Optional[Dict[str, Any]], key: str) -> Optional[int]:
    """
    Like `get_value` for counters. Integral numbers sent as floats or strings are
    converted, null stays None.

    Raises:
        UnifiMalformedResponseError: If the value is not an integer.
    """
    value = get_value(data, key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise _malformed(f"Expected an integer for '{key}'", value)
    if isinstance(value, float):
        if not value.is_integer():
            raise _malformed(f"Expected an integer for '{key}'", value)
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise _malformed(f"Expected an integer for '{key}'", value) from None


def unique_ordered(items: Iterable[T]) -> List[T]:
    """Removes duplicates while keeping the first occurrence of each item."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
