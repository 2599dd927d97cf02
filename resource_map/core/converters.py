"""Built-in converters.

Each converter takes the matched value and the recursive map callback.
Container converters map their children through the callback and return
plain dicts and lists.
"""

from __future__ import annotations

import base64
import datetime
from collections.abc import Mapping, Set
from typing import Any

from resource_map.core.registry import MapFn
from resource_map.core.tasks import gather
from resource_map.resources.base import ResourcePaginated

BINARY_TYPES = (bytes, bytearray, memoryview)

# Values with no children; they can never close a cycle
LEAF_TYPES = (datetime.date, *BINARY_TYPES)


def convert_date(value: datetime.date, map_value: MapFn, *, timespec: str = "milliseconds") -> str:
    """Render a date or datetime as ISO-8601 text.

    Datetimes are normalized to UTC (naive values are taken as UTC) and
    suffixed with ``Z``::

        datetime(2024, 1, 1, tzinfo=timezone.utc) -> "2024-01-01T00:00:00.000Z"
    """
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec=timespec) + "Z"
    return value.isoformat()


def convert_binary(value: bytes | bytearray | memoryview, map_value: MapFn) -> str:
    """Encode a binary blob as base64 text."""
    return base64.b64encode(value).decode("ascii")


async def convert_mapping(value: Mapping[Any, Any], map_value: MapFn) -> dict[str, Any]:
    """Copy a mapping into a dict with string keys and mapped values."""
    keys = [str(key) for key in value]
    values = await gather(*(map_value(item) for item in value.values()))
    return dict(zip(keys, values, strict=True))


async def convert_set(value: Set[Any], map_value: MapFn) -> list[Any]:
    """Turn a set into a list of mapped elements, in iteration order."""
    return await gather(*(map_value(item) for item in value))


def convert_paginated(value: ResourcePaginated[Any], map_value: MapFn) -> dict[str, Any]:
    """Unfold a page into its wire shape, ``{"data": [...], "total": n}``."""
    return value.as_dict()
