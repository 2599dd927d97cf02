"""Mapper Registry - ordered (type, converter) entries.

The registry is consulted in registration order; the first entry whose
type matches a value wins. It is populated once at setup and treated as
read-only while values are being mapped.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Union

logger = logging.getLogger(__name__)

MapFn = Callable[[Any], Awaitable[Any]]
Converter = Callable[[Any, MapFn], Any]
MatchType = Union[type, tuple[type, ...]]


class MapperRegistry:
    """Ordered collection of type-matched converters.

    Entries are keyed by their match type. Registering a type that is
    already present replaces its converter but keeps the entry's original
    position, so the last registration for a key wins.
    """

    def __init__(self) -> None:
        self._converters: dict[MatchType, Converter] = {}

    def register(self, match_type: MatchType, convert: Converter) -> MapperRegistry:
        """Add or replace the converter for match_type.

        Args:
            match_type: A class, or a tuple of classes, tested with isinstance.
            convert: Callable receiving the matched value and a recursive
                map callback. May return a value or an awaitable.

        Returns:
            The registry, for chaining.
        """
        if match_type in self._converters:
            logger.debug("Replacing converter for %r", match_type)
        else:
            logger.debug("Registering converter for %r", match_type)
        self._converters[match_type] = convert
        return self

    def lookup(self, value: Any) -> Converter | None:
        """Return the first converter whose type matches value, or None."""
        for match_type, convert in self._converters.items():
            if isinstance(value, match_type):
                return convert
        return None

    def has(self, match_type: MatchType) -> bool:
        """Check if a converter is registered under match_type."""
        return match_type in self._converters

    @property
    def types(self) -> list[MatchType]:
        """Registered match types, in registration order."""
        return list(self._converters)

    def __contains__(self, match_type: object) -> bool:
        return match_type in self._converters

    def __len__(self) -> int:
        """Number of registered converters."""
        return len(self._converters)
