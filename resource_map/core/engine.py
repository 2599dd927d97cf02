"""Recursive value mapper.

ResourceMapper walks an arbitrary value and returns a transport-safe
version of it: large integers become strings, registered types go
through their converter, resources are populated by the field pipeline
and declared-field objects are mapped in place.

Every call to ``map`` opens a MappingPass holding its own identity-keyed
visited set, so each distinct object is entered at most once per call
and concurrent calls never share traversal state. Leaves that cannot
hold references (dates, binary blobs, empty sequences) are not tracked,
so a shared datetime is converted at every occurrence.
"""

from __future__ import annotations

import asyncio
import datetime
import decimal
import functools
import inspect
import logging
from collections.abc import Mapping, Set
from typing import Any

from resource_map.core.config import MapperConfig
from resource_map.core.converters import (
    BINARY_TYPES,
    LEAF_TYPES,
    convert_binary,
    convert_date,
    convert_mapping,
    convert_paginated,
    convert_set,
)
from resource_map.core.registry import Converter, MapFn, MapperRegistry, MatchType
from resource_map.core.resolver import CollaboratorResolver
from resource_map.core.tasks import gather
from resource_map.mapping.declarations import FieldDeclarations, OverrideRules
from resource_map.mapping.pipeline import ResourceFieldPipeline
from resource_map.mapping.protocol import FieldSource, RuleSource
from resource_map.resources.base import Resource, ResourcePaginated

logger = logging.getLogger(__name__)


class MappingPass:
    """State of one top-level mapping call.

    Visited objects are keyed by ``id()`` and kept referenced until the
    pass ends, so an id cannot be reused by another object mid-pass.

    The pass is also the recursive map callback handed to converters:
    ``await mapping_pass(value)`` maps a nested value within the pass.
    """

    def __init__(self, mapper: ResourceMapper) -> None:
        self._mapper = mapper
        self._visited: dict[int, Any] = {}
        self._wrappers: dict[tuple[type, int], Resource[Any]] = {}

    def seen(self, value: Any) -> bool:
        return id(value) in self._visited

    def mark(self, value: Any) -> None:
        self._visited[id(value)] = value

    async def map(self, value: Any) -> Any:
        """Map a nested value within this pass."""
        return await self._mapper._map_value(value, self)

    __call__ = map

    def adopt(self, resource: Resource[Any]) -> None:
        """Record resource as the wrapper of its raw payload, unless one exists."""
        self._wrappers.setdefault((type(resource), id(resource.data)), resource)

    def wrap(self, resource_type: type[Resource[Any]], data: Any) -> Resource[Any]:
        """Wrap a raw nested value, reusing the wrapper already made for it.

        A raw payload that references itself therefore yields one wrapper,
        and the visited set stops the recursion.
        """
        key = (resource_type, id(data))
        wrapper = self._wrappers.get(key)
        if wrapper is None:
            wrapper = resource_type(data)
            self._wrappers[key] = wrapper
        return wrapper

    def __len__(self) -> int:
        """Number of objects visited so far."""
        return len(self._visited)


def _is_leaf(value: Any) -> bool:
    return isinstance(value, LEAF_TYPES) or (isinstance(value, (list, tuple)) and not value)


_CONTAINER_CONVERTERS = (convert_mapping, convert_set)


class ResourceMapper:
    """Asynchronous object-graph mapper.

    Args:
        config: Scalar conversion settings.
        resolver: Collaborator resolver used by override rules.
        fields: Field declaration source. Defaults to FieldDeclarations.
        rules: Override rule source. Defaults to OverrideRules.
    """

    def __init__(
        self,
        config: MapperConfig | None = None,
        *,
        resolver: CollaboratorResolver | None = None,
        fields: FieldSource | None = None,
        rules: RuleSource | None = None,
    ) -> None:
        self._config = config or MapperConfig()
        self._fields: FieldSource = fields or FieldDeclarations()
        self._pipeline = ResourceFieldPipeline(self._fields, rules or OverrideRules(), resolver)
        self._registry = MapperRegistry()

        # Resource must win over the generic Mapping entry: a Resource is a dict
        self._registry.register(Resource, self._convert_resource)
        self._registry.register(ResourcePaginated, convert_paginated)
        self._registry.register(
            datetime.date, functools.partial(convert_date, timespec=self._config.timespec)
        )
        self._registry.register(BINARY_TYPES, convert_binary)
        self._registry.register(Mapping, convert_mapping)
        self._registry.register(Set, convert_set)

    @classmethod
    def from_config(
        cls,
        config: MapperConfig,
        resolver: CollaboratorResolver | None = None,
    ) -> ResourceMapper:
        """Create a ResourceMapper from a MapperConfig and an optional resolver."""
        return cls(config, resolver=resolver)

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def registry(self) -> MapperRegistry:
        return self._registry

    @property
    def pipeline(self) -> ResourceFieldPipeline:
        return self._pipeline

    def register(self, match_type: MatchType, convert: Converter) -> ResourceMapper:
        """Register a converter after the built-in ones. Returns the mapper for chaining.

        The converter result is mapped again, so a converter may return
        raw values (datetimes, bytes, resources) and leave them to the mapper.
        """
        self._registry.register(match_type, convert)
        return self

    async def _convert_resource(self, value: Resource[Any], map_value: MapFn) -> Resource[Any]:
        wrap = None
        if isinstance(map_value, MappingPass):
            map_value.adopt(value)
            wrap = map_value.wrap
        await self._pipeline.map_resource(type(value), value, value.data, map_value, wrap=wrap)
        return value

    async def map(self, value: Any) -> Any:
        """Map value into a transport-safe structure.

        Exceptions raised by converters or override rules propagate
        unchanged and abort the whole call: sibling work still in flight
        is cancelled before the exception reaches the caller.
        """
        return await MappingPass(self).map(value)

    def map_sync(self, value: Any) -> Any:
        """Run ``map`` to completion. Must not be called from a running event loop."""
        return asyncio.run(self.map(value))

    def _map_scalar(self, value: Any) -> Any:
        if isinstance(value, int) and abs(value) > self._config.max_safe_integer:
            return str(value)
        if isinstance(value, decimal.Decimal) and self._config.decimal_as_string:
            return str(value)
        return value

    async def _map_value(self, value: Any, mapping_pass: MappingPass) -> Any:
        if value is None or isinstance(value, (bool, str, float)):
            return value
        if isinstance(value, (int, decimal.Decimal)):
            return self._map_scalar(value)

        if not _is_leaf(value):
            if mapping_pass.seen(value):
                logger.debug("Already visited %s, returning it unchanged", type(value).__name__)
                return value
            mapping_pass.mark(value)

        if isinstance(value, (list, tuple)):
            return await gather(*(mapping_pass.map(item) for item in value))

        convert = self._registry.lookup(value)
        if convert is not None:
            result = convert(value, mapping_pass)
            if inspect.isawaitable(result):
                result = await result
            # Built-in container converters already mapped their children
            if convert in _CONTAINER_CONVERTERS:
                return result
            return await mapping_pass.map(result)

        return await self._map_declared(value, mapping_pass)

    async def _map_declared(self, value: Any, mapping_pass: MappingPass) -> Any:
        """Map the declared fields of a plain object in place."""
        names = [name for name in self._fields.fields(type(value)) if hasattr(value, name)]
        if not names:
            return value

        mapped = await gather(*(mapping_pass.map(getattr(value, name)) for name in names))
        for name, item in zip(names, mapped, strict=True):
            object.__setattr__(value, name, item)
        return value
