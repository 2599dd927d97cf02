"""Resource field pipeline.

Populates a resource's output fields in two phases:

1. Override rules declared along the inheritance chain run, and their
   fields are written onto the result, oldest ancestor first so that a
   subclass rule wins a key collision.
2. Every declared field not written by a rule is projected from the raw
   payload, auto-wrapping values typed as nested resources.

Phase 2 only starts once all phase 1 writes are applied.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from typing import Any

from resource_map.core.exceptions import CollaboratorNotFoundError
from resource_map.core.resolver import CollaboratorResolver, Container, unwrap_token
from resource_map.core.tasks import gather
from resource_map.mapping.plan import FieldSpec, OverrideRule
from resource_map.mapping.protocol import FieldSource, RuleSource

logger = logging.getLogger(__name__)

MapFn = Callable[[Any], Awaitable[Any]]
WrapFn = Callable[[type, Any], Any]


async def _compute(rule: OverrideRule, data: Any, collaborators: list[Any]) -> Any:
    output = rule.compute(data, *collaborators)
    if inspect.isawaitable(output):
        return await output
    return output


def _read(data: Any, name: str) -> Any:
    """Read a raw field from a mapping or an attribute-bearing object."""
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def _construct(resource_type: type, data: Any) -> Any:
    return resource_type(data)


def _wrap(spec: FieldSpec, value: Any, wrap: WrapFn) -> Any:
    """Wrap a raw value into the nested resource class declared for the field."""
    if spec.element_type is None or value is None:
        return value
    if spec.is_array:
        return [wrap(spec.element_type, item) for item in value]
    return wrap(spec.element_type, value)


class ResourceFieldPipeline:
    """Computes the output fields of one resource.

    Args:
        fields: Source of declared fields and their type metadata.
        rules: Source of override rules.
        resolver: Collaborator resolver for rule injections. Defaults to an
            empty Container, so any injection fails.
    """

    def __init__(
        self,
        fields: FieldSource,
        rules: RuleSource,
        resolver: CollaboratorResolver | None = None,
    ) -> None:
        self._fields = fields
        self._rules = rules
        self._resolver: CollaboratorResolver = resolver if resolver is not None else Container()

    def _inject(self, rule: OverrideRule) -> list[Any]:
        """Resolve the collaborators a rule asks for, in declaration order."""
        collaborators = []
        for token in rule.injects:
            token = unwrap_token(token)
            instance = self._resolver.resolve(token)
            if instance is None:
                raise CollaboratorNotFoundError(token)
            logger.debug(
                "Injected %r into override rule of %s", token, rule.declared_on.__name__
            )
            collaborators.append(instance)
        return collaborators

    async def _map_entries(self, output: Mapping[str, Any], map_value: MapFn) -> list[tuple[str, Any]]:
        keys = list(output.keys())
        values = await gather(*(map_value(output[key]) for key in keys))
        return list(zip(keys, values, strict=True))

    async def _apply_overrides(
        self,
        resource_type: type,
        result: MutableMapping[str, Any],
        data: Any,
        pending: dict[str, None],
        map_value: MapFn,
    ) -> None:
        rules = self._rules.chain(resource_type)
        if not rules:
            return

        # Resolve every injection before any rule runs: a missing collaborator is a wiring error
        injections = [self._inject(rule) for rule in rules]
        outputs = await gather(
            *(
                _compute(rule, data, collaborators)
                for rule, collaborators in zip(rules, injections, strict=True)
            )
        )
        mapped = await gather(*(self._map_entries(output, map_value) for output in outputs))

        # Rule order, so later (more specific) rules overwrite earlier ones
        for entries in mapped:
            for key, value in entries:
                result[key] = value
                pending.pop(key, None)

    async def _project(
        self, resource_type: type, data: Any, name: str, map_value: MapFn, wrap: WrapFn
    ) -> Any:
        value = _wrap(self._fields.spec(resource_type, name), _read(data, name), wrap)
        return await map_value(value)

    async def map_resource(
        self,
        resource_type: type,
        result: MutableMapping[str, Any],
        data: Any,
        map_value: MapFn,
        *,
        wrap: WrapFn | None = None,
    ) -> MutableMapping[str, Any]:
        """Populate result with the output fields of resource_type.

        Args:
            resource_type: The resource class whose declarations apply.
            result: Mapping receiving the output fields, mutated in place.
            data: The raw payload. Never mutated.
            map_value: Recursive map callback for nested values.
            wrap: Builds the nested resource for a raw field value. Defaults
                to calling the declared resource class.

        Returns:
            The same result object.

        Raises:
            CollaboratorNotFoundError: If a rule injects an unregistered token.
        """
        wrap = wrap or _construct
        pending = dict.fromkeys(self._fields.fields(resource_type))

        await self._apply_overrides(resource_type, result, data, pending, map_value)

        names = list(pending)
        values = await gather(
            *(self._project(resource_type, data, name, map_value, wrap) for name in names)
        )
        for name, value in zip(names, values, strict=True):
            result[name] = value

        return result
