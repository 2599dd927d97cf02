"""Declaration source protocols.

The pipeline only consumes resolved declarations. FieldDeclarations and
OverrideRules are the default implementations; any object satisfying
these protocols can be passed to ResourceMapper instead.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from resource_map.mapping.plan import FieldSpec, OverrideRule


@runtime_checkable
class FieldSource(Protocol):
    """Resolves the declared output fields of a class."""

    def fields(self, cls: type) -> tuple[str, ...]:
        """Ordered names of the fields declared on cls."""
        ...

    def spec(self, cls: type, name: str) -> FieldSpec:
        """Type metadata for one declared field of cls."""
        ...


@runtime_checkable
class RuleSource(Protocol):
    """Resolves the override rules that apply to a resource class."""

    def chain(self, cls: type) -> list[OverrideRule]:
        """Rules declared along the inheritance chain, oldest ancestor first."""
        ...
