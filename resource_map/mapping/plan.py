"""Resource declaration data classes.

Frozen dataclasses describing what a resource class declares: the type
metadata of each output field and the override rules attached to it.
Used by ResourceFieldPipeline at mapping time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResourceField:
    """Explicit field type metadata, attached with ``typing.Annotated``.

    Example::

        class PostResource(Resource[Post]):
            author: Annotated[dict, ResourceField(UserResource)]
            tags: Annotated[list, ResourceField(TagResource, is_array=True)]
    """

    type: type
    is_array: bool = False


@dataclass(frozen=True)
class FieldSpec:
    """Type metadata for a single declared field."""

    name: str
    is_array: bool = False
    element_type: type | None = None  # Resource subclass to auto-wrap raw values with


@dataclass(frozen=True)
class OverrideRule:
    """A per-class rule producing replacement output fields."""

    declared_on: type
    compute: Callable[..., Any]  # (data, *collaborators) -> Mapping[str, Any] or awaitable
    injects: tuple[Any, ...] = field(default_factory=tuple)
