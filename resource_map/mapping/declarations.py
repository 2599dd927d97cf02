"""Field and override rule declarations.

Fields are declared as class annotations (or pydantic / dataclass fields
for plain objects). Override rules are attached with the resource_map
class decorator. FieldDeclarations and OverrideRules turn those
declarations into the lookups the pipeline consumes.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Callable, Iterable
from typing import Annotated, Any, ClassVar, TypeVar, Union, get_args, get_origin

from resource_map.core.exceptions import DeclarationError
from resource_map.mapping.plan import FieldSpec, OverrideRule, ResourceField
from resource_map.resources.base import Resource

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)

_RULE_ATTR = "__resource_map__"

_COLLECTION_ORIGINS = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Iterable,
        collections.abc.Collection,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
    }
)


def resource_map(
    compute: Callable[..., Any],
    *,
    injects: Iterable[Any] = (),
) -> Callable[[C], C]:
    """Attach an override rule to a resource class.

    ``compute`` receives the raw payload followed by one resolved
    collaborator per entry of ``injects`` and returns a mapping of output
    field names to values (or an awaitable of one). Returned fields replace
    the default projection of the same name.

    Example::

        @resource_map(lambda user, urls: {"avatar": urls.avatar(user.id)}, injects=[UrlService])
        class UserResource(Resource[User]):
            id: int
            avatar: str
    """
    injected = tuple(injects)

    def decorator(cls: C) -> C:
        if not (isinstance(cls, type) and issubclass(cls, Resource)):
            raise DeclarationError(cls, "resource_map can only decorate Resource subclasses")
        if not callable(compute):
            raise DeclarationError(cls, f"override rule must be callable, got {compute!r}")
        if _RULE_ATTR in cls.__dict__:
            raise DeclarationError(cls, "an override rule is already declared on this class")
        setattr(cls, _RULE_ATTR, OverrideRule(declared_on=cls, compute=compute, injects=injected))
        return cls

    return decorator


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _get_annotations(cls: type) -> dict[str, Any]:
    """Public annotated attributes of cls, including inherited ones."""
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: keep the raw annotations
        hints = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
    return {
        name: annotation
        for name, annotation in hints.items()
        if not name.startswith("_") and not _is_class_var(annotation)
    }


def _get_field_names(cls: type) -> list[str]:
    """Extract declared field names from a class (Pydantic, dataclass, or annotated)."""
    # Pydantic model
    if isinstance(getattr(cls, "model_fields", None), dict):
        return list(cls.model_fields.keys())  # type: ignore[attr-defined]

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    return list(_get_annotations(cls))


def _is_resource_class(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, Resource) and candidate is not Resource


def _strip_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _spec_from_annotation(name: str, annotation: Any) -> FieldSpec:
    annotation = _strip_optional(annotation)
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, ResourceField):
                return FieldSpec(name=name, is_array=extra.is_array, element_type=extra.type)
        annotation = _strip_optional(base)

    if _is_resource_class(annotation):
        return FieldSpec(name=name, element_type=annotation)

    if get_origin(annotation) in _COLLECTION_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        if len(args) == 1 and _is_resource_class(_strip_optional(args[0])):
            return FieldSpec(name=name, is_array=True, element_type=_strip_optional(args[0]))

    return FieldSpec(name=name)


def _same_rule(a: OverrideRule, b: OverrideRule) -> bool:
    return a.compute is b.compute and a.injects == b.injects


class FieldDeclarations:
    """Memoized field declarations, per class.

    Both lookups are computed on first access for a class and cached for
    the lifetime of the instance.
    """

    def __init__(self) -> None:
        self._fields: dict[type, tuple[str, ...]] = {}
        self._specs: dict[type, dict[str, FieldSpec]] = {}

    def fields(self, cls: type) -> tuple[str, ...]:
        """Ordered names of the fields declared on cls."""
        try:
            return self._fields[cls]
        except KeyError:
            names = tuple(_get_field_names(cls))
            self._fields[cls] = names
            return names

    def spec(self, cls: type, name: str) -> FieldSpec:
        """Type metadata for one declared field of cls."""
        specs = self._specs.get(cls)
        if specs is None:
            specs = {
                field_name: _spec_from_annotation(field_name, annotation)
                for field_name, annotation in _get_annotations(cls).items()
            }
            self._specs[cls] = specs
        return specs.get(name) or FieldSpec(name=name)


class OverrideRules:
    """Reads override rules declared with resource_map."""

    def own(self, cls: type) -> OverrideRule | None:
        """The rule declared directly on cls, ignoring inherited ones."""
        rule = cls.__dict__.get(_RULE_ATTR)
        return rule if isinstance(rule, OverrideRule) else None

    def chain(self, cls: type) -> list[OverrideRule]:
        """Rules along the inheritance chain of cls, oldest ancestor first.

        The generic Resource base and non-resource mixins are skipped. A
        rule object shared by several classes is applied once.
        """
        rules: list[OverrideRule] = []
        for klass in reversed(cls.__mro__):
            if not _is_resource_class(klass):
                continue
            rule = self.own(klass)
            if rule is not None and not any(_same_rule(seen, rule) for seen in rules):
                rules.append(rule)
        logger.debug("Resolved %d override rule(s) for %s", len(rules), cls.__name__)
        return rules
