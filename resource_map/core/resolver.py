"""Collaborator resolution.

Override rules name the collaborators they need by token. A
CollaboratorResolver turns tokens into live instances; any DI container
exposing ``resolve(token)`` fits. Container is a minimal token -> instance
implementation for wiring without a framework.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from resource_map.core.exceptions import CollaboratorNotFoundError


@runtime_checkable
class CollaboratorResolver(Protocol):
    """Resolves injection tokens to instances."""

    def resolve(self, token: Any) -> Any:
        """Return the instance registered for token.

        Raises:
            CollaboratorNotFoundError: If token is not registered.
        """
        ...


class ForwardRef:
    """A token whose value is computed when it is resolved.

    Lets a rule inject a class defined after the resource declaring it.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory

    def unwrap(self) -> Any:
        return self._factory()

    def __repr__(self) -> str:
        return f"ForwardRef({self._factory!r})"


def forward_ref(factory: Callable[[], Any]) -> ForwardRef:
    """Defer evaluation of an injection token."""
    return ForwardRef(factory)


def unwrap_token(token: Any) -> Any:
    """Evaluate token if it is a ForwardRef."""
    if isinstance(token, ForwardRef):
        return token.unwrap()
    return token


class Container:
    """Token -> instance lookup.

    Args:
        instances: Optional initial token -> instance mapping.
    """

    def __init__(self, instances: Mapping[Any, Any] | None = None) -> None:
        self._instances: dict[Any, Any] = dict(instances or {})

    def register(self, token: Any, instance: Any) -> Container:
        """Register instance under token. Returns the container for chaining."""
        self._instances[unwrap_token(token)] = instance
        return self

    def resolve(self, token: Any) -> Any:
        token = unwrap_token(token)
        try:
            return self._instances[token]
        except KeyError:
            raise CollaboratorNotFoundError(token) from None

    def has(self, token: Any) -> bool:
        """Check if a token is registered."""
        return unwrap_token(token) in self._instances

    def __len__(self) -> int:
        return len(self._instances)
