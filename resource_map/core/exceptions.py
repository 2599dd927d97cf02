"""ResourceMap exception hierarchy.

Only wiring and declaration mistakes are raised as ResourceMap exceptions.
Errors raised inside converters or override rules propagate unchanged.
"""

from __future__ import annotations

from typing import Any


class ResourceMapError(Exception):
    """Base exception for all ResourceMap errors."""


# --- Configuration ---


class ConfigurationError(ResourceMapError):
    """Base for wiring errors detected while mapping."""


class CollaboratorNotFoundError(ConfigurationError):
    """Raised when an override rule injects a token with no registered instance."""

    def __init__(self, token: Any) -> None:
        self.token = token
        super().__init__(f"No collaborator registered for token {_describe(token)}")


# --- Declaration ---


class DeclarationError(ResourceMapError):
    """Raised when a resource class declares an invalid override rule."""

    def __init__(self, resource_type: Any, detail: str) -> None:
        self.resource_type = resource_type
        super().__init__(f"Invalid declaration on {_describe(resource_type)}: {detail}")


def _describe(token: Any) -> str:
    name = getattr(token, "__qualname__", None)
    if isinstance(name, str):
        return f"'{name}'"
    return repr(token)
