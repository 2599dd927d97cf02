"""Resource layer - typed wrappers around raw payloads."""

from __future__ import annotations

from resource_map.resources.base import Resource, ResourcePaginated

__all__ = [
    "Resource",
    "ResourcePaginated",
]
