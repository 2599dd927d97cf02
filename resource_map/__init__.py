"""ResourceMap - cycle-safe object-graph serialization for response payloads."""

from __future__ import annotations

from resource_map.core.config import MapperConfig
from resource_map.core.engine import MappingPass, ResourceMapper
from resource_map.core.exceptions import (
    CollaboratorNotFoundError,
    ConfigurationError,
    DeclarationError,
    ResourceMapError,
)
from resource_map.core.registry import MapperRegistry
from resource_map.core.resolver import CollaboratorResolver, Container, forward_ref
from resource_map.mapping.declarations import FieldDeclarations, OverrideRules, resource_map
from resource_map.mapping.plan import FieldSpec, OverrideRule, ResourceField
from resource_map.resources.base import Resource, ResourcePaginated

__all__ = [
    # Config
    "MapperConfig",
    # Engine
    "ResourceMapper",
    "MappingPass",
    # Registry
    "MapperRegistry",
    # Resources
    "Resource",
    "ResourcePaginated",
    # Declarations
    "resource_map",
    "ResourceField",
    "FieldDeclarations",
    "OverrideRules",
    "FieldSpec",
    "OverrideRule",
    # Collaborators
    "CollaboratorResolver",
    "Container",
    "forward_ref",
    # Exceptions
    "ResourceMapError",
    "ConfigurationError",
    "CollaboratorNotFoundError",
    "DeclarationError",
]
