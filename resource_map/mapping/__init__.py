"""Mapping layer - field declarations, override rules and the resource pipeline."""

from __future__ import annotations

from resource_map.mapping.declarations import FieldDeclarations, OverrideRules, resource_map
from resource_map.mapping.pipeline import ResourceFieldPipeline
from resource_map.mapping.plan import FieldSpec, OverrideRule, ResourceField
from resource_map.mapping.protocol import FieldSource, RuleSource

__all__ = [
    "resource_map",
    "FieldDeclarations",
    "OverrideRules",
    "ResourceFieldPipeline",
    "FieldSpec",
    "OverrideRule",
    "ResourceField",
    "FieldSource",
    "RuleSource",
]
