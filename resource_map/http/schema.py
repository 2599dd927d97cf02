"""OpenAPI schema for paginated responses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def paginated_response_schema(
    item_ref: str,
    *,
    omit: Iterable[str] = (),
    extends: Mapping[str, Any] | None = None,
    description: str = "",
) -> dict[str, Any]:
    """Describe a ``{"data": [...], "total": n}`` response.

    Args:
        item_ref: JSON reference of the item schema, e.g.
            "#/components/schemas/UserResource".
        omit: Item properties marked write-only, so they are left out of
            the response description.
        extends: Extra top-level properties.
        description: Response description.

    Returns:
        An OpenAPI response object.
    """
    return {
        "description": description,
        "content": {
            "application/json": {
                "schema": {
                    "allOf": [
                        {"properties": dict(extends or {})},
                        {
                            "properties": {
                                "data": {
                                    "type": "array",
                                    "items": {
                                        "allOf": [
                                            {"$ref": item_ref},
                                            {
                                                "properties": {
                                                    key: {"writeOnly": True} for key in omit
                                                }
                                            },
                                        ]
                                    },
                                },
                                "total": {"type": "number"},
                            }
                        },
                    ]
                }
            }
        },
    }
