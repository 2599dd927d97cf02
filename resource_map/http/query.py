"""Pagination query parameters."""

from __future__ import annotations

from pydantic import BaseModel, Field

MAX_PAGE_SIZE = 100


class PaginatedQuery(BaseModel):
    """limit/offset query parameters.

    Query strings arrive as text; Pydantic coerces numeric strings such
    as ``"20"`` and rejects anything that is not a whole number.
    """

    limit: int = Field(default=20, ge=1, le=MAX_PAGE_SIZE)
    offset: int = Field(default=0, ge=0)
