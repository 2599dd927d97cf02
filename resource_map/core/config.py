"""Mapper configuration.

MapperConfig is a Pydantic model holding the scalar conversion knobs
used by ResourceMapper and the built-in converters.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# Largest integer a JSON consumer using IEEE-754 doubles can round-trip.
MAX_SAFE_INTEGER = 2**53 - 1


class MapperConfig(BaseModel):
    """Configuration for value mapping."""

    max_safe_integer: int = Field(default=MAX_SAFE_INTEGER, ge=0)
    decimal_as_string: bool = True
    timespec: Literal["seconds", "milliseconds", "microseconds"] = "milliseconds"
