"""Resource wrappers.

A Resource pairs a raw payload with the class that decides how it is
rendered. The wrapper is itself the output mapping: the pipeline fills it
with output fields and leaves the raw payload untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R", bound="Resource[Any]")


@dataclass
class ResourcePaginated(Generic[R]):
    """A page of resources plus the size of the whole collection.

    ResourceMapper renders a page as its wire shape, ``as_dict()``.
    """

    data: list[R]
    total: int

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"total must be non-negative, got {self.total}")

    def as_dict(self) -> dict[str, Any]:
        """Wire shape: {"data": [...], "total": n}."""
        return {"data": self.data, "total": self.total}


class Resource(dict, Generic[T]):  # type: ignore[type-arg]
    """Base class for resources.

    Subclasses declare their output fields as class annotations::

        class UserResource(Resource[User]):
            id: int
            name: str
            team: TeamResource
    """

    __slots__ = ("_data",)

    def __init__(self, data: T) -> None:
        super().__init__()
        self._data = data

    @property
    def data(self) -> T:
        """The raw payload this resource renders."""
        return self._data

    @classmethod
    def make(cls: type[R], data: Any) -> R:
        """Wrap a single raw item."""
        return cls(data)

    @classmethod
    def collection(cls: type[R], data: Iterable[Any]) -> list[R]:
        """Wrap each raw item."""
        return [cls(item) for item in data]

    @classmethod
    def paginated(cls: type[R], data: Iterable[Any], total: int) -> ResourcePaginated[R]:
        """Wrap each raw item and bundle the page with the collection total."""
        return ResourcePaginated([cls(item) for item in data], total)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r}, fields={dict.__repr__(self)})"
