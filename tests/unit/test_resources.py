"""Unit tests for Resource and ResourcePaginated."""

from __future__ import annotations

import pytest

from resource_map.resources.base import Resource, ResourcePaginated


class ItemResource(Resource[dict]):
    id: int


class TestResource:
    def test_make(self) -> None:
        raw = {"id": 1}
        resource = ItemResource.make(raw)
        assert isinstance(resource, ItemResource)
        assert resource.data is raw

    def test_starts_without_output_fields(self) -> None:
        assert ItemResource.make({"id": 1}) == {}

    def test_collection(self) -> None:
        resources = ItemResource.collection([{"id": 1}, {"id": 2}])
        assert [type(r) for r in resources] == [ItemResource, ItemResource]
        assert [r.data["id"] for r in resources] == [1, 2]

    def test_collection_accepts_iterables(self) -> None:
        resources = ItemResource.collection({"id": i} for i in range(3))
        assert len(resources) == 3

    def test_paginated(self) -> None:
        page = ItemResource.paginated([{"id": 1}, {"id": 2}], 10)
        assert isinstance(page, ResourcePaginated)
        assert page.total == 10
        assert len(page.data) == 2
        assert all(isinstance(r, ItemResource) for r in page.data)

    def test_data_is_read_only(self) -> None:
        resource = ItemResource.make({"id": 1})
        with pytest.raises(AttributeError):
            resource.data = {"id": 2}  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(ItemResource.make({"id": 1})) == "ItemResource({'id': 1}, fields={})"


class TestResourcePaginated:
    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ResourcePaginated([], -1)

    def test_total_may_exceed_page(self) -> None:
        page = ResourcePaginated([ItemResource.make({"id": 1})], 50)
        assert page.total == 50

    def test_as_dict(self) -> None:
        item = ItemResource.make({"id": 1})
        assert ResourcePaginated([item], 3).as_dict() == {"data": [item], "total": 3}
