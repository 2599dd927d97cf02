"""Unit tests for the HTTP boundary helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from resource_map.core.engine import ResourceMapper
from resource_map.http.interceptor import ResourceInterceptor, map_response, render_json
from resource_map.http.query import PaginatedQuery
from resource_map.http.schema import paginated_response_schema
from resource_map.resources.base import Resource


class ItemResource(Resource[dict]):
    id: int
    created_at: datetime


class TestPaginatedQuery:
    def test_defaults(self) -> None:
        query = PaginatedQuery()
        assert query.limit == 20
        assert query.offset == 0

    def test_coerces_query_strings(self) -> None:
        query = PaginatedQuery.model_validate({"limit": "50", "offset": "10"})
        assert query.limit == 50
        assert query.offset == 10

    @pytest.mark.parametrize(
        "params",
        [
            {"limit": "0"},
            {"limit": "101"},
            {"limit": "-5"},
            {"limit": "1.5"},
            {"limit": "abc"},
            {"offset": "-1"},
        ],
    )
    def test_rejects_invalid_values(self, params: dict) -> None:
        with pytest.raises(ValidationError):
            PaginatedQuery.model_validate(params)

    def test_bounds_are_inclusive(self) -> None:
        assert PaginatedQuery(limit=1).limit == 1
        assert PaginatedQuery(limit=100).limit == 100


class TestPaginatedResponseSchema:
    def test_shape(self) -> None:
        schema = paginated_response_schema("#/components/schemas/Item", description="Items")
        body = schema["content"]["application/json"]["schema"]
        assert schema["description"] == "Items"
        assert body["allOf"][0] == {"properties": {}}
        page = body["allOf"][1]["properties"]
        assert page["total"] == {"type": "number"}
        assert page["data"]["type"] == "array"
        assert page["data"]["items"]["allOf"][0] == {"$ref": "#/components/schemas/Item"}

    def test_omitted_fields_are_write_only(self) -> None:
        schema = paginated_response_schema("#/Item", omit=["password", "token"])
        items = schema["content"]["application/json"]["schema"]["allOf"][1]["properties"]["data"]
        assert items["items"]["allOf"][1] == {
            "properties": {"password": {"writeOnly": True}, "token": {"writeOnly": True}}
        }

    def test_extends(self) -> None:
        schema = paginated_response_schema("#/Item", extends={"cursor": {"type": "string"}})
        body = schema["content"]["application/json"]["schema"]
        assert body["allOf"][0] == {"properties": {"cursor": {"type": "string"}}}


class TestResourceInterceptor:
    async def test_maps_async_handler_result(self, mapper: ResourceMapper) -> None:
        async def handler(item_id: int):
            return ItemResource.make(
                {"id": item_id, "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc)}
            )

        result = await ResourceInterceptor(mapper).intercept(handler, 3)
        assert result == {"id": 3, "created_at": "2024-01-01T00:00:00.000Z"}

    async def test_maps_sync_handler_result(self, mapper: ResourceMapper) -> None:
        def handler():
            return {"big": 2**60}

        assert await ResourceInterceptor(mapper).intercept(handler) == {"big": str(2**60)}

    async def test_handler_errors_propagate(self, mapper: ResourceMapper) -> None:
        async def handler():
            raise LookupError("not found")

        with pytest.raises(LookupError):
            await ResourceInterceptor(mapper).intercept(handler)

    async def test_map_response_decorator(self, mapper: ResourceMapper) -> None:
        @map_response(mapper)
        def list_items(total: int):
            """List items."""
            return ItemResource.paginated([{"id": 1, "created_at": None}], total)

        page = await list_items(total=5)
        assert list_items.__doc__ == "List items."
        assert page["total"] == 5
        assert page["data"] == [{"id": 1, "created_at": None}]


class TestRenderJson:
    async def test_renders_mapped_page(self, mapper: ResourceMapper) -> None:
        page = await mapper.map(ItemResource.paginated([{"id": 1, "created_at": None}], 7))
        assert json.loads(render_json(page)) == {
            "data": [{"id": 1, "created_at": None}],
            "total": 7,
        }

    def test_rejects_cycles(self) -> None:
        value: dict = {}
        value["self"] = value
        with pytest.raises(ValueError):
            render_json(value)
