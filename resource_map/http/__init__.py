"""HTTP boundary helpers - pagination input, response schema and interception."""

from __future__ import annotations

from resource_map.http.interceptor import ResourceInterceptor, map_response, render_json
from resource_map.http.query import PaginatedQuery
from resource_map.http.schema import paginated_response_schema

__all__ = [
    "ResourceInterceptor",
    "map_response",
    "render_json",
    "PaginatedQuery",
    "paginated_response_schema",
]
