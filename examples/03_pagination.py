"""
Example 03: Pagination and Response Interception

This example demonstrates paginated resources, query validation and JSON rendering.
"""

import asyncio

from resource_map import Resource, ResourceMapper
from resource_map.http import PaginatedQuery, map_response, paginated_response_schema, render_json

ARTICLES = [{"id": i, "title": f"Article {i}", "draft": i % 2 == 0} for i in range(1, 43)]


class ArticleResource(Resource[dict]):
    id: int
    title: str


mapper = ResourceMapper()


@map_response(mapper)
async def list_articles(params: dict):
    query = PaginatedQuery.model_validate(params)
    page = ARTICLES[query.offset : query.offset + query.limit]
    return ArticleResource.paginated(page, len(ARTICLES))


async def main():
    print("=== GET /articles?limit=3&offset=10 ===\n")
    page = await list_articles({"limit": "3", "offset": "10"})
    print(render_json(page).decode())
    print()

    print("=== Response schema ===\n")
    print(paginated_response_schema("#/components/schemas/ArticleResource", omit=["draft"]))


if __name__ == "__main__":
    asyncio.run(main())
