"""
Example 02: Override Rules

This example demonstrates per-class override rules, inheritance and injected collaborators.
"""

import asyncio

from resource_map import Container, Resource, ResourceMapper, resource_map


class UrlService:
    def __init__(self, base: str) -> None:
        self.base = base

    def profile(self, user_id: int) -> str:
        return f"{self.base}/users/{user_id}"


@resource_map(
    lambda user, urls: {"url": urls.profile(user["id"])},
    injects=[UrlService],
)
class UserResource(Resource[dict]):
    id: int
    name: str
    url: str


@resource_map(lambda user: {"name": user["name"].upper(), "role": "admin"})
class AdminResource(UserResource):
    email: str


class TeamResource(Resource[dict]):
    name: str
    lead: AdminResource
    members: list[UserResource]


async def main():
    container = Container().register(UrlService, UrlService("https://api.example.com"))
    mapper = ResourceMapper(resolver=container)

    team = {
        "name": "Core",
        "lead": {"id": 1, "name": "Ann", "email": "ann@example.com"},
        "members": [{"id": 2, "name": "Bob"}, {"id": 3, "name": "Eve"}],
    }

    print("=== Nested resources with overrides ===\n")
    result = await mapper.map(TeamResource.make(team))
    print(f"   lead:    {result['lead']}")
    for member in result["members"]:
        print(f"   member:  {member}")


if __name__ == "__main__":
    asyncio.run(main())
