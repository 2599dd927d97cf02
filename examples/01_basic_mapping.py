"""
Example 01: Basic Mapping

This example demonstrates declaring resource fields and mapping raw payloads.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

from resource_map import Resource, ResourceMapper


@dataclass
class User:
    id: int
    name: str
    password_hash: str
    created_at: datetime
    avatar: bytes


class UserResource(Resource[User]):
    id: int
    name: str
    created_at: datetime
    avatar: bytes


async def main():
    mapper = ResourceMapper()

    user = User(
        id=9007199254740993,
        name="Alice",
        password_hash="$argon2id$...",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        avatar=b"\x89PNG",
    )

    print("=== Single resource ===\n")
    print(await mapper.map(UserResource.make(user)))
    print()

    print("=== Plain containers ===\n")
    print(await mapper.map({"tags": {"a", "b"}, "when": datetime(2024, 5, 1), 1: b"x"}))


if __name__ == "__main__":
    asyncio.run(main())
