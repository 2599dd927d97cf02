"""Concurrent evaluation of sibling values."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

T = TypeVar("T")


async def gather(*aws: Awaitable[T]) -> list[T]:
    """Await all of aws concurrently and return their results in order.

    Unlike ``asyncio.gather``, a failure cancels the remaining siblings and
    waits for them to finish before the exception propagates, so no work
    keeps running after the caller has seen the error.
    """
    if not aws:
        return []

    tasks: list[asyncio.Future[Any]] = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
