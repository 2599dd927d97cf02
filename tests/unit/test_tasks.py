"""Unit tests for the cancelling gather helper."""

from __future__ import annotations

import asyncio

import pytest

from resource_map.core.tasks import gather


async def _value(value, delay: float = 0):
    await asyncio.sleep(delay)
    return value


async def _fail(message: str):
    raise RuntimeError(message)


class TestGather:
    async def test_results_keep_argument_order(self) -> None:
        assert await gather(_value("a", 0.01), _value("b"), _value("c")) == ["a", "b", "c"]

    async def test_no_awaitables(self) -> None:
        assert await gather() == []

    async def test_failure_cancels_pending_siblings(self) -> None:
        finished = []

        async def slow():
            await asyncio.sleep(0.01)
            finished.append("slow")

        with pytest.raises(RuntimeError, match="first"):
            await gather(slow(), _fail("first"))
        await asyncio.sleep(0.05)
        assert finished == []

    async def test_siblings_are_done_when_error_surfaces(self) -> None:
        sibling = asyncio.ensure_future(asyncio.sleep(10))
        with pytest.raises(RuntimeError):
            await gather(sibling, _fail("boom"))
        assert sibling.cancelled()

