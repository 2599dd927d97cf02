"""Response interception.

Framework-agnostic glue that maps whatever a request handler returns
before it is sent. Register ``map_response`` on handlers, or call
``ResourceInterceptor.intercept`` from a framework middleware.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic_core import to_json

from resource_map.core.engine import ResourceMapper


class ResourceInterceptor:
    """Maps handler results through a ResourceMapper."""

    def __init__(self, mapper: ResourceMapper) -> None:
        self._mapper = mapper

    async def intercept(self, handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call handler (sync or async) and map its result."""
        result = handler(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return await self._mapper.map(result)


def map_response(mapper: ResourceMapper) -> Callable[[Callable[..., Any]], Callable[..., Awaitable[Any]]]:
    """Decorator form of ResourceInterceptor. The wrapped handler becomes async."""
    interceptor = ResourceInterceptor(mapper)

    def decorator(handler: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await interceptor.intercept(handler, *args, **kwargs)

        return wrapper

    return decorator


def render_json(value: Any) -> bytes:
    """Encode mapped output as JSON.

    Raises:
        ValueError: If value still contains a reference cycle.
    """
    return to_json(value)
