"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resource_map.core.config import MapperConfig
from resource_map.core.engine import ResourceMapper
from resource_map.core.resolver import Container


@pytest.fixture
def config() -> MapperConfig:
    """Default mapper config."""
    return MapperConfig()


@pytest.fixture
def container() -> Container:
    """Empty collaborator container."""
    return Container()


@pytest.fixture
def mapper(config: MapperConfig, container: Container) -> ResourceMapper:
    """Mapper wired to the shared container.

    Usage:
        container.register(UrlService, UrlService("https://api"))
        await mapper.map(UserResource.make(user))
    """
    return ResourceMapper(config, resolver=container)
