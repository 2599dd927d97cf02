"""Unit tests for Container and forward references."""

from __future__ import annotations

import pytest

from resource_map.core.exceptions import CollaboratorNotFoundError, ConfigurationError
from resource_map.core.resolver import (
    CollaboratorResolver,
    Container,
    ForwardRef,
    forward_ref,
    unwrap_token,
)


class Mailer:
    pass


class TestContainer:
    def test_implements_resolver_protocol(self) -> None:
        assert isinstance(Container(), CollaboratorResolver)

    def test_register_and_resolve(self) -> None:
        mailer = Mailer()
        container = Container().register(Mailer, mailer)
        assert container.resolve(Mailer) is mailer

    def test_initial_instances(self) -> None:
        container = Container({"mailer": 1, Mailer: 2})
        assert len(container) == 2
        assert container.resolve("mailer") == 1

    def test_string_tokens(self) -> None:
        container = Container().register("clock", "tick")
        assert container.has("clock") is True
        assert container.has("missing") is False

    def test_missing_token(self) -> None:
        with pytest.raises(CollaboratorNotFoundError, match="'Mailer'") as exc_info:
            Container().resolve(Mailer)
        assert exc_info.value.token is Mailer

    def test_missing_token_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            Container().resolve("mailer")

    def test_resolve_forward_ref(self) -> None:
        mailer = Mailer()
        container = Container().register(Mailer, mailer)
        assert container.resolve(forward_ref(lambda: Mailer)) is mailer

    def test_register_forward_ref(self) -> None:
        container = Container().register(forward_ref(lambda: Mailer), "m")
        assert container.resolve(Mailer) == "m"


class TestForwardRef:
    def test_is_lazy(self) -> None:
        calls = []

        def factory():
            calls.append(1)
            return Mailer

        ref = forward_ref(factory)
        assert isinstance(ref, ForwardRef)
        assert calls == []
        assert ref.unwrap() is Mailer
        assert calls == [1]

    def test_unwrap_token(self) -> None:
        assert unwrap_token(Mailer) is Mailer
        assert unwrap_token(forward_ref(lambda: "late")) == "late"
