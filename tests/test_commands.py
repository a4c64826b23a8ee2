"""Tests for command declarations, argument normalization and path filling."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from adapters.platforms.base import build_module, fill_path
from core.domain.commands import CommandModule, CommandSpec, optional, required
from core.domain.errors import ArgumentValidationError, CommandNotFoundError


class FakeClient:
    platform = "fake"

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any, Any]] = []

    async def request(self, method: str, path: str, *, params: Any = None, json: Any = None) -> Any:
        self.calls.append((method, path, params, json))
        return {"ok": True}


LIST = CommandSpec(
    "items:list",
    path="/items",
    args=(optional("limit", int), optional("active", bool)),
    aliases=("items",),
)
CREATE = CommandSpec("items:create", method="post", path="/items", args=(required("name", str),))
GET = CommandSpec("items:get", path="/items/{id}", args=(required("id", str),))


class TestCommandSpec:
    def test_method_upper_cased_and_idempotency_default(self) -> None:
        assert CREATE.method == "POST"
        assert not CREATE.is_idempotent
        assert LIST.is_idempotent

    def test_explicit_idempotent_post(self) -> None:
        spec = CommandSpec("search", method="POST", path="/search", idempotent=True)
        assert spec.is_idempotent

    def test_needs_path_or_handler(self) -> None:
        with pytest.raises(ValueError):
            CommandSpec("broken")

    def test_lax_coercion(self) -> None:
        assert LIST.normalize_args({"limit": "10", "active": "true"}) == {"limit": 10, "active": True}

    def test_numbers_coerced_to_str(self) -> None:
        assert GET.normalize_args({"id": 42}) == {"id": "42"}

    def test_undeclared_args_pass_through(self) -> None:
        assert LIST.normalize_args({"status": "ACTIVE"}) == {"status": "ACTIVE"}

    def test_missing_required_names_field(self) -> None:
        with pytest.raises(ArgumentValidationError) as excinfo:
            CREATE.normalize_args({})
        assert excinfo.value.fields == ["name"]
        assert "Missing required field(s): name" in excinfo.value.message

    def test_invalid_type_names_field(self) -> None:
        with pytest.raises(ArgumentValidationError) as excinfo:
            LIST.normalize_args({"limit": "lots"})
        assert excinfo.value.fields == ["limit"]

    def test_usage(self) -> None:
        assert CREATE.usage == "items:create name=<string>"


class TestCommandModule:
    def test_alias_resolves_to_same_spec(self) -> None:
        module = build_module("fake", [LIST, CREATE])

        assert module.get("items") is module.get("items:list")
        assert "items" in module
        assert module.names() == ["items:list", "items:create"]

    def test_unknown_command_lists_available(self) -> None:
        module = build_module("fake", [LIST, CREATE])

        with pytest.raises(CommandNotFoundError) as excinfo:
            module.get("nope")
        assert "items:list" in excinfo.value.message
        assert excinfo.value.platform == "fake"

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValueError):
            CommandModule("fake", [LIST, CommandSpec("items", path="/x")])


class TestGeneratedHandlers:
    def test_get_sends_query_params(self) -> None:
        module = build_module("fake", [LIST])
        client = FakeClient()

        asyncio.run(module.get("items:list").handler(client, {"limit": 5}))

        assert client.calls == [("GET", "/items", {"limit": 5}, None)]

    def test_post_sends_body_and_fills_path(self) -> None:
        spec = CommandSpec("items:rename", method="PATCH", path="/items/{id}", args=(required("id", str),))
        client = FakeClient()

        asyncio.run(build_module("fake", [spec]).get("items:rename").handler(client, {"id": "a b", "name": "x"}))

        assert client.calls == [("PATCH", "/items/a%20b", None, {"name": "x"})]

    def test_fill_path_keeps_email_readable(self) -> None:
        path, remaining = fill_path("/leads/{email}", {"email": "jo@acme.io", "x": 1})

        assert path == "/leads/jo@acme.io"
        assert remaining == {"x": 1}

    def test_fill_path_missing_placeholder(self) -> None:
        with pytest.raises(ArgumentValidationError):
            fill_path("/items/{id}", {})
