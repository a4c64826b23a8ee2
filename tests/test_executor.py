"""Tests for the command executor pipeline and its retry policy.

Coverage:
* Unknown platform/command -> not_found with zero network calls.
* Missing required args -> validation before any network call.
* No API key -> not_configured without building a client.
* GET-style commands retry exactly once on retryable failures.
* Mutating commands never retry.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from conftest import ExecutorHarness, RecordingTransport
from core.domain.commands import CommandModule, CommandSpec, PlatformDescriptor
from core.domain.errors import ErrorKind, HttpStatusError
from core.services.config_store import InMemoryConfigStore
from core.services.registry import PlatformRegistry

Harness = Callable[..., ExecutorHarness]


def _run(harness: ExecutorHarness, platform: str, command: str, args: dict[str, Any] | None = None):
    return asyncio.run(harness.executor.execute(platform, command, args))


class TestLookup:
    def test_unknown_platform(self, make_harness: Harness) -> None:
        harness = make_harness()

        result = _run(harness, "unknown", "campaigns", {})

        assert not result.ok
        assert result.error.kind is ErrorKind.NOT_FOUND
        assert "'unknown'" in result.error.message
        assert harness.transport.calls == 0
        assert harness.clients == []

    def test_unknown_command_lists_available(self, make_harness: Harness) -> None:
        harness = make_harness()

        result = _run(harness, "smartlead", "campaigns:explode")

        assert result.error.kind is ErrorKind.NOT_FOUND
        assert "campaigns:list" in result.error.message
        assert result.error.platform == "smartlead"
        assert result.error.command == "campaigns:explode"
        assert harness.transport.calls == 0

    def test_not_configured_builds_no_client(self, make_harness: Harness, registry) -> None:
        harness = make_harness(config_store=InMemoryConfigStore(defaults=registry.defaults()))

        result = _run(harness, "lemlist", "campaigns:list")

        assert result.error.kind is ErrorKind.NOT_CONFIGURED
        assert result.error.platform == "lemlist"
        assert harness.clients == []
        assert harness.transport.calls == 0

    def test_missing_required_field(self, make_harness: Harness) -> None:
        harness = make_harness()

        result = _run(harness, "smartlead", "campaigns:create", {})

        assert result.error.kind is ErrorKind.VALIDATION
        assert result.error.fields == ["name"]
        assert harness.transport.calls == 0


class TestRetryPolicy:
    def test_get_retries_once_and_returns_second_outcome(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(503), httpx.Response(200, json=[{"id": 7}]))

        result = _run(harness, "smartlead", "campaigns:list")

        assert result.ok
        assert result.value == [{"id": 7}]
        assert harness.transport.calls == 2
        assert harness.sleeps == [0]

    def test_get_gives_up_after_second_failure(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(500), httpx.Response(502, json={"error": "bad gateway"}))

        result = _run(harness, "smartlead", "campaigns:list")

        assert isinstance(result.error, HttpStatusError)
        assert result.error.status_code == 502
        assert harness.transport.calls == 2

    def test_network_error_retried_for_reads(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.ConnectError("reset"), httpx.Response(200, json={"ok": True}))

        result = _run(harness, "instantly", "campaigns:list")

        assert result.value == {"ok": True}
        assert harness.transport.calls == 2

    def test_non_retryable_read_not_retried(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(404, json={"message": "no such campaign"}))

        result = _run(harness, "smartlead", "campaigns:get", {"id": "9"})

        assert result.error.kind is ErrorKind.HTTP_STATUS
        assert harness.transport.calls == 1
        assert harness.sleeps == []

    def test_post_never_retries(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(500), httpx.Response(200, json={"id": 1}))

        result = _run(harness, "smartlead", "campaigns:create", {"name": "Q1 Outreach"})

        assert result.error.retryable
        assert harness.transport.calls == 1
        assert harness.sleeps == []

    def test_idempotent_post_search_retries(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(429), httpx.Response(200, json={"people": []}))

        result = _run(harness, "apollo", "contacts:search", {"q_keywords": "cto"})

        assert result.value == {"people": []}
        assert harness.transport.calls == 2

    def test_retry_logged_as_warning(self, make_harness: Harness, caplog: pytest.LogCaptureFixture) -> None:
        harness = make_harness(httpx.Response(500), httpx.Response(200, json={}))

        with caplog.at_level("WARNING", logger="core.services.executor"):
            _run(harness, "smartlead", "campaigns:list")

        assert "retrying once" in caplog.text
        assert "sl-test-key-123" not in caplog.text


class TestEndToEnd:
    def test_campaign_create_alias_returns_exact_object(self, make_harness: Harness) -> None:
        created = {"id": 1, "name": "Q1 Outreach", "created_at": "2024-01-01T00:00:00Z"}
        harness = make_harness(httpx.Response(200, json=created))

        result = _run(harness, "smartlead", "campaign-create", {"name": "Q1 Outreach"})

        assert result.ok
        assert result.value == created
        request = harness.transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/campaigns"
        assert request.url.params["api_key"] == "sl-test-key-123"
        assert json.loads(request.content) == {"name": "Q1 Outreach"}

    def test_custom_handler_shapes_payload(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(200, json={"added": 1}))

        _run(harness, "smartlead", "leads:add", {"campaign_id": 3, "leads": [{"email": "a@b.co"}]})

        request = harness.transport.requests[0]
        assert request.url.path == "/api/v1/campaigns/3/leads"
        assert json.loads(request.content) == {"lead_list": [{"email": "a@b.co"}]}

    def test_apollo_header_auth(self, make_harness: Harness) -> None:
        harness = make_harness(httpx.Response(200, json={"emailer_campaigns": []}))

        _run(harness, "apollo", "sequences:list")

        request = harness.transport.requests[0]
        assert request.headers["X-Api-Key"] == "ap-test-key-456"
        assert "api_key" not in request.url.params

    def test_unbound_handler_is_reported_without_request(self, store, settings) -> None:
        spec = CommandSpec("campaigns:list", path="/campaigns")
        descriptor = PlatformDescriptor(
            key="smartlead",
            display_name="Smartlead",
            description="Unbound catalog",
            default_base_url="https://server.smartlead.ai/api/v1",
            loader=lambda: CommandModule("smartlead", [spec]),
        )
        harness = ExecutorHarness(PlatformRegistry([descriptor]), store, settings, RecordingTransport())

        result = _run(harness, "smartlead", "campaigns:list")

        assert result.error.kind is ErrorKind.UNKNOWN
        assert "no handler bound" in result.error.message
        assert harness.transport.calls == 0

    def test_unexpected_exception_wrapped(self, make_harness: Harness) -> None:
        def explode(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("kaboom")

        harness = make_harness(explode)

        result = _run(harness, "smartlead", "campaigns:list")

        assert result.error.kind is ErrorKind.UNKNOWN
        assert "kaboom" in result.error.message
        assert result.error.platform == "smartlead"
