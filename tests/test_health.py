"""Tests for the concurrent health check."""

from __future__ import annotations

import asyncio

import httpx

from adapters.api_client import APIClient
from conftest import RecordingTransport
from core.domain.models import HealthState
from core.services.health import check_health


def _factory(transport: RecordingTransport):
    def build(descriptor, store, *, settings=None):
        return APIClient.from_store(descriptor, store, settings=settings, transport=transport)

    return build


class TestHealth:
    def test_reports_every_platform_in_order(self, registry, store, settings) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api.apollo.io":
                return httpx.Response(401, json={"error": "invalid key"})
            return httpx.Response(200, json={})

        transport = RecordingTransport(respond)

        reports = asyncio.run(check_health(registry, store, settings=settings, client_factory=_factory(transport)))

        assert [r.platform for r in reports] == registry.keys()
        states = {r.platform: r.state for r in reports}
        assert states["smartlead"] is HealthState.OK
        assert states["instantly"] is HealthState.OK
        assert states["apollo"] is HealthState.ERROR
        assert states["lemlist"] is HealthState.NOT_CONFIGURED
        # Solo las tres plataformas configuradas generan tráfico.
        assert transport.calls == 3

    def test_error_detail_and_latency(self, registry, store, settings) -> None:
        transport = RecordingTransport(httpx.Response(503, json={"message": "maintenance"}))

        reports = asyncio.run(
            check_health(
                registry,
                store,
                settings=settings,
                platforms=["smartlead"],
                client_factory=_factory(transport),
            )
        )

        (report,) = reports
        assert report.state is HealthState.ERROR
        assert "maintenance" in (report.detail or "")
        assert report.latency_ms is not None
        # Sin reintento en el health check.
        assert transport.calls == 1

    def test_concurrency_is_bounded(self, registry, settings) -> None:
        from core.domain.models import PlatformConfig
        from core.services.config_store import InMemoryConfigStore

        store = InMemoryConfigStore(
            {key: PlatformConfig(api_key="k") for key in registry.keys()},
            defaults=registry.defaults(),
        )
        limited = settings.model_copy(update={"health_max_concurrency": 2})
        in_flight = 0
        peak = 0

        class SlowClient:
            def __init__(self, platform: str) -> None:
                self.platform = platform

            async def request(self, method, path, *, params=None, json=None):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return {}

        def build(descriptor, store, *, settings=None):
            return SlowClient(descriptor.key)

        reports = asyncio.run(check_health(registry, store, settings=limited, client_factory=build))

        assert all(r.state is HealthState.OK for r in reports)
        assert peak == 2
