"""Health check de todas las plataformas.

- Concurrencia acotada (`health_max_concurrency`) con un semáforo.
- Plataformas sin API key no generan tráfico: salen como `not_configured`.
- Cada comprobación es un GET a `health_path` sin reintento.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable

from core.config import AppSettings
from core.domain.commands import PlatformDescriptor
from core.domain.errors import APIError
from core.domain.models import HealthReport, HealthState
from core.services.config_store import ConfigStore
from core.services.executor import ClientFactory, default_client_factory
from core.services.registry import PlatformRegistry

logger = logging.getLogger(__name__)


async def check_platform(
    descriptor: PlatformDescriptor,
    store: ConfigStore,
    *,
    settings: AppSettings,
    client_factory: ClientFactory = default_client_factory,
) -> HealthReport:
    report = HealthReport(
        platform=descriptor.key,
        display_name=descriptor.display_name,
        state=HealthState.NOT_CONFIGURED,
    )
    if not store.resolve_api_key(descriptor.key).ok:
        report.detail = "No API key"
        return report

    started = time.perf_counter()
    try:
        client = client_factory(descriptor, store, settings=settings)
        await client.request("GET", descriptor.health_path or "/")
    except APIError as exc:
        report.state = HealthState.ERROR
        report.detail = f"[{exc.kind.value}] {exc.message}"
    else:
        report.state = HealthState.OK
    report.latency_ms = round((time.perf_counter() - started) * 1000, 1)
    logger.debug("health %s -> %s (%s ms)", descriptor.key, report.state.value, report.latency_ms)
    return report


async def check_health(
    registry: PlatformRegistry,
    store: ConfigStore,
    *,
    settings: AppSettings | None = None,
    platforms: Iterable[str] | None = None,
    client_factory: ClientFactory = default_client_factory,
) -> list[HealthReport]:
    """Comprueba las plataformas (todas por defecto) y devuelve los informes en orden de listado."""

    settings = settings or AppSettings()
    descriptors = [registry.get(key) for key in platforms] if platforms else registry.list()
    sem = asyncio.Semaphore(max(1, settings.health_max_concurrency))

    async def check_one(descriptor: PlatformDescriptor) -> HealthReport:
        async with sem:
            return await check_platform(
                descriptor,
                store,
                settings=settings,
                client_factory=client_factory,
            )

    return list(await asyncio.gather(*(check_one(d) for d in descriptors)))
