"""Shared pytest fixtures for the cold-email-cli test suite.

Guidelines
----------
* No internet access in any test: HTTP goes through ``httpx.MockTransport``.
* Config never touches the real user directory (``CEC_CONFIG_DIR`` points
  at a temporary directory and platform env vars are cleared).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from adapters.api_client import APIClient
from core.config import AppSettings, env_prefix_for
from core.domain.commands import PlatformDescriptor
from core.domain.models import PlatformConfig
from core.services.config_store import ConfigStore, InMemoryConfigStore
from core.services.executor import CommandExecutor
from core.services.registry import PlatformRegistry, build_default_registry

PLATFORM_KEYS = (
    "smartlead",
    "instantly",
    "apollo",
    "salesforge",
    "emailbison",
    "amplemarket",
    "lemlist",
    "outreach",
    "quickmail",
    "salesloft",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    config_dir = tmp_path / "config"
    monkeypatch.setenv("CEC_CONFIG_DIR", str(config_dir))
    for key in PLATFORM_KEYS:
        prefix = env_prefix_for(key)
        monkeypatch.delenv(f"{prefix}_API_KEY", raising=False)
        monkeypatch.delenv(f"{prefix}_BASE_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    return config_dir


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda cada request y responde con una cola de respuestas.

    Cada elemento de la cola es un ``httpx.Response``, una excepción (que se
    lanza) o un callable ``request -> Response``. El último se repite.
    """

    def __init__(self, *responses: Any) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses) or [httpx.Response(200, json={})]
        super().__init__(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._responses)) - 1
        item = self._responses[index]
        if isinstance(item, Exception):
            raise item
        if callable(item) and not isinstance(item, httpx.Response):
            return item(request)
        return item


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(retry_delay_seconds=0, http_timeout_seconds=5)


@pytest.fixture
def registry() -> PlatformRegistry:
    return build_default_registry()


@pytest.fixture
def store(registry: PlatformRegistry) -> InMemoryConfigStore:
    return InMemoryConfigStore(
        {
            "smartlead": PlatformConfig(api_key="sl-test-key-123"),
            "apollo": PlatformConfig(api_key="ap-test-key-456"),
            "instantly": PlatformConfig(api_key="in-test-key-789"),
        },
        defaults=registry.defaults(),
    )


class ExecutorHarness:
    """Executor real + transporte simulado + registro de clientes/pausas."""

    def __init__(
        self,
        registry: PlatformRegistry,
        store: ConfigStore,
        settings: AppSettings,
        transport: RecordingTransport,
    ) -> None:
        self.transport = transport
        self.clients: list[APIClient] = []
        self.sleeps: list[float] = []
        self.executor = CommandExecutor(
            registry,
            store,
            settings=settings,
            client_factory=self.client_factory,
            sleep=self._sleep,
        )

    def client_factory(
        self,
        descriptor: PlatformDescriptor,
        store: ConfigStore,
        *,
        settings: AppSettings | None = None,
    ) -> APIClient:
        client = APIClient.from_store(descriptor, store, settings=settings, transport=self.transport)
        self.clients.append(client)
        return client

    async def _sleep(self, delay: float) -> None:
        self.sleeps.append(delay)


@pytest.fixture
def make_harness(
    registry: PlatformRegistry,
    store: InMemoryConfigStore,
    settings: AppSettings,
) -> Callable[..., ExecutorHarness]:
    def factory(*responses: Any, config_store: ConfigStore | None = None) -> ExecutorHarness:
        return ExecutorHarness(registry, config_store or store, settings, RecordingTransport(*responses))

    return factory
