"""Ejecución de comandos con política de reintento.

Pipeline de `execute(platform, command, args)`:
1. Resolver la plataforma en el registro.
2. Cargar (perezosamente) su catálogo y buscar el comando o alias.
3. Construir el cliente (falla rápido si no hay API key).
4. Normalizar args contra la declaración del comando.
5. Invocar el handler; si el comando es idempotente y el error es
   reintentable, un único reintento tras `retry_delay_seconds`.

Todo error que escapa de 1-5 se convierte en `CommandResult.failure`; nada
de lo anterior a la invocación toca la red.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

from core.config import AppSettings
from core.domain.commands import Args, CommandSpec, PlatformDescriptor
from core.domain.errors import APIError, UnknownAPIError
from core.domain.models import CommandResult
from core.interfaces.api_client import PlatformClient
from core.services.config_store import ConfigStore
from core.services.registry import PlatformRegistry

logger = logging.getLogger(__name__)

MAX_ATTEMPTS_IDEMPOTENT = 2


class ClientFactory(Protocol):
    def __call__(
        self,
        descriptor: PlatformDescriptor,
        store: ConfigStore,
        *,
        settings: AppSettings | None = None,
    ) -> PlatformClient: ...


def default_client_factory(
    descriptor: PlatformDescriptor,
    store: ConfigStore,
    *,
    settings: AppSettings | None = None,
) -> PlatformClient:
    from adapters.api_client import APIClient

    return APIClient.from_store(descriptor, store, settings=settings)


class CommandExecutor:
    def __init__(
        self,
        registry: PlatformRegistry,
        store: ConfigStore,
        *,
        settings: AppSettings | None = None,
        client_factory: ClientFactory = default_client_factory,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.registry = registry
        self.store = store
        self.settings = settings or AppSettings()
        self._client_factory = client_factory
        self._sleep = sleep

    def lookup(self, platform: str, command: str) -> tuple[PlatformDescriptor, CommandSpec]:
        """Resuelve plataforma + comando sin tocar la red (lanza `NotFoundError`)."""

        descriptor = self.registry.get(platform)
        spec = descriptor.load_commands().get(command)
        return descriptor, spec

    async def execute(self, platform: str, command: str, args: Args | None = None) -> CommandResult[Any]:
        try:
            descriptor, spec = self.lookup(platform, command)
            platform = descriptor.key
            client = self._client_factory(descriptor, self.store, settings=self.settings)
            normalized = spec.normalize_args(args)
            value = await self._invoke(client, spec, normalized)
        except APIError as exc:
            return CommandResult.failure(exc.with_context(platform=platform, command=command))
        except Exception as exc:  # noqa: BLE001 - frontera: todo fallo vuelve como resultado
            logger.debug("Unexpected failure in %s/%s", platform, command, exc_info=True)
            error = UnknownAPIError(
                f"{type(exc).__name__}: {exc}",
                platform=platform,
                command=command,
            )
            return CommandResult.failure(error)
        return CommandResult.success(value)

    async def _invoke(self, client: PlatformClient, spec: CommandSpec, args: Args) -> Any:
        handler = spec.handler
        if handler is None:
            raise UnknownAPIError(f"Command '{spec.name}' has no handler bound")
        attempts = MAX_ATTEMPTS_IDEMPOTENT if spec.is_idempotent else 1
        attempt = 1
        while True:
            try:
                return await handler(client, dict(args))
            except APIError as exc:
                if attempt >= attempts or not exc.retryable:
                    raise
                logger.warning(
                    "%s/%s failed (%s: %s); retrying once in %gs",
                    client.platform,
                    spec.name,
                    exc.kind.value,
                    exc.message,
                    self.settings.retry_delay_seconds,
                )
                await self._sleep(self.settings.retry_delay_seconds)
                attempt += 1
