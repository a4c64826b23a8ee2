"""Cliente REST autenticado por plataforma.

Responsabilidad:
- Construir la URL (base URL resuelta + path) e inyectar la API key según la
  convención de la plataforma (Bearer, header propio o query param).
- Mapear fallos de transporte/HTTP a la taxonomía `APIError`.

No reintenta: solo clasifica (`retryable`). La política está en el executor.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from adapters.http_client import build_async_client, decode_body
from core.config import AppSettings
from core.domain.commands import AuthScheme, PlatformDescriptor
from core.domain.errors import (
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    UnknownAPIError,
)
from core.domain.models import ResolvedConfig
from core.interfaces.api_client import PlatformClient
from core.services.config_store import ConfigStore

logger = logging.getLogger(__name__)


class APIClient(PlatformClient):
    """Cliente de una plataforma construido a partir de un snapshot de config.

    No observa cambios posteriores del `ConfigStore`: para ver una key nueva
    hay que construir otro cliente.
    """

    def __init__(
        self,
        config: ResolvedConfig,
        *,
        auth: AuthScheme,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.platform = config.platform
        self._config = config
        self._auth = auth
        self._settings = settings or AppSettings()
        self._transport = transport

    @classmethod
    def from_store(
        cls,
        descriptor: PlatformDescriptor,
        store: ConfigStore,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "APIClient":
        """Falla rápido con `NotConfiguredError` si no hay credenciales."""

        config = store.resolve(descriptor.key)
        return cls(config, auth=descriptor.auth, settings=settings, transport=transport)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def build_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        method = method.upper()
        url = self.build_url(path)
        headers: dict[str, str] = {}
        query = {k: v for k, v in (params or {}).items() if v is not None}
        self._auth.apply(self._config.api_key, headers, query)

        started = time.perf_counter()
        try:
            async with build_async_client(
                self._settings,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=query or None,
                    json=json,
                )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"Request timed out after {self._settings.http_timeout_seconds:g}s ({method} {path})",
                platform=self.platform,
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(
                f"Network error calling {method} {path}: {str(exc) or type(exc).__name__}",
                platform=self.platform,
                hint="Check your connection and the platform base URL.",
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UnknownAPIError(
                f"Request failed: {exc}",
                platform=self.platform,
            ) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "%s %s %s -> %s (%.0f ms)",
            self.platform,
            method,
            self._redact(url, query),
            response.status_code,
            elapsed_ms,
        )

        body = decode_body(response)
        if response.status_code >= 400:
            raise HttpStatusError(response.status_code, body, platform=self.platform)
        return body

    def _redact(self, url: str, query: dict[str, Any]) -> str:
        secret = self._auth.secret_names
        visible = {k: v for k, v in query.items() if k.lower() not in secret}
        if not visible:
            return url
        rendered = "&".join(f"{k}={v}" for k, v in visible.items())
        return f"{url}?{rendered}"

    def __repr__(self) -> str:
        return f"APIClient(platform={self.platform!r}, base_url={self.base_url!r})"
