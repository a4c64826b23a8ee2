"""Resolución y persistencia de credenciales por plataforma.

Precedencia (gana la primera con valor):
1. flag explícito de la invocación actual (`override`)
2. variable de entorno `<PLATFORM>_API_KEY` / `<PLATFORM>_BASE_URL`
3. valor persistido en el repositorio (fichero por plataforma)
4. (solo base URL) el default de fábrica de la plataforma

El store es una instancia explícita que se pasa a quien la necesite; nada lee
config por lookup global, así los tests inyectan un repositorio en memoria.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import urlparse

from core.config import PlatformEnvironment, default_env_files, env_prefix_for
from core.domain.errors import ArgumentValidationError, NotConfiguredError
from core.domain.models import (
    CommandResult,
    ConfigStatus,
    PlatformConfig,
    ResolvedConfig,
    mask_secret,
)
from core.interfaces.config_repository import ConfigRepository

logger = logging.getLogger(__name__)

USER_ENV_FILES: Any = object()

_KEY_ALIASES: dict[str, str] = {
    "apikey": "api_key",
    "api_key": "api_key",
    "api-key": "api_key",
    "baseurl": "base_url",
    "base_url": "base_url",
    "base-url": "base_url",
}


def normalize_config_key(key: str) -> str:
    normalized = _KEY_ALIASES.get(key.strip().lower())
    if normalized is None:
        raise ArgumentValidationError(
            f"Unknown config key '{key}'",
            fields=[key],
            hint="Supported keys: apiKey, baseUrl",
        )
    return normalized


class ConfigStore:
    def __init__(
        self,
        repository: ConfigRepository,
        *,
        defaults: Mapping[str, str] | None = None,
        env_files: tuple[str, ...] | None | object = USER_ENV_FILES,
    ) -> None:
        self._repository = repository
        self._defaults = dict(defaults or {})
        # El directorio de usuario se resuelve al construir el store, no al importar.
        self._env_files = default_env_files() if env_files is USER_ENV_FILES else env_files
        self._overrides: dict[str, PlatformConfig] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # --- persisted state -------------------------------------------------

    def get(self, platform: str) -> PlatformConfig:
        return self._repository.load(platform)

    def set(self, platform: str, partial: PlatformConfig | None = None, **values: Any) -> PlatformConfig:
        """Read-modify-write con escritura atómica (delegada al repositorio)."""

        partial = partial or PlatformConfig(**values)
        with self._lock_for(platform):
            current = self._repository.load(platform)
            updated = current.merged(partial).model_copy(
                update={"last_used": datetime.now(timezone.utc)}
            )
            self._repository.save(platform, updated)
        logger.debug("Saved config for %s (keys: %s)", platform, sorted(partial.model_fields_set))
        return updated

    def set_value(self, platform: str, key: str, value: str) -> PlatformConfig:
        field_name = normalize_config_key(key)
        return self.set(platform, PlatformConfig(**{field_name: value}))

    def clear(self, platform: str) -> bool:
        with self._lock_for(platform):
            return self._repository.delete(platform)

    # --- invocation overrides ---------------------------------------------

    def override(self, platform: str, *, api_key: str | None = None, base_url: str | None = None) -> None:
        """Valores de flags CLI; solo viven en memoria durante la invocación."""

        values = {k: v for k, v in {"api_key": api_key, "base_url": base_url}.items() if v}
        if not values:
            return
        current = self._overrides.get(platform, PlatformConfig())
        self._overrides[platform] = current.merged(PlatformConfig(**values))

    # --- resolution ------------------------------------------------------

    def environment(self, platform: str) -> PlatformEnvironment:
        return PlatformEnvironment.for_platform(platform, env_files=self._env_files)

    def _api_key_with_source(self, platform: str) -> tuple[str | None, str | None]:
        flag = self._overrides.get(platform)
        if flag and flag.api_key:
            return flag.api_key, "flag"
        env_value = (self.environment(platform).api_key or "").strip()
        if env_value:
            return env_value, "env"
        file_value = (self.get(platform).api_key or "").strip()
        if file_value:
            return file_value, "file"
        return None, None

    def resolve_api_key(self, platform: str) -> CommandResult[str]:
        """Devuelve la key o un `NotConfiguredError`; nunca lanza por ausencia."""

        api_key, source = self._api_key_with_source(platform)
        if api_key is None:
            prefix = env_prefix_for(platform)
            return CommandResult.failure(
                NotConfiguredError(
                    f"No API key configured for '{platform}'",
                    platform=platform,
                    hint=(
                        f"Set {prefix}_API_KEY, pass --api-key, or run "
                        f"`cec config:set {platform} apiKey <value>`."
                    ),
                )
            )
        logger.debug("Resolved %s API key from %s", platform, source)
        return CommandResult.success(api_key)

    def resolve_base_url(self, platform: str) -> str | None:
        flag = self._overrides.get(platform)
        if flag and flag.base_url:
            return flag.base_url
        env_value = (self.environment(platform).base_url or "").strip()
        if env_value:
            return env_value
        file_value = (self.get(platform).base_url or "").strip()
        if file_value:
            return file_value
        return self._defaults.get(platform)

    def resolve(self, platform: str) -> ResolvedConfig:
        """Snapshot para construir un `APIClient`; lanza `NotConfiguredError`."""

        api_key = self.resolve_api_key(platform).unwrap()
        base_url = self.resolve_base_url(platform)
        if not base_url:
            raise NotConfiguredError(
                f"No base URL configured for '{platform}'",
                platform=platform,
                hint=f"Set {env_prefix_for(platform)}_BASE_URL or `cec config:set {platform} baseUrl <url>`.",
            )
        return ResolvedConfig(platform=platform, api_key=api_key, base_url=base_url)

    # --- diagnostics -----------------------------------------------------

    def validate(self, platform: str) -> list[str]:
        issues: list[str] = []
        api_key, _ = self._api_key_with_source(platform)
        if not api_key:
            issues.append("API key is missing")
        base_url = self.resolve_base_url(platform)
        if not base_url:
            issues.append("Base URL is missing")
        else:
            parsed = urlparse(base_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                issues.append(f"Base URL is not an absolute http(s) URL: {base_url}")
        return issues

    def status(self, platform: str) -> ConfigStatus:
        api_key, source = self._api_key_with_source(platform)
        return ConfigStatus(
            platform=platform,
            configured=api_key is not None,
            api_key_source=source,
            masked_api_key=mask_secret(api_key),
            base_url=self.resolve_base_url(platform) or "",
            last_used=self.get(platform).last_used,
            issues=self.validate(platform),
        )

    def _lock_for(self, platform: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(platform, threading.Lock())


class InMemoryConfigRepository:
    """Repositorio en memoria (tests/embebido)."""

    def __init__(self, initial: Mapping[str, PlatformConfig] | None = None) -> None:
        self._data: dict[str, PlatformConfig] = dict(initial or {})

    def load(self, platform: str) -> PlatformConfig:
        return self._data.get(platform, PlatformConfig()).model_copy()

    def save(self, platform: str, config: PlatformConfig) -> None:
        self._data[platform] = config.model_copy()

    def delete(self, platform: str) -> bool:
        return self._data.pop(platform, None) is not None


class InMemoryConfigStore(ConfigStore):
    """Store aislado: sin ficheros ni `.env`; el entorno del proceso sí cuenta."""

    def __init__(
        self,
        initial: Mapping[str, PlatformConfig] | None = None,
        *,
        defaults: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(InMemoryConfigRepository(initial), defaults=defaults, env_files=None)
