"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y servicios lean config de forma consistente.

Hay dos niveles:
- `AppSettings`: ajustes globales de la herramienta (prefijo `CEC_`).
- `PlatformEnvironment`: credenciales por plataforma (`<PLATFORM>_API_KEY`,
  `<PLATFORM>_BASE_URL`), instanciado con el prefijo de cada plataforma.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "cold-email-cli"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    `CEC_CONFIG_DIR` tiene prioridad para poder aislar tests y entornos CI.
    """

    override = (os.environ.get("CEC_CONFIG_DIR") or "").strip()
    if override:
        return Path(override)

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_env_files() -> tuple[str, ...]:
    # Orden: proyecto primero (dev), luego config global de usuario.
    return (".env", str(get_user_env_file()))


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CEC_",
        extra="ignore",
        case_sensitive=False,
        env_file=default_env_files(),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout fijo por request hacia las APIs de las plataformas (segundos).",
    )
    user_agent: str = Field(
        default="cold-email-cli/2.0 (+https://local)",
        min_length=1,
        description="User-Agent enviado a las plataformas.",
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        le=30,
        description="Pausa antes del único reintento de comandos idempotentes.",
    )
    health_max_concurrency: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Peticiones simultáneas máximas del health check global.",
    )
    config_dir: Path | None = Field(
        default=None,
        description="Directorio alternativo para los ficheros de configuración por plataforma.",
    )

    def resolved_config_dir(self) -> Path:
        return self.config_dir or get_user_config_dir()


class PlatformEnvironment(BaseSettings):
    """Credenciales de una plataforma leídas del entorno.

    Se instancia con `_env_prefix=f"{KEY}_"`; así `SMARTLEAD_API_KEY` y
    `SMARTLEAD_BASE_URL` se mapean a `api_key` / `base_url`.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(default=None, description="API key de la plataforma.")
    base_url: str | None = Field(default=None, description="Base URL alternativa.")

    @classmethod
    def for_platform(
        cls,
        platform: str,
        *,
        env_files: tuple[str, ...] | None = None,
    ) -> "PlatformEnvironment":
        prefix = f"{env_prefix_for(platform)}_"
        return cls(_env_prefix=prefix, _env_file=env_files)


def env_prefix_for(platform: str) -> str:
    """`smartlead` -> `SMARTLEAD` (guiones a guion bajo)."""

    return platform.strip().upper().replace("-", "_")
