"""Contrato de persistencia de la config por plataforma."""

from __future__ import annotations

from typing import Protocol

from core.domain.models import PlatformConfig


class ConfigRepository(Protocol):
    """Lectura/escritura del estado persistido (fichero, memoria...)."""

    def load(self, platform: str) -> PlatformConfig:
        """Devuelve la config guardada o una vacía si no existe."""

        ...

    def save(self, platform: str, config: PlatformConfig) -> None:
        """Reemplaza la config de la plataforma de forma atómica."""

        ...

    def delete(self, platform: str) -> bool:
        ...
