"""Registro de plataformas.

Responsabilidad:
- Conocer qué plataformas existen (metadatos estáticos, orden de listado).
- Resolver una clave a su descriptor, sin cargar aún su catálogo de comandos.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from core.domain.commands import CommandSpec, PlatformDescriptor
from core.domain.errors import PlatformNotFoundError


@dataclass(frozen=True)
class SearchHit:
    platform: str
    command: CommandSpec


class PlatformRegistry:
    def __init__(self, descriptors: Iterable[PlatformDescriptor]) -> None:
        self._descriptors: dict[str, PlatformDescriptor] = {}
        for descriptor in descriptors:
            key = descriptor.key.lower()
            if key in self._descriptors:
                raise ValueError(f"Duplicate platform key: {key}")
            self._descriptors[key] = descriptor

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[PlatformDescriptor]:
        return iter(self._descriptors.values())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip().lower() in self._descriptors

    def list(self) -> list[PlatformDescriptor]:
        return list(self._descriptors.values())

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def get(self, key: str) -> PlatformDescriptor:
        descriptor = self._descriptors.get(key.strip().lower())
        if descriptor is None:
            raise PlatformNotFoundError(key, available=self.keys())
        return descriptor

    def defaults(self) -> dict[str, str]:
        """Base URLs de fábrica, para el fallback del `ConfigStore`."""

        return {key: d.default_base_url for key, d in self._descriptors.items()}

    def search(self, query: str, *, platform: str | None = None) -> list[SearchHit]:
        """Busca comandos por nombre, alias, descripción o categoría.

        Carga los catálogos necesarios (es la única operación del registro que
        lo hace para todas las plataformas).
        """

        needle = query.strip().lower()
        if not needle:
            return []
        descriptors = [self.get(platform)] if platform else self.list()
        hits: list[SearchHit] = []
        for descriptor in descriptors:
            for spec in descriptor.load_commands():
                haystack = " ".join((spec.name, *spec.aliases, spec.description, spec.category)).lower()
                if needle in haystack:
                    hits.append(SearchHit(platform=descriptor.key, command=spec))
        return hits


def build_default_registry() -> PlatformRegistry:
    from adapters.platforms import PLATFORM_DESCRIPTORS

    return PlatformRegistry(PLATFORM_DESCRIPTORS)
