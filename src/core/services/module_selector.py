"""Selección de plataforma: devuelve un executor ligado a ella.

La shell interactiva y `exec` trabajan con un `PlatformExecutor`; así no
repiten la clave de plataforma en cada llamada.
"""

from __future__ import annotations

from typing import Any

from core.domain.commands import Args, CommandModule, PlatformDescriptor
from core.domain.models import CommandResult
from core.services.executor import CommandExecutor


class PlatformExecutor:
    def __init__(self, descriptor: PlatformDescriptor, executor: CommandExecutor) -> None:
        self.descriptor = descriptor
        self._executor = executor

    @property
    def platform(self) -> str:
        return self.descriptor.key

    def commands(self) -> CommandModule:
        return self.descriptor.load_commands()

    async def execute(self, command: str, args: Args | None = None) -> CommandResult[Any]:
        return await self._executor.execute(self.platform, command, args)

    def __repr__(self) -> str:
        return f"PlatformExecutor({self.platform!r})"


class ModuleSelector:
    def __init__(self, executor: CommandExecutor) -> None:
        self._executor = executor

    def select(self, platform: str) -> PlatformExecutor:
        """Lanza `PlatformNotFoundError` si la clave no existe."""

        descriptor = self._executor.registry.get(platform)
        return PlatformExecutor(descriptor, self._executor)
