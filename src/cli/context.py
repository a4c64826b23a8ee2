"""Estado compartido de una invocación de la CLI.

Se construye perezosamente en el contexto raíz de Typer; los tests pueden
inyectar uno propio con `CliRunner.invoke(app, ..., obj=CliContext(...))`.
"""

from __future__ import annotations

from dataclasses import dataclass

import typer

from adapters.config_files import JsonFileConfigRepository
from core.config import AppSettings, default_env_files
from core.services.config_store import ConfigStore
from core.services.executor import CommandExecutor
from core.services.module_selector import ModuleSelector
from core.services.registry import PlatformRegistry, build_default_registry


@dataclass
class CliContext:
    settings: AppSettings
    registry: PlatformRegistry
    store: ConfigStore
    executor: CommandExecutor

    @classmethod
    def create(cls, settings: AppSettings | None = None) -> "CliContext":
        settings = settings or AppSettings(_env_file=default_env_files())
        registry = build_default_registry()
        store = ConfigStore(
            JsonFileConfigRepository(settings.resolved_config_dir()),
            defaults=registry.defaults(),
        )
        executor = CommandExecutor(registry, store, settings=settings)
        return cls(settings=settings, registry=registry, store=store, executor=executor)

    @property
    def selector(self) -> ModuleSelector:
        return ModuleSelector(self.executor)


def get_context(ctx: typer.Context) -> CliContext:
    root = ctx.find_root()
    if root.obj is None:
        root.obj = CliContext.create()
    return root.obj
