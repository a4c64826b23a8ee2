"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles entre `exec`, la shell y los listados.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.markup import escape
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from adapters.json_exporter import dumps
from core.domain.commands import CommandModule, PlatformDescriptor
from core.domain.errors import APIError
from core.domain.models import ConfigStatus, HealthReport, HealthState
from core.services.registry import SearchHit

_HEALTH_STYLES = {
    HealthState.OK: "green",
    HealthState.ERROR: "red",
    HealthState.NOT_CONFIGURED: "yellow",
}


def print_banner(console: Console, version: str) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> shell).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("COLD EMAIL CLI", style="bold cyan")
    subtitle = Text(f"Multi-platform outreach toolkit • v{version}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_platforms_table(descriptors: Iterable[PlatformDescriptor], statuses: dict[str, ConfigStatus]) -> Table:
    table = Table(title="Platforms")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")
    table.add_column("Configured", no_wrap=True)
    for descriptor in descriptors:
        status = statuses.get(descriptor.key)
        configured = "[green]yes[/green]" if status and status.configured else "[yellow]no[/yellow]"
        table.add_row(descriptor.key, descriptor.display_name, descriptor.description, configured)
    return table


def build_commands_table(descriptor: PlatformDescriptor, module: CommandModule) -> Table:
    table = Table(title=f"{descriptor.display_name} commands ({len(module)})")
    table.add_column("Category", style="magenta", no_wrap=True)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Method", style="white", no_wrap=True)
    table.add_column("Description")
    table.add_column("Aliases", style="dim")
    for category, specs in module.by_category().items():
        for index, spec in enumerate(specs):
            description = escape(spec.description) + (" [red](destructive)[/red]" if spec.destructive else "")
            table.add_row(
                category if index == 0 else "",
                spec.name,
                spec.method,
                description,
                ", ".join(spec.aliases),
            )
    return table


def build_search_table(query: str, hits: list[SearchHit]) -> Table:
    table = Table(title=f"Commands matching '{query}' ({len(hits)})")
    table.add_column("Platform", style="cyan", no_wrap=True)
    table.add_column("Command", style="white", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="dim")
    previous = None
    for hit in hits:
        table.add_row(
            hit.platform if hit.platform != previous else "",
            hit.command.name,
            hit.command.category,
            hit.command.description,
        )
        previous = hit.platform
    return table


def build_health_table(reports: list[HealthReport]) -> Table:
    table = Table(title="Platform health")
    table.add_column("Platform", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Latency", justify="right")
    table.add_column("Details", style="dim")
    for report in reports:
        style = _HEALTH_STYLES[report.state]
        latency = f"{report.latency_ms:.0f} ms" if report.latency_ms is not None else "-"
        table.add_row(
            report.display_name,
            f"[{style}]{report.state.value}[/{style}]",
            latency,
            escape(report.detail or ""),
        )
    return table


def build_config_table(statuses: list[ConfigStatus]) -> Table:
    table = Table(title="Configuration")
    table.add_column("Platform", style="cyan", no_wrap=True)
    table.add_column("API key", style="white")
    table.add_column("Source", style="dim")
    table.add_column("Base URL", style="magenta")
    table.add_column("Last used", style="dim")
    for status in statuses:
        table.add_row(
            status.platform,
            status.masked_api_key or "[yellow]not set[/yellow]",
            status.api_key_source or "-",
            status.base_url or "-",
            status.last_used.isoformat(timespec="seconds") if status.last_used else "-",
        )
    return table


def print_json(console: Console, payload: Any) -> None:
    console.print(Syntax(dumps(payload), "json", theme="ansi_dark", word_wrap=True))


def print_error(console: Console, error: APIError) -> None:
    """`Error [<kind>]: mensaje` + pista opcional."""

    line = Text.assemble((f"Error [{error.kind.value}]:", "bold red"), " ", str(error))
    console.print(line)
    status_code = getattr(error, "status_code", None)
    body = getattr(error, "body", None)
    if status_code is not None and isinstance(body, (dict, list)):
        print_json(console, body)
    if error.hint:
        console.print(Text.assemble(("Hint:", "yellow"), " ", error.hint))
