"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cli.context import get_context
from core.config import default_env_files
from core.domain.errors import APIError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_config_dir(path: Path) -> tuple[bool, str]:
    """Comprueba que el directorio de config existe (o se puede crear) y es escribible."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, str(exc)
    if not os.access(path, os.W_OK):
        return False, f"{path} is not writable"
    return True, str(path)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    state = get_context(ctx)
    settings = state.settings

    table = Table(title="Cold Email CLI Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    ok_dir, detail_dir = _check_config_dir(settings.resolved_config_dir())
    table.add_row("Config dir", "OK" if ok_dir else "FAIL", detail_dir)
    for env_file in default_env_files():
        found = Path(env_file).is_file()
        table.add_row(".env", "FOUND" if found else "-", env_file)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Retry delay", "OK", f"{settings.retry_delay_seconds:g}s")
    table.add_row("Health concurrency", "OK", str(settings.health_max_concurrency))

    # Platforms (sin red)
    configured = 0
    for key in state.registry.keys():
        status = state.store.status(key)
        if status.configured:
            configured += 1
            detail = f"{status.masked_api_key} from {status.api_key_source}"
        else:
            detail = "no API key"
        label = "OK" if status.configured and not status.issues else ("ISSUES" if status.configured else "OPTIONAL")
        if status.configured and status.issues:
            detail = f"{detail}; {'; '.join(status.issues)}"
        table.add_row(key, label, detail)

    _console.print(table)

    if not configured:
        _console.print(
            "\n[yellow]Note:[/yellow] No platform has an API key yet. Run `cec doctor setup` "
            "or `cec config:set <platform> apiKey <value>`."
        )


@app.command(name="setup")
def setup(ctx: typer.Context) -> None:
    """Interactive platform setup (stores config in the user config directory).

    Designed for non-Python users: no manual file editing.
    """

    state = get_context(ctx)
    platform = typer.prompt(
        "Platform",
        default=state.registry.keys()[0],
        show_default=True,
    ).strip().lower()

    try:
        descriptor = state.registry.get(platform)
    except APIError as exc:
        raise typer.BadParameter(exc.hint or exc.message) from exc

    api_key = typer.prompt(f"{descriptor.display_name} API key", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt(
        "Base URL",
        default=descriptor.default_base_url,
        show_default=True,
    ).strip()

    if not api_key:
        raise typer.BadParameter("API key is required")

    values = {"api_key": api_key}
    if base_url and base_url != descriptor.default_base_url:
        values["base_url"] = base_url
    state.store.set(descriptor.key, **values)

    issues = state.store.validate(descriptor.key)
    if issues:
        _console.print(f"[yellow]Saved with issues:[/yellow] {'; '.join(issues)}", highlight=False)
    else:
        _console.print(f"[green]Saved.[/green] {descriptor.display_name} is ready: `cec {descriptor.key}`.")
