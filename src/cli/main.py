"""CLI principal (`cec`).

Por qué Typer:
- Subcomandos tipados con ayuda generada sin escribir parsers a mano.
- `CliRunner` permite testear la superficie completa sin subprocesos.

Esta capa es la única que decide color y exit code:
- 1: error de la plataforma/config (cualquier `APIError`)
- 2: `--args` no es un objeto JSON válido
- 130: Ctrl+C
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.json_exporter import dumps, export_result_json
from cli import doctor
from cli.context import get_context
from cli.shell import InteractiveShell
from cli.ui_components import (
    build_commands_table,
    build_config_table,
    build_health_table,
    build_platforms_table,
    build_search_table,
    print_banner,
    print_error,
    print_json,
)
from core.config import env_prefix_for
from core.domain.errors import APIError, ArgumentValidationError
from core.domain.models import HealthState
from core.services.config_store import normalize_config_key
from core.services.health import check_health
from core.services.registry import build_default_registry

__version__ = "2.0.0"

EXIT_ERROR = 1
EXIT_BAD_ARGS = 2
EXIT_INTERRUPTED = 130

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


app = typer.Typer(
    invoke_without_command=True,
    add_completion=False,
    help="Cold email multi-platform CLI: one interface for SmartLead, Instantly, Apollo and more.",
)
app.add_typer(doctor.app, name="doctor")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _fail(error: APIError, code: int = EXIT_ERROR) -> typer.Exit:
    print_error(err_console, error)
    return typer.Exit(code)


def _parse_args_option(raw: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except ValueError as exc:
        raise _fail(ArgumentValidationError(f"--args is not valid JSON: {exc}"), EXIT_BAD_ARGS) from exc
    if not isinstance(payload, dict):
        raise _fail(ArgumentValidationError("--args must be a JSON object"), EXIT_BAD_ARGS)
    return payload


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and retries to stderr."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Without a subcommand, show the platform overview menu."""

    setup_logging(verbose)
    if version:
        console.print(f"cold-email-cli {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is not None:
        return

    state = get_context(ctx)
    print_banner(console, __version__)
    statuses = {key: state.store.status(key) for key in state.registry.keys()}
    console.print(build_platforms_table(state.registry.list(), statuses))
    console.print(
        "\nOpen a platform shell with [cyan]cec <platform>[/cyan], run a single command with "
        "[cyan]cec exec <platform> <command> --args '<json>'[/cyan]."
    )


# --- direct execution ----------------------------------------------------


@app.command(name="exec")
def exec_command(
    ctx: typer.Context,
    platform: str = typer.Argument(..., help="Platform key, e.g. smartlead."),
    command: str = typer.Argument(..., help="Command name or alias, e.g. campaigns:list."),
    args: str = typer.Option("{}", "--args", "-a", help="Command arguments as a JSON object."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key for this invocation only."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Base URL for this invocation only."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation for destructive commands."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result as JSON."),
    raw_json: bool = typer.Option(False, "--json", help="Print plain JSON (no colors)."),
) -> None:
    """Run a single platform command and exit."""

    state = get_context(ctx)
    payload = _parse_args_option(args)
    try:
        descriptor, spec = state.executor.lookup(platform, command)
    except APIError as exc:
        raise _fail(exc.with_context(platform=platform, command=command)) from exc

    state.store.override(descriptor.key, api_key=api_key, base_url=base_url)
    if spec.destructive and not yes:
        if not typer.confirm(f"'{spec.name}' on {descriptor.display_name} is destructive. Continue?", default=False):
            err_console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(EXIT_ERROR)

    result = asyncio.run(state.executor.execute(descriptor.key, command, payload))
    if output is not None:
        export_result_json(result=result, output_path=output)
        logger.debug("Result written to %s", output)

    if result.error is not None:
        if raw_json:
            typer.echo(dumps({"error": result.error.to_dict()}))
            raise typer.Exit(EXIT_ERROR)
        raise _fail(result.error)

    if raw_json:
        typer.echo(dumps(result.value))
    else:
        print_json(console, result.value)


# --- discovery -----------------------------------------------------------


@app.command()
def platforms(ctx: typer.Context) -> None:
    """List supported platforms and whether they have an API key."""

    state = get_context(ctx)
    statuses = {key: state.store.status(key) for key in state.registry.keys()}
    console.print(build_platforms_table(state.registry.list(), statuses))


@app.command()
def commands(
    ctx: typer.Context,
    platform: str = typer.Argument(..., help="Platform key."),
) -> None:
    """List a platform's commands by category."""

    state = get_context(ctx)
    try:
        descriptor = state.registry.get(platform)
    except APIError as exc:
        raise _fail(exc) from exc
    console.print(build_commands_table(descriptor, descriptor.load_commands()))


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for in command names, aliases and descriptions."),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="Restrict to one platform."),
) -> None:
    """Search commands across all platforms."""

    state = get_context(ctx)
    try:
        hits = state.registry.search(query, platform=platform)
    except APIError as exc:
        raise _fail(exc) from exc
    if not hits:
        console.print(f"No commands match '{query}'.", highlight=False)
        return
    console.print(build_search_table(query, hits))


@app.command()
def health(
    ctx: typer.Context,
    platform: Optional[list[str]] = typer.Option(None, "--platform", "-p", help="Check only these platforms."),
) -> None:
    """Check connectivity of configured platforms."""

    state = get_context(ctx)
    try:
        reports = asyncio.run(
            check_health(state.registry, state.store, settings=state.settings, platforms=platform or None)
        )
    except APIError as exc:
        raise _fail(exc) from exc
    console.print(build_health_table(reports))
    if any(report.state is HealthState.ERROR for report in reports):
        raise typer.Exit(EXIT_ERROR)


# --- configuration -------------------------------------------------------


@app.command(name="config:set")
def config_set(
    ctx: typer.Context,
    platform: str = typer.Argument(..., help="Platform key."),
    key: str = typer.Argument(..., help="apiKey or baseUrl."),
    value: str = typer.Argument(..., help="Value to store."),
) -> None:
    """Store a value in the platform's persisted config."""

    state = get_context(ctx)
    try:
        descriptor = state.registry.get(platform)
        state.store.set_value(descriptor.key, key, value)
    except APIError as exc:
        raise _fail(exc) from exc
    console.print(f"[green]Saved[/green] {key} for {descriptor.display_name}.", highlight=False)


@app.command(name="config:get")
def config_get(
    ctx: typer.Context,
    platform: str = typer.Argument(..., help="Platform key."),
    key: Optional[str] = typer.Argument(None, help="apiKey or baseUrl (default: both)."),
) -> None:
    """Show the effective config (API key masked)."""

    state = get_context(ctx)
    try:
        descriptor = state.registry.get(platform)
        field_name = None
        if key:
            field_name = normalize_config_key(key)
    except APIError as exc:
        raise _fail(exc) from exc
    status = state.store.status(descriptor.key)
    view = {"apiKey": status.masked_api_key, "baseUrl": status.base_url}
    if field_name == "api_key":
        view = {"apiKey": status.masked_api_key}
    elif field_name == "base_url":
        view = {"baseUrl": status.base_url}
    print_json(console, view)


@app.command(name="config:list")
def config_list(ctx: typer.Context) -> None:
    """List config for every platform (API keys masked)."""

    state = get_context(ctx)
    console.print(build_config_table([state.store.status(key) for key in state.registry.keys()]))


@app.command(name="config:validate")
def config_validate(
    ctx: typer.Context,
    platform: Optional[str] = typer.Argument(None, help="Platform key (default: all)."),
) -> None:
    """Validate API key and base URL; exit 1 on issues."""

    state = get_context(ctx)
    try:
        keys = [state.registry.get(platform).key] if platform else state.registry.keys()
    except APIError as exc:
        raise _fail(exc) from exc

    failed = False
    for key in keys:
        issues = state.store.validate(key)
        if issues:
            failed = True
            console.print(f"[red]✗[/red] {key}: {'; '.join(issues)}", highlight=False)
        else:
            console.print(f"[green]✓[/green] {key}: OK", highlight=False)
    if failed:
        raise typer.Exit(EXIT_ERROR)


@app.command(name="config:clear")
def config_clear(
    ctx: typer.Context,
    platform: str = typer.Argument(..., help="Platform key."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Remove a platform's persisted config."""

    state = get_context(ctx)
    try:
        descriptor = state.registry.get(platform)
    except APIError as exc:
        raise _fail(exc) from exc
    if not yes and not typer.confirm(f"Remove stored config for {descriptor.display_name}?", default=False):
        raise typer.Exit(EXIT_ERROR)
    removed = state.store.clear(descriptor.key)
    console.print("Removed." if removed else "Nothing stored.")


@app.command(name="config:env-example")
def config_env_example(ctx: typer.Context) -> None:
    """Print a `.env` template with every platform variable."""

    state = get_context(ctx)
    lines = ["# cold-email-cli environment", ""]
    for descriptor in state.registry:
        prefix = env_prefix_for(descriptor.key)
        lines.append(f"# {descriptor.display_name}")
        lines.append(f"{prefix}_API_KEY=")
        lines.append(f"# {prefix}_BASE_URL={descriptor.default_base_url}")
        lines.append("")
    typer.echo("\n".join(lines).rstrip() + "\n", nl=False)


# --- per-platform shells -------------------------------------------------


def _register_shell(key: str, display_name: str) -> None:
    def open_shell(
        ctx: typer.Context,
        api_key: Optional[str] = typer.Option(None, "--api-key", help="API key for this session only."),
        base_url: Optional[str] = typer.Option(None, "--base-url", help="Base URL for this session only."),
    ) -> None:
        state = get_context(ctx)
        state.store.override(key, api_key=api_key, base_url=base_url)
        InteractiveShell(state.selector, key, console=console).run()

    open_shell.__doc__ = f"Interactive {display_name} shell."
    app.command(name=key)(open_shell)


for _descriptor in build_default_registry():
    _register_shell(_descriptor.key, _descriptor.display_name)


def run() -> None:
    # Consolas Windows con cp1252: los símbolos de rich (✓, ✗) fallan sin esto.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        raise SystemExit(EXIT_INTERRUPTED)
