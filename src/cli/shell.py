"""Shell interactiva por plataforma.

Cada línea es `<comando> [json | clave=valor ...]`, más los comandos propios
de la shell (`help [comando]`, `commands`, `use <plataforma>`, `exit`/`quit`).

La shell solo espera en la lectura de input: cada comando abre y cierra su
propio cliente HTTP dentro de `asyncio.run`.
"""

from __future__ import annotations

import asyncio
import json
import shlex
from typing import Any, Callable

import typer
from rich.console import Console
from rich.prompt import Prompt

from cli.ui_components import build_commands_table, print_error, print_json
from core.domain.commands import Args
from core.domain.errors import APIError, ArgumentValidationError
from core.services.module_selector import ModuleSelector, PlatformExecutor

EXIT_WORDS = {"exit", "quit", ":q"}


def parse_value(raw: str) -> Any:
    """`[..]`/`{..}` se decodifican como JSON; el resto queda como texto."""

    if raw[:1] in ("[", "{"):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
    return raw


def parse_line(line: str) -> tuple[str, Args]:
    """Separa una línea de la shell en `(comando, args)`.

    >>> parse_line('campaigns:create name="Q1 Outreach"')
    ('campaigns:create', {'name': 'Q1 Outreach'})
    """

    text = line.strip()
    command, _, rest = text.partition(" ")
    rest = rest.strip()
    if not rest:
        return command, {}

    if rest.startswith("{"):
        try:
            payload = json.loads(rest)
        except ValueError as exc:
            raise ArgumentValidationError(f"Invalid JSON arguments: {exc}", command=command) from exc
        if not isinstance(payload, dict):
            raise ArgumentValidationError("JSON arguments must be an object", command=command)
        return command, payload

    try:
        tokens = shlex.split(rest)
    except ValueError as exc:
        raise ArgumentValidationError(f"Could not parse arguments: {exc}", command=command) from exc

    args: Args = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise ArgumentValidationError(
                f"Expected key=value, got '{token}'",
                command=command,
                hint="Use key=value pairs or a JSON object.",
            )
        args[key] = parse_value(value)
    return command, args


class InteractiveShell:
    def __init__(
        self,
        selector: ModuleSelector,
        platform: str,
        *,
        console: Console,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self._selector = selector
        self.console = console
        self.executor: PlatformExecutor = selector.select(platform)
        self._read_line = read_line or (lambda prompt: Prompt.ask(prompt, console=console))

    @property
    def prompt(self) -> str:
        return f"[bold cyan]{self.executor.platform}[/bold cyan]>"

    def print_help(self, words: list[str] | None = None) -> None:
        if words:
            self._print_command_help(words[0])
            return
        self.console.print(
            "Type a command with arguments as key=value pairs or a JSON object, e.g.\n"
            "  campaigns:list limit=10\n"
            '  campaigns:create {"name": "Q1 Outreach"}\n'
            "Shell commands: help [command], commands, use <platform>, exit",
            highlight=False,
        )

    def _print_command_help(self, name: str) -> None:
        try:
            spec = self.executor.commands().get(name)
        except APIError as exc:
            print_error(self.console, exc.with_context(platform=self.executor.platform))
            return
        lines = [spec.usage, spec.description or "(no description)"]
        lines.append(f"Required: {', '.join(spec.required_fields) or '-'}")
        lines.append(f"Optional: {', '.join(spec.optional_fields) or '-'}")
        if spec.aliases:
            lines.append(f"Aliases: {', '.join(spec.aliases)}")
        self.console.print("\n".join(lines), markup=False, highlight=False)

    def run(self) -> None:
        descriptor = self.executor.descriptor
        self.console.print(
            f"[bold]{descriptor.display_name}[/bold] shell • {descriptor.command_count} commands "
            "• type [cyan]help[/cyan] or [cyan]exit[/cyan]"
        )
        while True:
            try:
                line = self._read_line(self.prompt)
            except EOFError:
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Procesa una línea; devuelve `False` cuando hay que salir."""

        text = line.strip()
        if not text:
            return True
        word = text.split()[0].lower()
        if word in EXIT_WORDS:
            return False
        if word == "help":
            self.print_help(text.split()[1:])
            return True
        if word == "commands":
            self.console.print(build_commands_table(self.executor.descriptor, self.executor.commands()))
            return True
        if word == "use":
            self._switch(text.split()[1:])
            return True

        try:
            command, args = parse_line(text)
            spec = self.executor.commands().get(command)
        except APIError as exc:
            print_error(self.console, exc.with_context(platform=self.executor.platform))
            return True
        if spec.destructive and not typer.confirm(f"'{spec.name}' is destructive. Continue?", default=False):
            self.console.print("[yellow]Cancelled.[/yellow]")
            return True

        result = asyncio.run(self.executor.execute(command, args))
        if result.error is not None:
            print_error(self.console, result.error)
        else:
            print_json(self.console, result.value)
        return True

    def _switch(self, words: list[str]) -> None:
        if not words:
            self.console.print("[yellow]Usage:[/yellow] use <platform>")
            return
        try:
            self.executor = self._selector.select(words[0])
        except APIError as exc:
            print_error(self.console, exc)
            return
        self.console.print(f"Switched to [bold]{self.executor.descriptor.display_name}[/bold]")
