"""Tests for the interactive shell (line parsing and dispatch)."""

from __future__ import annotations

import httpx
import pytest
from rich.console import Console

from cli.shell import InteractiveShell, parse_line
from core.domain.errors import ArgumentValidationError
from core.services.module_selector import ModuleSelector


class TestParseLine:
    def test_key_value_pairs(self) -> None:
        assert parse_line('campaigns:create name="Q1 Outreach" limit=5') == (
            "campaigns:create",
            {"name": "Q1 Outreach", "limit": "5"},
        )

    def test_json_object(self) -> None:
        assert parse_line('leads:add {"campaign_id": 1, "leads": []}') == (
            "leads:add",
            {"campaign_id": 1, "leads": []},
        )

    def test_json_values_inside_pairs(self) -> None:
        _, args = parse_line("""leads:add leads='[{"email":"a@b.co"}]'""")
        assert args == {"leads": [{"email": "a@b.co"}]}

    def test_bare_command(self) -> None:
        assert parse_line("  campaigns:list ") == ("campaigns:list", {})

    @pytest.mark.parametrize("line", ["cmd {bad json", "cmd [1, 2]", "cmd token", "cmd 'unclosed"])
    def test_invalid_input(self, line: str) -> None:
        with pytest.raises(ArgumentValidationError):
            parse_line(line)


def _shell(harness, lines: list[str], platform: str = "smartlead") -> tuple[InteractiveShell, Console]:
    console = Console(record=True, width=120)
    feed = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    shell = InteractiveShell(ModuleSelector(harness.executor), platform, console=console, read_line=read_line)
    return shell, console


class TestInteractiveShell:
    def test_runs_commands_until_exit(self, make_harness) -> None:
        harness = make_harness(httpx.Response(200, json=[{"id": 1, "name": "Q1"}]))
        shell, console = _shell(harness, ["campaigns:list limit=1", "exit", "campaigns:list"])

        shell.run()

        assert harness.transport.calls == 1
        assert '"Q1"' in console.export_text()

    def test_errors_are_rendered_and_loop_continues(self, make_harness) -> None:
        harness = make_harness()
        shell, console = _shell(harness, ["nope", "campaigns:create", "quit"])

        shell.run()

        output = console.export_text()
        assert "Error [not_found]" in output
        assert "Error [validation]" in output
        assert harness.transport.calls == 0

    def test_use_switches_platform(self, make_harness) -> None:
        harness = make_harness(httpx.Response(200, json={}))
        shell, _ = _shell(harness, ["use apollo", "sequences:list"])

        shell.run()

        assert shell.executor.platform == "apollo"
        assert harness.transport.requests[0].url.host == "api.apollo.io"

    def test_destructive_requires_confirmation(self, make_harness, monkeypatch: pytest.MonkeyPatch) -> None:
        harness = make_harness(httpx.Response(200, json={}))
        monkeypatch.setattr("cli.shell.typer.confirm", lambda *a, **k: False)
        shell, console = _shell(harness, ["campaigns:delete id=3"])

        shell.run()

        assert harness.transport.calls == 0
        assert "Cancelled" in console.export_text()

    def test_commands_and_help(self, make_harness) -> None:
        shell, console = _shell(make_harness(), ["help", "commands"])

        shell.run()

        output = console.export_text()
        assert "Shell commands" in output
        assert "campaigns:list" in output

    def test_help_for_command_lists_fields(self, make_harness) -> None:
        harness = make_harness()
        shell, console = _shell(harness, ["help campaign-create", "help campaigns:explode"])

        shell.run()

        output = console.export_text()
        assert "campaigns:create name=<string> [track_settings=<array>]" in output
        assert "Required: name" in output
        assert "Optional: track_settings, client_id" in output
        assert "Aliases: campaign-create, camp:create" in output
        assert "Unknown command 'campaigns:explode'" in output
        assert harness.transport.calls == 0
