"""Tests for the ``cec`` command line (typer ``CliRunner``, no network)."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from cli.context import CliContext
from cli.main import EXIT_BAD_ARGS, EXIT_ERROR, __version__, app

runner = CliRunner()


@pytest.fixture
def make_context(make_harness, registry, store, settings):
    def factory(*responses):
        harness = make_harness(*responses)
        context = CliContext(settings=settings, registry=registry, store=store, executor=harness.executor)
        return context, harness

    return factory


# ---------------------------------------------------------------------------
# exec
# ---------------------------------------------------------------------------

class TestExec:
    def test_success_prints_json(self, make_context) -> None:
        context, harness = make_context(httpx.Response(200, json={"id": 1, "name": "Q1 Outreach"}))

        result = runner.invoke(
            app,
            ["exec", "smartlead", "campaign-create", "--args", '{"name": "Q1 Outreach"}', "--json"],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"id": 1, "name": "Q1 Outreach"}
        assert harness.transport.calls == 1

    def test_invalid_args_json_exits_2(self, make_context) -> None:
        context, harness = make_context()

        result = runner.invoke(app, ["exec", "smartlead", "campaigns:list", "--args", "{oops"], obj=context)

        assert result.exit_code == EXIT_BAD_ARGS
        assert "Error [validation]" in result.output
        assert harness.transport.calls == 0

    def test_args_must_be_object(self, make_context) -> None:
        context, _ = make_context()

        result = runner.invoke(app, ["exec", "smartlead", "campaigns:list", "--args", "[1]"], obj=context)

        assert result.exit_code == EXIT_BAD_ARGS

    def test_unknown_platform_exits_1(self, make_context) -> None:
        context, harness = make_context()

        result = runner.invoke(app, ["exec", "unknown", "campaigns"], obj=context)

        assert result.exit_code == EXIT_ERROR
        assert "Error [not_found]" in result.output
        assert "unknown" in result.output
        assert harness.transport.calls == 0

    def test_http_error_exits_1(self, make_context) -> None:
        context, _ = make_context(httpx.Response(404, json={"message": "no campaign"}))

        result = runner.invoke(app, ["exec", "smartlead", "campaigns:get", "--args", '{"id": 9}'], obj=context)

        assert result.exit_code == EXIT_ERROR
        assert "Error [http_status]" in result.output

    def test_destructive_declined(self, make_context) -> None:
        context, harness = make_context()

        result = runner.invoke(
            app,
            ["exec", "smartlead", "campaigns:delete", "--args", '{"id": 3}'],
            obj=context,
            input="n\n",
        )

        assert result.exit_code == EXIT_ERROR
        assert harness.transport.calls == 0

    def test_destructive_with_yes(self, make_context) -> None:
        context, harness = make_context(httpx.Response(200, json={"deleted": True}))

        result = runner.invoke(
            app,
            ["exec", "smartlead", "campaigns:delete", "--args", '{"id": 3}', "--yes", "--json"],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        assert harness.transport.requests[0].method == "DELETE"

    def test_api_key_flag_overrides(self, make_context) -> None:
        context, harness = make_context(httpx.Response(200, json=[]))

        result = runner.invoke(
            app,
            ["exec", "lemlist", "campaigns:list", "--api-key", "flag-key", "--json"],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        assert harness.transport.requests[0].headers["Authorization"] == "Bearer flag-key"

    def test_output_file(self, make_context, tmp_path: Path) -> None:
        context, _ = make_context(httpx.Response(200, json={"ok": True}))
        target = tmp_path / "out" / "result.json"

        result = runner.invoke(
            app,
            ["exec", "smartlead", "campaigns:list", "--output", str(target)],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        assert json.loads(target.read_text(encoding="utf-8")) == {"ok": True}


# ---------------------------------------------------------------------------
# discovery
# ---------------------------------------------------------------------------

class TestDiscovery:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_platforms(self, make_context) -> None:
        context, _ = make_context()

        result = runner.invoke(app, ["platforms"], obj=context)

        assert result.exit_code == 0
        assert "smartlead" in result.output
        assert "salesloft" in result.output

    def test_commands_unknown_platform(self, make_context) -> None:
        context, _ = make_context()

        result = runner.invoke(app, ["commands", "mailchimp"], obj=context)

        assert result.exit_code == EXIT_ERROR

    def test_search(self, make_context) -> None:
        context, _ = make_context()

        result = runner.invoke(app, ["search", "warmup"], obj=context)

        assert result.exit_code == 0
        assert "smartlead" in result.output

    def test_platform_shell_exits_on_eof(self, make_context) -> None:
        context, harness = make_context(httpx.Response(200, json=[]))

        result = runner.invoke(app, ["smartlead"], obj=context, input="campaigns:list\nexit\n")

        assert result.exit_code == 0, result.output
        assert harness.transport.calls == 1


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

class TestConfigCommands:
    def test_set_then_get_masks_key(self, isolated_env: Path) -> None:
        result = runner.invoke(app, ["config:set", "smartlead", "apiKey", "abcdefghijkl"])
        assert result.exit_code == 0, result.output

        stored = json.loads((isolated_env / "platforms" / "smartlead.json").read_text(encoding="utf-8"))
        assert stored["apiKey"] == "abcdefghijkl"

        result = runner.invoke(app, ["config:get", "smartlead", "apiKey"])
        assert result.exit_code == 0
        assert "abcdefgh..." in result.output
        assert "abcdefghijkl" not in result.output

    def test_set_unknown_key(self) -> None:
        result = runner.invoke(app, ["config:set", "smartlead", "token", "x"])

        assert result.exit_code == EXIT_ERROR
        assert "Unknown config key" in result.output

    def test_validate_reports_missing(self) -> None:
        result = runner.invoke(app, ["config:validate", "lemlist"])

        assert result.exit_code == EXIT_ERROR
        assert "API key is missing" in result.output

    def test_validate_ignores_env_file_of_other_user_dir(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        other = tmp_path / "xdg" / "cold-email-cli"
        other.mkdir(parents=True)
        (other / ".env").write_text("LEMLIST_API_KEY=from-another-user-dir\n", encoding="utf-8")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        result = runner.invoke(app, ["config:validate", "lemlist"])

        assert result.exit_code == EXIT_ERROR
        assert "API key is missing" in result.output

    def test_validate_ok_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEMLIST_API_KEY", "from-env")

        result = runner.invoke(app, ["config:validate", "lemlist"])

        assert result.exit_code == 0, result.output

    def test_clear(self, isolated_env: Path) -> None:
        runner.invoke(app, ["config:set", "apollo", "api_key", "x"])

        result = runner.invoke(app, ["config:clear", "apollo", "--yes"])

        assert result.exit_code == 0
        assert not (isolated_env / "platforms" / "apollo.json").exists()

    def test_env_example(self) -> None:
        result = runner.invoke(app, ["config:env-example"])

        assert result.exit_code == 0
        assert "SMARTLEAD_API_KEY=" in result.output
        assert "# SALESLOFT_BASE_URL=https://api.salesloft.com/v2" in result.output

    def test_doctor_run(self) -> None:
        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "Config dir" in result.output
