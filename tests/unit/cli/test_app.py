"""Unit tests for the main CLI application and its global options."""

import httpx
from typer.testing import CliRunner

from rpaasv2 import __version__
from rpaasv2.cli.app import app
from rpaasv2.cli.context import CommandContext

runner = CliRunner()


def autoscale_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"minReplicas": 1, "maxReplicas": 2})


class TestMainApp:
    """Tests for main app options."""

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "RPaaS CLI" in result.stdout

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_autoscale_help_lists_subcommands(self) -> None:
        result = runner.invoke(app, ["autoscale", "--help"])
        assert result.exit_code == 0
        for command in ("info", "update", "remove"):
            assert command in result.stdout

    def test_logs_help(self) -> None:
        result = runner.invoke(app, ["logs", "--help"])
        assert result.exit_code == 0
        assert "Shows the log entries from instance pods" in result.stdout

    def test_debug_flag_is_accepted(self) -> None:
        result = runner.invoke(app, ["--debug", "version"])
        assert result.exit_code == 0


class TestTargets:
    """Tests for target resolution from flags and environment."""

    def test_no_target_configured(self) -> None:
        result = runner.invoke(app, ["autoscale", "info", "-s", "my-service", "-i", "my-instance"])

        assert result.exit_code == 1
        assert "no RPaaS target configured" in result.output

    def test_rpaas_url_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RPAAS_URL", "http://env-rpaas.test")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return autoscale_ok(request)

        context = CommandContext(transport=httpx.MockTransport(handler))
        result = runner.invoke(app, ["autoscale", "info", "-i", "my-instance"], obj=context)

        assert result.exit_code == 0
        assert requests[0].url.host == "env-rpaas.test"

    def test_flag_overrides_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RPAAS_URL", "http://env-rpaas.test")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return autoscale_ok(request)

        context = CommandContext(transport=httpx.MockTransport(handler))
        result = runner.invoke(
            app,
            ["--rpaas-url", "http://flag-rpaas.test", "autoscale", "info", "-i", "my-instance"],
            obj=context,
        )

        assert result.exit_code == 0
        assert requests[0].url.host == "flag-rpaas.test"

    def test_tsuru_target_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TSURU_TARGET", "http://tsuru.test")
        monkeypatch.setenv("TSURU_TOKEN", "t0k3n")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return autoscale_ok(request)

        context = CommandContext(transport=httpx.MockTransport(handler))
        result = runner.invoke(app, ["autoscale", "info", "-s", "rpaasv2", "-i", "my-instance"], obj=context)

        assert result.exit_code == 0
        assert requests[0].url.path == "/services/rpaasv2/proxy/my-instance"
        assert requests[0].headers["Authorization"] == "Bearer t0k3n"

    def test_tsuru_target_requires_service(self) -> None:
        context = CommandContext(transport=httpx.MockTransport(autoscale_ok))
        result = runner.invoke(
            app,
            ["--tsuru-target", "http://tsuru.test", "--tsuru-token", "t0k3n", "autoscale", "info", "-i", "my-instance"],
            obj=context,
        )

        assert result.exit_code == 1
        assert "service is required" in result.output

    def test_direct_target_confirmation_without_service(self) -> None:
        context = CommandContext(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
        result = runner.invoke(
            app,
            ["--rpaas-url", "http://rpaas.test", "autoscale", "remove", "-i", "my-instance"],
            obj=context,
        )

        assert result.exit_code == 0
        assert result.stdout == "Autoscale of my-instance successfully removed\n"


class TestSettingsFile:
    """Tests for the --config option."""

    def test_invalid_settings_file(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("client:\n  unknown: 1\n")

        result = runner.invoke(app, ["--config", str(path), "version"])

        assert result.exit_code == 1
        assert "Invalid configuration in" in result.output

    def test_timeout_from_settings_file(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("client:\n  timeout: 7\n  user_agent: my-agent\n")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return autoscale_ok(request)

        context = CommandContext(transport=httpx.MockTransport(handler))
        result = runner.invoke(
            app,
            ["--config", str(path), "--rpaas-url", "http://rpaas.test", "autoscale", "info", "-i", "my-instance"],
            obj=context,
        )

        assert result.exit_code == 0
        assert context.timeout == 7.0
        assert requests[0].headers["User-Agent"] == "my-agent"
