"""
Unit tests for the gitor-server entry point.

uvicorn.run is replaced, so these tests only check how configuration and
command line overrides reach the server.
"""
import pytest
import yaml
from click.testing import CliRunner

from gitor_server import cli as server_cli


@pytest.fixture
def config_path(tmp_path, repos_dir):
    path = tmp_path / "server-config.yml"
    path.write_text(yaml.safe_dump({
        "paths": {"repositories": str(repos_dir)},
        "server": {
            "port": "9000",
            "tokenWhitelist": ["secret"],
            "address": "git.example.com",
            "user": "git",
        },
    }))
    return str(path)


@pytest.fixture
def served(monkeypatch):
    """Capture the arguments uvicorn.run is called with."""
    calls = []
    monkeypatch.setattr(server_cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(server_cli, "setup_logging", lambda *args, **kwargs: None)
    return calls


class TestServerMain:
    """Tests for gitor-server."""

    def test_serves_on_configured_address(self, config_path, served):
        result = CliRunner().invoke(server_cli.main, ["--config", config_path])

        assert result.exit_code == 0
        app, kwargs = served[0]
        assert app.state.config.port == 9000
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9000

    def test_command_line_overrides_config(self, config_path, served):
        result = CliRunner().invoke(
            server_cli.main, ["--config", config_path, "--host", "127.0.0.1", "-p", "7000"]
        )

        assert result.exit_code == 0
        _, kwargs = served[0]
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 7000

    def test_invalid_config_exits_before_serving(self, tmp_path, served):
        result = CliRunner().invoke(server_cli.main, ["--config", str(tmp_path / "nope.yml")])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output
        assert served == []
