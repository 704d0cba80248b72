"""Tests for the command-line interface."""

import json
import sys

import pytest
from click.testing import CliRunner
from loguru import logger

from network_watchdog import __version__
from network_watchdog.cli import main

SCRIPT = """\
events:
  - {type: available, network: 100, interface: wlan0}
  - {type: capabilities, network: 100, capabilities: [internet]}
  - {type: link, network: 100, link: {interface_name: wlan0, addresses: [10.0.0.2/24]}}
  - {type: lost, network: 100}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI binds loguru to the runner's stderr; rebind it afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def base_args(tmp_path):
    return ["--config", str(tmp_path / "config.json"), "--log-level", "ERROR"]


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "events.yaml"
    path.write_text(SCRIPT)
    return path


class TestCLI:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_replay_text(self, runner, base_args, script_file):
        result = runner.invoke(main, base_args + ["replay", str(script_file)])

        assert result.exit_code == 0
        assert "Replayed 4 event(s)" in result.output
        assert "disconnected (initial)" in result.output
        assert "no_internet_access" in result.output
        assert "vpn_connection" in result.output
        assert "last_network: 100" in result.output

    def test_replay_json(self, runner, base_args, script_file):
        result = runner.invoke(main, base_args + ["replay", str(script_file), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["initial_state"] == "disconnected"
        assert data["states"] == [
            "connected",
            "no_internet_access",
            "vpn_connection",
            "metered_connection",
            "disconnected",
        ]
        assert data["params"]["connected"] is False
        assert data["params"]["current_network"] == 100
        assert data["params"]["link_metadata"]["addresses"] == ["10.0.0.2/24"]

    def test_replay_malformed_script(self, runner, base_args, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("events:\n  - {type: reboot, network: 1}\n")

        result = runner.invoke(main, base_args + ["replay", str(bad)])

        assert result.exit_code == 1
        assert "unknown type" in result.output

    def test_config_show(self, runner, base_args, tmp_path):
        result = runner.invoke(main, base_args + ["config", "show"])

        assert result.exit_code == 0
        assert str(tmp_path / "config.json") in result.output
        assert "Stream buffer size" in result.output

    def test_config_set(self, runner, base_args, tmp_path):
        result = runner.invoke(main, base_args + ["config", "set", "stream_buffer_size", "16"])

        assert result.exit_code == 0
        saved = json.loads((tmp_path / "config.json").read_text())
        assert saved["stream_buffer_size"] == 16

    def test_config_export_import(self, runner, base_args, tmp_path):
        exported = tmp_path / "exported.yaml"

        result = runner.invoke(main, base_args + ["config", "export", str(exported), "--format", "yaml"])
        assert result.exit_code == 0
        assert exported.exists()

        result = runner.invoke(main, base_args + ["config", "import", str(exported), "--format", "yaml"])
        assert result.exit_code == 0
        assert "imported" in result.output
