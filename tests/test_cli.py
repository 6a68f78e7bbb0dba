"""
Unit tests for netlocator/cli.py
"""

import pytest
import toml
from click.testing import CliRunner
from unittest.mock import patch

from netlocator.cli import cli
from netlocator.controller import Evaluation, RunOutcome, RunResult
from netlocator.dispatcher import TransitionReport
from netlocator.location.classifier import LocationDecision, Mode
from netlocator.network.models import InterfaceStatus


@pytest.fixture
def config_file(temp_config_dir, mock_config, tmp_path):
    mock_config["settings"]["marker_file"] = str(tmp_path / "last_network")
    path = temp_config_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(mock_config, f)
    return path


@pytest.fixture
def runner(config_file):
    with (
        patch("netlocator.config.get_config_path", return_value=config_file),
        patch("netlocator.cli.setup_logging"),
    ):
        yield CliRunner()


@pytest.mark.unit
class TestRunCommand:
    def test_applied_prints_summary(self, runner, descriptors):
        decision = LocationDecision(Mode.WORK, descriptors["wifi"], "10.1.2.3")
        report = TransitionReport(decision=decision, summary="Interface: Wi-Fi (en0)")
        result_value = RunResult(RunOutcome.APPLIED, Evaluation(decision=decision), report)

        with patch("netlocator.cli.run_once", return_value=result_value) as mock_run:
            result = runner.invoke(cli, ["run", "--throttle", "0", "--pause", "2"])

        assert result.exit_code == 0
        assert "Interface: Wi-Fi (en0)" in result.output
        settings = mock_run.call_args.args[0]
        assert settings.throttle_seconds == 0
        assert settings.pause_seconds == 2

    def test_nothing_to_do_exits_zero(self, runner):
        with patch("netlocator.cli.run_once", return_value=RunResult(RunOutcome.THROTTLED)):
            result = runner.invoke(cli, ["run"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_config_error_exits_one(self, config_file):
        config_file.write_text('[work]\ndomain_pattern = ""\n')

        with (
            patch("netlocator.config.get_config_path", return_value=config_file),
            patch("netlocator.cli.run_once") as mock_run,
        ):
            result = CliRunner().invoke(cli, ["run"])

        assert result.exit_code == 1
        assert "domain_pattern" in result.output
        mock_run.assert_not_called()

    def test_negative_throttle_rejected(self, runner):
        with patch("netlocator.cli.run_once") as mock_run:
            result = runner.invoke(cli, ["run", "--throttle", "-1"])

        assert result.exit_code == 1
        mock_run.assert_not_called()


@pytest.mark.unit
class TestCheckCommand:
    def test_reports_decision(self, runner, descriptors):
        selected = InterfaceStatus(descriptors["wifi"], "192.168.1.20", True)
        evaluation = Evaluation(
            statuses=[selected],
            selected=selected,
            search_content="home.arpa",
            network_name="HomeWiFi",
            decision=LocationDecision(Mode.NON_WORK, descriptors["wifi"], "192.168.1.20"),
        )

        with patch("netlocator.cli.evaluate", return_value=evaluation):
            result = runner.invoke(cli, ["check"])

        assert result.exit_code == 0
        assert "Wi-Fi (en0)" in result.output
        assert "Wi-Fi network: HomeWiFi" in result.output
        assert "Location: Non-work" in result.output

    def test_no_interface(self, runner):
        with patch("netlocator.cli.evaluate", return_value=Evaluation()):
            result = runner.invoke(cli, ["check"])

        assert result.exit_code == 0
        assert "(none found)" in result.output
        assert "No usable interface." in result.output


@pytest.mark.unit
class TestMarkerCommands:
    def test_status_without_marker(self, runner):
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "No network recorded yet." in result.output

    def test_status_and_reset(self, runner, tmp_path):
        (tmp_path / "last_network").write_text("en0 192.168.1.20\n")

        status = runner.invoke(cli, ["status"])
        assert "Last network: en0 192.168.1.20" in status.output

        reset = runner.invoke(cli, ["reset"])
        assert "Marker removed." in reset.output
        assert not (tmp_path / "last_network").exists()

        again = runner.invoke(cli, ["reset"])
        assert "No marker to remove." in again.output


@pytest.mark.unit
def test_config_command_shows_settings(runner, config_file):
    result = runner.invoke(cli, ["config"])

    assert result.exit_code == 0
    assert f"Configuration: {config_file}" in result.output
    assert "Work domain pattern: example.com" in result.output
    assert "Office_Printer" in result.output
