"""
Unit tests for netlocator/utils/commands.py
"""

import subprocess

import pytest
from unittest.mock import MagicMock, patch


def _completed(returncode=0, stdout="", stderr=""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


@pytest.mark.unit
class TestRunCommand:
    def test_success_status(self):
        from netlocator.utils.commands import run_command

        with patch("subprocess.run", return_value=_completed()) as mock_run:
            assert run_command(["networksetup", "-listallhardwareports"]) is True

        assert mock_run.call_args.kwargs["timeout"] > 0

    def test_capture_strips_output(self):
        from netlocator.utils.commands import run_command

        with patch("subprocess.run", return_value=_completed(stdout="192.168.1.20\n")):
            assert run_command(["ipconfig", "getifaddr", "en0"], capture=True) == "192.168.1.20"

    def test_failure(self):
        from netlocator.utils.commands import run_command

        with patch("subprocess.run", return_value=_completed(returncode=1, stderr="boom")):
            assert run_command(["false"]) is False
            assert run_command(["false"], capture=True) is None

    def test_timeout_is_failure(self):
        from netlocator.utils.commands import run_command

        with patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="sntp", timeout=3)
        ):
            assert run_command(["sntp", "-sS", "time.apple.com"], timeout=3) is False
            assert run_command(["sntp"], capture=True, timeout=3) is None

    def test_missing_binary(self):
        from netlocator.utils.commands import run_command

        with patch("subprocess.run", side_effect=FileNotFoundError()):
            assert run_command(["nonexistent"]) is False

    def test_shell_joins_list(self):
        from netlocator.utils.commands import run_command

        with patch("subprocess.run", return_value=_completed()) as mock_run:
            run_command(["echo", "a b"], shell=True)

        assert mock_run.call_args.args[0] == "echo 'a b'"
