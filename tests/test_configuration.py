"""
Unit tests for netlocator/network/configuration.py
"""

import pytest
from unittest.mock import patch, call


@pytest.mark.unit
class TestSetProxy:
    def test_enable_auto_discovery(self):
        from netlocator.network.configuration import set_proxy

        with patch("netlocator.network.configuration.run_command", return_value=True) as mock_run:
            assert set_proxy(True, "Wi-Fi") is True

        mock_run.assert_called_once_with(
            ["sudo", "/usr/sbin/networksetup", "-setproxyautodiscovery", "Wi-Fi", "on"]
        )

    def test_disable_turns_everything_off(self):
        from netlocator.network.configuration import set_proxy

        with patch("netlocator.network.configuration.run_command", return_value=True) as mock_run:
            assert set_proxy(False, "Ethernet") is True

        options = [c.args[0][2] for c in mock_run.call_args_list]
        assert options == [
            "-setproxyautodiscovery",
            "-setautoproxystate",
            "-setwebproxystate",
            "-setsecurewebproxystate",
            "-setsocksfirewallproxystate",
        ]
        assert all(c.args[0][3:] == ["Ethernet", "off"] for c in mock_run.call_args_list)

    def test_disable_continues_after_failure(self):
        from netlocator.network.configuration import set_proxy

        with patch(
            "netlocator.network.configuration.run_command",
            side_effect=[False, True, True, True, True],
        ) as mock_run:
            assert set_proxy(False, "Ethernet") is False

        assert mock_run.call_count == 5


@pytest.mark.unit
class TestTimeSource:
    def test_sets_server_and_syncs(self):
        from netlocator.network.configuration import set_time_source

        with patch("netlocator.network.configuration.run_command", return_value=True) as mock_run:
            assert set_time_source("time.example.com") is True

        commands = [c.args[0] for c in mock_run.call_args_list]
        assert commands[0] == [
            "sudo",
            "/usr/sbin/systemsetup",
            "-setnetworktimeserver",
            "time.example.com",
        ]
        assert commands[-1][:2] == ["sudo", "/usr/bin/sntp"]
        assert "timeout" in mock_run.call_args_list[-1].kwargs

    def test_failed_sync_still_succeeds(self):
        from netlocator.network.configuration import set_time_source

        with patch(
            "netlocator.network.configuration.run_command", side_effect=[True, True, False]
        ):
            assert set_time_source("time.example.com") is True

    def test_failed_server_change(self):
        from netlocator.network.configuration import set_time_source

        with patch("netlocator.network.configuration.run_command", return_value=False) as mock_run:
            assert set_time_source("time.example.com") is False

        assert mock_run.call_count == 1


@pytest.mark.unit
class TestDnsOverride:
    def test_apply_writes_one_file_per_domain(self, tmp_path):
        from netlocator.network import configuration

        with (
            patch.object(configuration, "RESOLVER_DIR", tmp_path),
            patch("netlocator.network.configuration.run_command", return_value=True) as mock_run,
        ):
            assert configuration.apply_dns_override(["corp.example.com", "eng.example.com"])

        tee_calls = [c for c in mock_run.call_args_list if c.args[0][:2] == ["sudo", "tee"]]
        assert [c.args[0][2] for c in tee_calls] == [
            str(tmp_path / "corp.example.com"),
            str(tmp_path / "eng.example.com"),
        ]
        assert tee_calls[0].kwargs["input"].startswith(configuration.RESOLVER_HEADER)
        assert "search corp.example.com" in tee_calls[0].kwargs["input"]
        assert call(["sudo", "dscacheutil", "-flushcache"]) in mock_run.call_args_list

    def test_apply_nothing(self):
        from netlocator.network.configuration import apply_dns_override

        with patch("netlocator.network.configuration.run_command") as mock_run:
            assert apply_dns_override([]) is True
            mock_run.assert_not_called()

    def test_remove_only_managed_files(self, tmp_path):
        from netlocator.network import configuration

        (tmp_path / "corp.example.com").write_text(
            f"{configuration.RESOLVER_HEADER}\nsearch corp.example.com\n"
        )
        (tmp_path / "other.example.org").write_text("nameserver 10.0.0.53\n")

        with (
            patch.object(configuration, "RESOLVER_DIR", tmp_path),
            patch("netlocator.network.configuration.run_command", return_value=True) as mock_run,
        ):
            assert configuration.remove_dns_override() is True

        removed = [c.args[0][-1] for c in mock_run.call_args_list if c.args[0][:2] == ["sudo", "rm"]]
        assert removed == [str(tmp_path / "corp.example.com")]

    def test_remove_without_resolver_dir(self, tmp_path):
        from netlocator.network import configuration

        with (
            patch.object(configuration, "RESOLVER_DIR", tmp_path / "missing"),
            patch("netlocator.network.configuration.run_command") as mock_run,
        ):
            assert configuration.remove_dns_override() is True
            mock_run.assert_not_called()


@pytest.mark.unit
def test_set_default_printer():
    from netlocator.network.configuration import set_default_printer

    with patch("netlocator.network.configuration.run_command", return_value=True) as mock_run:
        assert set_default_printer("Office_Printer")

    mock_run.assert_called_once_with(["/usr/sbin/lpadmin", "-d", "Office_Printer"])
