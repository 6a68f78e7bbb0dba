"""
Pytest configuration and shared fixtures for NetLocator tests.

This module provides reusable fixtures and configuration for all tests.
"""

import pytest
from unittest.mock import MagicMock


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no system access")


@pytest.fixture
def mock_config():
    """Provide a raw configuration dictionary as load_config() returns it."""
    return {
        "settings": {
            "debug": False,
            "throttle_seconds": 10,
            "pause_seconds": 0,
            "notifications": True,
        },
        "work": {
            "domain_pattern": "example.com",
            "network_name": "CorpWiFi",
            "search_domains": ["corp.example.com", "eng.example.com"],
            "ntp_server": "time.example.com",
            "printer": "Office_Printer",
            "proxy_service": "",
            "tunnel_forces_work": False,
        },
        "home": {
            "ntp_server": "time.apple.com",
            "printer": "Home_Printer",
        },
        "vpn_clients": [
            {
                "name": "Cisco Secure Client",
                "process": "Cisco Secure Client",
                "path": "/opt/cisco/secureclient/bin/vpn",
            },
            {"name": "GlobalProtect", "process": "GlobalProtect"},
        ],
    }


@pytest.fixture
def settings(mock_config, tmp_path):
    """Validated settings with the marker in a temporary directory."""
    from netlocator import config

    mock_config["settings"]["marker_file"] = str(tmp_path / "last_network")
    return config.load_settings(mock_config)


@pytest.fixture
def descriptors():
    """Interface descriptors for a laptop with Wi-Fi, Ethernet and a VPN tunnel."""
    from netlocator.network.models import InterfaceDescriptor, PortRole

    return {
        "wifi": InterfaceDescriptor("en0", PortRole.WIRELESS, "Wi-Fi", "Wi-Fi"),
        "ethernet": InterfaceDescriptor(
            "en5", PortRole.WIRED, "Thunderbolt Ethernet", "Thunderbolt Ethernet"
        ),
        "usb_lan": InterfaceDescriptor(
            "en7", PortRole.WIRED, "USB 10/100/1000 LAN", "USB 10/100/1000 LAN"
        ),
        "vpn": InterfaceDescriptor("utun3", PortRole.TUNNEL, "VPN"),
    }


@pytest.fixture
def make_caps():
    """
    Build a mock capability object.

    Args to the factory:
        interfaces: list of InterfaceDescriptor
        addresses: device -> address for active devices
        search: DNS search content
        ssid: wireless network name
        default_route: device backing the default route
        wifi_power: value returned by wireless_power()
    """
    from netlocator.dispatcher import SystemCapabilities

    def factory(
        interfaces=(),
        addresses=None,
        search="",
        ssid=None,
        default_route=None,
        wifi_power=True,
    ):
        addresses = addresses or {}
        caps = MagicMock(spec=SystemCapabilities)
        caps.list_interfaces.return_value = list(interfaces)
        caps.interface_status.side_effect = lambda device: (
            (True, addresses[device]) if device in addresses else (False, None)
        )
        caps.default_route_interface.return_value = default_route
        caps.dns_search_content.return_value = search
        caps.wireless_network_name.return_value = ssid
        caps.wireless_power.return_value = wifi_power
        caps.set_proxy.return_value = True
        caps.set_time_source.return_value = True
        caps.set_default_printer.return_value = True
        caps.apply_dns_override.return_value = True
        caps.remove_dns_override.return_value = True
        caps.terminate_known_clients.return_value = {}
        caps.vpn_details.return_value = None
        caps.enrich_connection.return_value = None
        caps.notify.return_value = True
        return caps

    return factory


@pytest.fixture
def mock_ipapi_response():
    """Provide a mock response from ip-api.com."""
    return {
        "status": "success",
        "query": "203.0.113.42",
        "city": "San Francisco",
        "regionName": "California",
        "countryCode": "US",
        "isp": "Example ISP Inc",
    }


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide a temporary config directory."""
    config_dir = tmp_path / ".config" / "netlocator"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
