"""
Configuration management for NetLocator.

This module handles loading, validation, and default configuration values
for the NetLocator application. The TOML file is read once per process and
turned into an immutable Settings record; nothing mutates it during a run.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import toml

from .exceptions import ConfigError

# --- App Constants ---
APP_NAME = "netlocator"
APP_DISPLAY_NAME = "NetLocator"
LOG_DIR = Path.home() / "Library" / "Logs"
LOG_FILE = LOG_DIR / "netlocator.log"
STATE_DIR = Path.home() / "Library" / "Application Support" / APP_NAME
MARKER_FILE = STATE_DIR / "last_network"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Network Constants ---
DEFAULT_NTP_SERVER = "time.apple.com"
DEFAULT_THROTTLE_SECONDS = 10
DEFAULT_PAUSE_SECONDS = 0
DEFAULT_DEBUG = False

# --- Timeouts (seconds) ---
COMMAND_TIMEOUT = 10
PROBE_TIMEOUT = 3
SNTP_TIMEOUT = 3
WPAD_TIMEOUT = 5
IPINFO_TIMEOUT = 10
IPINFO_API_URL = "http://ip-api.com/json"

# --- Default Port Numbers ---
DEFAULT_HTTP_PORT = 80

# VPN clients terminated when leaving the work network.
DEFAULT_VPN_CLIENTS = [
    {
        "name": "Cisco Secure Client",
        "process": "Cisco Secure Client",
        "path": "/opt/cisco/secureclient/bin/vpn",
    },
    {
        "name": "Cisco AnyConnect",
        "process": "Cisco AnyConnect Secure Mobility Client",
        "path": "/opt/cisco/anyconnect/bin/vpn",
    },
    {
        "name": "GlobalProtect",
        "process": "GlobalProtect",
        "path": "",
    },
]

# Default configuration for the application
DEFAULT_CONFIG = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "throttle_seconds": DEFAULT_THROTTLE_SECONDS,
        "pause_seconds": DEFAULT_PAUSE_SECONDS,
        "notifications": True,
    },
    "work": {
        # Regular expression matched against the resolver search domains.
        "domain_pattern": "",
        "network_name": "",
        "search_domains": [],
        "ntp_server": "",
        "printer": "",
        "proxy_service": "",
        "tunnel_forces_work": False,
    },
    "home": {
        "ntp_server": DEFAULT_NTP_SERVER,
        "printer": "",
    },
    "vpn_clients": DEFAULT_VPN_CLIENTS,
}


@dataclass(frozen=True)
class VpnClient:
    """A VPN client that is shut down when the host leaves the work network."""

    name: str
    process: str
    path: str = ""


@dataclass(frozen=True)
class Settings:
    """Classification inputs and run parameters, immutable for the run."""

    work_domain_pattern: str
    work_network_name: str = ""
    work_search_domains: Tuple[str, ...] = ()
    work_ntp_server: str = ""
    work_printer: str = ""
    default_ntp_server: str = DEFAULT_NTP_SERVER
    default_printer: str = ""
    proxy_service: str = ""
    tunnel_forces_work: bool = False
    throttle_seconds: float = DEFAULT_THROTTLE_SECONDS
    pause_seconds: float = DEFAULT_PAUSE_SECONDS
    notifications: bool = True
    debug: bool = DEFAULT_DEBUG
    marker_file: Path = MARKER_FILE
    vpn_clients: Tuple[VpnClient, ...] = field(default_factory=tuple)


def get_config_path():
    """Gets the path to the configuration file."""
    return Path.home() / ".config" / "netlocator" / "config.toml"


def load_config(path: Optional[Path] = None):
    """Loads the configuration from the TOML file."""
    path = path or get_config_path()
    if not path.exists():
        # Create a default config if one doesn't exist
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)
        return DEFAULT_CONFIG

    try:
        with open(path, "r") as f:
            cfg = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Could not read configuration {path}: {e}") from e

    # stdlib logging here: logging_config imports this module
    logger = logging.getLogger(__name__)
    logger.debug(f"Loaded configuration sections: {list(cfg.keys())}")
    return cfg


def _seconds(value, name):
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a number, got {value!r}")
    if seconds < 0:
        raise ConfigError(f"'{name}' must not be negative")
    return seconds


def _section(cfg, name):
    value = cfg.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'[{name}]' must be a table, got {value!r}")
    return value


def _string_list(value, name):
    """A list of strings; a single string is taken as a one-item list."""
    if isinstance(value, str):
        value = [value] if value.strip() else []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{name}' must be a list of strings, got {value!r}")
    return tuple(v.strip() for v in value if v.strip())


def _vpn_clients(entries):
    if not isinstance(entries, list):
        raise ConfigError("'vpn_clients' must be a list of tables")

    clients = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("process"):
            raise ConfigError(f"VPN client entry needs a 'process' name: {entry!r}")
        clients.append(
            VpnClient(
                name=str(entry.get("name") or entry["process"]),
                process=str(entry["process"]),
                path=str(entry.get("path", "")),
            )
        )
    return tuple(clients)


def load_settings(cfg, throttle_seconds=None, pause_seconds=None):
    """
    Validate a raw configuration dictionary into a Settings record.

    Args:
        cfg: Dictionary as returned by load_config()
        throttle_seconds: Optional override from the command line
        pause_seconds: Optional override from the command line

    Returns:
        Settings

    Raises:
        ConfigError: If the work domain pattern is missing or invalid, a
            section is not a table, or any duration, search-domain list or VPN
            client entry is malformed.
    """
    settings = _section(cfg, "settings")
    work = _section(cfg, "work")
    home = _section(cfg, "home")

    pattern = str(work.get("domain_pattern", "")).strip()
    if not pattern:
        raise ConfigError(
            f"'work.domain_pattern' is not set. Edit {get_config_path()} first."
        )
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"'work.domain_pattern' is not a valid expression: {e}")

    if throttle_seconds is None:
        throttle_seconds = settings.get("throttle_seconds", DEFAULT_THROTTLE_SECONDS)
    if pause_seconds is None:
        pause_seconds = settings.get("pause_seconds", DEFAULT_PAUSE_SECONDS)

    marker_file = settings.get("marker_file")

    return Settings(
        work_domain_pattern=pattern,
        work_network_name=str(work.get("network_name", "")),
        work_search_domains=_string_list(work.get("search_domains", []), "work.search_domains"),
        work_ntp_server=str(work.get("ntp_server", "")),
        work_printer=str(work.get("printer", "")),
        default_ntp_server=str(home.get("ntp_server") or DEFAULT_NTP_SERVER),
        default_printer=str(home.get("printer", "")),
        proxy_service=str(work.get("proxy_service", "")),
        tunnel_forces_work=bool(work.get("tunnel_forces_work", False)),
        throttle_seconds=_seconds(throttle_seconds, "throttle_seconds"),
        pause_seconds=_seconds(pause_seconds, "pause_seconds"),
        notifications=bool(settings.get("notifications", True)),
        debug=bool(settings.get("debug", DEFAULT_DEBUG)),
        marker_file=Path(marker_file).expanduser() if marker_file else MARKER_FILE,
        vpn_clients=_vpn_clients(cfg.get("vpn_clients", DEFAULT_VPN_CLIENTS)),
    )


if __name__ == "__main__":
    config = load_config()
    import json

    print(json.dumps(config, indent=4))
