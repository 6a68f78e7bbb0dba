"""
Network state detection functions for NetLocator.

This module answers the questions the classifier asks: which Wi-Fi network
is a wireless device associated with, what does the resolver search list
currently contain, and is the Wi-Fi radio powered.
"""

import re
from pathlib import Path
from typing import Optional

try:
    import CoreWLAN
except ImportError:
    CoreWLAN = None

from .. import config
from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)

RESOLV_CONF = Path("/etc/resolv.conf")


def _ssid_corewlan(device):
    if not CoreWLAN:
        return None
    try:
        client = CoreWLAN.CWWiFiClient.sharedWiFiClient()
        interface = client.interfaceWithName_(device) if client else None
        if interface:
            return interface.ssid()
    except Exception as e:
        logger.debug(f"Could not get SSID using CoreWLAN: {e}")
    return None


def wireless_network_name(device: str) -> Optional[str]:
    """Gets the SSID a wireless device is associated with, if any."""
    ssid = _ssid_corewlan(device)
    if ssid:
        return ssid

    # CoreWLAN hides the SSID without Location Services; ask the tools instead
    output = run_command(
        ["networksetup", "-getairportnetwork", device],
        capture=True,
        quiet_on_error=True,
        timeout=config.PROBE_TIMEOUT,
    )
    if output:
        match = re.search(r"Current (?:Wi-Fi|AirPort) Network:\s*(.+)", output)
        if match:
            return match.group(1).strip()

    output = run_command(
        ["ipconfig", "getsummary", device],
        capture=True,
        quiet_on_error=True,
        timeout=config.PROBE_TIMEOUT,
    )
    if output:
        match = re.search(r"^\s*SSID\s*:\s*(.+)$", output, re.MULTILINE)
        if match:
            return match.group(1).strip()

    logger.debug(f"No wireless network name for {device}")
    return None


def wireless_power(device: str) -> Optional[bool]:
    """
    Report whether the Wi-Fi radio on a device is powered.

    Returns:
        True or False, or None when the state could not be determined.
    """
    output = run_command(
        ["networksetup", "-getairportpower", device],
        capture=True,
        quiet_on_error=True,
        timeout=config.PROBE_TIMEOUT,
    )
    if not output:
        return None
    match = re.search(r":\s*(On|Off)\s*$", output, re.IGNORECASE)
    if not match:
        return None
    return match.group(1).lower() == "on"


def set_wireless_power(device: str, on: bool) -> bool:
    state = "on" if on else "off"
    logger.info(f"Turning Wi-Fi power {state} for {device}")
    return run_command(["networksetup", "-setairportpower", device, state])


def parse_resolv_conf(content: str) -> str:
    """Return the search/domain entries of resolv.conf as one line of text."""
    domains = []
    for line in content.splitlines():
        line = line.strip()
        if line.startswith(("search", "domain")):
            domains.extend(line.split()[1:])
    return " ".join(domains)


def _scutil_search_domains() -> str:
    output = run_command(["scutil", "--dns"], capture=True, timeout=config.PROBE_TIMEOUT)
    if not output:
        return ""
    domains = re.findall(r"search domain\[\d+\]\s*:\s*(\S+)", output)
    return " ".join(dict.fromkeys(domains))


def dns_search_content() -> str:
    """
    Get the current resolver search-domain text.

    /etc/resolv.conf is the file whose changes trigger a run, so it is read
    first; scutil is consulted when it has no search entries.
    """
    try:
        content = parse_resolv_conf(RESOLV_CONF.read_text())
    except OSError as e:
        logger.debug(f"Could not read {RESOLV_CONF}: {e}")
        content = ""

    if not content:
        content = _scutil_search_domains()

    logger.debug(f"DNS search content: '{content}'")
    return content
