"""
VPN client integration for NetLocator.

Reads connection details from VPN client command-line tools for the work
notification, and shuts known clients down when leaving the work network.
"""

import re
from pathlib import Path
from typing import Dict, Iterable, Optional

from .. import config
from ..config import VpnClient
from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)


def parse_vpn_stats(stats: str) -> Optional[Dict[str, str]]:
    """Pull server address and protocol out of `vpn stats` output."""
    if not stats or re.search(r"state:\s*Disconnected", stats, re.IGNORECASE):
        return None

    details = {}
    server_match = re.search(r"server address:\s*(.+)", stats, re.IGNORECASE)
    if server_match:
        details["server"] = server_match.group(1).strip()
    protocol_match = re.search(r"protocol:\s*(.+)", stats, re.IGNORECASE)
    if protocol_match:
        details["protocol"] = protocol_match.group(1).strip()
    return details or None


def vpn_details(registry: Iterable[VpnClient]) -> Optional[Dict[str, str]]:
    """
    Best-effort VPN connection details from the first client that reports any.

    Returns:
        dict with optional keys server and protocol, or None
    """
    for client in registry:
        if not client.path or not Path(client.path).exists():
            continue
        stats = run_command(
            [client.path, "stats"], capture=True, quiet_on_error=True, timeout=config.PROBE_TIMEOUT
        )
        details = parse_vpn_stats(stats)
        if details:
            details["client"] = client.name
            logger.info(
                f"{client.name} details: "
                + ", ".join(f"{k}={v}" for k, v in details.items() if k != "client")
            )
            return details

    logger.debug("No VPN client reported connection details")
    return None


def terminate_client(client: VpnClient) -> bool:
    """Disconnect and quit one VPN client. True if anything was stopped."""
    stopped = False
    if client.path and Path(client.path).exists():
        if run_command([client.path, "disconnect"], quiet_on_error=True):
            logger.info(f"Disconnected {client.name}")
            stopped = True

    if run_command(["killall", client.process], quiet_on_error=True):
        logger.info(f"Terminated {client.name}")
        stopped = True
    return stopped


def terminate_known_clients(registry: Iterable[VpnClient]) -> Dict[str, bool]:
    """
    Stop every registered VPN client.

    Each attempt is independent; one failing never prevents the others.

    Returns:
        Mapping of client name to whether it was stopped
    """
    results = {}
    for client in registry:
        try:
            results[client.name] = terminate_client(client)
        except Exception as e:
            logger.warning(f"Failed to terminate {client.name}: {e}")
            results[client.name] = False
    return results
