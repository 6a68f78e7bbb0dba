"""
Active-interface selection for NetLocator.

Picks exactly one interface out of the probed inventory. The order is total
and the first match wins:

    1. an active tunnel (VPN always wins)
    2. an active wired interface: "Ethernet" ports first, then USB LAN
       adapters, then any other wired port
    3. an active wireless interface
    4. whatever backs the default route
"""

import re
from typing import Callable, Iterable, List, Optional

from ..logging_config import get_logger
from .models import InterfaceStatus, PortRole

# Get module logger
logger = get_logger(__name__)

ETHERNET_MARKER = "Ethernet"
USB_LAN_RE = re.compile(r"^USB.*LAN$")


def _active(statuses: Iterable[InterfaceStatus], role: PortRole) -> List[InterfaceStatus]:
    return [s for s in statuses if s.active and s.role is role]


def select_wired(statuses: Iterable[InterfaceStatus]) -> Optional[InterfaceStatus]:
    wired = _active(statuses, PortRole.WIRED)
    if not wired:
        return None

    for status in wired:
        if ETHERNET_MARKER in status.descriptor.port_name:
            logger.debug(f"Using active Ethernet interface: {status.descriptor}")
            return status

    for status in wired:
        if USB_LAN_RE.match(status.descriptor.port_name):
            logger.debug(f"Using active USB LAN interface: {status.descriptor}")
            return status

    logger.debug(f"Using first active wired interface: {wired[0].descriptor}")
    return wired[0]


def select_interface(
    statuses: List[InterfaceStatus],
    default_route: Optional[Callable[[], Optional[InterfaceStatus]]] = None,
) -> Optional[InterfaceStatus]:
    """
    Select the interface that represents the host's network attachment.

    Args:
        statuses: Probed interfaces in inventory order
        default_route: Called only when no tunnel, wired or wireless interface
            is active; returns the probed default-route interface, if any

    Returns:
        The selected InterfaceStatus, or None when nothing qualifies.
    """
    tunnels = _active(statuses, PortRole.TUNNEL)
    if tunnels:
        logger.debug(f"Using active tunnel interface: {tunnels[0].descriptor}")
        return tunnels[0]

    wired = select_wired(statuses)
    if wired:
        return wired

    wireless = _active(statuses, PortRole.WIRELESS)
    if wireless:
        logger.debug(f"Using active wireless interface: {wireless[0].descriptor}")
        return wireless[0]

    if default_route is not None:
        status = default_route()
        if status is not None and status.active:
            logger.debug(f"Using default route interface: {status.descriptor}")
            return status

    logger.info("No active network interface found")
    return None
