"""
Location classification for NetLocator.

This is the only module that evaluates the configured work-domain pattern.
Given the selected interface and what the resolver and Wi-Fi report, it
decides whether the host is on the work network.
"""

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import Settings
from ..logging_config import get_logger
from ..network.models import InterfaceDescriptor, InterfaceStatus, PortRole

# Get module logger
logger = get_logger(__name__)


class Mode(Enum):
    WORK = "work"
    NON_WORK = "non-work"

    def __str__(self):
        return "Work" if self is Mode.WORK else "Non-work"


@dataclass(frozen=True)
class LocationDecision:
    mode: Mode
    interface: InterfaceDescriptor
    address: str


def is_ipv4_address(address: Optional[str]) -> bool:
    """True only for a dotted-quad IPv4 literal."""
    if not address:
        return False
    try:
        ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return True


def matches_work_domain(search_content: str, pattern: str) -> bool:
    return bool(search_content) and re.search(pattern, search_content, re.IGNORECASE) is not None


def classify(
    selected: InterfaceStatus,
    search_content: str,
    network_name: Optional[str],
    settings: Settings,
) -> Optional[LocationDecision]:
    """
    Decide Work or NonWork for the selected interface.

    Precedence: the DNS search content matching the work-domain pattern wins;
    otherwise a wireless interface on the work network name is Work;
    everything else is NonWork. An active tunnel only earns top selection
    priority, unless tunnel_forces_work is configured.

    Args:
        selected: The interface chosen by select_interface()
        search_content: Current resolver search-domain text
        network_name: SSID, only consulted for wireless interfaces
        settings: Classification inputs

    Returns:
        LocationDecision, or None when the address is not a usable IPv4
        literal.
    """
    address = selected.address
    if not is_ipv4_address(address):
        logger.info(f"Address '{address}' on {selected.device} is not a usable IPv4 address")
        return None

    descriptor = selected.descriptor

    if matches_work_domain(search_content, settings.work_domain_pattern):
        logger.info(f"Search domains '{search_content}' match the work domain")
        mode = Mode.WORK
    elif (
        descriptor.role is PortRole.WIRELESS
        and settings.work_network_name
        and network_name == settings.work_network_name
    ):
        logger.info(f"Wireless network '{network_name}' is the work network")
        mode = Mode.WORK
    elif descriptor.role is PortRole.TUNNEL and settings.tunnel_forces_work:
        logger.info(f"Tunnel {descriptor.device} is active, treating as work")
        mode = Mode.WORK
    else:
        mode = Mode.NON_WORK

    logger.debug(f"Classified {descriptor} {address} as {mode}")
    return LocationDecision(mode=mode, interface=descriptor, address=address)
