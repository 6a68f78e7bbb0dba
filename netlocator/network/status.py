"""
Interface status probes for NetLocator.

Read-only queries answering "does this device hold a routable address right
now, and which one". Every query has a bounded timeout; a timeout or error
means the interface is inactive.
"""

import ipaddress
import re
from typing import Callable, List, Optional, Tuple

try:
    import SystemConfiguration
except ImportError:
    SystemConfiguration = None

from .. import config
from ..logging_config import get_logger
from ..utils import run_command
from .models import InterfaceDescriptor, InterfaceStatus

# Get module logger
logger = get_logger(__name__)

_INET6_RE = re.compile(r"^\s*inet6\s+([0-9a-fA-F:]+)(?:%\S+)?\s", re.MULTILINE)


def _global_ipv6(ifconfig_output: str) -> Optional[str]:
    for match in _INET6_RE.finditer(ifconfig_output):
        try:
            address = ipaddress.IPv6Address(match.group(1))
        except ValueError:
            continue
        if address.is_global:
            return str(address)
    return None


def _routable_ipv4(text: Optional[str]) -> Optional[str]:
    """The address if it is a usable IPv4 literal, else None."""
    if not text:
        return None
    try:
        address = ipaddress.IPv4Address(text.strip())
    except ValueError:
        logger.debug(f"Ignoring unparseable IPv4 address {text!r}")
        return None
    if address.is_link_local or address.is_loopback or address.is_unspecified:
        # 169.254/16 is self-assigned while DHCP has not answered yet
        logger.debug(f"Ignoring non-routable IPv4 address {address}")
        return None
    return str(address)


def interface_status(device: str) -> Tuple[bool, Optional[str]]:
    """
    Probe a device for a routable IPv4 or global IPv6 address.

    Self-assigned (169.254/16), loopback and unspecified IPv4 addresses do
    not count; the IPv6 check still runs for them.

    Args:
        device: BSD device name (e.g. 'en0', 'utun3')

    Returns:
        (active, address). (False, None) on timeout, error or no address.
    """
    try:
        ipv4 = _routable_ipv4(
            run_command(
                ["ipconfig", "getifaddr", device],
                capture=True,
                quiet_on_error=True,
                timeout=config.PROBE_TIMEOUT,
            )
        )
        if ipv4:
            logger.debug(f"{device} has IPv4 address {ipv4}")
            return True, ipv4

        ifconfig = run_command(
            ["ifconfig", device],
            capture=True,
            quiet_on_error=True,
            timeout=config.PROBE_TIMEOUT,
        )
        if ifconfig and "status: inactive" not in ifconfig:
            ipv6 = _global_ipv6(ifconfig)
            if ipv6:
                logger.debug(f"{device} has global IPv6 address {ipv6}")
                return True, ipv6
    except Exception as e:
        logger.debug(f"Status probe failed for {device}: {e}")

    return False, None


def probe(
    descriptor: InterfaceDescriptor,
    status: Optional[Callable[[str], Tuple[bool, Optional[str]]]] = None,
) -> InterfaceStatus:
    """
    Probe one descriptor. A status function that raises means inactive.

    Args:
        descriptor: Interface to probe
        status: Status query, interface_status() unless a caller supplies one
    """
    try:
        active, address = (status or interface_status)(descriptor.device)
    except Exception as e:
        logger.debug(f"Status probe failed for {descriptor.device}: {e}")
        active, address = False, None
    return InterfaceStatus(descriptor=descriptor, address=address, active=bool(active))


def probe_interfaces(
    descriptors: List[InterfaceDescriptor],
    status: Optional[Callable[[str], Tuple[bool, Optional[str]]]] = None,
) -> List[InterfaceStatus]:
    """Probe every descriptor, preserving inventory order."""
    return [probe(descriptor, status) for descriptor in descriptors]


def _default_route_interface_native() -> Optional[str]:
    if not SystemConfiguration:
        return None

    try:
        store = SystemConfiguration.SCDynamicStoreCreate(None, "NetLocator", None, None)
        if not store:
            return None
        ipv4_dict = SystemConfiguration.SCDynamicStoreCopyValue(
            store, "State:/Network/Global/IPv4"
        )
        if ipv4_dict:
            return ipv4_dict.get("PrimaryInterface")
    except Exception as e:
        logger.debug(f"Native default route interface lookup failed: {e}")
    return None


def default_route_interface() -> Optional[str]:
    """Return the device backing the current default route, if any."""
    interface = _default_route_interface_native()
    if interface:
        logger.debug(f"Using native method for default route: {interface}")
        return interface

    output = run_command(
        ["route", "-n", "get", "default"],
        capture=True,
        quiet_on_error=True,
        timeout=config.PROBE_TIMEOUT,
    )
    if output:
        match = re.search(r"interface:\s*(\S+)", output)
        if match:
            return match.group(1)

    logger.debug("No default route interface found")
    return None
