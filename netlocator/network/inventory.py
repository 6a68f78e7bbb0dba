"""
Interface inventory for NetLocator.

Builds the list of InterfaceDescriptors from the system's network service
order, independent of whether each interface is currently up.
"""

import re
from typing import List

from .. import config
from ..logging_config import get_logger
from ..utils import run_command
from .models import TUNNEL_PREFIXES, InterfaceDescriptor, PortRole, resolve_role

# Get module logger
logger = get_logger(__name__)

_SERVICE_RE = re.compile(r"^\((\d+|\*)\)\s+(.+)$")
_PORT_RE = re.compile(r"^\(Hardware Port:\s*(.*?),\s*Device:\s*(\S*)\)$")


def parse_service_order(output: str) -> List[InterfaceDescriptor]:
    """
    Parse `networksetup -listnetworkserviceorder` output.

    Disabled services and services without a device (for example VPN
    configurations that only get a utun device once connected) are skipped.
    """
    descriptors = []
    service_name = None
    disabled = False

    for line in output.splitlines():
        line = line.strip()
        service_match = _SERVICE_RE.match(line)
        if service_match:
            disabled = service_match.group(1) == "*"
            service_name = service_match.group(2).strip()
            continue

        port_match = _PORT_RE.match(line)
        if port_match and service_name:
            port_name, device = port_match.group(1).strip(), port_match.group(2).strip()
            if disabled:
                logger.debug(f"Skipping disabled service '{service_name}'")
            elif device:
                descriptors.append(
                    InterfaceDescriptor(
                        device=device,
                        role=resolve_role(device, port_name),
                        port_name=port_name,
                        service_name=service_name,
                    )
                )
            service_name = None

    return descriptors


def parse_hardware_ports(output: str) -> List[InterfaceDescriptor]:
    """Parse `networksetup -listallhardwareports` output."""
    descriptors = []
    port_name = None
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("Hardware Port:"):
            port_name = line.split(":", 1)[1].strip()
        elif line.startswith("Device:") and port_name:
            device = line.split(":", 1)[1].strip()
            if device:
                descriptors.append(
                    InterfaceDescriptor(
                        device=device,
                        role=resolve_role(device, port_name),
                        port_name=port_name,
                    )
                )
            port_name = None
    return descriptors


def list_tunnel_devices() -> List[str]:
    """Return tunnel devices known to the kernel, in `ifconfig -l` order."""
    output = run_command(
        ["ifconfig", "-l"], capture=True, quiet_on_error=True, timeout=config.PROBE_TIMEOUT
    )
    if not output:
        return []
    return [dev for dev in output.split() if dev.startswith(TUNNEL_PREFIXES)]


def list_interfaces() -> List[InterfaceDescriptor]:
    """
    Enumerate network interfaces in service order.

    Returns:
        List of InterfaceDescriptor. Empty when enumeration fails; callers
        treat that as "no usable interface".
    """
    try:
        output = run_command(
            ["networksetup", "-listnetworkserviceorder"], capture=True
        )
        descriptors = parse_service_order(output) if output else []

        if not descriptors:
            logger.debug("Service order unavailable, falling back to hardware ports")
            output = run_command(["networksetup", "-listallhardwareports"], capture=True)
            descriptors = parse_hardware_ports(output) if output else []

        if not descriptors:
            logger.warning("Could not enumerate network services")
            return []

        # VPN clients create utun devices that are not network services
        known = {d.device for d in descriptors}
        for device in list_tunnel_devices():
            if device not in known:
                descriptors.append(
                    InterfaceDescriptor(device=device, role=PortRole.TUNNEL, port_name="VPN")
                )
    except Exception as e:
        logger.error(f"Error enumerating network interfaces: {e}")
        return []

    logger.debug(f"Interface inventory: {', '.join(str(d) for d in descriptors) or 'empty'}")
    return descriptors
