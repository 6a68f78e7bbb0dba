"""
Typed records describing network interfaces for one run.

Roles are resolved once, when the inventory is built. Nothing downstream
looks at port names to decide what kind of interface it is dealing with,
except the Ethernet and USB LAN preferences in selection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# macOS tunnel interfaces (utun0, utun1, ...) and legacy PPP/IPsec devices
TUNNEL_PREFIXES = ("utun", "ppp", "ipsec")
WIRELESS_MARKERS = ("wi-fi", "wifi", "airport", "wlan", "wireless")
WIRED_MARKERS = ("ethernet", "lan")


class PortRole(Enum):
    TUNNEL = "tunnel"
    WIRED = "wired"
    WIRELESS = "wireless"
    OTHER = "other"


def resolve_role(device: str, port_name: str) -> PortRole:
    """
    Resolve the hardware-port role of a device.

    Tunnel devices are identified by their device prefix regardless of the
    port name; everything else is matched case-insensitively on the port name.
    """
    if device.startswith(TUNNEL_PREFIXES):
        return PortRole.TUNNEL

    name = port_name.lower()
    if any(marker in name for marker in WIRELESS_MARKERS):
        return PortRole.WIRELESS
    if any(marker in name for marker in WIRED_MARKERS):
        return PortRole.WIRED
    return PortRole.OTHER


@dataclass(frozen=True)
class InterfaceDescriptor:
    device: str
    role: PortRole
    port_name: str
    service_name: str = ""

    @property
    def service(self) -> str:
        """Network service name accepted by networksetup."""
        return self.service_name or self.port_name

    def __str__(self):
        return f"{self.port_name} ({self.device})"


@dataclass(frozen=True)
class InterfaceStatus:
    descriptor: InterfaceDescriptor
    address: Optional[str] = None
    active: bool = False

    @property
    def device(self) -> str:
        return self.descriptor.device

    @property
    def role(self) -> PortRole:
        return self.descriptor.role
