"""
Network module for NetLocator.

This module handles all network-related operations including:
- Interface inventory and status probes
- Active-interface selection
- Network state detection (SSID, DNS search domains, Wi-Fi power)
- Network configuration (proxy, NTP, printer, DNS overrides)
"""

from .models import InterfaceDescriptor, InterfaceStatus, PortRole
from .inventory import list_interfaces
from .status import default_route_interface, interface_status, probe, probe_interfaces
from .selection import select_interface
from .detection import (
    dns_search_content,
    set_wireless_power,
    wireless_network_name,
    wireless_power,
)
from .configuration import (
    apply_dns_override,
    remove_dns_override,
    set_default_printer,
    set_proxy,
    set_time_source,
)

__all__ = [
    # Types
    "InterfaceDescriptor",
    "InterfaceStatus",
    "PortRole",
    # Detection
    "list_interfaces",
    "interface_status",
    "probe",
    "probe_interfaces",
    "default_route_interface",
    "select_interface",
    "dns_search_content",
    "wireless_network_name",
    "wireless_power",
    "set_wireless_power",
    # Configuration
    "set_proxy",
    "set_time_source",
    "set_default_printer",
    "apply_dns_override",
    "remove_dns_override",
]
