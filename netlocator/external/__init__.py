"""
External services module for NetLocator.

This module handles interactions with external services including:
- Connection details from ip-api.com
- WPAD/PAC proxy discovery
- VPN client integrations
- Desktop notifications
"""

from .ipinfo import enrich_connection
from .notify import notify
from .vpn import terminate_known_clients, vpn_details
from .wpad import system_proxy

__all__ = [
    "enrich_connection",
    "notify",
    "system_proxy",
    "terminate_known_clients",
    "vpn_details",
]
