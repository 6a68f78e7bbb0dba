"""
Connection information from ip-api.com for NetLocator.

Used only to enrich the notification with ISP, region and city. Every
failure yields None; the caller never depends on the result.
"""

import ipaddress
import json
import urllib.error
import urllib.request
from typing import Dict, Optional

from .. import config
from ..logging_config import get_logger
from .wpad import system_proxy

# Get module logger
logger = get_logger(__name__)


def lookup_url(address: Optional[str]) -> str:
    """Look up the address itself when it is public, else our public IP."""
    try:
        if address and ipaddress.ip_address(address).is_global:
            return f"{config.IPINFO_API_URL}/{address}"
    except ValueError:
        pass
    return config.IPINFO_API_URL


def enrich_connection(
    address: Optional[str], via_proxy: bool = False, search_domains=()
) -> Optional[Dict[str, str]]:
    """
    Fetch ISP and location details for the current connection.

    Args:
        address: Address of the selected interface
        via_proxy: If True, route the request through the discovered proxy
        search_domains: Domains used to locate a WPAD file

    Returns:
        dict with keys ip, region, city, isp; or None on any failure
    """
    logger.debug(f"enrich_connection called (address={address}, via_proxy={via_proxy})")

    handlers = []
    if via_proxy:
        proxy = system_proxy(search_domains)
        if proxy:
            handlers.append(urllib.request.ProxyHandler({"http": proxy, "https": proxy}))
    if not handlers:
        handlers.append(urllib.request.ProxyHandler({}))
    opener = urllib.request.build_opener(*handlers)

    url = lookup_url(address)
    request = urllib.request.Request(url)
    request.add_header("User-Agent", "NetLocator/1.0")

    try:
        logger.debug(f"Making request to {url}")
        with opener.open(request, timeout=config.IPINFO_TIMEOUT) as response:
            data = json.loads(response.read().decode("utf-8"))
    except (urllib.error.URLError, OSError, json.JSONDecodeError) as e:
        logger.info(f"Could not fetch connection details: {e}")
        return None

    if data.get("status") == "fail":
        logger.info(f"ip-api.com lookup failed: {data.get('message', 'unknown error')}")
        return None

    result = {
        "ip": data.get("query", "N/A"),
        "region": data.get("regionName", "N/A"),
        "city": data.get("city", "N/A"),
        "isp": data.get("isp", "N/A"),
    }
    logger.debug(f"Connection details: {result}")
    return result
