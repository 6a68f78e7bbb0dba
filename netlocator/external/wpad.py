"""
Proxy discovery for NetLocator.

On the work network the connection lookup has to go through the proxy the
system discovered. This module reads the effective proxy settings from
`scutil --proxy`, fetching and evaluating the PAC/WPAD file when needed.
Every fetch is bounded by WPAD_TIMEOUT; an unreachable file means "no proxy".
"""

import re
import urllib.error
import urllib.request
from typing import Dict, Iterable, List, Optional

from .. import config
from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)

PAC_TEST_URL = "http://ip-api.com/json"
PAC_TEST_HOST = "ip-api.com"


def parse_scutil_proxy(output: str) -> Dict[str, str]:
    """Turn `scutil --proxy` output into a flat key/value dictionary."""
    values = {}
    for line in output.splitlines():
        match = re.match(r"^\s*(\w+)\s*:\s*(.+?)\s*$", line)
        if match:
            values[match.group(1)] = match.group(2)
    return values


def extract_proxy_from_result(pac_result: str) -> Optional[str]:
    """
    Extract the first proxy from a PAC result string.

    Args:
        pac_result: Result string from FindProxyForURL (e.g. "PROXY host:port; DIRECT")

    Returns:
        Proxy URL, "DIRECT", or None
    """
    if not pac_result:
        return None

    for entry in (p.strip() for p in pac_result.split(";")):
        if entry.startswith("PROXY "):
            server = entry[6:].strip()
            if server:
                if not server.startswith(("http://", "https://")):
                    server = f"http://{server}"
                return server
        elif entry == "DIRECT":
            return "DIRECT"

    return None


def fetch_pac(pac_url: str) -> Optional[str]:
    """Download a PAC file directly, bypassing any proxy."""
    opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
    try:
        with opener.open(urllib.request.Request(pac_url), timeout=config.WPAD_TIMEOUT) as response:
            content = response.read().decode("utf-8", errors="ignore")
    except (urllib.error.URLError, OSError) as e:
        logger.debug(f"PAC file not accessible at {pac_url}: {e}")
        return None

    if not content.strip():
        logger.warning(f"Empty PAC file content from {pac_url}")
        return None
    return content


def evaluate_pac(pac_content: str) -> Optional[str]:
    """Evaluate PAC content for the connection lookup URL."""
    try:
        import pacparser
    except ImportError:
        logger.error("pacparser module not available. Install with: pip install pacparser")
        return None

    pacparser.init()
    try:
        pacparser.parse_pac_string(pac_content)
        result = pacparser.find_proxy(PAC_TEST_URL, PAC_TEST_HOST)
        logger.debug(f"PAC result for {PAC_TEST_URL}: {result}")
        return extract_proxy_from_result(result) or "DIRECT"
    except Exception as e:
        logger.error(f"Error evaluating PAC file: {e}")
        return None
    finally:
        pacparser.cleanup()


def proxy_from_pac(pac_url: str) -> Optional[str]:
    content = fetch_pac(pac_url)
    return evaluate_pac(content) if content else None


def wpad_urls(search_domains: Iterable[str]) -> List[str]:
    """
    Candidate WPAD locations, walking each search domain up to its parent.

    "eng.corp.example.com" yields wpad.eng.corp.example.com,
    wpad.corp.example.com and wpad.example.com.
    """
    urls = []
    for domain in search_domains:
        labels = domain.strip(".").split(".")
        for i in range(len(labels) - 1):
            url = f"http://wpad.{'.'.join(labels[i:])}/wpad.dat"
            if url not in urls:
                urls.append(url)
    return urls


def system_proxy(search_domains: Iterable[str] = ()) -> Optional[str]:
    """
    Resolve the proxy the system would use for outbound HTTP.

    Returns:
        Proxy URL such as "http://proxy.example.com:8080", or None for a
        direct connection or when nothing could be determined.
    """
    output = run_command(["scutil", "--proxy"], capture=True, timeout=config.PROBE_TIMEOUT)
    values = parse_scutil_proxy(output) if output else {}

    if values.get("HTTPEnable") == "1" and values.get("HTTPProxy"):
        port = values.get("HTTPPort", str(config.DEFAULT_HTTP_PORT))
        return f"http://{values['HTTPProxy']}:{port}"

    candidates = []
    if values.get("ProxyAutoConfigEnable") == "1" and values.get("ProxyAutoConfigURLString"):
        candidates.append(values["ProxyAutoConfigURLString"])
    if values.get("ProxyAutoDiscoveryEnable") == "1":
        candidates.extend(wpad_urls(search_domains))

    for pac_url in candidates:
        proxy = proxy_from_pac(pac_url)
        if proxy == "DIRECT":
            logger.debug(f"{pac_url} returned DIRECT")
            return None
        if proxy:
            logger.info(f"Using proxy {proxy} from {pac_url}")
            return proxy

    logger.debug("No system proxy found")
    return None
