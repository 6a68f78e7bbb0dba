"""
Network configuration functions for NetLocator.

Thin wrappers over the macOS tools that change system settings: proxy
auto-discovery, network time, default printer and per-domain resolver files.
Each returns True on success and False on failure; none raise for a failed
command.
"""

from pathlib import Path

from .. import config
from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)

RESOLVER_DIR = Path("/etc/resolver")
RESOLVER_HEADER = f"# Managed by {config.APP_NAME}"


def set_proxy(on, service_name):
    """Enable or disable location-aware proxy discovery for a network service."""
    if on:
        logger.info(f"Enabling proxy auto-discovery for '{service_name}'")
        return run_command(
            ["sudo", "/usr/sbin/networksetup", "-setproxyautodiscovery", service_name, "on"]
        )

    logger.info(f"Disabling all proxies for '{service_name}'")
    ok = True
    for option in (
        "-setproxyautodiscovery",
        "-setautoproxystate",
        "-setwebproxystate",
        "-setsecurewebproxystate",
        "-setsocksfirewallproxystate",
    ):
        logger.debug(f"Running {option} off for '{service_name}'")
        ok = run_command(["sudo", "/usr/sbin/networksetup", option, service_name, "off"]) and ok
    return ok


def set_time_source(ntp_server):
    """Sets the system-wide network time server and syncs the clock once."""
    logger.info(f"Setting NTP server to {ntp_server}")

    if not run_command(
        ["sudo", "/usr/sbin/systemsetup", "-setnetworktimeserver", ntp_server]
    ):
        return False

    run_command(["sudo", "/usr/sbin/systemsetup", "-setusingnetworktime", "on"])

    # NTP is often blocked right after a VPN comes up; a failed sync is not fatal
    synced = run_command(
        ["sudo", "/usr/bin/sntp", "-t", str(config.SNTP_TIMEOUT), "-sS", ntp_server],
        timeout=config.SNTP_TIMEOUT + 5,
    )
    if synced:
        logger.info("Time synchronization completed successfully")
    else:
        logger.info(
            "Immediate time sync failed, NTP server is configured for automatic sync"
        )
    return True


def set_default_printer(printer_name):
    """Sets the system's default printer."""
    logger.info(f"Setting default printer to {printer_name}")
    return run_command(["/usr/sbin/lpadmin", "-d", printer_name])


def _flush_dns_cache():
    run_command(["sudo", "dscacheutil", "-flushcache"])
    run_command(["sudo", "killall", "-HUP", "mDNSResponder"])


def apply_dns_override(domains):
    """Create an /etc/resolver file for each work-only search domain."""
    if not domains:
        return True

    if not run_command(["sudo", "mkdir", "-p", str(RESOLVER_DIR)]):
        return False

    ok = True
    for domain in domains:
        content = f"{RESOLVER_HEADER}\nsearch {domain}\nsearch_order 1\n"
        # tee avoids shell redirection under sudo
        if run_command(["sudo", "tee", str(RESOLVER_DIR / domain)], input=content):
            logger.debug(f"Created resolver file for {domain}")
        else:
            logger.warning(f"Could not create resolver file for {domain}")
            ok = False

    logger.info(f"Applied DNS search override for {len(domains)} domain(s)")
    _flush_dns_cache()
    return ok


def managed_resolver_files():
    """Resolver files previously written by apply_dns_override()."""
    try:
        candidates = sorted(RESOLVER_DIR.iterdir())
    except OSError:
        return []

    managed = []
    for path in candidates:
        try:
            if path.read_text().startswith(RESOLVER_HEADER):
                managed.append(path)
        except OSError as e:
            logger.debug(f"Skipping unreadable resolver file {path}: {e}")
    return managed


def remove_dns_override():
    """Remove every resolver file this application created."""
    files = managed_resolver_files()
    if not files:
        logger.debug("No DNS search overrides to remove")
        return True

    ok = True
    for path in files:
        if run_command(["sudo", "rm", "-f", str(path)]):
            logger.debug(f"Removed resolver file: {path}")
        else:
            ok = False

    logger.info(f"Removed {len(files)} resolver files from {RESOLVER_DIR}")
    _flush_dns_cache()
    return ok
