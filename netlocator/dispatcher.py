"""
Transition dispatcher for NetLocator.

Given a location decision that differs from the last one recorded, apply the
settings for that location in a fixed order and post one summary
notification. A failing step is logged and recorded; the remaining steps
still run. Nothing here is retried.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import config
from .config import Settings
from .external import enrich_connection, notify, terminate_known_clients, vpn_details
from .location.classifier import LocationDecision, Mode
from .logging_config import get_logger
from .network import (
    apply_dns_override,
    default_route_interface,
    dns_search_content,
    interface_status,
    list_interfaces,
    remove_dns_override,
    set_default_printer,
    set_proxy,
    set_time_source,
    set_wireless_power,
    wireless_network_name,
    wireless_power,
)

# Get module logger
logger = get_logger(__name__)


class SystemCapabilities:
    """
    The operating-system operations the run controller and dispatcher use.

    Each method delegates to the module that implements it. Tests substitute
    a mock with the same methods.
    """

    def list_interfaces(self):
        return list_interfaces()

    def interface_status(self, device):
        return interface_status(device)

    def default_route_interface(self):
        return default_route_interface()

    def wireless_network_name(self, device):
        return wireless_network_name(device)

    def wireless_power(self, device):
        return wireless_power(device)

    def set_wireless_power(self, device, on):
        return set_wireless_power(device, on)

    def dns_search_content(self):
        return dns_search_content()

    def set_proxy(self, on, service):
        return set_proxy(on, service)

    def set_time_source(self, server):
        return set_time_source(server)

    def set_default_printer(self, name):
        return set_default_printer(name)

    def apply_dns_override(self, domains):
        return apply_dns_override(domains)

    def remove_dns_override(self):
        return remove_dns_override()

    def terminate_known_clients(self, registry):
        return terminate_known_clients(registry)

    def vpn_details(self, registry):
        return vpn_details(registry)

    def notify(self, title, message):
        return notify(title, message)

    def enrich_connection(self, address, via_proxy, search_domains=()):
        return enrich_connection(address, via_proxy=via_proxy, search_domains=search_domains)


@dataclass
class TransitionReport:
    decision: LocationDecision
    applied: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    vpn: Optional[Dict[str, str]] = None
    connection: Optional[Dict[str, str]] = None
    title: str = ""
    summary: str = ""
    notified: bool = False


def _step(report, name, func, *args):
    """Run one capability call; a falsy result or exception marks it failed."""
    try:
        result = func(*args)
    except Exception as e:
        logger.error(f"{name} failed: {e}")
        report.failed.append(name)
        return None

    if result is False or result is None:
        logger.warning(f"{name} did not succeed")
        report.failed.append(name)
    else:
        report.applied.append(name)
    return result


def compose_summary(report: TransitionReport):
    """Build the notification title and message for a transition."""
    decision = report.decision
    title = f"{config.APP_DISPLAY_NAME}: {decision.mode} network"

    lines = [
        f"Interface: {decision.interface}",
        f"Address: {decision.address}",
        f"Location: {decision.mode}",
    ]

    if report.connection:
        info = report.connection
        lines.append(f"ISP: {info.get('isp', 'N/A')}")
        lines.append(f"Region: {info.get('city', 'N/A')}, {info.get('region', 'N/A')}")

    if report.vpn:
        vpn = report.vpn.get("server", "unknown server")
        if report.vpn.get("protocol"):
            vpn += f" ({report.vpn['protocol']})"
        lines.append(f"VPN: {vpn}")

    if report.failed:
        lines.append(f"Failed: {', '.join(report.failed)}")

    return title, "\n".join(lines)


def _apply_work(report, settings, caps, service):
    _step(report, "proxy on", caps.set_proxy, True, service)
    if settings.work_ntp_server:
        _step(report, "time source", caps.set_time_source, settings.work_ntp_server)
    if settings.work_printer:
        _step(report, "default printer", caps.set_default_printer, settings.work_printer)
    if settings.work_search_domains:
        _step(report, "dns override", caps.apply_dns_override, list(settings.work_search_domains))

    # Diagnostics only; a missing answer is not a failure
    try:
        report.vpn = caps.vpn_details(settings.vpn_clients)
    except Exception as e:
        logger.debug(f"VPN details unavailable: {e}")


def _shutdown_vpn_clients(report, caps, registry):
    """Only a client that was actually stopped counts as applied."""
    try:
        results = caps.terminate_known_clients(registry) or {}
    except Exception as e:
        logger.error(f"vpn client shutdown failed: {e}")
        report.failed.append("vpn client shutdown")
        return

    stopped = [name for name, ok in results.items() if ok]
    if stopped:
        logger.info(f"Stopped VPN clients: {', '.join(stopped)}")
        report.applied.append("vpn client shutdown")
    else:
        logger.info("No VPN client was running")


def _apply_non_work(report, settings, caps, service):
    _step(report, "proxy off", caps.set_proxy, False, service)
    _step(report, "time source", caps.set_time_source, settings.default_ntp_server)
    if settings.default_printer:
        _step(report, "default printer", caps.set_default_printer, settings.default_printer)
    _step(report, "dns override removal", caps.remove_dns_override)
    if settings.vpn_clients:
        _shutdown_vpn_clients(report, caps, settings.vpn_clients)


def dispatch(
    decision: LocationDecision,
    settings: Settings,
    caps: Optional[SystemCapabilities] = None,
    service: Optional[str] = None,
) -> TransitionReport:
    """
    Apply the settings for a new location and post a summary notification.

    Args:
        decision: The new location decision
        settings: Configured values for both locations
        caps: Capability implementation (defaults to the real system)
        service: Network service for proxy changes (defaults to the
            decision's interface)

    Returns:
        TransitionReport describing what was applied and what failed
    """
    caps = caps or SystemCapabilities()
    service = service or decision.interface.service
    report = TransitionReport(decision=decision)

    logger.info(f"Applying {decision.mode} settings for {decision.interface} {decision.address}")

    if decision.mode is Mode.WORK:
        _apply_work(report, settings, caps, service)
    else:
        _apply_non_work(report, settings, caps, service)

    try:
        report.connection = caps.enrich_connection(
            decision.address,
            decision.mode is Mode.WORK,
            settings.work_search_domains,
        )
    except Exception as e:
        logger.debug(f"Connection enrichment failed: {e}")

    report.title, report.summary = compose_summary(report)
    logger.info(f"{report.title}: " + "; ".join(report.summary.splitlines()))

    if settings.notifications:
        try:
            report.notified = bool(caps.notify(report.title, report.summary))
        except Exception as e:
            logger.warning(f"Notification failed: {e}")

    if report.failed:
        logger.warning(f"Transition finished with failures: {', '.join(report.failed)}")
    return report
