"""
Run controller for NetLocator.

One invocation, one pass through the state machine:

    throttle check -> settle pause -> inventory -> selection
        -> classification -> marker compare -> dispatch -> marker write

Every path ends the run. Nothing loops or retries here; the next trigger
from launchd is the retry.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .dispatcher import SystemCapabilities, TransitionReport, dispatch
from .location.classifier import LocationDecision, classify
from .logging_config import get_logger
from .network.models import InterfaceDescriptor, InterfaceStatus, PortRole, resolve_role
from .network.selection import select_interface
from .network.status import probe, probe_interfaces
from .state.marker import (
    NetworkMarker,
    is_throttled,
    read_marker,
    run_lock,
    touch_marker,
    write_marker,
)

# Get module logger
logger = get_logger(__name__)


class RunOutcome(Enum):
    THROTTLED = "throttled"
    NO_INTERFACE = "no-interface"
    NO_SIGNAL = "no-signal"
    UNCHANGED = "unchanged"
    APPLIED = "applied"
    RESTART = "restart"


@dataclass
class Evaluation:
    """What detection saw, before any decision about side effects."""

    statuses: List[InterfaceStatus] = field(default_factory=list)
    selected: Optional[InterfaceStatus] = None
    search_content: str = ""
    network_name: Optional[str] = None
    decision: Optional[LocationDecision] = None


@dataclass
class RunResult:
    outcome: RunOutcome
    evaluation: Optional[Evaluation] = None
    report: Optional[TransitionReport] = None

    @property
    def decision(self) -> Optional[LocationDecision]:
        return self.evaluation.decision if self.evaluation else None


def lock_path_for(marker_file: Path) -> Path:
    return Path(marker_file).with_name(".run.lock")


def _default_route_lookup(caps, statuses):
    def lookup():
        try:
            device = caps.default_route_interface()
        except Exception as e:
            logger.debug(f"Default route lookup failed: {e}")
            return None
        if not device:
            return None

        for status in statuses:
            if status.device == device:
                return status
        descriptor = InterfaceDescriptor(
            device=device, role=resolve_role(device, ""), port_name=device
        )
        return probe(descriptor, caps.interface_status)

    return lookup


def evaluate(settings: Settings, caps=None) -> Evaluation:
    """
    Run inventory, selection and classification without side effects.

    Returns:
        Evaluation; its decision is None when no interface was usable or the
        address carried no usable signal.
    """
    caps = caps or SystemCapabilities()
    evaluation = Evaluation()

    try:
        descriptors = caps.list_interfaces() or []
    except Exception as e:
        logger.error(f"Interface inventory failed: {e}")
        descriptors = []

    evaluation.statuses = probe_interfaces(descriptors, caps.interface_status)
    for status in evaluation.statuses:
        logger.debug(
            f"{status.descriptor}: {f'active {status.address}' if status.active else 'inactive'}"
        )

    selected = select_interface(
        evaluation.statuses, _default_route_lookup(caps, evaluation.statuses)
    )
    evaluation.selected = selected
    if selected is None:
        return evaluation

    logger.info(f"Selected interface {selected.descriptor} with address {selected.address}")

    try:
        evaluation.search_content = caps.dns_search_content() or ""
    except Exception as e:
        logger.debug(f"Could not read DNS search content: {e}")

    if selected.role is PortRole.WIRELESS:
        try:
            evaluation.network_name = caps.wireless_network_name(selected.device)
        except Exception as e:
            logger.debug(f"Could not read wireless network name: {e}")

    evaluation.decision = classify(
        selected, evaluation.search_content, evaluation.network_name, settings
    )
    return evaluation


def proxy_service(evaluation: Evaluation, settings: Settings) -> str:
    """
    Network service whose proxy settings a transition changes.

    Tunnels are not network services, so for a VPN decision the underlying
    physical interface is used.
    """
    if settings.proxy_service:
        return settings.proxy_service

    selected = evaluation.selected
    if selected.role is PortRole.TUNNEL:
        underlying = select_interface(
            [s for s in evaluation.statuses if s.role is not PortRole.TUNNEL]
        )
        if underlying is not None:
            return underlying.descriptor.service
    return selected.descriptor.service


def _persist(action, *args):
    try:
        action(*args)
    except OSError as e:
        logger.error(f"Could not update marker: {e}")


def _restart_wireless(caps, statuses) -> bool:
    """Power on a Wi-Fi radio that is switched off. True if one was."""
    for status in statuses:
        if status.role is not PortRole.WIRELESS:
            continue
        try:
            powered = caps.wireless_power(status.device)
        except Exception as e:
            logger.debug(f"Could not read Wi-Fi power for {status.device}: {e}")
            continue
        if powered is False:
            logger.info(f"Wi-Fi {status.device} is powered off, turning it on")
            try:
                caps.set_wireless_power(status.device, True)
            except Exception as e:
                logger.error(f"Could not power on Wi-Fi {status.device}: {e}")
            return True
    return False


def _run(settings, caps, now, sleep) -> RunResult:
    marker_file = settings.marker_file

    if is_throttled(marker_file, settings.throttle_seconds, now):
        logger.info(f"Last run was less than {settings.throttle_seconds:g}s ago, skipping")
        return RunResult(RunOutcome.THROTTLED)

    if settings.pause_seconds > 0:
        logger.debug(f"Waiting {settings.pause_seconds:g}s for the network to settle")
        sleep(settings.pause_seconds)

    evaluation = evaluate(settings, caps)

    if evaluation.selected is None:
        if _restart_wireless(caps, evaluation.statuses):
            # Next trigger re-evaluates once Wi-Fi has joined a network
            _persist(write_marker, marker_file, NetworkMarker.empty())
            return RunResult(RunOutcome.RESTART, evaluation)
        _persist(touch_marker, marker_file)
        return RunResult(RunOutcome.NO_INTERFACE, evaluation)

    decision = evaluation.decision
    if decision is None:
        _persist(touch_marker, marker_file)
        return RunResult(RunOutcome.NO_SIGNAL, evaluation)

    current = NetworkMarker(device=decision.interface.device, address=decision.address)
    previous = read_marker(marker_file)
    if previous == current:
        logger.info(f"Network unchanged ({current}), nothing to apply")
        _persist(write_marker, marker_file, current)
        return RunResult(RunOutcome.UNCHANGED, evaluation)

    logger.info(f"Network changed from {previous or 'unknown'} to {current}")
    report = dispatch(decision, settings, caps, service=proxy_service(evaluation, settings))
    _persist(write_marker, marker_file, current)
    return RunResult(RunOutcome.APPLIED, evaluation, report)


def run_once(settings: Settings, caps=None, now=None, sleep=time.sleep) -> RunResult:
    """
    Perform one invocation of the run state machine.

    Args:
        settings: Validated settings
        caps: Capability implementation (defaults to the real system)
        now: Current time for the throttle check (defaults to time.time())
        sleep: Function used for the settle pause

    Returns:
        RunResult with the terminal outcome
    """
    caps = caps or SystemCapabilities()

    with run_lock(lock_path_for(settings.marker_file)) as acquired:
        if not acquired:
            logger.info("Another run is in progress, skipping")
            return RunResult(RunOutcome.THROTTLED)

        result = _run(settings, caps, now, sleep)

    logger.info(f"Run finished: {result.outcome.value}")
    return result
