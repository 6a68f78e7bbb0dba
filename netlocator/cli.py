import sys
import time

import click

from . import config
from .controller import RunOutcome, evaluate, run_once
from .exceptions import ConfigError
from .logging_config import setup_logging
from .state import clear_marker, marker_age, read_marker


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


def _load_settings(throttle=None, pause=None):
    """Load and validate settings, exiting with status 1 on a config error."""
    try:
        cfg = config.load_config()
        return config.load_settings(cfg, throttle_seconds=throttle, pause_seconds=pause)
    except ConfigError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        sys.exit(1)


@click.group(cls=OrderedGroup)
def cli():
    """
    NetLocator - switch macOS settings between work and non-work networks.

    Each run looks at the active network interface, decides whether the host
    is on the work network, and applies proxy, time server, printer and DNS
    search settings once per change. launchd runs `netlocator run` whenever
    /etc/resolv.conf changes.
    """
    pass


@cli.command()
@click.option(
    "--throttle",
    type=float,
    default=None,
    help="Skip the run if the last one was less than this many seconds ago.",
)
@click.option(
    "--pause",
    type=float,
    default=None,
    help="Seconds to wait for DHCP and link negotiation before probing.",
)
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
def run(throttle, pause, debug):
    """
    Evaluate the network once and apply settings if the location changed.

    Exits 0 on every normal path, including "nothing to do". Exits 1 only
    when the configuration cannot be loaded.
    """
    settings = _load_settings(throttle, pause)
    setup_logging(debug=debug or settings.debug, force_reinit=True)

    result = run_once(settings)
    if result.outcome is RunOutcome.APPLIED:
        click.echo(result.report.summary)


@cli.command()
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
def check(debug):
    """
    Show what a run would decide, without changing anything.

    Lists every interface with its status, the selected interface, and the
    resulting location. No settings are applied and the marker is untouched.
    """
    settings = _load_settings()
    setup_logging(debug=debug, force_reinit=True)

    evaluation = evaluate(settings)

    click.echo(click.style("Interfaces:", bold=True))
    if not evaluation.statuses:
        click.echo("  (none found)")
    for status in evaluation.statuses:
        state = status.address if status.active else "inactive"
        click.echo(f"  {status.descriptor} [{status.role.value}]: {state}")

    if evaluation.selected is None:
        click.echo(click.style("No usable interface.", fg="yellow"))
        return

    click.echo(f"Selected: {evaluation.selected.descriptor}")
    click.echo(f"DNS search: {evaluation.search_content or '(empty)'}")
    if evaluation.network_name:
        click.echo(f"Wi-Fi network: {evaluation.network_name}")

    decision = evaluation.decision
    if decision is None:
        click.echo(click.style("No usable address, no decision.", fg="yellow"))
        return

    click.echo(click.style(f"Location: {decision.mode}", fg="green"))

    previous = read_marker(settings.marker_file)
    if previous is not None and (previous.device, previous.address) == (
        decision.interface.device,
        decision.address,
    ):
        click.echo("Unchanged since the last run.")


@cli.command()
def status():
    """Show the last recorded network and when it was recorded."""
    settings = _load_settings()
    marker = read_marker(settings.marker_file)
    if marker is None:
        click.echo("No network recorded yet.")
        return

    age = marker_age(settings.marker_file)
    recorded = time.strftime(
        config.LOG_DATE_FORMAT, time.localtime(time.time() - (age or 0))
    )
    click.echo(f"Last network: {marker}")
    click.echo(f"Recorded: {recorded}")


@cli.command()
def reset():
    """Forget the last recorded network so the next run re-applies settings."""
    settings = _load_settings()
    if clear_marker(settings.marker_file):
        click.echo("Marker removed. The next run will apply settings.")
    else:
        click.echo("No marker to remove.")


@cli.command(name="config")
def show_config():
    """Show the configuration file location and the resolved settings."""
    path = config.get_config_path()
    if not path.exists():
        config.load_config()
        click.echo(f"Created default configuration at {path}")
    else:
        click.echo(f"Configuration: {path}")

    settings = _load_settings()

    click.echo(f"  Work domain pattern: {settings.work_domain_pattern}")
    click.echo(f"  Work network name:   {settings.work_network_name or '(none)'}")
    click.echo(f"  Work search domains: {', '.join(settings.work_search_domains) or '(none)'}")
    click.echo(f"  Work NTP server:     {settings.work_ntp_server or '(unchanged)'}")
    click.echo(f"  Work printer:        {settings.work_printer or '(unchanged)'}")
    click.echo(f"  Home NTP server:     {settings.default_ntp_server}")
    click.echo(f"  Home printer:        {settings.default_printer or '(unchanged)'}")
    click.echo(f"  Throttle:            {settings.throttle_seconds:g}s")
    click.echo(f"  Settle pause:        {settings.pause_seconds:g}s")
    click.echo(f"  Marker file:         {settings.marker_file}")
    clients = ", ".join(c.name for c in settings.vpn_clients)
    click.echo(f"  VPN clients:         {clients or '(none)'}")


if __name__ == "__main__":
    cli()
