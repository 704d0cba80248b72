"""Command-line interface for network-watchdog."""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from network_watchdog import __version__
from network_watchdog.core.config import Config
from network_watchdog.core.logger import setup_logger
from network_watchdog.services.connectivity_monitor import ConnectivityMonitor
from network_watchdog.services.watchdog import NetworkWatchdog
from network_watchdog.sources.event_script import EventScriptError, load_event_script, replay_events
from network_watchdog.sources.manual_source import ManualSignalSource


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def main(ctx, config: Optional[Path], log_level: Optional[str]):
    """network-watchdog - Connectivity-state watchdog tools."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config(config)
    setup_logger(level=log_level or ctx.obj["config"].log_level, log_file=ctx.obj["config"].log_file)


@main.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def replay(ctx, script: Path, output_format: str):
    """Replay a recorded event script through the watchdog."""
    config: Config = ctx.obj["config"]

    try:
        events = load_event_script(script)
    except EventScriptError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    source = ManualSignalSource()
    watchdog = NetworkWatchdog(source, stream_buffer_size=config.stream_buffer_size)
    published = []

    with ConnectivityMonitor(watchdog) as monitor:
        subscription = monitor.network_state.attach(published.append)
        monitor.start_watching()
        replay_events(source, events)
        subscription.detach()
        params = monitor.access_network_params()

    # First entry is the value held before any event
    initial, states = published[0], published[1:]

    if output_format == "json":
        click.echo(
            json.dumps(
                {
                    "initial_state": initial.value,
                    "states": [state.value for state in states],
                    "params": params.to_dict(),
                },
                indent=2,
            )
        )
        return

    click.echo(f"Replayed {len(events)} event(s) from {script}")
    click.echo(f"  {initial} (initial)")
    for state in states:
        click.echo(f"  {state}")

    click.echo("Network params:")
    for key, value in params.to_dict().items():
        click.echo(f"  {key}: {value}")


@main.group("config")
def config_group():
    """Manage configuration."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    config: Config = ctx.obj["config"]
    click.echo(f"Configuration file: {config.config_path}")
    click.echo(f"Log level: {config.log_level}")
    click.echo(f"Log file: {config.log_file or '-'}")
    click.echo(f"Stream buffer size: {config.stream_buffer_size}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key: str, value: str):
    """Set a configuration value (VALUE is parsed as JSON when possible)."""
    config: Config = ctx.obj["config"]

    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    config.set(key, parsed)
    config.save()
    click.echo(f"✓ {key} = {parsed!r}")


@config_group.command("import")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="File format",
)
@click.pass_context
def config_import(ctx, file, file_format):
    """Import configuration from file."""
    config: Config = ctx.obj["config"]

    if config.import_config(file, file_format):
        click.echo(f"✓ Configuration imported from {file}")
    else:
        click.echo("✗ Failed to import configuration", err=True)
        sys.exit(1)


@config_group.command("export")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="File format",
)
@click.pass_context
def config_export(ctx, file, file_format):
    """Export configuration to file."""
    config: Config = ctx.obj["config"]

    if config.export_config(file, file_format):
        click.echo(f"✓ Configuration exported to {file}")
    else:
        click.echo("✗ Failed to export configuration", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
