"""CLI handling for clipbridge.

This module provides the command-line interface for clipbridge: it checks
that the clipboard tools are installed, loads the configuration (falling
back to defaults), configures logging, and runs the bridge until it is
signaled.

Usage:
    clipbridge [--config PATH] [--verbose | --quiet]
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from clipbridge.config import ConfigError, default_config, load_config
from clipbridge.main_logging import close_logging, configure_logging
from clipbridge.main_options import ExclusiveFlag
from clipbridge.tools import check_required_tools, warn_missing_session

if TYPE_CHECKING:
    from clipbridge.config import Config


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: ~/.config/clipbridge/config.toml)",
)
@click.option(
    "--verbose",
    is_flag=True,
    cls=ExclusiveFlag,
    excludes=["quiet"],
    help="Enable DEBUG-level logging",
)
@click.option(
    "--quiet",
    is_flag=True,
    cls=ExclusiveFlag,
    excludes=["verbose"],
    help="Disable logging",
)
def main(config_path: str | None, verbose: bool, quiet: bool) -> None:
    """Keep the Wayland and X11 clipboards in sync."""
    check_required_tools()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"config error: {e}", err=True)
        click.echo("using defaults...", err=True)
        config = default_config()

    try:
        handler = configure_logging(
            config.logging_enabled and not quiet, verbose, config.log_path
        )
    except OSError as e:
        click.echo(f"error: failed to open log file: {e}", err=True)
        sys.exit(1)

    try:
        warn_missing_session()
        _run_bridge(config)
    finally:
        close_logging(handler)


def _run_bridge(config: Config) -> None:
    """Run the bridge in a fresh event loop.

    Args:
        config: The loaded configuration.
    """
    import asyncio
    from clipbridge.bridge import run_bridge

    asyncio.run(run_bridge(config))
