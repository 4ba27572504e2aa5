#!/usr/bin/env python3
"""Bridge lifecycle for clipbridge.

The bridge runs on a Wayland desktop where a virtual machine's guest
tools own the X11 clipboard. It builds one endpoint per clipboard,
starts from an empty sync state, and polls both clipboards until SIGINT
or SIGTERM arrives. The cycle in flight when the signal arrives is
allowed to finish.

Usage:
    clipbridge [--config PATH] [--verbose | --quiet]
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

from clipbridge.endpoint import wayland_endpoint, x11_endpoint
from clipbridge.sync_loop import run_sync_loop
from clipbridge.sync_state import SyncState

if TYPE_CHECKING:
    from clipbridge.config import Config

logger = logging.getLogger(__name__)


async def run_bridge(
    config: Config, shutdown_requested: asyncio.Event | None = None
) -> SyncState:
    """Synchronize the Wayland and X11 clipboards until shutdown.

    Registers SIGINT and SIGTERM handlers that request shutdown, then
    runs the sync loop at the configured interval.

    Args:
        config: The bridge configuration.
        shutdown_requested: Event to stop the bridge; created if not given.

    Returns:
        The sync state after the last completed cycle.
    """
    if shutdown_requested is None:
        shutdown_requested = asyncio.Event()

    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    logger.info(
        "clipboard sync started (interval: %sms, timeout: %ss, max size: %d bytes)",
        config.interval_ms,
        config.command_timeout,
        config.max_clipboard_size,
    )
    try:
        state = await run_sync_loop(
            SyncState(),
            wayland_endpoint(config),
            x11_endpoint(config),
            config.interval,
            shutdown_requested,
        )
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
    logger.info("clipboard sync stopped")
    return state
