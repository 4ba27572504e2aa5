#!/usr/bin/env python3
"""Main synchronization event loop.

This module turns a poll interval and a shutdown event into a stream of
ticks, and runs exactly one sync cycle per tick until shutdown is
requested. Cycles never overlap: the next tick is only awaited once the
current cycle has returned.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import suppress
from typing import TYPE_CHECKING

from clipbridge.sync_cycle import sync_cycle

if TYPE_CHECKING:
    from clipbridge.endpoint import ClipboardEndpoint
    from clipbridge.sync_state import SyncState

logger = logging.getLogger(__name__)


async def ticks(
    interval: float, shutdown_requested: asyncio.Event
) -> AsyncIterator[int]:
    """Yield tick numbers every interval seconds until shutdown is requested.

    Ticks are scheduled on a fixed grid like a ticker: if the consumer
    takes longer than one interval, the missed ticks are dropped rather
    than delivered in a burst. Waiting for the next tick returns as soon
    as shutdown_requested is set.

    Args:
        interval: Seconds between ticks.
        shutdown_requested: Event that ends the stream when set.

    Yields:
        Consecutive tick numbers starting at 1.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + interval
    count = 0
    while not shutdown_requested.is_set():
        delay = deadline - loop.time()
        if delay > 0:
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(shutdown_requested.wait(), timeout=delay)
            if shutdown_requested.is_set():
                return
        count += 1
        yield count
        now = loop.time()
        deadline += interval
        if deadline < now:
            skipped = int((now - deadline) // interval) + 1
            deadline += skipped * interval
            logger.debug("Cycle overran the interval, skipped %d tick(s)", skipped)


async def run_sync_loop(
    state: SyncState,
    wayland: ClipboardEndpoint,
    x11: ClipboardEndpoint,
    interval: float,
    shutdown_requested: asyncio.Event,
) -> SyncState:
    """Run sync cycles on every tick until shutdown is requested.

    A shutdown request interrupts the wait between ticks, never a cycle
    that is already running.

    Args:
        state: The initial synchronization state.
        wayland: The Wayland clipboard endpoint.
        x11: The X11 clipboard endpoint.
        interval: Seconds between cycles.
        shutdown_requested: Event signaling graceful shutdown request.

    Returns:
        The state after the last completed cycle.
    """
    async for _ in ticks(interval, shutdown_requested):
        state = await sync_cycle(state, wayland, x11)
    return state
