#!/usr/bin/env python3
"""One synchronization cycle between the Wayland and X11 clipboards.

A cycle reads both endpoints, compares each side against its last-seen
fingerprint, and copies new content to the other side. Content is only
copied when all three hold:

- the source side is non-empty
- the source side changed since it was last observed
- the two sides currently differ

The last condition is what prevents echo: after content is copied, the
next read of the destination returns the same content, which matches the
source and is therefore not copied back.

The Wayland direction is always evaluated first. If both sides changed
to different values between two ticks, Wayland wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clipbridge.hashing import compute_hash

if TYPE_CHECKING:
    from clipbridge.endpoint import ClipboardEndpoint
    from clipbridge.sync_state import SyncState

logger = logging.getLogger(__name__)


async def _propagate(
    content: bytes, source: ClipboardEndpoint, target: ClipboardEndpoint, arrow: str
) -> bool:
    """Copy content from source to target, returning True if the write succeeded."""
    logger.info("%s %s -> %s: %d bytes", arrow, source.name, target.name, len(content))
    return await target.write(content)


async def sync_cycle(
    state: SyncState,
    wayland: ClipboardEndpoint,
    x11: ClipboardEndpoint,
) -> SyncState:
    """Run one read-compare-propagate cycle.

    Never raises: endpoint failures are already reduced to empty reads and
    failed writes. A failed write leaves the fingerprints of that direction
    untouched, so the change is seen again and retried on the next cycle.

    Args:
        state: Fingerprints as of the end of the previous cycle.
        wayland: The Wayland clipboard endpoint.
        x11: The X11 clipboard endpoint.

    Returns:
        The state to pass to the next cycle.
    """
    wayland_content = await wayland.read()
    x11_content = await x11.read()

    wayland_hash = compute_hash(wayland_content)
    x11_hash = compute_hash(x11_content)
    last_wayland = state.last_wayland_hash
    last_x11 = state.last_x11_hash

    # Wayland -> X11
    if wayland_content and wayland_hash != last_wayland:
        if wayland_hash == x11_hash:
            last_wayland = wayland_hash
        elif await _propagate(wayland_content, wayland, x11, ">>"):
            last_wayland = wayland_hash
            last_x11 = x11_hash = wayland_hash

    # X11 -> Wayland, compared against what X11 holds after the step above
    if x11_content and x11_hash != last_x11:
        if x11_hash == wayland_hash:
            last_x11 = x11_hash
        elif await _propagate(x11_content, x11, wayland, "<<"):
            last_x11 = x11_hash
            last_wayland = x11_hash

    logger.debug("cycle done: wayland=%s x11=%s", last_wayland[:12], last_x11[:12])
    return state.with_hashes(wayland_hash=last_wayland, x11_hash=last_x11)
