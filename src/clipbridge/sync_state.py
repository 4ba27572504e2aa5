#!/usr/bin/env python3
"""Synchronization state.

This module provides the SyncState dataclass holding the bridge's belief
about the last content seen on each clipboard endpoint. The state is
immutable: each sync cycle takes a state and returns the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from clipbridge.hashing import EMPTY_HASH


@dataclass(frozen=True)
class SyncState:
    """Last-seen fingerprints of both clipboard endpoints.

    A fresh state treats both sides as empty, so the first non-empty content
    found on either side after startup is propagated once.

    Attributes:
        last_wayland_hash: SHA-256 hex digest of the last observed Wayland content.
        last_x11_hash: SHA-256 hex digest of the last observed X11 content.
    """

    last_wayland_hash: str = EMPTY_HASH
    last_x11_hash: str = EMPTY_HASH

    def with_hashes(
        self,
        wayland_hash: str | None = None,
        x11_hash: str | None = None,
    ) -> SyncState:
        """Return a copy with the given fingerprints replaced.

        Args:
            wayland_hash: New Wayland fingerprint, or None to keep the current one.
            x11_hash: New X11 fingerprint, or None to keep the current one.
        """
        changes = {}
        if wayland_hash is not None:
            changes["last_wayland_hash"] = wayland_hash
        if x11_hash is not None:
            changes["last_x11_hash"] = x11_hash
        return replace(self, **changes)
