#!/usr/bin/env python3
"""Pytest fixtures for clipbridge tests.

Provides fake clipboard endpoints for driving sync cycles without the
real clipboard tools, and helpers for building child-process commands.
"""

import sys
from dataclasses import dataclass, field

import pytest

from clipbridge.config import Config
from clipbridge.sync_state import SyncState


@dataclass
class FakeEndpoint:
    """In-memory clipboard endpoint.

    Reads return the current content. Successful writes replace it, the
    way a real clipboard would on the next read.
    """

    name: str
    content: bytes = b""
    fail_writes: bool = False
    writes: list[bytes] = field(default_factory=list)

    async def read(self) -> bytes:
        return self.content

    async def write(self, content: bytes) -> bool:
        self.writes.append(content)
        if self.fail_writes:
            return False
        self.content = content
        return True


def python_command(code: str) -> tuple[str, ...]:
    """Return a command running a Python snippet in a child interpreter."""
    return (sys.executable, "-c", code)


@pytest.fixture
def wayland() -> FakeEndpoint:
    """Create an empty fake Wayland clipboard."""
    return FakeEndpoint("wayland")


@pytest.fixture
def x11() -> FakeEndpoint:
    """Create an empty fake X11 clipboard."""
    return FakeEndpoint("x11")


@pytest.fixture
def sync_state() -> SyncState:
    """Create a fresh SyncState instance for testing."""
    return SyncState()


@pytest.fixture
def config() -> Config:
    """Create a Config with short timeouts that logs to stdout."""
    return Config(command_timeout=1, interval_ms=10, log_file="")
