#!/usr/bin/env python3
"""
Tests for CommandEndpoint read/write failure handling.
"""
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from conftest import python_command
from clipbridge.config import Config
from clipbridge.endpoint import (
    WAYLAND_READ_COMMAND,
    WAYLAND_WRITE_COMMAND,
    X11_READ_COMMAND,
    X11_WRITE_COMMAND,
    CommandEndpoint,
    wayland_endpoint,
    x11_endpoint,
)
from clipbridge.endpoint_process import (
    CommandFailedError,
    CommandTimeoutError,
    ContentTooLargeError,
)


def make_endpoint(read_code: str = "pass", write_code: str = "pass",
        timeout: float = 5, max_size: int = 100) -> CommandEndpoint:
    """Create an endpoint running Python snippets as its tools."""
    return CommandEndpoint(
        name="test",
        read_command=python_command(read_code),
        write_command=python_command(write_code),
        timeout=timeout,
        max_size=max_size,
    )


@pytest.mark.asyncio
async def test_read_returns_content() -> None:
    """Test a successful read returns the tool's output."""
    endpoint = make_endpoint(read_code="import sys; sys.stdout.write('hello')")
    assert await endpoint.read() == b"hello"


@pytest.mark.asyncio
async def test_read_failure_returns_empty_silently(caplog: pytest.LogCaptureFixture) -> None:
    """Test a failing tool reads as empty without a warning."""
    endpoint = make_endpoint(read_code="import sys; sys.exit(1)")
    with caplog.at_level(logging.INFO, logger="clipbridge"):
        assert await endpoint.read() == b""
    assert caplog.records == []


@pytest.mark.asyncio
async def test_read_timeout_returns_empty_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    """Test a hanging tool reads as empty and logs a warning."""
    endpoint = make_endpoint(read_code="import time; time.sleep(30)", timeout=0.2)
    with caplog.at_level(logging.WARNING, logger="clipbridge"):
        assert await endpoint.read() == b""
    assert "timed out" in caplog.text


@pytest.mark.asyncio
async def test_read_oversized_returns_empty_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    """Test content over max_size reads as empty and logs a warning."""
    endpoint = make_endpoint(read_code="import sys; sys.stdout.write('x' * 11)", max_size=10)
    with caplog.at_level(logging.WARNING, logger="clipbridge"):
        assert await endpoint.read() == b""
    assert "exceeds size limit" in caplog.text


@pytest.mark.asyncio
async def test_write_success_returns_true(tmp_path: Path) -> None:
    """Test a successful write returns True and delivers the content."""
    target = tmp_path / "clipboard"
    endpoint = make_endpoint(
        write_code=f"import sys; open({str(target)!r}, 'wb').write(sys.stdin.buffer.read())"
    )
    assert await endpoint.write(b"hello") is True
    assert target.read_bytes() == b"hello"


@pytest.mark.asyncio
async def test_write_oversized_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    """Test content over max_size is never handed to the write tool."""
    endpoint = make_endpoint(max_size=10)
    with patch("clipbridge.endpoint.run_write_command", new_callable=AsyncMock) as mock_run:
        with caplog.at_level(logging.ERROR, logger="clipbridge"):
            assert await endpoint.write(b"x" * 11) is False
        mock_run.assert_not_called()
    assert "exceeds max size" in caplog.text


@pytest.mark.asyncio
async def test_write_failure_returns_false_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    """Test a failing write tool returns False and logs a warning."""
    endpoint = make_endpoint(write_code="import sys; sys.stdin.read(); sys.exit(1)")
    with caplog.at_level(logging.WARNING, logger="clipbridge"):
        assert await endpoint.write(b"hello") is False
    assert "failed to set test clipboard" in caplog.text


@pytest.mark.asyncio
async def test_write_timeout_returns_false_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    """Test a hanging write tool returns False after the timeout."""
    endpoint = make_endpoint(write_code="import time; time.sleep(30)", timeout=0.2)
    with caplog.at_level(logging.WARNING, logger="clipbridge"):
        assert await endpoint.write(b"hello") is False
    assert "timed out" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [CommandTimeoutError("t"), CommandFailedError("f"), ContentTooLargeError(11, 10)],
)
async def test_read_never_raises(error: Exception) -> None:
    """Test every invocation error is absorbed by read()."""
    endpoint = make_endpoint()
    with patch("clipbridge.endpoint.run_read_command", new_callable=AsyncMock) as mock_run:
        mock_run.side_effect = error
        assert await endpoint.read() == b""


def test_wayland_endpoint_uses_wl_clipboard() -> None:
    """Test the Wayland endpoint runs wl-paste/wl-copy with configured limits."""
    config = Config(command_timeout=3, max_clipboard_size=1024)
    endpoint = wayland_endpoint(config)
    assert endpoint.name == "wayland"
    assert endpoint.read_command == WAYLAND_READ_COMMAND
    assert endpoint.write_command == WAYLAND_WRITE_COMMAND
    assert endpoint.read_command[0] == "wl-paste"
    assert endpoint.write_command[0] == "wl-copy"
    assert endpoint.timeout == 3
    assert endpoint.max_size == 1024


def test_x11_endpoint_uses_xclip_clipboard_selection() -> None:
    """Test the X11 endpoint runs xclip on the CLIPBOARD selection."""
    config = Config(command_timeout=3, max_clipboard_size=1024)
    endpoint = x11_endpoint(config)
    assert endpoint.name == "x11"
    assert endpoint.read_command == X11_READ_COMMAND
    assert endpoint.write_command == X11_WRITE_COMMAND
    assert "clipboard" in endpoint.read_command
    assert endpoint.read_command[-1] == "-o"
    assert endpoint.write_command[-1] == "-i"
    assert endpoint.timeout == 3
    assert endpoint.max_size == 1024
