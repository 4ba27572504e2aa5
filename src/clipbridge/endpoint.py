#!/usr/bin/env python3
"""Clipboard endpoint adapters.

An endpoint is one of the two clipboards being bridged. The sync engine
only sees the small ClipboardEndpoint capability: read the current text,
or write new text. CommandEndpoint implements it by running the
clipboard's command-line tools, and absorbs every tool failure:

- read() returns b"" when the tool times out, fails, or the content is
  larger than the configured limit
- write() returns False when the content is too large or the tool fails

Neither method raises, so a broken or missing clipboard never stops the
bridge; the next cycle simply tries again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from clipbridge.endpoint_process import (
    CommandFailedError,
    CommandTimeoutError,
    ContentTooLargeError,
    run_read_command,
    run_write_command,
)

if TYPE_CHECKING:
    from clipbridge.config import Config

logger = logging.getLogger(__name__)

WAYLAND_READ_COMMAND: tuple[str, ...] = ("wl-paste", "--no-newline", "--type", "text/plain")
WAYLAND_WRITE_COMMAND: tuple[str, ...] = ("wl-copy", "--type", "text/plain")
X11_READ_COMMAND: tuple[str, ...] = ("xclip", "-selection", "clipboard", "-o")
X11_WRITE_COMMAND: tuple[str, ...] = ("xclip", "-selection", "clipboard", "-i")


class ClipboardEndpoint(Protocol):
    """Read/write access to one clipboard."""

    name: str

    async def read(self) -> bytes:
        """Return the current clipboard text, or b"" if unavailable."""
        ...

    async def write(self, content: bytes) -> bool:
        """Replace the clipboard text, returning True on success."""
        ...


@dataclass(frozen=True)
class CommandEndpoint:
    """Clipboard endpoint backed by external read and write commands.

    Attributes:
        name: Label used in log messages ("wayland", "x11").
        read_command: Command printing the clipboard text on stdout.
        write_command: Command taking new clipboard text on stdin.
        timeout: Deadline in seconds for each command invocation.
        max_size: Largest content in bytes accepted in either direction.
    """

    name: str
    read_command: tuple[str, ...]
    write_command: tuple[str, ...]
    timeout: float
    max_size: int

    async def read(self) -> bytes:
        """Read the clipboard.

        Timeouts and oversized content are logged as warnings. Any other
        failure (tool missing, nothing copied, non-zero exit) is
        indistinguishable from an empty clipboard.

        Returns:
            Clipboard content bytes, or b"" on any failure.
        """
        try:
            return await run_read_command(self.read_command, self.timeout, self.max_size)
        except CommandTimeoutError:
            logger.warning("%s read timed out after %s seconds", self.name, self.timeout)
        except ContentTooLargeError as e:
            logger.warning(
                "%s clipboard exceeds size limit (more than %d bytes)", self.name, e.limit
            )
        except CommandFailedError as e:
            logger.debug("%s read failed: %s", self.name, e)
        return b""

    async def write(self, content: bytes) -> bool:
        """Write content to the clipboard.

        Args:
            content: Text to place on the clipboard.

        Returns:
            True if the write command succeeded, False if it was skipped
            or failed.
        """
        if len(content) > self.max_size:
            logger.error(
                "content exceeds max size, skipping %s sync (%d > %d bytes)",
                self.name,
                len(content),
                self.max_size,
            )
            return False

        try:
            await run_write_command(self.write_command, content, self.timeout)
        except CommandTimeoutError:
            logger.warning("%s write timed out after %s seconds", self.name, self.timeout)
            return False
        except CommandFailedError as e:
            logger.warning("failed to set %s clipboard: %s", self.name, e)
            return False
        return True


def wayland_endpoint(config: Config) -> CommandEndpoint:
    """Create the Wayland endpoint (wl-paste / wl-copy)."""
    return CommandEndpoint(
        name="wayland",
        read_command=WAYLAND_READ_COMMAND,
        write_command=WAYLAND_WRITE_COMMAND,
        timeout=config.command_timeout,
        max_size=config.max_clipboard_size,
    )


def x11_endpoint(config: Config) -> CommandEndpoint:
    """Create the X11 endpoint (xclip on the CLIPBOARD selection)."""
    return CommandEndpoint(
        name="x11",
        read_command=X11_READ_COMMAND,
        write_command=X11_WRITE_COMMAND,
        timeout=config.command_timeout,
        max_size=config.max_clipboard_size,
    )
