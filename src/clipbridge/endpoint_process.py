"""Bounded external-process invocation for clipboard tools.

Every clipboard access runs a separate short-lived process (wl-paste,
wl-copy, xclip). This module runs those processes under a deadline,
caps the amount of output it is willing to hold, and reports every way
the call can go wrong as a CommandError subclass. Callers decide which
of those errors are worth logging.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import suppress

# Bytes requested from the child's stdout per read.
READ_CHUNK_SIZE: int = 65536


class CommandError(Exception):
    """Base class for clipboard tool invocation failures."""

    pass


class CommandTimeoutError(CommandError):
    """The tool did not finish within the command timeout."""

    pass


class CommandFailedError(CommandError):
    """The tool could not be started or exited with a non-zero status."""

    pass


class ContentTooLargeError(CommandError):
    """Content exceeds the configured maximum clipboard size."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"content size {size} exceeds limit {limit}")


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill the process if it is still running and reap it."""
    if proc.returncode is None:
        with suppress(ProcessLookupError):
            proc.kill()
    await proc.wait()


async def _read_limited(stream: asyncio.StreamReader, limit: int) -> bytes:
    """Read a stream to EOF, giving up once more than limit bytes arrive.

    Raises:
        ContentTooLargeError: As soon as the total exceeds limit.
    """
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise ContentTooLargeError(total, limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def _collect_output(
    proc: asyncio.subprocess.Process, argv: Sequence[str], limit: int
) -> bytes:
    if proc.stdout is None:
        raise CommandFailedError(f"{argv[0]} has no output pipe")
    content = await _read_limited(proc.stdout, limit)
    returncode = await proc.wait()
    if returncode != 0:
        raise CommandFailedError(f"{argv[0]} exited with status {returncode}")
    return content


async def run_read_command(argv: Sequence[str], timeout: float, limit: int) -> bytes:
    """Run a clipboard read command and return its standard output.

    Args:
        argv: Command and arguments, e.g. ("xclip", "-selection", "clipboard", "-o").
        timeout: Deadline in seconds for the whole invocation.
        limit: Maximum number of output bytes accepted.

    Returns:
        The complete output of the command.

    Raises:
        CommandTimeoutError: If the command does not finish within timeout.
        CommandFailedError: If the command cannot be started or exits non-zero.
        ContentTooLargeError: If the output exceeds limit bytes.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as e:
        raise CommandFailedError(f"cannot run {argv[0]}: {e}") from e

    try:
        return await asyncio.wait_for(_collect_output(proc, argv, limit), timeout=timeout)
    except asyncio.TimeoutError as e:
        await _terminate(proc)
        raise CommandTimeoutError(f"{argv[0]} timed out after {timeout} seconds") from e
    except ContentTooLargeError:
        await _terminate(proc)
        raise


async def run_write_command(argv: Sequence[str], data: bytes, timeout: float) -> None:
    """Run a clipboard write command, feeding data on its standard input.

    Output streams are discarded: wl-copy and xclip leave a background
    process behind to own the selection, and that process inherits them.

    Args:
        argv: Command and arguments, e.g. ("wl-copy", "--type", "text/plain").
        data: Content written to the command's stdin.
        timeout: Deadline in seconds for the whole invocation.

    Raises:
        CommandTimeoutError: If the command does not finish within timeout.
        CommandFailedError: If the command cannot be started or exits non-zero.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as e:
        raise CommandFailedError(f"cannot run {argv[0]}: {e}") from e

    try:
        await asyncio.wait_for(proc.communicate(data), timeout=timeout)
    except asyncio.TimeoutError as e:
        await _terminate(proc)
        raise CommandTimeoutError(f"{argv[0]} timed out after {timeout} seconds") from e

    if proc.returncode != 0:
        raise CommandFailedError(f"{argv[0]} exited with status {proc.returncode}")
