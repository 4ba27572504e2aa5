"""Startup checks for the clipboard tools and session environment.

The bridge cannot do anything without wl-paste, wl-copy and xclip, so a
missing tool stops the process before the first cycle. Missing session
variables are only logged: they are commonly set later by the session
manager, and the tools will simply fail until then.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys

logger = logging.getLogger(__name__)

REQUIRED_TOOLS: tuple[str, ...] = ("wl-paste", "wl-copy", "xclip")

INSTALL_HINT: str = "sudo dnf install wl-clipboard xclip"


def find_missing_tools(tools: tuple[str, ...] = REQUIRED_TOOLS) -> list[str]:
    """Return the tools that cannot be found on PATH."""
    return [tool for tool in tools if shutil.which(tool) is None]


def check_required_tools(tools: tuple[str, ...] = REQUIRED_TOOLS) -> None:
    """Exit if any required clipboard tool is missing.

    Args:
        tools: Executable names that must be on PATH.

    Raises:
        SystemExit: If a tool cannot be found.
    """
    missing = find_missing_tools(tools)
    if not missing:
        return
    print(f'error: "{missing[0]}" not found. install it with:', file=sys.stderr)
    print(f"  {INSTALL_HINT}", file=sys.stderr)
    sys.exit(1)


def warn_missing_session() -> None:
    """Log a warning for each unset display variable."""
    for name in ("WAYLAND_DISPLAY", "DISPLAY"):
        if not os.environ.get(name):
            logger.warning("%s is not set, %s clipboard may be unavailable",
                name, "wayland" if name == "WAYLAND_DISPLAY" else "x11")
