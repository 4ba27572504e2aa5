#!/usr/bin/env python3
"""Configuration for clipbridge.

Settings are read from a TOML file with three tables:

    [timeouts]
    command_timeout = 2             # seconds per clipboard tool call
    max_clipboard_size = 52428800   # bytes

    [sync]
    interval_ms = 500
    enable_logging = true

    [logging]
    verbose = true
    log_file = "~/.local/share/clipbridge/sync.log"   # "" means stdout

Any key may be omitted; missing keys keep their default values.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)

DEFAULT_COMMAND_TIMEOUT: int = 2
DEFAULT_MAX_CLIPBOARD_SIZE: int = 52428800
DEFAULT_INTERVAL_MS: int = 500
DEFAULT_LOG_FILE: str = "~/.local/share/clipbridge/sync.log"

# TOML table holding each Config field.
_FIELD_TABLES: dict[str, str] = {
    "command_timeout": "timeouts",
    "max_clipboard_size": "timeouts",
    "interval_ms": "sync",
    "enable_logging": "sync",
    "verbose": "logging",
    "log_file": "logging",
}


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""

    pass


def config_search_paths() -> list[Path]:
    """Return the configuration file locations, most specific first."""
    home = Path.home()
    return [
        home / ".config" / "clipbridge" / "config.toml",
        home / ".clipbridge.toml",
        Path("/etc/clipbridge/config.toml"),
    ]


def find_config_file() -> Path | None:
    """Return the first existing configuration file, or None."""
    for path in config_search_paths():
        if path.is_file():
            return path
    return None


class Config(BaseModel):
    """Bridge configuration, fixed for the lifetime of the process.

    Attributes:
        command_timeout: Deadline in seconds for each clipboard tool call.
        max_clipboard_size: Largest clipboard content in bytes that is synced.
        interval_ms: Milliseconds between sync cycles.
        enable_logging: Emit informational and warning log lines.
        verbose: Also required for informational and warning log lines;
            turning either switch off silences the log.
        log_file: Log file path, or "" to log to standard output.
    """

    model_config = ConfigDict(frozen=True)

    command_timeout: StrictInt = Field(
        default=DEFAULT_COMMAND_TIMEOUT,
        ge=1,
        description="Seconds to wait for a clipboard tool",
    )
    max_clipboard_size: StrictInt = Field(
        default=DEFAULT_MAX_CLIPBOARD_SIZE,
        ge=1,
        description="Largest synced content in bytes",
    )
    interval_ms: StrictInt = Field(
        default=DEFAULT_INTERVAL_MS,
        ge=1,
        description="Milliseconds between sync cycles",
    )
    enable_logging: StrictBool = True
    verbose: StrictBool = True
    log_file: StrictStr = DEFAULT_LOG_FILE

    @property
    def interval(self) -> float:
        """Seconds between sync cycles."""
        return self.interval_ms / 1000

    @property
    def logging_enabled(self) -> bool:
        """Whether informational and warning lines are emitted."""
        return self.enable_logging and self.verbose

    @property
    def log_path(self) -> Path | None:
        """Resolved log file path, or None for standard output."""
        return resolve_log_path(self.log_file)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Config:
        """Build a Config from parsed TOML tables.

        Args:
            data: Parsed TOML document.

        Returns:
            Config with values from data over the defaults.

        Raises:
            ConfigError: If a table is not a table or a value is invalid.
        """
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            table_name = _FIELD_TABLES[name]
            table = data.get(table_name, {})
            if not isinstance(table, dict):
                raise ConfigError(f"[{table_name}] must be a table")
            if name in table:
                values[name] = table[name]

        try:
            return cls(**values)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigError(f"invalid configuration: {details}") from e


def default_config() -> Config:
    """Return the built-in configuration."""
    return Config()


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from path, the search path, or the defaults.

    Args:
        path: Explicit configuration file. When None, the first file in
            config_search_paths() that exists is used; if there is none,
            the defaults are returned.

    Returns:
        The loaded configuration.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or
            holds invalid values.
    """
    config_path = Path(path) if path is not None else find_config_file()
    if config_path is None:
        return default_config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"failed to read {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse {config_path}: {e}") from e

    return Config.from_mapping(data)


def resolve_log_path(log_file: str) -> Path | None:
    """Expand environment variables and ~ in a log file setting.

    Args:
        log_file: Configured log file; empty means standard output.

    Returns:
        The expanded path, or None for standard output.
    """
    if not log_file:
        return None
    return Path(os.path.expandvars(log_file)).expanduser()
