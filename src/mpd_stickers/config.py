"""Configuration utilities for MPD-STICKERS.

This module centralizes how the MPD server address is read from the
environment. It follows the variables understood by other MPD clients
(``MPD_HOST``, ``MPD_PORT``) including the ``password@host`` convention.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mpd_stickers.interfaces.redactor import Redactor

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 10.0

MPD_HOST_KEY = "MPD_HOST"  # pragma: no mutate
MPD_PORT_KEY = "MPD_PORT"  # pragma: no mutate
MPD_TIMEOUT_KEY = "MPD_TIMEOUT"  # pragma: no mutate


class InvalidSettingError(Exception):
    """Raised when a connection setting has an unusable value."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r} ({reason}).")
        self.name = name
        self.value = value
        self.reason = reason


@dataclass(frozen=True)
class MpdSettings:
    """Where and how to reach the MPD server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise InvalidSettingError("port", self.port, "expected 1-65535")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise InvalidSettingError(
                "timeout", self.timeout, "must be a positive number of seconds"
            )

    @property
    def is_unix_socket(self) -> bool:
        """True when the host is a filesystem path to a Unix domain socket."""
        return self.host.startswith("/")

    @property
    def host_spec(self) -> str:
        """Host in ``password@host`` form (as accepted by ``MPD_HOST``)."""
        if self.password:
            return f"{self.password}@{self.host}"
        return self.host

    def display_address(self, redactor: Redactor) -> str:
        """Server address safe for logs: redacted host, plus the port for TCP."""
        host = redactor.sanitize_host(self.host_spec)
        if self.is_unix_socket:
            return host
        return f"{host}:{self.port}"


def split_host(raw_host: str) -> tuple[str | None, str]:
    """Split an ``MPD_HOST`` value into ``(password, host)``.

    Args:
        raw_host: ``host`` or ``password@host``.

    Returns:
        The password (``None`` when absent) and the host (default host when
        empty).
    """
    password, sep, host = raw_host.partition("@")
    if not sep:
        password, host = "", password
    return (password or None), (host or DEFAULT_HOST)


def parse_port(raw_port: str) -> int:
    """Parse a port number.

    Raises:
        InvalidSettingError: If the value is not an integer.
    """
    try:
        return int(raw_port)
    except ValueError as e:
        raise InvalidSettingError("port", raw_port, "expected an integer") from e


def parse_timeout(raw_timeout: str) -> float:
    """Parse a timeout in seconds.

    Raises:
        InvalidSettingError: If the value is not a number.
    """
    try:
        return float(raw_timeout)
    except ValueError as e:
        raise InvalidSettingError("timeout", raw_timeout, "expected seconds") from e


def get_mpd_settings(environ: Mapping[str, str] | None = None) -> MpdSettings:
    """Read the MPD connection settings from the environment.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        MpdSettings built from ``MPD_HOST``, ``MPD_PORT`` and ``MPD_TIMEOUT``,
        falling back to defaults for unset variables.

    Raises:
        InvalidSettingError: If a variable is set to an unusable value.
    """
    env = os.environ if environ is None else environ
    password, host = split_host(env.get(MPD_HOST_KEY, ""))
    port = parse_port(raw) if (raw := env.get(MPD_PORT_KEY)) else DEFAULT_PORT
    timeout = (
        parse_timeout(raw) if (raw := env.get(MPD_TIMEOUT_KEY)) else DEFAULT_TIMEOUT
    )
    return MpdSettings(host=host, port=port, password=password, timeout=timeout)
