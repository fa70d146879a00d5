"""Logging setup for the MPD-STICKERS CLI and library.

Two handlers hang off the root logger:

- a Rich console handler on stderr, whose records carry a short ``prefix``
  telling protocol traffic and third-party libraries apart from our own
  messages;
- an optional flight recorder: a `MemoryHandler` keeping recent records at
  DEBUG and dumping them to a file when a WARNING shows up.

Protocol traffic goes to the ``mpd_stickers.wire`` logger at DEBUG, one record
per line (``>> command`` sent, ``<< reply`` received). The CLI keeps that
logger at INFO unless asked for a wire trace (``-L mpd_stickers.wire=DEBUG``).
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from mpd_stickers.config import MpdSettings
    from mpd_stickers.interfaces.redactor import Redactor

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "mpd_stickers"
WIRE_LOGGER = "mpd_stickers.wire"
WIRE_PREFIX = "[mpd]"

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)


def _in_hierarchy(name: str, parent: str) -> bool:
    return name == parent or name.startswith(f"{parent}.")


def wire_trace_enabled() -> bool:
    """True when protocol lines would be logged by ``mpd_stickers.wire``."""
    return logging.getLogger(WIRE_LOGGER).isEnabledFor(logging.DEBUG)


class ConsolePrefixFilter(logging.Filter):
    """Set ``record.prefix`` for the console format; never drops a record.

    - ``mpd_stickers.wire`` records get ``[mpd]``, so traffic reads
      ``[mpd] >> sticker get ...``.
    - Other ``mpd_stickers`` records get no prefix.
    - Anything else gets its top-level package, e.g. ``[urllib3]``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if _in_hierarchy(record.name, WIRE_LOGGER):
            record.prefix = WIRE_PREFIX
        elif _in_hierarchy(record.name, PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.partition('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.WARNING, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Console threshold. Ignored in debug mode, which shows everything.
        debug_mode: Show timestamps, logger names and clickable source paths
            instead of the short prefixes.
        color: Follows click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: Handler for the root logger.
    """
    color_system: Literal["auto"] | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(ConsolePrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder writing to *path*.

    The file is truncated when the handler is built. Up to *capacity* records
    are buffered; the buffer goes to disk when it fills up, when a record at
    *flush_level* or above arrives, and on close if *flush_on_close* is set.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def _describe_flight_recorder(handler: MemoryHandler) -> str:
    target = handler.target
    path = target.baseFilename if isinstance(target, logging.FileHandler) else None
    return (
        f"path={path or '<none>'}, capacity={handler.capacity}, "
        f"flush_on_close={handler.flushOnClose}"
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    logger_levels: dict[str, int],
    settings: MpdSettings,
    redactor: Redactor,
) -> None:
    """Log a one-line INFO summary, then DEBUG diagnostics.

    The summary names the version, the console level and whether the flight
    recorder and the wire trace are on. The diagnostics cover the interpreter,
    the (redacted) MPD server and how it is reached, the redaction mode, the
    handlers, the flight recorder and per-logger level overrides.

    Args:
        logger: Logger to write to.
        app_version: Version shown in the summary.
        level: Effective console level.
        handlers: Handlers attached to the root logger; a `MemoryHandler`
            among them is reported as the flight recorder.
        logger_levels: Per-logger levels set from ``-L``.
        settings: Server settings; the password never reaches the log.
        redactor: Redactor applied to the server address.
    """
    recorder = next((h for h in handlers if isinstance(h, MemoryHandler)), None)

    logger.info(
        "MPD-STICKERS %s: console=%s, flight-recorder=%s, wire-trace=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if recorder else "OFF",
        "ON" if wire_trace_enabled() else "OFF",
    )

    logger.debug(
        "Python %s on %s %s (pid %s)",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        os.getpid(),
    )
    logger.debug(
        "MPD server: %s over %s, timeout=%ss",
        settings.display_address(redactor),
        "unix socket" if settings.is_unix_socket else "tcp",
        settings.timeout,
    )
    logger.debug("Redaction: %s", redactor.mode.value)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if recorder is not None:
        logger.debug("Flight recorder: %s", _describe_flight_recorder(recorder))
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
