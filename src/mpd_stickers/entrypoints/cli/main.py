"""MPD-STICKERS CLI entry point.

Defines the top-level ``mpd-stickers`` command (via Click-Extra) and registers
subcommands exposed by the project.

Currently available groups
- ``mpd-stickers sticker``: read, write, delete, list and find stickers.

Notes
- The CLI version is sourced from `mpd_stickers.__version__` and displayed
  automatically by Click-Extra (``--version``).
- The server address comes from ``MPD_HOST``/``MPD_PORT``/``MPD_TIMEOUT``
  unless ``--host``/``--port``/``--timeout`` are given.

Examples
    $ mpd-stickers --version
    $ mpd-stickers sticker list song "Artist/Album/01 Track.flac"
    $ MPD_HOST=secret@music.local mpd-stickers sticker find song rating
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from mpd_stickers import __version__, config
from mpd_stickers.adapters.redactor import Redactor
from mpd_stickers.interfaces.redactor import RedactorMode
from mpd_stickers.logging import (
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .helpers import CliState, hyperlink
from .helpers.log_level_parser import parse_log_level
from .sticker import sticker as sticker_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """MPD-STICKERS command-line interface.

    Read and write MPD stickers: free-form name/value pairs the Music Player
    Daemon stores next to songs and directories in its database, shared by
    every client talking to the same server.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Protocol: "
        + hyperlink("https://mpd.readthedocs.io/en/latest/protocol.html#stickers"),
    ]
)


def _resolve_settings(
    host: str | None, port: str | None, timeout: str | None
) -> config.MpdSettings:
    overrides = {
        key: value
        for key, value in (
            (config.MPD_HOST_KEY, host),
            (config.MPD_PORT_KEY, port),
            (config.MPD_TIMEOUT_KEY, timeout),
        )
        if value is not None
    }
    try:
        return config.get_mpd_settings({**os.environ, **overrides})
    except config.InvalidSettingError as e:
        raise click.BadParameter(str(e)) from e


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--host",
    help="MPD host, optionally as PASSWORD@HOST (overrides MPD_HOST).",
    default=None,
)
@click.option(
    "--port",
    help="MPD port (overrides MPD_PORT).",
    default=None,
)
@click.option(
    "--timeout",
    help="Socket timeout in seconds (overrides MPD_TIMEOUT).",
    default=None,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("mpd-stickers", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="MPD_STICKERS_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="MPD_STICKERS_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "(tunable via MPD_STICKERS_FLIGHT_RECORDER_CAPACITY) at DEBUG granularity "
        "(unaffected by -v/-q) and writes them to --log-path when a WARNING/ERROR "
        "occurs, or on clean exit if --force-flush is set. Console verbosity is "
        "unchanged. Use --no-flight-recorder to disable."
    ),
    default=True,
    envvar="MPD_STICKERS_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR; console output is unaffected."
    ),
    default=False,
    envvar="MPD_STICKERS_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). This changes the "
        "logger's own level, so it applies to BOTH console and flight-recorder. "
        "Use -L mpd_stickers.wire=DEBUG to log protocol traffic. Repeatable or "
        "via MPD_STICKERS_LOGGER_LEVELS (comma/space list)."
    ),
    default=("mpd_stickers.wire=INFO",),
    envvar="MPD_STICKERS_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--redactor-mode",
    "redactor_mode",
    type=click.Choice(["lenient", "strict"], case_sensitive=False),
    help=(
        "Set the redaction mode for logs and error messages. "
        "'lenient' (default) redacts the MPD password but keeps the host visible; "
        "'strict' redacts the password and the host."
    ),
    default="lenient",
    envvar="MPD_STICKERS_REDACTOR_MODE",
    show_envvar=True,
    show_default=True,
)
@clickx.pass_context
def mpd_stickers(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    host: str | None,
    port: str | None,
    timeout: str | None,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
) -> None:
    """MPD-STICKERS command-line interface."""

    # 0) compute effective verbosity
    base_level = logging.WARNING
    level = base_level - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) configure console handler
    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) configure flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) configure root logger with configured handlers
    logging.basicConfig(
        level=logging.DEBUG,  # capture all levels; handlers filter
        handlers=handlers,
        force=True,
    )

    # 4) set per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    # 5) resolve the server address and share it with subcommands
    settings = _resolve_settings(host, port, timeout)
    mode = RedactorMode(redactor_mode.lower())
    ctx.obj = CliState(settings=settings, redactor_mode=mode)

    # 6) log startup info
    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        logger_levels=logger_levels,
        settings=settings,
        redactor=Redactor(mode),
    )

    # 7) ensure logging is cleanly shutdown on program exit
    ctx.call_on_close(logging.shutdown)


mpd_stickers.add_command(sticker_group)
