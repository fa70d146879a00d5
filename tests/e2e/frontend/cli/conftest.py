"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, fixtures to register that command, obtain a CliRunner and run tests
within an isolated filesystem, and a fixture that routes sticker commands to
the in-memory sticker database instead of a real MPD server.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from mpd_stickers.bootstrap import bootstrap
from mpd_stickers.entrypoints.cli import sticker as sticker_cli
from mpd_stickers.entrypoints.cli.main import mpd_stickers

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the
    'mpd_stickers.demo' logger and additional messages on a 'some.thirdparty'
    logger to exercise logger-level filtering and flight-recorder behavior.
    """
    logger = logging.getLogger("mpd_stickers.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command on `mpd_stickers` for one test."""
    mpd_stickers.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(mpd_stickers, "log-demo")


@pytest.fixture
def runner():
    """Return a CliRunner whose flight recorder writes into the working directory."""
    return CliRunner(env={"MPD_STICKERS_LOG_PATH": "latest.log"})


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated filesystem."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def memory_backend(monkeypatch, memory_dispatcher):
    """Answer sticker commands from `memory_dispatcher`.

    Returns:
        MemoryDispatcher: The database the CLI reads and writes.
    """

    def _bootstrap(**kwargs):
        return bootstrap(dispatcher=memory_dispatcher, **kwargs)

    monkeypatch.setattr(sticker_cli, "bootstrap", _bootstrap)
    return memory_dispatcher
