"""Unit tests for mpd_stickers.logging."""

import logging

import pytest

from mpd_stickers.adapters.redactor import Redactor
from mpd_stickers.config import MpdSettings
from mpd_stickers.interfaces.redactor import RedactorMode
from mpd_stickers.logging import (
    WIRE_LOGGER,
    ConsolePrefixFilter,
    config_console_handler,
    config_flight_recorder,
    log_startup,
    wire_trace_enabled,
)

# pylint: disable=magic-value-comparison


def make_record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "message", None, None)


@pytest.mark.parametrize(
    ("name", "prefix"),
    [
        (WIRE_LOGGER, "[mpd]"),
        ("mpd_stickers.adapters.mpd.connection", ""),
        ("mpd_stickers", ""),
        ("urllib3.connectionpool", "[urllib3]"),
        ("mpd_stickersextra", "[mpd_stickersextra]"),
    ],
)
def test_console_prefix(name, prefix):
    record = make_record(name)
    assert ConsolePrefixFilter().filter(record) is True
    assert record.prefix == prefix


def test_console_handler_prefixes_only_outside_debug_mode():
    plain = config_console_handler(level=logging.INFO)
    assert plain.level == logging.INFO
    assert any(isinstance(f, ConsolePrefixFilter) for f in plain.filters)

    debug = config_console_handler(level=logging.INFO, debug_mode=True)
    assert debug.level == logging.DEBUG
    assert not debug.filters


def test_wire_trace_follows_logger_level():
    wire = logging.getLogger(WIRE_LOGGER)
    previous = wire.level
    try:
        wire.setLevel(logging.INFO)
        assert not wire_trace_enabled()
        wire.setLevel(logging.DEBUG)
        assert wire_trace_enabled()
    finally:
        wire.setLevel(previous)


def test_flight_recorder_writes_on_warning(tmp_path):
    path = tmp_path / "recorder.log"
    recorder = config_flight_recorder(path, capacity=10)
    logger = logging.getLogger("mpd_stickers.tests.recorder")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(recorder)
    try:
        logger.debug("buffered")
        assert path.read_text(encoding="utf-8") == ""
        logger.warning("trigger")
    finally:
        logger.removeHandler(recorder)
        logger.propagate = True
        recorder.close()
    content = path.read_text(encoding="utf-8")
    assert "DEBUG mpd_stickers.tests.recorder" in content
    assert "trigger" in content


class TestLogStartup:
    @staticmethod
    def test_reports_server_and_redaction(tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="mpd_stickers.tests.startup")
        recorder = config_flight_recorder(tmp_path / "startup.log", capacity=5)
        try:
            log_startup(
                logging.getLogger("mpd_stickers.tests.startup"),
                app_version="1.2.3",
                level=logging.WARNING,
                handlers=[recorder],
                logger_levels={},
                settings=MpdSettings(host="music.local", password="hunter2"),
                redactor=Redactor(RedactorMode.STRICT),
            )
        finally:
            recorder.close()
        messages = [r.getMessage() for r in caplog.records]
        assert messages[0].startswith("MPD-STICKERS 1.2.3: console=WARNING")
        assert "flight-recorder=ON" in messages[0]
        assert "MPD server: ***@***:6600 over tcp, timeout=10.0s" in messages
        assert "Redaction: strict" in messages
        assert "Per-logger overrides: <none>" in messages
        assert any(
            m.startswith("Flight recorder: path=") and "capacity=5" in m
            for m in messages
        )
        assert "hunter2" not in caplog.text
        assert "music.local" not in caplog.text

    @staticmethod
    def test_unix_socket_without_recorder(caplog):
        caplog.set_level(logging.DEBUG, logger="mpd_stickers.tests.startup")
        log_startup(
            logging.getLogger("mpd_stickers.tests.startup"),
            app_version="1.2.3",
            level=logging.INFO,
            handlers=[],
            logger_levels={WIRE_LOGGER: logging.INFO},
            settings=MpdSettings(host="/run/mpd/socket"),
            redactor=Redactor(),
        )
        messages = [r.getMessage() for r in caplog.records]
        assert "flight-recorder=OFF" in messages[0]
        assert "MPD server: /run/mpd/socket over unix socket, timeout=10.0s" in messages
        assert not any(m.startswith("Flight recorder") for m in messages)
        assert f"Per-logger overrides: {{'{WIRE_LOGGER}': 'INFO'}}" in messages
