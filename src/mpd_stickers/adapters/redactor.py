"""Regex-based redactor for MPD host specifications and command lines.

This module provides a Redactor implementation that masks the MPD password
where it can leak: the ``password@host`` form of ``MPD_HOST`` and the
``password`` protocol command written to the wire log. It supports lenient and
strict modes (strict also hides the host).
"""

import re

from mpd_stickers.interfaces import redactor
from mpd_stickers.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
PASSWORD_COMMAND_PATTERN = re.compile(r"^(password\s+)(?:\"(?:[^\"\\]|\\.)*\"|\S+)")


class Redactor(redactor.Redactor):
    """Redactor implementation using regex-based sanitization."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def sanitize_host(self, raw_host: str) -> str:
        password, sep, host = str(raw_host).partition("@")
        if not sep:
            password, host = "", password
        if self._mode == RedactorMode.STRICT:
            host = PLACEHOLDER
        if not sep:
            return host
        return f"{PLACEHOLDER if password else ''}@{host}"

    def sanitize_command_line(self, line: str) -> str:
        return PASSWORD_COMMAND_PATTERN.sub(rf'\1"{PLACEHOLDER}"', line)
