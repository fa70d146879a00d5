"""Interfaces for redacting sensitive values.

This module defines the Redactor interface and the RedactorMode enumeration
used by adapters to keep the MPD password out of logs, prompts and error
messages. The password can appear in a host specification (MPD's
``password@host`` convention) and in the ``password`` protocol command.
"""

import abc
from enum import Enum

# pylint: disable=too-few-public-methods


class RedactorMode(Enum):
    """Enumeration for redactor modes.

    Modes:
    - LENIENT: redact passwords but keep host names visible.
    - STRICT: redact passwords and also host names.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Interface for sanitizing sensitive information from strings."""

    _mode: RedactorMode

    @abc.abstractmethod
    def sanitize_host(self, raw_host: str) -> str:
        """Return a display-safe host specification.

        Args:
            raw_host: Host as configured, possibly ``password@host``.

        Returns:
            The host specification with sensitive parts redacted.
        """

    @abc.abstractmethod
    def sanitize_command_line(self, line: str) -> str:
        """Return a display-safe protocol command line.

        Args:
            line: A command line as sent to the server.

        Returns:
            The line with any password argument redacted.
        """

    @property
    def mode(self) -> RedactorMode:
        """Return the redaction mode."""
        return self._mode
