"""Exceptions raised by command dispatchers."""

from enum import IntEnum


class AckCode(IntEnum):
    """Error codes carried by MPD ``ACK`` replies."""

    NOT_LIST = 1
    ARG = 2
    PASSWORD = 3
    PERMISSION = 4
    UNKNOWN = 5
    NO_EXIST = 50
    PLAYLIST_MAX = 51
    SYSTEM = 52
    PLAYLIST_LOAD = 53
    UPDATE_ALREADY = 54
    PLAYER_SYNC = 55
    EXIST = 56


class DispatcherError(Exception):
    """Base class for dispatcher errors."""


class ProtocolError(DispatcherError):
    """The server rejected a command with an ``ACK`` reply.

    Attributes:
        code (int): The ACK error code (an `AckCode` when the code is known).
        command_list_index (int): Position of the failing command inside a
            command list (0 outside of command lists).
        command (str): The command the server reports as failing.
        message (str): The server's human-readable message.
    """

    def __init__(
        self, code: int, command_list_index: int, command: str, message: str
    ) -> None:
        super().__init__(
            f"[{int(code)}@{command_list_index}] {{{command}}} {message}"
        )
        self.code = code
        self.command_list_index = command_list_index
        self.command = command
        self.message = message


class TransportError(DispatcherError):
    """The connection to the server failed (socket error, timeout, bad framing)."""


class ConnectionClosedError(TransportError):
    """The server closed the connection while a reply was expected."""

    def __init__(self) -> None:
        super().__init__("Connection closed by the server.")


class NotConnectedError(DispatcherError):
    """A command was dispatched before the connection was opened."""

    def __init__(self) -> None:
        super().__init__("Not connected; call open() first.")


class CommandListError(DispatcherError):
    """A command list was used incorrectly (e.g., nested)."""
