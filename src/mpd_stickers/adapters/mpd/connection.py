"""MPD socket dispatcher.

`MpdConnection` owns one connection to an MPD server (TCP or Unix domain
socket) and implements `CommandDispatcher` on top of the wire codec in
`mpd_stickers.adapters.mpd.protocol`.

Key behaviors
-------------
- **Lifecycle**: `open()` connects, checks the ``OK MPD <version>`` greeting
  and authenticates when a password is configured. `close()` says ``close``
  to the server (best effort) and releases the socket. Both are idempotent,
  and the connection is a context manager.
- **Errors**: ``ACK`` replies raise `ProtocolError` and leave the connection
  usable. Socket failures, timeouts, undecodable replies and EOF raise
  `TransportError` (`ConnectionClosedError` for EOF) and close the socket;
  call `open()` again to reconnect.
- **Command lists**: inside ``with conn.command_list() as batch:`` every
  `dispatch` is queued and returns ``None``. The batch is sent on normal exit
  and ``batch.results`` receives one parsed reply per command. Nothing is
  sent if the block raises.
- **Thread-safety**: all traffic happens under an `RLock`; a command list
  holds the lock for the duration of the block.
- **Wire log**: every line is logged at DEBUG on ``mpd_stickers.wire`` after
  passing sent lines through the redactor.
"""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO

from mpd_stickers.adapters.mpd.protocol import (
    ACK_PREFIX,
    COMMAND_LIST_BEGIN,
    COMMAND_LIST_END,
    ENCODING,
    GREETING_PREFIX,
    LIST_OK,
    OK,
    build_command_line,
    parse_ack,
    parse_response,
)
from mpd_stickers.adapters.redactor import Redactor
from mpd_stickers.interfaces.dispatcher import (
    CommandDispatcher,
    CommandList,
    CommandListError,
    ConnectionClosedError,
    NotConnectedError,
    RawResponse,
    TransportError,
)
from mpd_stickers.logging import WIRE_LOGGER

if TYPE_CHECKING:
    from mpd_stickers.config import MpdSettings
    from mpd_stickers.interfaces.redactor import Redactor as AbstractRedactor

logger = logging.getLogger(__name__)
wire_logger = logging.getLogger(WIRE_LOGGER)


class MpdConnection(CommandDispatcher):
    """Dispatcher speaking the MPD protocol over a socket."""

    def __init__(
        self, settings: MpdSettings, redactor: AbstractRedactor | None = None
    ) -> None:
        self._settings = settings
        self._redactor = redactor or Redactor()
        self._lock = threading.RLock()
        self._sock: socket.socket | None = None
        self._rfile: BinaryIO | None = None
        self._batch: CommandList | None = None
        self._server_version: str | None = None

    # --- Properties ---

    @property
    def settings(self) -> MpdSettings:
        """Return the settings this connection was built from."""
        return self._settings

    @property
    def connected(self) -> bool:
        """True while the socket is open."""
        return self._sock is not None

    @property
    def server_version(self) -> str | None:
        """Protocol version announced in the server greeting."""
        return self._server_version

    @property
    def address(self) -> str:
        """Display-safe server address."""
        return self._settings.display_address(self._redactor)

    # --- Lifecycle ---

    def open(self) -> None:
        with self._lock:
            if self._sock is not None:
                return
            logger.debug("Connecting to MPD at %s", self.address)
            self._sock = self._connect()
            self._rfile = self._sock.makefile("rb")
            try:
                self._handshake()
            except BaseException:
                self._teardown()
                raise
            logger.info(
                "Connected to MPD %s at %s", self._server_version, self.address
            )

    def close(self) -> None:
        with self._lock:
            if self._sock is None:
                return
            try:
                self._write_lines(["close"])
            except TransportError as e:
                logger.debug("Ignoring error while closing connection: %s", e)
            finally:
                self._teardown()
            logger.debug("Disconnected from %s", self.address)

    def _connect(self) -> socket.socket:
        settings = self._settings
        try:
            if settings.is_unix_socket:
                sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
                sock.settimeout(settings.timeout)
                try:
                    sock.connect(settings.host)
                except OSError:
                    sock.close()
                    raise
                return sock
            return socket.create_connection(
                (settings.host, settings.port), timeout=settings.timeout
            )
        except OSError as e:
            raise TransportError(f"Cannot connect to {self.address}: {e}") from e

    def _handshake(self) -> None:
        greeting = self._read_line()
        if not greeting.startswith(GREETING_PREFIX):
            raise TransportError(f"Unexpected greeting from server: {greeting!r}")
        self._server_version = greeting.removeprefix(GREETING_PREFIX)
        if self._settings.password:
            self._execute("password", [self._settings.password])

    def _teardown(self) -> None:
        if self._rfile is not None:
            self._rfile.close()
        if self._sock is not None:
            self._sock.close()
        self._rfile = None
        self._sock = None
        self._server_version = None

    # --- Dispatch ---

    def dispatch(self, command: str, args: Sequence[str | None] = ()) -> RawResponse:
        with self._lock:
            if self._batch is not None:
                self._batch.append(command, args)
                return None
            self._require_open()
            return self._execute(command, args)

    @contextmanager
    def command_list(self) -> Iterator[CommandList]:
        """Queue the commands dispatched inside the block and send them as one batch.

        Yields:
            CommandList: The batch; its ``results`` are filled once sent.

        Raises:
            CommandListError: If a command list is already open.
            NotConnectedError: If the connection is not open.
            ProtocolError: If the server rejects one of the queued commands.
        """
        with self._lock:
            if self._batch is not None:
                raise CommandListError("Command lists cannot be nested.")
            self._require_open()
            batch = CommandList()
            self._batch = batch
            try:
                yield batch
            finally:
                self._batch = None
            self._send_batch(batch)

    def _require_open(self) -> None:
        if self._sock is None:
            raise NotConnectedError()

    def _execute(self, command: str, args: Sequence[str | None]) -> RawResponse:
        self._write_lines([build_command_line(command, args)])
        lines, _ = self._read_reply()
        return parse_response(lines)

    def _send_batch(self, batch: CommandList) -> None:
        if not batch.commands:
            return
        logger.debug("Sending command list of %d command(s)", len(batch))
        self._write_lines(
            [
                COMMAND_LIST_BEGIN,
                *(build_command_line(command, args) for command, args in batch.commands),
                COMMAND_LIST_END,
            ]
        )
        for _ in batch.commands:
            lines, terminator = self._read_reply()
            if terminator != LIST_OK:
                self._teardown()
                raise TransportError("Command list reply ended early.")
            batch.results.append(parse_response(lines))
        if (line := self._read_line()) != OK:
            self._teardown()
            raise TransportError(f"Expected OK after command list, got {line!r}")

    # --- Wire I/O ---

    def _write_lines(self, lines: Sequence[str]) -> None:
        if self._sock is None:
            raise NotConnectedError()
        if wire_logger.isEnabledFor(logging.DEBUG):
            for line in lines:
                wire_logger.debug(">> %s", self._redactor.sanitize_command_line(line))
        payload = "".join(f"{line}\n" for line in lines).encode(ENCODING)
        try:
            self._sock.sendall(payload)
        except OSError as e:
            self._teardown()
            raise TransportError(f"Cannot send to {self.address}: {e}") from e

    def _read_line(self) -> str:
        if self._rfile is None:
            raise NotConnectedError()
        try:
            raw = self._rfile.readline()
        except OSError as e:
            self._teardown()
            raise TransportError(f"Cannot read from {self.address}: {e}") from e
        if not raw:
            self._teardown()
            raise ConnectionClosedError()
        try:
            line = raw.decode(ENCODING).rstrip("\n")
        except UnicodeDecodeError as e:
            self._teardown()
            raise TransportError(f"Undecodable reply line: {raw!r}") from e
        wire_logger.debug("<< %s", line)
        return line

    def _read_reply(self) -> tuple[list[str], str]:
        """Read lines up to ``OK``/``list_OK``; return them and the terminator.

        Raises:
            ProtocolError: If the server answers with ``ACK``.
        """
        lines: list[str] = []
        while True:
            line = self._read_line()
            if line in (OK, LIST_OK):
                return lines, line
            if line.startswith(ACK_PREFIX):
                raise parse_ack(line)
            lines.append(line)
