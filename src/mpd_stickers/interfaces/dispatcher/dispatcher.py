"""Command dispatcher port.

A dispatcher sends one protocol command with its positional arguments and
returns the server's reply, already tokenized into primitive values.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from types import TracebackType

RawRecord: TypeAlias = Mapping[str, str]
"""One structured record of a multi-object reply (e.g. ``file`` + ``sticker``)."""

RawResponse: TypeAlias = (
    bool | str | Sequence[str] | Sequence[RawRecord] | RawRecord | None
)
"""Every shape a dispatcher may return.

- ``True``: the command succeeded with zero result lines.
- ``str``: exactly one result line's value.
- sequence of ``str``: several values for the same key.
- sequence of records: several objects (each record starts at a ``file`` key).
- a single record: several distinct keys describing one thing.
- ``None``: the command was queued inside a command list; its individual result
  is not returned from ``dispatch``.
"""


class CommandDispatcher(abc.ABC):
    """Contract for sending a command and receiving its parsed reply."""

    @abc.abstractmethod
    def dispatch(self, command: str, args: Sequence[str | None] = ()) -> RawResponse:
        """Send a command and return the parsed reply.

        Args:
            command: Command name as sent on the wire (e.g. ``"sticker get"``).
            args: Positional arguments. ``None`` entries are placeholders for
                omitted optional arguments and are not sent.

        Returns:
            RawResponse: The parsed reply.

        Raises:
            ProtocolError: If the server rejects the command.
            TransportError: If the connection fails.
        """

    # --- Lifecycle (no-ops for dispatchers without a connection) ---

    def open(self) -> None:
        """Acquire whatever resources the dispatcher needs."""

    def close(self) -> None:
        """Release the dispatcher's resources."""

    def __enter__(self) -> CommandDispatcher:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
