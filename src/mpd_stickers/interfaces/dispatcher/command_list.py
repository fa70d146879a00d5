"""Command list batch shared by dispatchers that support batching."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .dispatcher import RawResponse


@dataclass
class CommandList:
    """Commands queued inside a command list, and their replies once sent.

    While the batch is open, ``dispatch`` queues into `commands` and returns
    ``None``. When the batch is sent, the parsed reply of each command is
    appended to `results` in the same order.
    """

    commands: list[tuple[str, tuple[str | None, ...]]] = field(default_factory=list)
    results: list[RawResponse] = field(default_factory=list)

    def append(self, command: str, args: Sequence[str | None]) -> None:
        """Queue one command."""
        self.commands.append((command, tuple(args)))

    def __len__(self) -> int:
        return len(self.commands)
