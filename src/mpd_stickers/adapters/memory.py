"""In-memory sticker database dispatcher.

This module provides a dependency-free `CommandDispatcher` that answers the
``sticker`` commands the way an MPD server does, with the sticker database
kept in RAM. It is meant for **tests**, examples and offline development.

Key behaviors
-------------
- **Objects**: only objects registered with `add_object` can carry stickers;
  anything else is answered with ``ACK`` ``NO_EXIST`` (``no such song``).
- **Reply shapes** match what the socket dispatcher parses off the wire:
  ``True`` for no lines, a ``str`` for one line, a ``list`` for several,
  records (``file`` + ``sticker``) for ``sticker find``.
- **Omitted arguments**: ``None`` arguments are dropped before the command is
  interpreted, as they are on the wire.
- **Command lists**: `command_list()` queues commands and runs them on exit;
  the first failure stops the batch and carries its position in the list.
- **Thread-safety**: all state is guarded by an `RLock`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager

from mpd_stickers.interfaces.dispatcher import (
    AckCode,
    CommandDispatcher,
    CommandList,
    CommandListError,
    ProtocolError,
    RawResponse,
)

logger = logging.getLogger(__name__)

STICKER_COMMAND = "sticker"
DEFAULT_OBJECT_TYPES = ("song",)

ObjectKey = tuple[str, str]


def _lines_response(lines: list[str]) -> RawResponse:
    if not lines:
        return True
    if len(lines) == 1:
        return lines[0]
    return lines


class MemoryDispatcher(CommandDispatcher):
    """Dispatcher answering sticker commands from an in-memory database."""

    def __init__(self, object_types: Iterable[str] = DEFAULT_OBJECT_TYPES) -> None:
        self._lock = threading.RLock()
        self._object_types = frozenset(object_types)
        self._objects: set[ObjectKey] = set()
        self._stickers: dict[ObjectKey, dict[str, str]] = {}
        self._batch: CommandList | None = None
        self._subcommands: dict[str, tuple[Callable[..., RawResponse], int, int]] = {
            "get": (self._get, 3, 3),
            "set": (self._set, 4, 4),
            "delete": (self._delete, 2, 3),
            "list": (self._list, 2, 2),
            "find": (self._find, 3, 3),
        }

    # --- Test/setup helpers ---

    def add_object(self, uri: str, type_: str = "song") -> None:
        """Register an object that can carry stickers.

        Raises:
            ValueError: If the object type is not supported by this dispatcher.
        """
        if type_ not in self._object_types:
            raise ValueError(f"unsupported object type: {type_!r}")
        with self._lock:
            self._objects.add((type_, uri))

    def snapshot(self, type_: str, uri: str) -> dict[str, str]:
        """Return a copy of the stickers stored on an object."""
        with self._lock:
            return dict(self._stickers.get((type_, uri), {}))

    # --- Dispatch ---

    def dispatch(self, command: str, args: Sequence[str | None] = ()) -> RawResponse:
        with self._lock:
            if self._batch is not None:
                self._batch.append(command, args)
                return None
            return self._execute(command, args)

    @contextmanager
    def command_list(self) -> Iterator[CommandList]:
        """Queue the commands dispatched inside the block and run them on exit.

        Raises:
            CommandListError: If a command list is already open.
            ProtocolError: If one of the queued commands fails; its
                ``command_list_index`` is the command's position in the batch.
        """
        with self._lock:
            if self._batch is not None:
                raise CommandListError("Command lists cannot be nested.")
            batch = CommandList()
            self._batch = batch
            try:
                yield batch
            finally:
                self._batch = None
            for index, (command, args) in enumerate(batch.commands):
                try:
                    batch.results.append(self._execute(command, args))
                except ProtocolError as e:
                    raise ProtocolError(e.code, index, e.command, e.message) from e

    def _execute(self, command: str, args: Sequence[str | None]) -> RawResponse:
        name, _, subcommand = command.partition(" ")
        if name != STICKER_COMMAND:
            raise ProtocolError(AckCode.UNKNOWN, 0, name, f'unknown command "{name}"')
        words = [subcommand] if subcommand else []
        words.extend(arg for arg in args if arg is not None)
        if not words or words[0] not in self._subcommands:
            raise ProtocolError(AckCode.ARG, 0, STICKER_COMMAND, "bad request")
        handler, min_args, max_args = self._subcommands[words[0]]
        operands = words[1:]
        if not min_args <= len(operands) <= max_args:
            raise ProtocolError(
                AckCode.ARG,
                0,
                STICKER_COMMAND,
                f'wrong number of arguments for "{STICKER_COMMAND}"',
            )
        logger.debug("Executing %s %s", STICKER_COMMAND, " ".join(words))
        return handler(*operands)

    # --- Sticker subcommands ---

    def _require_object(self, type_: str, uri: str) -> ObjectKey:
        if type_ not in self._object_types:
            raise ProtocolError(
                AckCode.ARG, 0, STICKER_COMMAND, "unknown sticker domain"
            )
        if (type_, uri) not in self._objects:
            raise ProtocolError(
                AckCode.NO_EXIST, 0, STICKER_COMMAND, f"no such {type_}"
            )
        return (type_, uri)

    @staticmethod
    def _no_such_sticker() -> ProtocolError:
        return ProtocolError(AckCode.NO_EXIST, 0, STICKER_COMMAND, "no such sticker")

    def _get(self, type_: str, uri: str, name: str) -> RawResponse:
        stickers = self._stickers.get(self._require_object(type_, uri), {})
        if name not in stickers:
            raise self._no_such_sticker()
        return f"{name}={stickers[name]}"

    def _set(self, type_: str, uri: str, name: str, value: str) -> RawResponse:
        key = self._require_object(type_, uri)
        self._stickers.setdefault(key, {})[name] = value
        return True

    def _delete(self, type_: str, uri: str, name: str | None = None) -> RawResponse:
        key = self._require_object(type_, uri)
        stickers = self._stickers.get(key, {})
        if name is None:
            if not stickers:
                raise self._no_such_sticker()
            del self._stickers[key]
            return True
        if name not in stickers:
            raise self._no_such_sticker()
        del stickers[name]
        return True

    def _list(self, type_: str, uri: str) -> RawResponse:
        stickers = self._stickers.get(self._require_object(type_, uri), {})
        return _lines_response([f"{name}={value}" for name, value in stickers.items()])

    def _find(self, type_: str, directory: str, name: str) -> RawResponse:
        if type_ not in self._object_types:
            raise ProtocolError(
                AckCode.ARG, 0, STICKER_COMMAND, "unknown sticker domain"
            )
        prefix = directory.rstrip("/") + "/"
        records = [
            {"file": uri, "sticker": f"{name}={stickers[name]}"}
            for (object_type, uri), stickers in sorted(self._stickers.items())
            if object_type == type_
            and name in stickers
            and (not directory or uri == directory or uri.startswith(prefix))
        ]
        return records or True
