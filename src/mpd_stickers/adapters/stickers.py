"""Sticker adapter: MPD sticker commands with normalized replies.

Stickers are name/value pairs that clients attach to objects in the MPD
database (songs, directories, ...). MPD gives them no meaning of its own; the
values are opaque strings. Objects are addressed by their type (``"song"``
for songs) and their URI (the path within the database).

The dispatcher returns differently shaped replies depending on how many lines
the server sent. This module folds those shapes into two stable results:

- ``True`` (no lines) becomes an empty mapping;
- one line (a ``str``) is treated like a sequence of one;
- several lines become a ``dict`` (later duplicates win);
- ``None`` (the command was queued in a command list) is only meaningful for
  `StickerAdapter.find`, which returns it as is.

Every call is a fresh round-trip; nothing is cached here.

Typical usage
-------------
    stickers = StickerAdapter(dispatcher)
    stickers.set("song", "a.mp3", "rating", "5")
    stickers.get("song", "a.mp3", "rating")  # "5"
    stickers.list("song", "a.mp3")  # {"rating": "5"}
    stickers.find("song", "", "rating")  # {"a.mp3": "5"}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from mpd_stickers.domain.errors import MalformedStickerError, UnexpectedResponseError

if TYPE_CHECKING:
    from mpd_stickers.interfaces.dispatcher import CommandDispatcher, RawResponse

logger = logging.getLogger(__name__)

GET = "sticker get"
SET = "sticker set"
DELETE = "sticker delete"
LIST = "sticker list"
FIND = "sticker find"


def split_sticker_line(line: str) -> tuple[str, str]:
    """Split ``name=value`` on the first ``=`` (values may contain ``=``).

    Raises:
        MalformedStickerError: If the line holds no ``=``.
    """
    name, sep, value = line.partition("=")
    if not sep:
        raise MalformedStickerError(line)
    return name, value


def sticker_value(raw: RawResponse) -> str:
    """Extract the value from a ``sticker get`` reply."""
    match raw:
        case str():
            return raw.split("=", 1)[-1]
        case _:
            raise UnexpectedResponseError(GET, raw)


def sticker_lines_to_dict(raw: RawResponse) -> dict[str, str]:
    """Normalize a ``sticker list`` reply into a name → value mapping."""
    match raw:
        case True:
            # the object exists but carries no stickers
            return {}
        case str():
            lines = [raw]
        case [*lines] if all(isinstance(line, str) for line in lines):
            pass
        case _:
            raise UnexpectedResponseError(LIST, raw)
    return dict(split_sticker_line(line) for line in lines)


def sticker_records_to_dict(raw: RawResponse, name: str) -> dict[str, str] | None:
    """Normalize a ``sticker find`` reply into a URI → value mapping.

    Each record's ``sticker`` field starts with ``<name>=``; that literal
    prefix is removed. Returns ``None`` when the reply is ``None``.
    """
    match raw:
        case None:
            return None
        case True:
            return {}
        case Mapping():
            records = [raw]
        case [*records] if all(isinstance(record, Mapping) for record in records):
            pass
        case _:
            raise UnexpectedResponseError(FIND, raw)
    prefix = f"{name}="
    try:
        return {
            record["file"]: record["sticker"].removeprefix(prefix)
            for record in records
        }
    except KeyError as e:
        raise UnexpectedResponseError(FIND, raw) from e


class StickerAdapter:
    """Read, write and search MPD stickers through a command dispatcher.

    The dispatcher is injected; the adapter never opens connections itself.
    Dispatcher errors (e.g. `ProtocolError` for a missing sticker) propagate
    unchanged.
    """

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> CommandDispatcher:
        """Return the dispatcher commands are sent through."""
        return self._dispatcher

    def get(self, type_: str, uri: str, name: str) -> str:
        """Read a sticker value for the specified object.

        Args:
            type_: Object type (e.g. ``"song"``).
            uri: Object URI.
            name: Sticker name.

        Returns:
            str: The sticker's value.

        Raises:
            ProtocolError: If the object or sticker does not exist.
        """
        logger.debug("Getting sticker %r on %s %r", name, type_, uri)
        return sticker_value(self._dispatcher.dispatch(GET, [type_, uri, name]))

    def set(self, type_: str, uri: str, name: str, value: str) -> RawResponse:
        """Add a sticker value to the object, replacing an existing one.

        Returns:
            The dispatcher's reply, unmodified.
        """
        logger.debug("Setting sticker %r on %s %r", name, type_, uri)
        return self._dispatcher.dispatch(SET, [type_, uri, name, value])

    def delete(self, type_: str, uri: str, name: str | None = None) -> RawResponse:
        """Delete a sticker from the object.

        When ``name`` is omitted, all sticker values of the object are deleted.

        Returns:
            The dispatcher's reply, unmodified.
        """
        logger.debug("Deleting sticker %r on %s %r", name or "<all>", type_, uri)
        return self._dispatcher.dispatch(DELETE, [type_, uri, name])

    def list(self, type_: str, uri: str) -> dict[str, str]:
        """List the stickers of the object.

        Returns:
            dict[str, str]: Sticker names mapped to values (empty when the
            object has none).
        """
        logger.debug("Listing stickers on %s %r", type_, uri)
        return sticker_lines_to_dict(self._dispatcher.dispatch(LIST, [type_, uri]))

    def find(self, type_: str, directory: str, name: str) -> dict[str, str] | None:
        """Search for stickers with the given name below a directory.

        Args:
            type_: Object type (usually ``"song"``).
            directory: Directory to search under; ``""`` searches the whole
                database.
            name: Sticker name to search for.

        Returns:
            Object URIs mapped to the sticker's value, an empty mapping when
            nothing matched, or ``None`` when the command was queued in a
            command list.
        """
        logger.debug("Finding sticker %r on %s below %r", name, type_, directory)
        raw = self._dispatcher.dispatch(FIND, [type_, directory, name])
        return sticker_records_to_dict(raw, name)
