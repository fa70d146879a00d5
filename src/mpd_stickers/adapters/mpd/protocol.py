"""MPD wire codec: command serialization and reply parsing.

The MPD protocol is line based. A command is its name followed by
space-separated arguments; arguments are double-quoted with ``\\`` and ``"``
escaped. A reply is zero or more ``key: value`` lines terminated by ``OK``,
or a single ``ACK [code@index] {command} message`` line.

`parse_response` folds the ``key: value`` lines into the shapes described by
`mpd_stickers.interfaces.dispatcher.RawResponse`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from mpd_stickers.interfaces.dispatcher import (
    AckCode,
    ProtocolError,
    RawResponse,
    TransportError,
)

ENCODING = "utf-8"
GREETING_PREFIX = "OK MPD "
OK = "OK"
LIST_OK = "list_OK"
ACK_PREFIX = "ACK "
COMMAND_LIST_BEGIN = "command_list_ok_begin"
COMMAND_LIST_END = "command_list_end"
PAIR_SEPARATOR = ": "
RECORD_KEY = "file"

ACK_PATTERN = re.compile(r"^ACK \[(\d+)@(\d+)\] \{([^}]*)\} ?(.*)$")
KNOWN_ACK_CODES = frozenset(code.value for code in AckCode)


def quote_argument(arg: str) -> str:
    """Quote one argument for the wire.

    Example:
        ``quote_argument('say "hi"')`` → ``'"say \\"hi\\""'``
    """
    escaped = str(arg).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_command_line(command: str, args: Sequence[str | None] = ()) -> str:
    """Serialize a command and its arguments into one line (without newline).

    ``None`` arguments are omitted, which is how optional trailing arguments
    (e.g. the sticker name of ``sticker delete``) are left out.
    """
    parts = [command]
    parts.extend(quote_argument(arg) for arg in args if arg is not None)
    return " ".join(parts)


def parse_ack(line: str) -> ProtocolError:
    """Parse an ``ACK`` line into a `ProtocolError` (returned, not raised).

    Raises:
        TransportError: If the line is not a well-formed ACK.
    """
    if not (match := ACK_PATTERN.match(line)):
        raise TransportError(f"Malformed ACK line: {line!r}")
    raw_code, raw_index, command, message = match.groups()
    code: int = int(raw_code)
    if code in KNOWN_ACK_CODES:
        code = AckCode(code)
    return ProtocolError(code, int(raw_index), command, message)


def parse_pairs(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Split ``key: value`` lines into pairs.

    Raises:
        TransportError: If a line has no ``": "`` separator.
    """
    pairs: list[tuple[str, str]] = []
    for line in lines:
        key, sep, value = line.partition(PAIR_SEPARATOR)
        if not sep:
            raise TransportError(f"Malformed reply line: {line!r}")
        pairs.append((key, value))
    return pairs


def parse_response(lines: Sequence[str]) -> RawResponse:
    """Fold the lines of one reply (``OK`` excluded) into a raw response.

    Rules:
    - no lines → ``True``;
    - any ``file`` key → a list of records, a new record starting at each
      ``file`` key;
    - a single distinct key → its value (one line) or list of values;
    - otherwise → a dict of key → value (later duplicates win).
    """
    if not lines:
        return True
    pairs = parse_pairs(lines)
    keys = {key for key, _ in pairs}
    if RECORD_KEY in keys:
        return _group_records(pairs)
    if len(keys) == 1:
        values = [value for _, value in pairs]
        return values[0] if len(values) == 1 else values
    return dict(pairs)


def _group_records(pairs: list[tuple[str, str]]) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    for key, value in pairs:
        if key == RECORD_KEY or not records:
            records.append({})
        records[-1][key] = value
    return records
