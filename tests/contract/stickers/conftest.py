"""Fixtures for sticker contract tests.

Every test runs against each dispatcher backend. Both backends share the
`memory_dispatcher` database, so tests can inspect state through
`memory_dispatcher.snapshot()` whichever backend served the commands.
"""

from collections.abc import Iterator

import pytest

from mpd_stickers.adapters.mpd import MpdConnection
from mpd_stickers.adapters.stickers import StickerAdapter
from mpd_stickers.interfaces.dispatcher import CommandDispatcher


@pytest.fixture(params=["memory", "mpd"])
def dispatcher(
    request: pytest.FixtureRequest, memory_dispatcher
) -> Iterator[CommandDispatcher]:
    """Return an open dispatcher for the requested backend.

    Supported params:
      - `"memory"` → the shared `MemoryDispatcher`
      - `"mpd"` → an `MpdConnection` to a fake MPD server backed by it
    """
    match request.param:
        case "memory":
            yield memory_dispatcher
        case "mpd":
            server = request.getfixturevalue("mpd_server")
            with MpdConnection(server.settings()) as connection:
                yield connection
        case _:
            raise ValueError(f"unknown dispatcher type: {request.param}")


@pytest.fixture
def stickers(dispatcher) -> StickerAdapter:
    return StickerAdapter(dispatcher)
