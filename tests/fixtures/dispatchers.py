"""Dispatcher fixtures shared by every test suite.

Provided fixtures
-----------------
- **songs**: URIs of the songs registered in the in-memory database.
- **memory_dispatcher**: A fresh `MemoryDispatcher` with `songs` registered.
"""

import pytest

from mpd_stickers.adapters.memory import MemoryDispatcher

SONGS = (
    "Artist/Album/01 Intro.flac",
    "Artist/Album/02 Song.flac",
    "Artist/Live/01 Encore.mp3",
    "Various/Compilation/07 Hit.ogg",
)


@pytest.fixture
def songs() -> tuple[str, ...]:
    """URIs of the songs known to `memory_dispatcher`."""
    return SONGS


@pytest.fixture
def memory_dispatcher() -> MemoryDispatcher:
    """Return an in-memory sticker database with a few songs and no stickers."""
    dispatcher = MemoryDispatcher()
    for uri in SONGS:
        dispatcher.add_object(uri)
    return dispatcher
