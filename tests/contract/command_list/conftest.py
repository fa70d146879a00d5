"""Fixtures for command list contract tests."""

from collections.abc import Iterator

import pytest

from mpd_stickers.adapters.mpd import MpdConnection


@pytest.fixture(params=["memory", "mpd"])
def batching_dispatcher(request: pytest.FixtureRequest, memory_dispatcher) -> Iterator:
    """Return an open dispatcher that supports ``command_list()``."""
    match request.param:
        case "memory":
            yield memory_dispatcher
        case "mpd":
            server = request.getfixturevalue("mpd_server")
            with MpdConnection(server.settings()) as connection:
                yield connection
        case _:
            raise ValueError(f"unknown dispatcher type: {request.param}")
