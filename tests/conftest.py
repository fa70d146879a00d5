"""Global pytest fixtures for MPD-STICKERS."""

pytest_plugins = [
    "tests.fixtures.dispatchers",
    "tests.fixtures.mpd_server",
]
