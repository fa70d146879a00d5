"""Test the bootstrap function."""

import pytest

from mpd_stickers.adapters.mpd import MpdConnection
from mpd_stickers.adapters.redactor import Redactor
from mpd_stickers.adapters.stickers import StickerAdapter
from mpd_stickers.bootstrap import AppContainer, bootstrap, build_dispatcher
from mpd_stickers.config import MpdSettings
from mpd_stickers.interfaces.redactor import RedactorMode

# pylint: disable=magic-value-comparison


@pytest.fixture
def setenvvar(monkeypatch):
    """Point MPD_HOST/MPD_PORT at a password-protected host."""
    monkeypatch.setenv("MPD_HOST", "secret@music.local")
    monkeypatch.setenv("MPD_PORT", "6601")
    monkeypatch.delenv("MPD_TIMEOUT", raising=False)


class TestBuildDispatcher:
    @staticmethod
    def test_returns_unopened_connection():
        dispatcher = build_dispatcher(MpdSettings(), Redactor())
        assert isinstance(dispatcher, MpdConnection)
        assert not dispatcher.connected


class TestBootstrap:
    @staticmethod
    def test_reads_settings_from_environment(setenvvar):
        container = bootstrap()
        assert isinstance(container, AppContainer)
        assert isinstance(container.dispatcher, MpdConnection)
        assert container.dispatcher.settings == MpdSettings(
            host="music.local", port=6601, password="secret"
        )
        assert container.dispatcher.address == "***@music.local:6601"

    @staticmethod
    def test_strict_mode_reaches_the_connection(setenvvar):
        container = bootstrap(redactor_mode=RedactorMode.STRICT)
        assert container.redactor.mode is RedactorMode.STRICT
        assert container.dispatcher.address == "***@***:6601"

    @staticmethod
    def test_explicit_settings_win(setenvvar):
        container = bootstrap(settings=MpdSettings(host="other", port=7000))
        assert container.dispatcher.settings.host == "other"

    @staticmethod
    def test_injected_dispatcher_is_used(memory_dispatcher):
        container = bootstrap(dispatcher=memory_dispatcher)
        assert container.dispatcher is memory_dispatcher
        assert isinstance(container.stickers, StickerAdapter)
        assert container.stickers.dispatcher is memory_dispatcher

    @staticmethod
    def test_end_to_end_over_socket(mpd_settings, memory_dispatcher):
        container = bootstrap(settings=mpd_settings)
        with container.dispatcher:
            container.stickers.set("song", "Artist/Live/01 Encore.mp3", "seen", "1")
        assert memory_dispatcher.snapshot("song", "Artist/Live/01 Encore.mp3") == {
            "seen": "1"
        }
