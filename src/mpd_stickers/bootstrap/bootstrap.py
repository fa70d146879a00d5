"""Bootstrap the sticker adapter with its command dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

from mpd_stickers import config
from mpd_stickers.adapters.mpd import MpdConnection
from mpd_stickers.adapters.redactor import Redactor
from mpd_stickers.adapters.stickers import StickerAdapter
from mpd_stickers.interfaces.dispatcher import CommandDispatcher
from mpd_stickers.interfaces.redactor import RedactorMode


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    dispatcher: CommandDispatcher
    stickers: StickerAdapter
    redactor: Redactor


def build_dispatcher(settings: config.MpdSettings, redactor: Redactor) -> MpdConnection:
    """Build an (unopened) MPD connection for the given settings."""
    return MpdConnection(settings, redactor=redactor)


def bootstrap(
    settings: config.MpdSettings | None = None,
    dispatcher: CommandDispatcher | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
) -> AppContainer:
    """Wire the sticker adapter to a dispatcher.

    Args:
        settings: Connection settings; read from the environment when omitted.
            Ignored when ``dispatcher`` is given.
        dispatcher: An existing dispatcher to use instead of an MPD connection.
        redactor_mode: How aggressively secrets are hidden in logs and messages.

    Returns:
        AppContainer: The wired application. The dispatcher is not opened;
        use it as a context manager.
    """
    redactor = Redactor(redactor_mode)
    if dispatcher is None:
        dispatcher = build_dispatcher(settings or config.get_mpd_settings(), redactor)
    return AppContainer(
        dispatcher=dispatcher,
        stickers=StickerAdapter(dispatcher),
        redactor=redactor,
    )
