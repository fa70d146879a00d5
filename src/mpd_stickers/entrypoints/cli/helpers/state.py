"""Per-invocation CLI state shared between the root group and subcommands."""

from dataclasses import dataclass, field

from mpd_stickers.config import MpdSettings
from mpd_stickers.interfaces.redactor import RedactorMode


@dataclass(frozen=True)
class CliState:
    """Settings resolved by the root ``mpd-stickers`` group."""

    settings: MpdSettings = field(default_factory=MpdSettings)
    redactor_mode: RedactorMode = RedactorMode.LENIENT
