"""CLI helpers for MPD-STICKERS.

Utilities used by the command-line interface: OSC-8 terminal hyperlinks when
supported, message emitters that write to stderr with emoji→ASCII fallbacks,
and the per-invocation state passed from the root group to subcommands.
"""

from .hyperlinks import hyperlink
from .messages import error, success, warn
from .state import CliState

__all__ = ["CliState", "error", "hyperlink", "success", "warn"]
