"""MPD-STICKERS

A small client layer for the Music Player Daemon's sticker database.
It turns the protocol's heterogeneous replies into plain mappings so
application code can read and annotate songs and directories without
caring about wire details.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
