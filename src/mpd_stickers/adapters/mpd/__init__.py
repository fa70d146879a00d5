"""MPD protocol adapters: the wire codec and the socket dispatcher."""

from .connection import MpdConnection

__all__ = ["MpdConnection"]
