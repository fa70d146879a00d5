"""Domain layer for MPD-STICKERS.

Contains the rules for what a well-formed sticker reply looks like and the
errors raised when a reply breaks them. This package is deliberately
technology-agnostic.

Dependency rule: do not import from `mpd_stickers.adapters` or
`mpd_stickers.entrypoints`.
"""
