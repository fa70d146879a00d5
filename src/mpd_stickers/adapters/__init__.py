"""Adapters (infrastructure) for MPD-STICKERS.

Provide concrete implementations of the interface ports (the MPD socket
dispatcher, an in-memory dispatcher, redactors) plus the sticker adapter that
normalizes dispatcher replies.

Dependency rule: may import `mpd_stickers.domain` and
`mpd_stickers.interfaces`; the domain must not import this package.
"""
