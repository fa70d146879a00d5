"""Entrypoints (inbound adapters) for MPD-STICKERS.

Expose the application to the outside world: currently the ``mpd-stickers``
command line. Parse and validate inputs, obtain a wired sticker adapter from
`mpd_stickers.bootstrap`, and present results.

Dependency rule: may import `mpd_stickers.bootstrap`; avoid importing
`mpd_stickers.adapters` directly.
"""
