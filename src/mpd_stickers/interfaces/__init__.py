"""Interfaces (application boundary) for MPD-STICKERS.

Defines framework-free application contracts: ABCs, small type aliases and the
error taxonomy shared by adapters and the composition root (e.g., the command
dispatcher port, redactors). Business rules stay out of this package.

Dependency rule: this package is independent; do not import from any
`mpd_stickers.*` modules. It may be imported by `mpd_stickers.adapters` and
`mpd_stickers.bootstrap`.
"""
