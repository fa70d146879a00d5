"""Bootstrap (composition root) for MPD-STICKERS.

Assembles the application at runtime: wires a concrete command dispatcher
(the MPD socket connection by default) to the sticker adapter, reads
configuration, and exposes the result to entrypoints as an `AppContainer`.

Import rules:
- Entry points import *this* package (not adapters/interfaces/domain).
- This package may import: `mpd_stickers.adapters`, `mpd_stickers.interfaces`,
  `mpd_stickers.domain`, and `mpd_stickers.config`.
- Inner layers must not import `mpd_stickers.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import AppContainer, bootstrap, build_dispatcher

__all__ = ["AppContainer", "bootstrap", "build_dispatcher"]
