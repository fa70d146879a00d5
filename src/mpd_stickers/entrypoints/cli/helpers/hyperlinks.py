"""OSC-8 hyperlink utilities for the MPD-STICKERS CLI.

Detects whether the active text stream is likely to render OSC-8 terminal
hyperlinks and renders a URL as a clickable link, falling back to plain text.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINAL_PROGRAMS = frozenset(
    {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}
)


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: Text stream to check; defaults to ``sys.stdout``.

    Returns:
        bool: ``False`` for non-TTY streams; otherwise whether the terminal is
        on a small allowlist (``TERM_PROGRAM``, Windows Terminal, VTE-based
        terminals, Alacritty, Konsole).
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINAL_PROGRAMS
        or os.getenv("WT_SESSION")
        or os.getenv("VTE_VERSION")
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, text: str | None = None) -> str:
    """Return ``text`` linked to ``url`` when supported, else the plain URL."""
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{text or url}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
