"""The ``mpd-stickers`` command line interface."""
