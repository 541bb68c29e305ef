"""msgpick: browse a message collection, flag what to keep, export it.

Core pieces live in flat modules (store, cursor, selection, commands, export);
the terminal front-end lives in `msgpick.tui`.
"""

__version__ = "0.3.0"
