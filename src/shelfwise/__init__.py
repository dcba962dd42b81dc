"""shelfwise — addressing and ordering engine for a personal item organizer."""

__version__ = "0.1.0"
