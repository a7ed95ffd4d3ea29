"""contactsync: incremental contact-list loading with mutation-driven refresh."""

__version__ = "0.1.0"
