"""revfix: verify and apply AI code review fixes."""

__version__ = "0.1.0"
