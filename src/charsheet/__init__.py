"""Terminal character sheet editor."""

__version__ = "0.1.0"
