"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when a character file cannot be written, read or validated."""
