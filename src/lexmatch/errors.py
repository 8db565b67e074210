from __future__ import annotations


class ConfigurationError(ValueError):
    """Conflicting or incomplete options; raised before any scanning starts."""


class ResourceError(OSError):
    """A lexicon or document source is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
