"""
Exception hierarchy for mediasort.
"""

from pathlib import Path


class MediaSortError(Exception):
    """Base error for the project."""


class ConfigurationError(MediaSortError):
    """Invalid run configuration, detected before any file is touched."""


class RejectedEntryError(MediaSortError):
    """A discovered file is not eligible for sorting."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"\"{path}\" {reason}")
        self.path = path
        self.reason = reason


class DirectoryCreationError(MediaSortError):
    def __init__(self, directory: Path, cause: Exception):
        super().__init__(f"Unable to create directory \"{directory}\": {cause}")
        self.directory = directory


class CollisionError(MediaSortError):
    pass
