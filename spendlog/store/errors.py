"""Errors raised by the record store.

Storage errors propagate to the caller: the document on disk is left intact
and nothing can be recovered locally.
"""


class StorageError(Exception):
    """Base class for record store failures."""


class StorageLimitExceeded(StorageError):
    """The document is larger than the maximum allowed file size."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            f"Data file too large ({size / 1024 / 1024:.2f}MB). Maximum is {limit / 1024 / 1024:.0f}MB."
        )


class StorageIOError(StorageError):
    """A filesystem operation on the document failed."""
