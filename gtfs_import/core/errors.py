"""Fatal import errors.

Row-level malformation and validation findings are data, not exceptions; only
conditions that make a whole table or archive unusable are raised.
"""

from __future__ import annotations


class FeedImportError(Exception):
    """Base class for errors that abort the import of one feed."""


class ArchiveUnreadable(FeedImportError):
    """The source could not be opened, is not an archive, or an entry is corrupt."""


class ArchiveEmpty(FeedImportError):
    """The archive holds no entries with the table extension."""


class TableUnreadable(FeedImportError):
    """A table's header line could not be read."""

    def __init__(self, table: str, reason: str) -> None:
        super().__init__(f"{table}: {reason}")
        self.table = table
        self.reason = reason
