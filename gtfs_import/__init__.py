"""Import GTFS archives into parsed tables and check their structure.

Typical use:

    from gtfs_import import read_feed

    feed = read_feed("gtfs.zip")
    feed["stops"].rows          # raw string rows, file order
    feed["stops"].problems      # rows whose width disagreed with the header
    feed.report.is_valid        # structure against the GTFS file specs
"""

from __future__ import annotations

from gtfs_import.core.config import ImportSettings, load_settings
from gtfs_import.core.errors import ArchiveEmpty, ArchiveUnreadable, FeedImportError, TableUnreadable
from gtfs_import.core.feed_loader import read_feed, read_feeds, validate_source
from gtfs_import.io import parse_table, read_archive
from gtfs_import.models import (
    GTFS_REGISTRY,
    Feed,
    FileSpec,
    ParseProblem,
    RawTable,
    SchemaRegistry,
    ValidationReport,
    ValidationRow,
    attach_report,
    detach_report,
    validate_feed,
    validate_structure,
)

__version__ = "0.1.0"

__all__ = [
    "ArchiveEmpty",
    "ArchiveUnreadable",
    "Feed",
    "FeedImportError",
    "FileSpec",
    "GTFS_REGISTRY",
    "ImportSettings",
    "ParseProblem",
    "RawTable",
    "SchemaRegistry",
    "TableUnreadable",
    "ValidationReport",
    "ValidationRow",
    "attach_report",
    "detach_report",
    "load_settings",
    "parse_table",
    "read_archive",
    "read_feed",
    "read_feeds",
    "validate_feed",
    "validate_source",
    "validate_structure",
]
