"""Feed data models, GTFS file specifications and structure validation.

These are contracts to keep imports deterministic:
- parsed tables and their parse problems are immutable values;
- validation is a pure function of table/header presence and the registry.
"""

from __future__ import annotations

from gtfs_import.models.feed import Feed, attach_report, detach_report
from gtfs_import.models.registry import GTFS_REGISTRY, SchemaRegistry, default_registry
from gtfs_import.models.report import ValidationReport, ValidationRow
from gtfs_import.models.schemas import GTFS_FILES, GTFS_SPEC_VERSION, FileSpec
from gtfs_import.models.table import ParseProblem, RawTable
from gtfs_import.models.validate import coerce_dtypes, validate_feed, validate_structure

__all__ = [
    "FileSpec",
    "GTFS_FILES",
    "GTFS_SPEC_VERSION",
    "SchemaRegistry",
    "GTFS_REGISTRY",
    "default_registry",
    "ParseProblem",
    "RawTable",
    "ValidationRow",
    "ValidationReport",
    "Feed",
    "attach_report",
    "detach_report",
    "coerce_dtypes",
    "validate_structure",
    "validate_feed",
]
