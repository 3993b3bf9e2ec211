"""The `Feed` aggregate and the pure operations that attach/detach its report."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from gtfs_import.core.config import TABLE_EXTENSION
from gtfs_import.models.report import ValidationReport
from gtfs_import.models.table import ParseProblem, RawTable


@dataclass(frozen=True)
class Feed:
    """Parsed GTFS tables from one archive, plus an optional validation report.

    Tables are fixed at construction; a new report means a new `Feed` sharing the
    same `RawTable` objects (see `attach_report`).
    """

    tables: Mapping[str, RawTable]
    source: str = ""
    skipped_files: tuple[str, ...] = ()
    report: ValidationReport | None = None
    extension: str = TABLE_EXTENSION

    def __post_init__(self) -> None:
        if not isinstance(self.tables, MappingProxyType):
            object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    def __getitem__(self, name: str) -> RawTable:
        return self.tables[name]

    def __contains__(self, name: object) -> bool:
        return name in self.tables

    def __iter__(self) -> Iterator[str]:
        return iter(self.tables)

    def get(self, name: str) -> RawTable | None:
        return self.tables.get(name)

    @property
    def table_names(self) -> tuple[str, ...]:
        return tuple(self.tables)

    @property
    def file_names(self) -> tuple[str, ...]:
        return tuple(name + self.extension for name in self.tables)

    @property
    def problems(self) -> dict[str, tuple[ParseProblem, ...]]:
        """Parse problems per table, only for tables that have any."""
        return {name: t.problems for name, t in self.tables.items() if t.problems}

    def columns_by_file(self) -> dict[str, tuple[str, ...]]:
        """Presence snapshot used by validation: file name -> header columns."""
        return {name + self.extension: t.columns for name, t in self.tables.items()}

    def summary(self) -> dict[str, object]:
        out: dict[str, object] = {
            "source": self.source,
            "n_tables": len(self.tables),
            "rows": {name: len(t) for name, t in self.tables.items()},
            "n_parse_problems": sum(len(t.problems) for t in self.tables.values()),
            "tables_with_problems": sorted(self.problems),
            "skipped_files": list(self.skipped_files),
            "validated": self.report is not None,
        }
        if self.report is not None:
            out.update(
                {
                    "all_required_files_present": self.report.all_required_files_present,
                    "all_required_fields_present_in_required_files": (
                        self.report.all_required_fields_present_in_required_files
                    ),
                    "all_required_fields_present_in_optional_files": (
                        self.report.all_required_fields_present_in_optional_files
                    ),
                    "extra_files": list(self.report.extra_files),
                }
            )
        return out


def attach_report(feed: Feed, report: ValidationReport) -> Feed:
    """Return a copy of `feed` carrying `report`; tables are shared, not re-parsed."""
    return replace(feed, report=report)


def detach_report(feed: Feed) -> Feed:
    return replace(feed, report=None)
