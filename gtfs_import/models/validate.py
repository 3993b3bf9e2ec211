"""Structure validation of a feed against the GTFS file specifications.

Validation is a pure function of (file -> header columns, registry): it performs
no I/O and never raises for missing files or fields, those are reported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import pandas as pd

from gtfs_import.models.registry import SchemaRegistry, default_registry
from gtfs_import.models.report import ValidationReport, ValidationRow
from gtfs_import.models.schemas import FileSpec

if TYPE_CHECKING:
    from gtfs_import.models.feed import Feed

LOGGER = logging.getLogger(__name__)

_NUMERIC_DTYPES = {"Float64", "Int64"}


def coerce_dtypes(df: pd.DataFrame, spec: FileSpec) -> pd.DataFrame:
    """Apply `spec` dtypes to the columns of `df` that it declares. Returns a copy."""
    out = df.copy()
    for col in out.columns:
        dtype = spec.dtype_of(col)
        try:
            if dtype in _NUMERIC_DTYPES:
                out[col] = pd.to_numeric(out[col]).astype(dtype)
            else:
                out[col] = out[col].astype(dtype)
        except (TypeError, ValueError) as exc:
            raise TypeError(
                f"{spec.name}: failed to coerce column '{col}' to dtype '{dtype}': {exc}"
            ) from exc
    return out


def _file_rows(
    spec: FileSpec, columns: Sequence[str] | None
) -> list[ValidationRow]:
    present = columns is not None
    header = set(columns or ())
    category = "required" if spec.required else "optional"
    return [
        ValidationRow(
            file=spec.name,
            field=name,
            field_required=name in spec.required_fields,
            file_category=category,
            file_present=present,
            field_present=present and name in header,
        )
        for name in spec.all_fields
    ]


def validate_structure(
    present: Mapping[str, Sequence[str]],
    registry: SchemaRegistry | None = None,
) -> ValidationReport:
    """Build a `ValidationReport` from a presence snapshot.

    `present` maps each file name found in the feed (e.g. "stops.txt") to the
    columns of its header. Matrix order is registry file order, then declared
    field order; archive order never matters.
    """
    registry = registry or default_registry()

    matrix: list[ValidationRow] = []
    problem_required: list[ValidationRow] = []
    problem_optional: list[ValidationRow] = []
    extra_fields: dict[str, tuple[str, ...]] = {}

    for spec in registry:
        columns = present.get(spec.name)
        rows = _file_rows(spec, columns)
        matrix.extend(rows)

        missing = [r for r in rows if r.field_required and not r.field_present]
        if spec.required:
            problem_required.extend(missing)
        elif columns is not None:
            problem_optional.extend(missing)

        if columns is not None:
            declared = set(spec.all_fields)
            extra = tuple(c for c in columns if c not in declared)
            if extra:
                extra_fields[spec.name] = extra

    all_files = all(name in present for name in registry.required_files())
    fields_in_required = not any(r.file_present for r in problem_required)
    fields_in_optional = not problem_optional
    extra_files = tuple(sorted(name for name in present if name not in registry))

    report = ValidationReport(
        spec_version=registry.version,
        all_required_files_present=all_files,
        all_required_fields_present_in_required_files=fields_in_required,
        all_required_fields_present_in_optional_files=fields_in_optional,
        validation_matrix=tuple(matrix),
        problem_required_files=tuple(problem_required),
        problem_optional_files=tuple(problem_optional),
        extra_files=extra_files,
        extra_fields=extra_fields,
    )
    LOGGER.debug(
        "Validated %d files against %s: %d matrix rows, %d required problems, %d optional problems",
        len(present),
        registry.version,
        len(matrix),
        len(problem_required),
        len(problem_optional),
    )
    return report


def validate_feed(feed: Feed, registry: SchemaRegistry | None = None) -> ValidationReport:
    """Validate a parsed `Feed` (its table names and header columns only).

    Skipped (unreadable) files count as absent when the registry knows them;
    unknown ones are still in the archive and so stay in `extra_files`.
    """
    registry = registry or default_registry()
    present: dict[str, Sequence[str]] = dict(feed.columns_by_file())
    for name in feed.skipped_files:
        if name not in registry:
            present.setdefault(name, ())
    report = validate_structure(present, registry)
    if report.is_valid:
        LOGGER.info("%s: feed structure valid", feed.source or "feed")
    else:
        LOGGER.warning(
            "%s: feed structure invalid (required files: %s, required fields in required files: %s, "
            "required fields in optional files: %s)",
            feed.source or "feed",
            report.all_required_files_present,
            report.all_required_fields_present_in_required_files,
            report.all_required_fields_present_in_optional_files,
        )
    if report.extra_files:
        LOGGER.info(
            "%s: files not in %s: %s",
            feed.source or "feed",
            report.spec_version,
            list(report.extra_files),
        )
    return report
