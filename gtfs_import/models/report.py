"""Validation report models."""

from __future__ import annotations

from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

FileCategory = Literal["required", "optional"]

MATRIX_COLUMNS: tuple[str, ...] = (
    "file",
    "field",
    "field_required",
    "file_category",
    "file_present",
    "field_present",
)


class ValidationRow(BaseModel):
    """One (file, field) cell of the validation matrix."""

    model_config = ConfigDict(frozen=True)

    file: str
    field: str
    field_required: bool
    file_category: FileCategory
    file_present: bool
    field_present: bool


class ValidationReport(BaseModel):
    """Structure of a feed measured against the GTFS file specifications."""

    model_config = ConfigDict(frozen=True)

    spec_version: str
    all_required_files_present: bool
    all_required_fields_present_in_required_files: bool
    all_required_fields_present_in_optional_files: bool
    validation_matrix: tuple[ValidationRow, ...] = Field(default_factory=tuple)
    problem_required_files: tuple[ValidationRow, ...] = Field(default_factory=tuple)
    problem_optional_files: tuple[ValidationRow, ...] = Field(default_factory=tuple)
    extra_files: tuple[str, ...] = Field(default_factory=tuple)
    # present columns a declared file does not declare, per file
    extra_fields: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return (
            self.all_required_files_present
            and self.all_required_fields_present_in_required_files
            and self.all_required_fields_present_in_optional_files
        )

    def missing_files(self) -> tuple[str, ...]:
        """Required files absent from the feed, in registry order."""
        seen: dict[str, None] = {}
        for row in self.problem_required_files:
            if not row.file_present:
                seen.setdefault(row.file, None)
        return tuple(seen)

    def matrix_frame(self) -> pd.DataFrame:
        return _rows_frame(self.validation_matrix)

    def problems_frame(self) -> pd.DataFrame:
        return _rows_frame(self.problem_required_files + self.problem_optional_files)


def _rows_frame(rows: tuple[ValidationRow, ...]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump() for r in rows], columns=list(MATRIX_COLUMNS))
