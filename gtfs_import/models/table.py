"""Parsed table types: `RawTable` and the `ParseProblem`s recorded while building it."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

import pandas as pd

from gtfs_import.models.schemas import FileSpec
from gtfs_import.models.validate import coerce_dtypes


@dataclass(frozen=True)
class ParseProblem:
    """A row whose value count disagrees with the header.

    `row` is 1-based and excludes the header. `col` is the 1-based position of the
    first missing (short row) or unexpected (long row) value.
    """

    row: int
    col: int
    expected: int
    actual: int
    raw: str

    def to_dict(self) -> dict[str, object]:
        return {
            "row": self.row,
            "col": self.col,
            "expected": self.expected,
            "actual": self.actual,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class RawTable:
    """One GTFS table as raw strings, in file order, with its parse problems."""

    name: str
    columns: tuple[str, ...]
    rows: tuple[Mapping[str, str], ...] = field(default_factory=tuple)
    problems: tuple[ParseProblem, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Mapping[str, str]]:
        return iter(self.rows)

    def problems_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [p.to_dict() for p in self.problems],
            columns=["row", "col", "expected", "actual", "raw"],
        )

    def to_frame(self, spec: FileSpec | None = None) -> pd.DataFrame:
        """Typed pandas view. Empty strings become NA; `spec` dtypes are applied when given."""
        df = pd.DataFrame([dict(r) for r in self.rows], columns=list(self.columns), dtype="string")
        df = df.replace("", pd.NA)
        if spec is None:
            return df
        return coerce_dtypes(df, spec)
