"""Lightweight I/O helpers.

This module centralises:
- archive and table reading (`read_archive`, `parse_table`)
- simple JSON/text helpers used by scripts
- validation report export (`write_report`)
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from gtfs_import.io.archive import ArchiveSource, describe_source, read_archive
from gtfs_import.io.table_parser import parse_table
from gtfs_import.models.report import ValidationReport

__all__ = [
    "ArchiveSource",
    "describe_source",
    "ensure_parent_dir",
    "parse_table",
    "read_archive",
    "read_json",
    "sha256_file",
    "write_json",
    "write_report",
]


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(obj: Any, path: Path) -> None:
    ensure_parent_dir(path)
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")


def sha256_file(path: Path) -> str:
    """Return SHA256 hex digest for a file."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def write_report(report: ValidationReport, out_dir: Path, label: str) -> tuple[Path, Path]:
    """Write `<label>_validation.json` (full report) and `<label>_matrix.csv`."""
    json_path = Path(out_dir) / f"{label}_validation.json"
    csv_path = Path(out_dir) / f"{label}_matrix.csv"
    write_json(report.model_dump(mode="json"), json_path)
    ensure_parent_dir(csv_path)
    report.matrix_frame().to_csv(csv_path, index=False)
    return json_path, csv_path
