"""Project configuration (paths, feed format constants, import settings)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

# Feed format (GTFS Schedule)
TABLE_EXTENSION: str = ".txt"
DELIMITER: str = ","
# utf-8-sig strips the byte-order mark many agencies still emit.
ENCODING: str = "utf-8-sig"

LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def project_root() -> Path:
    """Return repository root assuming this file lives in `<root>/gtfs_import/core/config.py`."""
    return Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Paths:
    root: Path
    config: Path


def get_paths(root: Path | None = None) -> Paths:
    r = project_root() if root is None else Path(root).resolve()
    return Paths(
        root=r,
        config=r / "config",
    )


@dataclass(frozen=True)
class ImportSettings:
    """Knobs for one feed import. Defaults follow the GTFS reference."""

    delimiter: str = DELIMITER
    encoding: str = ENCODING
    table_extension: str = TABLE_EXTENSION
    # 1 parses tables sequentially; >1 uses a thread pool per feed.
    max_workers: int = 1
    # Unreadable optional/unknown files are recorded as absent instead of aborting.
    skip_unreadable_optional: bool = True

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if not self.table_extension.startswith("."):
            raise ValueError(f"table_extension must start with '.', got {self.table_extension!r}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


def load_settings(path: Path | None = None, **overrides: Any) -> ImportSettings:
    """Load `ImportSettings` from the `import:` block of a YAML file.

    Missing file (or `path=None`) means defaults. Keyword overrides win over the file.
    """
    values: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        doc = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        values.update(doc.get("import") or {})
    values.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ImportSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"unknown import settings: {unknown}")
    return replace(ImportSettings(), **values)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
