"""Common CLI utilities for import scripts."""

from __future__ import annotations

import argparse
from typing import Any


def create_base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file (default: config/import_config.yaml).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Parse tables on this many threads (overrides the config file).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser


def add_report_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip structure validation (tables are still parsed).",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Write <feed>_validation.json and <feed>_matrix.csv into this directory.",
    )
    parser.add_argument(
        "--files",
        nargs="+",
        default=None,
        help="Only parse these tables (e.g. stops routes shapes).",
    )


class ImportStats:
    """Simple container for collecting statistics across feed imports."""

    def __init__(self) -> None:
        self.stats: dict[str, Any] = {}
        self.imported: list[str] = []
        self.failed: list[str] = []

    def update(self, label: str, feed_stats: dict[str, Any]) -> None:
        self.stats[label] = feed_stats
        self.imported.append(label)

    def add_failure(self, label: str) -> None:
        self.failed.append(label)

    def get_summary(self) -> dict[str, Any]:
        return {
            "imported": self.imported,
            "failed": self.failed,
            "feed_count": len(self.imported),
            "failure_count": len(self.failed),
            "feeds": self.stats,
        }
