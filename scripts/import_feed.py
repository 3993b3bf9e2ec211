"""Import one or more GTFS archives and report their structure.

Run:
  python scripts/import_feed.py data/raw/gtfs.zip [more.zip ...] --report-dir data/reports

Outputs (with --report-dir):
- <feed>_validation.json (full validation report)
- <feed>_matrix.csv (file/field validation matrix)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

# Ensure repo root is on sys.path so `import gtfs_import` works when executing this file directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gtfs_import.core.cli_utils import ImportStats, add_report_flags, create_base_parser
from gtfs_import.core.config import configure_logging, get_paths, load_settings
from gtfs_import.core.feed_loader import read_feeds
from gtfs_import.io import sha256_file, write_report

LOGGER = logging.getLogger("import_feed")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the feed import script."""
    parser = create_base_parser("Import GTFS archives and validate their structure.")
    add_report_flags(parser)
    parser.add_argument("sources", nargs="+", help="GTFS zip files or directories of .txt files.")
    return parser.parse_args(argv)


def run(
    sources: list[str],
    *,
    config: str | None = None,
    workers: int | None = None,
    validate: bool = True,
    report_dir: str | None = None,
    files: list[str] | None = None,
) -> dict[str, Any]:
    """Import each source and return a summary dict (per-feed stats plus failures)."""
    config_path = Path(config) if config else get_paths().config / "import_config.yaml"
    settings = load_settings(config_path, max_workers=workers)

    labelled = {Path(s).stem or s: Path(s) for s in sources}
    feeds = read_feeds(labelled, files=files, validate=validate, settings=settings)

    stats = ImportStats()
    for label, feed in feeds.items():
        if feed is None:
            stats.add_failure(label)
            continue
        feed_stats = feed.summary()
        path = labelled[label]
        if path.is_file():
            feed_stats["sha256"] = sha256_file(path)
        stats.update(label, feed_stats)

        for table, problems in feed.problems.items():
            LOGGER.info("%s/%s: %d parse problems", label, table, len(problems))

        if report_dir is not None and feed.report is not None:
            json_path, csv_path = write_report(feed.report, Path(report_dir), label)
            LOGGER.info("Wrote %s and %s", json_path, csv_path)

    return stats.get_summary()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    summary = run(
        args.sources,
        config=args.config,
        workers=args.workers,
        validate=not args.no_validate,
        report_dir=args.report_dir,
        files=args.files,
    )
    LOGGER.info(
        "Import complete. Feeds: %d, failed: %d", summary["feed_count"], summary["failure_count"]
    )
    return 1 if summary["failure_count"] else 0


if __name__ == "__main__":
    sys.exit(main())
