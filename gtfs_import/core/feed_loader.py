"""Import pipeline: archive -> parsed tables -> `Feed` (-> validation report).

One call imports one feed, all-or-nothing: the `Feed` is assembled only after
every table has been parsed, so a fatal error never leaves a partial feed
behind. `read_feeds` isolates failures per source for batch imports.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import PurePosixPath

from gtfs_import.core.config import ImportSettings
from gtfs_import.core.errors import FeedImportError, TableUnreadable
from gtfs_import.io import ArchiveSource, describe_source, parse_table, read_archive
from gtfs_import.models.feed import Feed, attach_report
from gtfs_import.models.registry import SchemaRegistry, default_registry
from gtfs_import.models.report import ValidationReport
from gtfs_import.models.table import RawTable
from gtfs_import.models.validate import validate_feed

LOGGER = logging.getLogger(__name__)


def _wanted(entries: Mapping[str, io.BytesIO], files: Iterable[str] | None, extension: str) -> list[str]:
    if files is None:
        return list(entries)
    wanted = {f if f.endswith(extension) else f + extension for f in files}
    missing = sorted(wanted - set(entries))
    if missing:
        LOGGER.info("Requested files not in archive: %s", missing)
    return [name for name in entries if name in wanted]


def _parse_one(name: str, stream: io.BytesIO, settings: ImportSettings) -> RawTable:
    return parse_table(
        stream,
        PurePosixPath(name).stem,
        delimiter=settings.delimiter,
        encoding=settings.encoding,
    )


def _parse_all(
    entries: Mapping[str, io.BytesIO], names: list[str], settings: ImportSettings
) -> dict[str, RawTable | TableUnreadable]:
    """Parse each entry; unreadable tables come back as their exception, keyed by file name."""
    results: dict[str, RawTable | TableUnreadable] = {}
    if settings.max_workers > 1 and len(names) > 1:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
            futures = {name: pool.submit(_parse_one, name, entries[name], settings) for name in names}
            for name in names:
                try:
                    results[name] = futures[name].result()
                except TableUnreadable as exc:
                    results[name] = exc
    else:
        for name in names:
            try:
                results[name] = _parse_one(name, entries[name], settings)
            except TableUnreadable as exc:
                results[name] = exc
    return results


def read_feed(
    source: ArchiveSource,
    *,
    files: Iterable[str] | None = None,
    validate: bool = True,
    registry: SchemaRegistry | None = None,
    settings: ImportSettings | None = None,
) -> Feed:
    """Import one GTFS archive into a `Feed`.

    `files` restricts parsing to the named tables ("stops" or "stops.txt").
    With `validate=True` the structure report is attached to the returned feed.

    Raises:
        ArchiveUnreadable, ArchiveEmpty: the archive itself is unusable.
        TableUnreadable: a required table (or, with `skip_unreadable_optional`
            off, any table) has no readable header.
    """
    settings = settings or ImportSettings()
    registry = registry or default_registry()
    label = describe_source(source)

    entries = read_archive(source, extension=settings.table_extension)
    names = _wanted(entries, files, settings.table_extension)
    results = _parse_all(entries, names, settings)

    tables: dict[str, RawTable] = {}
    skipped: list[str] = []
    for name in names:
        result = results[name]
        if isinstance(result, RawTable):
            tables[result.name] = result
            continue
        if registry.is_required_file(name) or not settings.skip_unreadable_optional:
            raise result
        LOGGER.warning("%s: %s treated as absent: %s", label, name, result.reason)
        skipped.append(name)

    feed = Feed(
        tables=tables,
        source=label,
        skipped_files=tuple(skipped),
        extension=settings.table_extension,
    )
    LOGGER.info(
        "%s: imported %d tables (%d rows, %d parse problems)",
        label,
        len(tables),
        sum(len(t) for t in tables.values()),
        sum(len(t.problems) for t in tables.values()),
    )

    if validate:
        feed = attach_report(feed, validate_feed(feed, registry))
    return feed


def validate_source(
    source: ArchiveSource,
    *,
    registry: SchemaRegistry | None = None,
    settings: ImportSettings | None = None,
) -> ValidationReport:
    """Import `source` and return only its validation report."""
    feed = read_feed(source, validate=False, registry=registry, settings=settings)
    return validate_feed(feed, registry)


def read_feeds(
    sources: Mapping[str, ArchiveSource] | Iterable[ArchiveSource],
    **kwargs,
) -> dict[str, Feed | None]:
    """Import several feeds; a failed feed maps to `None` and does not stop the rest.

    `sources` is either `{label: source}` or an iterable of sources labelled by
    `describe_source`. Keyword arguments go to `read_feed`.
    """
    if isinstance(sources, Mapping):
        labelled = list(sources.items())
    else:
        labelled = [(describe_source(s), s) for s in sources]

    out: dict[str, Feed | None] = {}
    for label, source in labelled:
        if label in out:
            raise ValueError(f"duplicate feed label: {label!r}")
        try:
            out[label] = read_feed(source, **kwargs)
        except FeedImportError as e:
            LOGGER.warning("Failed to import %s: %s", label, e)
            out[label] = None
    LOGGER.info(
        "Imported %d of %d feeds", sum(f is not None for f in out.values()), len(out)
    )
    return out
