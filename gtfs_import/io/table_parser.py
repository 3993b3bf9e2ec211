"""Parse one GTFS table stream into a `RawTable`.

Rows never fail the parse. A record whose value count differs from the header's
is kept (short rows padded with "", long rows truncated to the header width)
and recorded as a `ParseProblem`. A blank line is a record with one empty value,
so blank trailing lines are reported rather than dropped.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import BinaryIO

from gtfs_import.core.config import DELIMITER, ENCODING
from gtfs_import.core.errors import TableUnreadable
from gtfs_import.models.table import ParseProblem, RawTable

LOGGER = logging.getLogger(__name__)


def _decode(stream: BinaryIO, name: str, encoding: str) -> str:
    try:
        return stream.read().decode(encoding)
    except UnicodeDecodeError as exc:
        raise TableUnreadable(name, f"cannot decode as {encoding}: {exc}") from exc


def _records(lines: list[str], delimiter: str, name: str) -> Iterator[tuple[list[str], str]]:
    """Yield `(values, raw)` per record; a quoted field may span physical lines.

    On a csv error the first physical line of the broken record is split plainly
    and reading resumes on the next line, so no line is lost.
    """
    start = 0
    while start < len(lines):
        # strict: an unterminated quote raises instead of swallowing the rest of the file
        reader = csv.reader(lines[start:], delimiter=delimiter, strict=True)
        consumed = 0
        try:
            for values in reader:
                end = reader.line_num
                raw = "".join(lines[start + consumed : start + end]).rstrip("\r\n")
                consumed = end
                # csv yields [] for a blank line; that is still one (empty) value
                yield (values or [""]), raw
            return
        except csv.Error as exc:
            raw = lines[start + consumed].rstrip("\r\n")
            LOGGER.warning(
                "%s: malformed quoting at physical line %d (%s); line split without quoting",
                name,
                start + consumed + 1,
                exc,
            )
            yield raw.split(delimiter), raw
            start += consumed + 1


def _reconcile(values: list[str], width: int) -> list[str]:
    if len(values) < width:
        return values + [""] * (width - len(values))
    return values[:width]


def parse_table(
    stream: BinaryIO,
    name: str,
    *,
    delimiter: str = DELIMITER,
    encoding: str = ENCODING,
) -> RawTable:
    """Parse `stream` (header line first) into a `RawTable` named `name`.

    Raises:
        TableUnreadable: the stream is empty, the header line is blank, or the
            bytes cannot be decoded.
    """
    text = _decode(stream, name, encoding)
    # newline="" keeps "\r\n" together and line endings untranslated
    lines = list(io.StringIO(text, newline=""))
    records = _records(lines, delimiter, name)

    header = next(records, None)
    if header is None:
        raise TableUnreadable(name, "empty file, no header line")
    columns = tuple(c.strip() for c in header[0])
    if not any(columns):
        raise TableUnreadable(name, "blank header line")
    width = len(columns)
    duplicates = sorted({c for c in columns if columns.count(c) > 1})
    if duplicates:
        # rows keep the value of the last column with a repeated name
        LOGGER.warning("%s: duplicate header columns %s", name, duplicates)

    rows: list[Mapping[str, str]] = []
    problems: list[ParseProblem] = []
    for values, raw in records:
        if len(values) != width:
            problems.append(
                ParseProblem(
                    row=len(rows) + 1,
                    col=min(width, len(values)) + 1,
                    expected=width,
                    actual=len(values),
                    raw=raw,
                )
            )
            values = _reconcile(values, width)
        rows.append(MappingProxyType(dict(zip(columns, values))))

    if problems:
        LOGGER.warning(
            "%s: %d of %d rows do not match the %d-column header (first at row %d)",
            name,
            len(problems),
            len(rows),
            width,
            problems[0].row,
        )
    LOGGER.debug("%s: parsed %d rows, %d columns", name, len(rows), width)
    return RawTable(name=name, columns=columns, rows=tuple(rows), problems=tuple(problems))
