"""Open a GTFS archive and hand back one byte stream per table file."""

from __future__ import annotations

import io
import logging
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Union
from zipfile import BadZipFile, LargeZipFile, ZipFile

from gtfs_import.core.config import TABLE_EXTENSION
from gtfs_import.core.errors import ArchiveEmpty, ArchiveUnreadable

LOGGER = logging.getLogger(__name__)

ArchiveSource = Union[str, Path, bytes, bytearray, BinaryIO]

_IGNORED_PREFIXES = ("__MACOSX/",)


def describe_source(source: ArchiveSource) -> str:
    """Short human label for logs and batch results."""
    if isinstance(source, (str, Path)):
        return Path(source).name or str(source)
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return getattr(source, "name", None) or "<stream>"


def _qualifies(member: str, extension: str) -> bool:
    if not member or member.endswith("/"):
        return False
    if member.startswith(_IGNORED_PREFIXES):
        return False
    return member.endswith(extension)


def _read_zip(zf: ZipFile, label: str, extension: str) -> dict[str, io.BytesIO]:
    out: dict[str, io.BytesIO] = {}
    for member in zf.namelist():
        if not _qualifies(member, extension):
            continue
        name = PurePosixPath(member).name
        if name in out:
            LOGGER.warning("%s: duplicate entry %s ignored (keeping the first %s)", label, member, name)
            continue
        try:
            data = zf.read(member)
        except (BadZipFile, zlib.error, EOFError, OSError, RuntimeError, NotImplementedError) as exc:
            raise ArchiveUnreadable(f"{label}: corrupt entry {member!r}: {exc}") from exc
        out[name] = io.BytesIO(data)
    return out


def _read_directory(path: Path, extension: str) -> dict[str, io.BytesIO]:
    out: dict[str, io.BytesIO] = {}
    for p in sorted(path.iterdir()):
        if p.is_file() and p.name.endswith(extension):
            try:
                out[p.name] = io.BytesIO(p.read_bytes())
            except OSError as exc:
                raise ArchiveUnreadable(f"{path}: cannot read {p.name}: {exc}") from exc
    return out


def read_archive(
    source: ArchiveSource, *, extension: str = TABLE_EXTENSION
) -> dict[str, io.BytesIO]:
    """Return `{file name: stream}` for every `extension` entry, in archive order.

    `source` is a zip path, the zip's bytes, a binary file object, or a directory
    holding the `.txt` files. Entries in sub-folders are keyed by base name. The
    extension match is case-sensitive: `calendar.TXT` is not a table file.

    Raises:
        ArchiveUnreadable: source missing, not a zip, or an entry is corrupt.
        ArchiveEmpty: no entry ends in `extension`.
    """
    label = describe_source(source)

    if isinstance(source, (str, Path)) and Path(source).is_dir():
        tables = _read_directory(Path(source), extension)
    else:
        handle = io.BytesIO(bytes(source)) if isinstance(source, (bytes, bytearray)) else source
        try:
            with ZipFile(handle) as zf:
                tables = _read_zip(zf, label, extension)
        except ArchiveUnreadable:
            raise
        except (BadZipFile, LargeZipFile, OSError, EOFError, ValueError) as exc:
            raise ArchiveUnreadable(f"{label}: not a readable zip archive: {exc}") from exc

    if not tables:
        raise ArchiveEmpty(f"{label}: archive contains no {extension} files")

    LOGGER.info("%s: %d table files found", label, len(tables))
    LOGGER.debug("%s: entries %s", label, list(tables))
    return tables
