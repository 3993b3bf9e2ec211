from pathlib import Path

import pytest

from gtfs_import.core.errors import ArchiveEmpty, ArchiveUnreadable
from gtfs_import.io import read_archive


def test_one_entry_per_table_file(make_archive, gtfs_files) -> None:
    files = {**gtfs_files, "README.md": "not a table", "logo.png": b"\x89PNG"}
    path = make_archive(files)

    entries = read_archive(path)

    assert list(entries) == list(gtfs_files)
    assert entries["stops.txt"].read().startswith(b"stop_id,")


def test_accepts_bytes_and_file_objects(make_archive, zip_bytes, gtfs_files) -> None:
    data = zip_bytes(gtfs_files)
    path = make_archive(gtfs_files)

    from_bytes = read_archive(data)
    with path.open("rb") as fh:
        from_file = read_archive(fh)

    assert list(from_bytes) == list(from_file) == list(gtfs_files)


def test_nested_entries_keyed_by_base_name(make_archive) -> None:
    path = make_archive(
        {
            "feed/": "",
            "feed/stops.txt": "stop_id\nS1\n",
            "__MACOSX/feed/._stops.txt": "junk",
            "other/stops.txt": "stop_id\nS2\n",
        }
    )

    entries = read_archive(path)

    assert list(entries) == ["stops.txt"]
    assert entries["stops.txt"].read() == b"stop_id\nS1\n"


def test_directory_source(tmp_path: Path, gtfs_files) -> None:
    for name, content in gtfs_files.items():
        (tmp_path / name).write_text(content, encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")

    entries = read_archive(tmp_path)

    assert sorted(entries) == sorted(gtfs_files)


def test_missing_path_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(ArchiveUnreadable):
        read_archive(tmp_path / "nope.zip")


def test_non_zip_is_unreadable(tmp_path: Path) -> None:
    path = tmp_path / "feed.zip"
    path.write_bytes(b"stop_id,stop_name\nS1,First\n")

    with pytest.raises(ArchiveUnreadable):
        read_archive(path)
    with pytest.raises(ArchiveUnreadable):
        read_archive(b"")


def test_no_table_files_is_empty(make_archive) -> None:
    path = make_archive({"README.md": "hello"})

    with pytest.raises(ArchiveEmpty):
        read_archive(path)


def test_corrupt_entry_is_unreadable(make_archive) -> None:
    path = make_archive({"stops.txt": "stop_id,stop_name\n" + "S1,First Street\n" * 50})
    data = bytearray(path.read_bytes())
    # flip a byte inside the stored member data so its CRC no longer matches
    offset = data.index(b"S1,First Street")
    data[offset] ^= 0xFF
    path.write_bytes(bytes(data))

    with pytest.raises(ArchiveUnreadable):
        read_archive(path)


def test_extension_match_is_case_sensitive(make_archive, gtfs_files) -> None:
    files = {**gtfs_files, "Notes.TXT": "note\nhello\n", "stops.TXT": "x\n1\n"}
    path = make_archive(files)

    entries = read_archive(path)

    assert "Notes.TXT" not in entries
    assert "stops.TXT" not in entries
    assert entries["stops.txt"].read().startswith(b"stop_id,")
