import pytest

from gtfs_import.models import GTFS_REGISTRY, FileSpec, SchemaRegistry
from gtfs_import.models.schemas import GTFS_SPEC_VERSION


def test_required_and_optional_files() -> None:
    assert GTFS_REGISTRY.required_files() == (
        "agency.txt",
        "stops.txt",
        "routes.txt",
        "trips.txt",
        "stop_times.txt",
        "calendar.txt",
    )
    assert "frequencies.txt" in GTFS_REGISTRY.optional_files()
    assert GTFS_REGISTRY.is_required_file("stops.txt")
    assert not GTFS_REGISTRY.is_required_file("shapes.txt")
    assert GTFS_REGISTRY.version == GTFS_SPEC_VERSION


def test_field_lookups() -> None:
    assert GTFS_REGISTRY.required_fields_of("frequencies.txt") == (
        "trip_id",
        "start_time",
        "end_time",
        "headway_secs",
    )
    assert GTFS_REGISTRY.optional_fields_of("frequencies.txt") == ("exact_times",)
    assert GTFS_REGISTRY.optional_fields_of("calendar.txt") == ()


def test_unknown_file_is_not_an_error() -> None:
    assert "timetables-new.txt" not in GTFS_REGISTRY
    assert not GTFS_REGISTRY.is_required_file("timetables-new.txt")
    assert GTFS_REGISTRY.required_fields_of("timetables-new.txt") == ()
    assert GTFS_REGISTRY.optional_fields_of("timetables-new.txt") == ()
    assert GTFS_REGISTRY.get("timetables-new.txt") is None


def test_every_required_file_has_a_required_field() -> None:
    for spec in GTFS_REGISTRY:
        assert set(spec.required_fields) <= set(spec.all_fields)
        if spec.required:
            assert spec.required_fields


def test_all_known_files_keeps_declared_order() -> None:
    known = GTFS_REGISTRY.all_known_files()

    assert known[0] == "agency.txt"
    assert known == tuple(spec.name for spec in GTFS_REGISTRY)
    assert len(known) == len(set(known)) == len(GTFS_REGISTRY)


def test_spec_for_table() -> None:
    assert GTFS_REGISTRY.spec_for_table("stops").name == "stops.txt"
    assert GTFS_REGISTRY.spec_for_table("nope") is None


def test_file_spec_rejects_inconsistent_fields() -> None:
    with pytest.raises(ValueError):
        FileSpec(name="x.txt", required_fields=("a",), optional_fields=("a",))
    with pytest.raises(ValueError):
        FileSpec(name="x.txt", required=True, optional_fields=("a",))
    with pytest.raises(ValueError):
        FileSpec(name="x.txt", required_fields=("a",), dtypes={"b": "Int64"})


def test_registry_rejects_duplicate_files() -> None:
    spec = FileSpec(name="x.txt", required_fields=("a",))

    with pytest.raises(ValueError):
        SchemaRegistry([spec, spec], version="test")
