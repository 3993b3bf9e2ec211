from dataclasses import FrozenInstanceError
from io import BytesIO

import pandas as pd
import pytest

from gtfs_import.io import parse_table
from gtfs_import.models import (
    GTFS_REGISTRY,
    Feed,
    attach_report,
    detach_report,
    validate_feed,
)


def _table(text: str, name: str):
    return parse_table(BytesIO(text.encode("utf-8")), name)


@pytest.fixture()
def feed(gtfs_files) -> Feed:
    tables = {}
    for file_name, content in gtfs_files.items():
        table = _table(content, file_name.removesuffix(".txt"))
        tables[table.name] = table
    return Feed(tables=tables, source="demo.zip")


def test_lookup_by_table_name(feed: Feed) -> None:
    assert "stops" in feed
    assert feed["stops"].columns[0] == "stop_id"
    assert feed.get("frequencies") is None
    assert "stops.txt" in feed.file_names
    assert feed.columns_by_file()["calendar.txt"][0] == "service_id"


def test_feed_is_immutable(feed: Feed) -> None:
    with pytest.raises(TypeError):
        feed.tables["stops"] = feed["routes"]
    with pytest.raises(FrozenInstanceError):
        feed.report = None


def test_attach_and_detach_share_tables(feed: Feed) -> None:
    report = validate_feed(feed)

    validated = attach_report(feed, report)

    assert feed.report is None
    assert validated.report is report
    assert validated["stops"] is feed["stops"]
    assert validated.tables is feed.tables

    detached = detach_report(validated)
    assert detached.report is None
    assert validated.report is report
    assert detached["stops"] is feed["stops"]


def test_reattaching_a_recomputed_report(feed: Feed) -> None:
    first = attach_report(feed, validate_feed(feed))

    second = attach_report(first, validate_feed(first))

    assert second.report == first.report


def test_problems_and_summary(gtfs_files) -> None:
    calendar = _table(gtfs_files["calendar.txt"] + "\n\n", "calendar")
    stops = _table(gtfs_files["stops.txt"], "stops")
    feed = Feed(tables={"calendar": calendar, "stops": stops}, source="x.zip")

    assert list(feed.problems) == ["calendar"]
    summary = feed.summary()
    assert summary["n_tables"] == 2
    assert summary["rows"] == {"calendar": 3, "stops": 2}
    assert summary["n_parse_problems"] == 2
    assert summary["validated"] is False

    summary = attach_report(feed, validate_feed(feed)).summary()
    assert summary["validated"] is True
    assert summary["all_required_files_present"] is False


def test_to_frame_applies_dtypes(feed: Feed) -> None:
    stops = feed["stops"].to_frame(GTFS_REGISTRY.get("stops.txt"))

    assert str(stops["stop_lat"].dtype) == "Float64"
    assert str(stops["stop_id"].dtype) == "string"
    assert stops["stop_lat"].iloc[0] == pytest.approx(36.425288)

    calendar = feed["calendar"].to_frame(GTFS_REGISTRY.get("calendar.txt"))
    assert str(calendar["monday"].dtype) == "Int64"
    assert calendar["saturday"].iloc[0] == 0


def test_to_frame_keeps_raw_strings_without_spec() -> None:
    table = _table("stop_id,stop_code\nS1,\nS2,007\n", "stops")

    df = table.to_frame()

    assert df["stop_code"].iloc[1] == "007"
    assert pd.isna(df["stop_code"].iloc[0])
    assert table.rows[0]["stop_code"] == ""


def test_to_frame_reports_bad_values() -> None:
    table = _table("stop_id,stop_name,stop_lat,stop_lon\nS1,First,north,1.0\n", "stops")

    with pytest.raises(TypeError, match="stop_lat"):
        table.to_frame(GTFS_REGISTRY.get("stops.txt"))


def test_problems_frame() -> None:
    table = _table("a,b\n1\n2,3\n", "t")

    df = table.problems_frame()

    assert df.to_dict(orient="records") == [
        {"row": 1, "col": 2, "expected": 2, "actual": 1, "raw": "1"}
    ]
