from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from zipfile import ZipFile

import pytest

CALENDAR_HEADER = (
    "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date"
)

VALID_FEED: dict[str, str] = {
    "agency.txt": (
        "agency_id,agency_name,agency_url,agency_timezone\n"
        "DTA,Demo Transit,http://example.com,America/Los_Angeles\n"
    ),
    "stops.txt": (
        "stop_id,stop_name,stop_lat,stop_lon\n"
        "S1,First Street,36.425288,-117.133162\n"
        "S2,Second Street,36.868446,-116.784582\n"
    ),
    "routes.txt": (
        "route_id,agency_id,route_short_name,route_long_name,route_type\n"
        "R1,DTA,10,Main Line,3\n"
    ),
    "trips.txt": "route_id,service_id,trip_id,shape_id\nR1,WK,T1,SH1\n",
    "stop_times.txt": (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,S1,1\n"
        "T1,08:10:00,08:10:00,S2,2\n"
    ),
    "calendar.txt": f"{CALENDAR_HEADER}\nWK,1,1,1,1,1,0,0,20240101,20241231\n",
    "shapes.txt": (
        "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
        "SH1,36.425288,-117.133162,1\n"
        "SH1,36.868446,-116.784582,2\n"
    ),
}


def _zip_bytes(files: dict[str, str | bytes]) -> bytes:
    buf = BytesIO()
    with ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


@pytest.fixture()
def gtfs_files() -> dict[str, str]:
    return dict(VALID_FEED)


@pytest.fixture()
def zip_bytes() -> Callable[[dict[str, str | bytes]], bytes]:
    return _zip_bytes


@pytest.fixture()
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    def _make(files: dict[str, str | bytes], name: str = "feed.zip") -> Path:
        path = tmp_path / name
        path.write_bytes(_zip_bytes(files))
        return path

    return _make
