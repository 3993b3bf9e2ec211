"""GTFS file specifications.

This module contains only:
- `FileSpec` (per-file contract: required flag, required/optional fields, dtypes)
- the concrete GTFS Schedule file specs, in reference order (`GTFS_FILES`)
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Bump whenever a file or field below changes.
GTFS_SPEC_VERSION: str = "gtfs-schedule-2020.1"


class FileSpec(BaseModel):
    """Column-level contract for one GTFS file."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    required_fields: tuple[str, ...] = Field(default_factory=tuple)
    optional_fields: tuple[str, ...] = Field(default_factory=tuple)
    # pandas dtype strings, e.g. "string", "Float64", "Int64"; undeclared fields are "string"
    dtypes: Mapping[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_fields(self) -> FileSpec:
        overlap = set(self.required_fields) & set(self.optional_fields)
        if overlap:
            raise ValueError(f"{self.name}: fields both required and optional: {sorted(overlap)}")
        if self.required and not self.required_fields:
            raise ValueError(f"{self.name}: a required file needs at least one required field")
        unknown = set(self.dtypes) - set(self.all_fields)
        if unknown:
            raise ValueError(f"{self.name}: dtypes for undeclared fields: {sorted(unknown)}")
        return self

    @property
    def table_name(self) -> str:
        return PurePosixPath(self.name).stem

    @property
    def all_fields(self) -> tuple[str, ...]:
        return self.required_fields + self.optional_fields

    def dtype_of(self, field: str) -> str:
        return self.dtypes.get(field, "string")


_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

AGENCY = FileSpec(
    name="agency.txt",
    required=True,
    required_fields=("agency_name", "agency_url", "agency_timezone"),
    optional_fields=("agency_id", "agency_lang", "agency_phone", "agency_fare_url", "agency_email"),
)

STOPS = FileSpec(
    name="stops.txt",
    required=True,
    required_fields=("stop_id", "stop_name", "stop_lat", "stop_lon"),
    optional_fields=(
        "stop_code",
        "stop_desc",
        "zone_id",
        "stop_url",
        "location_type",
        "parent_station",
        "stop_timezone",
        "wheelchair_boarding",
        "level_id",
        "platform_code",
    ),
    dtypes={
        "stop_lat": "Float64",
        "stop_lon": "Float64",
        "location_type": "Int64",
        "wheelchair_boarding": "Int64",
    },
)

ROUTES = FileSpec(
    name="routes.txt",
    required=True,
    required_fields=("route_id", "route_short_name", "route_long_name", "route_type"),
    optional_fields=(
        "agency_id",
        "route_desc",
        "route_url",
        "route_color",
        "route_text_color",
        "route_sort_order",
    ),
    dtypes={"route_type": "Int64", "route_sort_order": "Int64"},
)

TRIPS = FileSpec(
    name="trips.txt",
    required=True,
    required_fields=("route_id", "service_id", "trip_id"),
    optional_fields=(
        "trip_headsign",
        "trip_short_name",
        "direction_id",
        "block_id",
        "shape_id",
        "wheelchair_accessible",
        "bikes_allowed",
    ),
    dtypes={"direction_id": "Int64", "wheelchair_accessible": "Int64", "bikes_allowed": "Int64"},
)

STOP_TIMES = FileSpec(
    name="stop_times.txt",
    required=True,
    required_fields=("trip_id", "arrival_time", "departure_time", "stop_id", "stop_sequence"),
    optional_fields=(
        "stop_headsign",
        "pickup_type",
        "drop_off_type",
        "shape_dist_traveled",
        "timepoint",
    ),
    dtypes={
        "stop_sequence": "Int64",
        "pickup_type": "Int64",
        "drop_off_type": "Int64",
        "shape_dist_traveled": "Float64",
        "timepoint": "Int64",
    },
)

CALENDAR = FileSpec(
    name="calendar.txt",
    required=True,
    required_fields=("service_id", *_WEEKDAYS, "start_date", "end_date"),
    dtypes={day: "Int64" for day in _WEEKDAYS},
)

CALENDAR_DATES = FileSpec(
    name="calendar_dates.txt",
    required_fields=("service_id", "date", "exception_type"),
    dtypes={"exception_type": "Int64"},
)

FARE_ATTRIBUTES = FileSpec(
    name="fare_attributes.txt",
    required_fields=("fare_id", "price", "currency_type", "payment_method", "transfers"),
    optional_fields=("agency_id", "transfer_duration"),
    dtypes={
        "price": "Float64",
        "payment_method": "Int64",
        "transfers": "Int64",
        "transfer_duration": "Int64",
    },
)

FARE_RULES = FileSpec(
    name="fare_rules.txt",
    required_fields=("fare_id",),
    optional_fields=("route_id", "origin_id", "destination_id", "contains_id"),
)

SHAPES = FileSpec(
    name="shapes.txt",
    required_fields=("shape_id", "shape_pt_lat", "shape_pt_lon", "shape_pt_sequence"),
    optional_fields=("shape_dist_traveled",),
    dtypes={
        "shape_pt_lat": "Float64",
        "shape_pt_lon": "Float64",
        "shape_pt_sequence": "Int64",
        "shape_dist_traveled": "Float64",
    },
)

FREQUENCIES = FileSpec(
    name="frequencies.txt",
    required_fields=("trip_id", "start_time", "end_time", "headway_secs"),
    optional_fields=("exact_times",),
    dtypes={"headway_secs": "Int64", "exact_times": "Int64"},
)

TRANSFERS = FileSpec(
    name="transfers.txt",
    required_fields=("from_stop_id", "to_stop_id", "transfer_type"),
    optional_fields=("min_transfer_time",),
    dtypes={"transfer_type": "Int64", "min_transfer_time": "Int64"},
)

PATHWAYS = FileSpec(
    name="pathways.txt",
    required_fields=("pathway_id", "from_stop_id", "to_stop_id", "pathway_mode", "is_bidirectional"),
    optional_fields=(
        "length",
        "traversal_time",
        "stair_count",
        "max_slope",
        "min_width",
        "signposted_as",
        "reversed_signposted_as",
    ),
    dtypes={
        "pathway_mode": "Int64",
        "is_bidirectional": "Int64",
        "length": "Float64",
        "traversal_time": "Int64",
        "stair_count": "Int64",
        "max_slope": "Float64",
        "min_width": "Float64",
    },
)

LEVELS = FileSpec(
    name="levels.txt",
    required_fields=("level_id", "level_index"),
    optional_fields=("level_name",),
    dtypes={"level_index": "Float64"},
)

FEED_INFO = FileSpec(
    name="feed_info.txt",
    required_fields=("feed_publisher_name", "feed_publisher_url", "feed_lang"),
    optional_fields=(
        "feed_start_date",
        "feed_end_date",
        "feed_version",
        "feed_contact_email",
        "feed_contact_url",
    ),
)

GTFS_FILES: tuple[FileSpec, ...] = (
    AGENCY,
    STOPS,
    ROUTES,
    TRIPS,
    STOP_TIMES,
    CALENDAR,
    CALENDAR_DATES,
    FARE_ATTRIBUTES,
    FARE_RULES,
    SHAPES,
    FREQUENCIES,
    TRANSFERS,
    PATHWAYS,
    LEVELS,
    FEED_INFO,
)
