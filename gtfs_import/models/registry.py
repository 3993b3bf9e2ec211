"""Read-only lookup over the GTFS file specifications.

A name missing from the registry is not an error: it means "unknown/extra
file", and every lookup answers accordingly (not required, no fields).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gtfs_import.models.schemas import GTFS_FILES, GTFS_SPEC_VERSION, FileSpec


class SchemaRegistry:
    """Ordered, immutable set of `FileSpec`s keyed by file name."""

    def __init__(self, specs: Iterable[FileSpec], *, version: str) -> None:
        by_name: dict[str, FileSpec] = {}
        for spec in specs:
            if spec.name in by_name:
                raise ValueError(f"duplicate file spec: {spec.name}")
            by_name[spec.name] = spec
        self._specs = by_name
        self.version = version

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[FileSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def get(self, name: str) -> FileSpec | None:
        return self._specs.get(name)

    def is_required_file(self, name: str) -> bool:
        spec = self._specs.get(name)
        return spec is not None and spec.required

    def required_fields_of(self, name: str) -> tuple[str, ...]:
        spec = self._specs.get(name)
        return spec.required_fields if spec is not None else ()

    def optional_fields_of(self, name: str) -> tuple[str, ...]:
        spec = self._specs.get(name)
        return spec.optional_fields if spec is not None else ()

    def all_known_files(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def required_files(self) -> tuple[str, ...]:
        return tuple(n for n, s in self._specs.items() if s.required)

    def optional_files(self) -> tuple[str, ...]:
        return tuple(n for n, s in self._specs.items() if not s.required)

    def spec_for_table(self, table_name: str) -> FileSpec | None:
        """Look up by logical table name (`stops`) rather than file name (`stops.txt`)."""
        for spec in self._specs.values():
            if spec.table_name == table_name:
                return spec
        return None


GTFS_REGISTRY = SchemaRegistry(GTFS_FILES, version=GTFS_SPEC_VERSION)


def default_registry() -> SchemaRegistry:
    return GTFS_REGISTRY
