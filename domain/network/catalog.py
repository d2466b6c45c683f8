"""Read-only antenna catalog.

The catalog is an injected reference table, not a global. Lookups come in
two flavours so the caller decides whether a miss is fatal:

    catalog.get("h-amb4519")      # AntennaModel | None
    catalog.require("h-amb4519")  # AntennaModel, or UnknownAntennaError
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from domain.network.errors import DuplicateAntennaError, UnknownAntennaError
from domain.network.value_objects import AntennaModel


class AntennaCatalog:
    """Immutable id -> AntennaModel table preserving insertion order."""

    def __init__(self, antennas: Iterable[AntennaModel] = ()) -> None:
        by_id: dict[str, AntennaModel] = {}
        for antenna in antennas:
            if antenna.id in by_id:
                raise DuplicateAntennaError(antenna.id)
            by_id[antenna.id] = antenna
        self._by_id = by_id

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "AntennaCatalog":
        """Build a catalog from external records (camelCase keys accepted).

        Raises:
            pydantic.ValidationError: If a record is malformed
            DuplicateAntennaError: If two records share an id
        """
        return cls(AntennaModel.model_validate(record) for record in records)

    def get(self, antenna_id: str) -> AntennaModel | None:
        return self._by_id.get(antenna_id)

    def require(self, antenna_id: str) -> AntennaModel:
        antenna = self._by_id.get(antenna_id)
        if antenna is None:
            raise UnknownAntennaError(antenna_id)
        return antenna

    def default(self) -> AntennaModel | None:
        """First entry in catalog order, or None when empty."""
        return next(iter(self._by_id.values()), None)

    def ids(self) -> tuple[str, ...]:
        return tuple(self._by_id)

    def __contains__(self, antenna_id: object) -> bool:
        return antenna_id in self._by_id

    def __iter__(self) -> Iterator[AntennaModel]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"AntennaCatalog({len(self)} antennas)"
