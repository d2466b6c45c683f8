"""Network Bounded Context - Value Objects.

Immutable descriptions of antennas, sectors and sites. All validation occurs
at construction time via Pydantic; NaN/Inf are rejected everywhere, so the
propagation services can assume finite WGS84 inputs.

Edits are expressed as copies (``model_copy(update=...)``); nothing in the
engine mutates a Site or Sector in place.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from domain.terrain.value_objects import GeoPoint

DEFAULT_TX_POWER_DBM = 43.0
DEFAULT_FREQUENCY_MHZ = 1800.0


class TowerType(str, Enum):
    """Tower structure. Cosmetic: never used in the physics."""

    MONOPOLE = "Monopole"
    LATTICE = "Lattice"
    GUYED = "Guyed"
    ROOFTOP = "Rooftop"


class SiteStatus(str, Enum):
    PLANNED = "planned"
    ACTIVE = "active"
    RETIRED = "retired"


# ---------------------------------------------------------------------------
# AntennaModel
# ---------------------------------------------------------------------------
class AntennaModel(BaseModel):
    """Catalog entry for a panel/omni antenna (Value Object).

    Accepts both snake_case field names and the camelCase keys used by the
    external catalog records (``gainDbi``, ``horizontalBeamwidth`` ...).

    Invariants:
        beamwidths > 0
        0 < frequency_range_mhz[0] <= frequency_range_mhz[1]
    """

    id: str = Field(min_length=1)
    vendor: str = ""
    model: str = ""
    gain_dbi: float = Field(alias="gainDbi")
    horizontal_beamwidth_deg: float = Field(gt=0, le=360, alias="horizontalBeamwidth")
    vertical_beamwidth_deg: float = Field(gt=0, le=180, alias="verticalBeamwidth")
    frequency_range_mhz: tuple[float, float] = Field(
        validation_alias=AliasChoices(
            "frequency_range_mhz", "frequencyRangeMhz", "frequencyRange"
        )
    )
    weight_kg: float = Field(default=0.0, ge=0, alias="weightKg")
    ports: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_frequency_range(self) -> "AntennaModel":
        low, high = self.frequency_range_mhz
        if low <= 0:
            raise ValueError(f"Frequency range must be positive, got {low}")
        if low > high:
            raise ValueError(f"Invalid frequency range ordering: {low} > {high}")
        return self

    def supports_frequency(self, frequency_mhz: float) -> bool:
        """Check whether a carrier falls inside the rated band (inclusive)."""
        low, high = self.frequency_range_mhz
        return low <= frequency_mhz <= high


# ---------------------------------------------------------------------------
# Sector
# ---------------------------------------------------------------------------
class Sector(BaseModel):
    """One antenna face of a site (Value Object).

    ``height_m`` of None means "mounted at the site's tower height".
    Azimuth is normalized into [0, 360).
    """

    id: str = Field(default_factory=lambda: uuid4().hex, min_length=1)
    antenna_id: str
    azimuth_deg: float = 0.0
    mechanical_tilt_deg: float = Field(default=0.0, ge=-90, le=90)
    electrical_tilt_deg: float = Field(default=0.0, ge=-90, le=90)
    tx_power_dbm: float = DEFAULT_TX_POWER_DBM
    frequency_mhz: float = Field(default=DEFAULT_FREQUENCY_MHZ, gt=0)
    height_m: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @field_validator("azimuth_deg")
    @classmethod
    def normalize_azimuth(cls, value: float) -> float:
        return value % 360.0

    @property
    def effective_tilt_deg(self) -> float:
        """Mechanical plus electrical downtilt."""
        return self.mechanical_tilt_deg + self.electrical_tilt_deg


# ---------------------------------------------------------------------------
# Site
# ---------------------------------------------------------------------------
class Site(BaseModel):
    """A cell site: position, tower and its ordered sectors (Value Object)."""

    id: str = Field(min_length=1)
    name: str = ""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    tower_height_m: float = Field(default=30.0, gt=0)
    tower_type: TowerType = TowerType.MONOPOLE
    status: SiteStatus = SiteStatus.PLANNED
    sectors: tuple[Sector, ...] = ()

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    def mount_height_m(self, sector: Sector) -> float:
        """Antenna height above ground for ``sector`` on this site."""
        if sector.height_m is not None:
            return sector.height_m
        return self.tower_height_m

    def with_sectors(self, sectors: Iterable[Sector]) -> "Site":
        """Return a copy carrying ``sectors`` instead of the current ones."""
        return self.model_copy(update={"sectors": tuple(sectors)})
