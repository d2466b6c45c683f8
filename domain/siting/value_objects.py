"""Siting Bounded Context - Value Objects."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from domain.network.value_objects import Sector, Site, SiteStatus, TowerType


class Justification(str, Enum):
    """Dominant reason a candidate was proposed."""

    COVERAGE_GAP = "coverage_gap"
    MESH_CONTINUITY = "mesh_continuity"
    CAPACITY_DEMAND = "capacity_demand"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[Justification, str] = {
    Justification.COVERAGE_GAP: "Coverage gap optimization.",
    Justification.MESH_CONTINUITY: "Mesh continuity: stitches the handover boundary.",
    Justification.CAPACITY_DEMAND: "Capacity demand: high synthetic traffic density.",
}


class SiteCandidate(BaseModel):
    """A proposed new site location (Value Object).

    Attributes:
        site_id: Ephemeral id used while the optimization run was in progress
        rsrp_dbm: Best RSRP at the location before the candidate existed
        demand: Synthetic traffic density at the location (0-100)
        nearest_site_m: Geodesic distance to the nearest site (existing or
            previously accepted) when the candidate was accepted
        sectors: Optimized sector layout synthesized for the candidate
    """

    site_id: str = Field(min_length=1)
    name: str = ""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    justification: Justification
    score: float = Field(ge=0)
    rsrp_dbm: float
    demand: float = Field(ge=0, le=100)
    nearest_site_m: float | None = Field(default=None, ge=0)
    tower_height_m: float = Field(default=30.0, gt=0)
    tower_type: TowerType = TowerType.MONOPOLE
    sectors: tuple[Sector, ...] = ()

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @property
    def reason(self) -> str:
        return self.justification.description

    def to_site(self, site_id: str | None = None, name: str | None = None) -> Site:
        """Materialize the candidate as a planned Site the caller can keep."""
        return Site(
            id=site_id or self.site_id,
            name=name if name is not None else self.name,
            latitude=self.latitude,
            longitude=self.longitude,
            tower_height_m=self.tower_height_m,
            tower_type=self.tower_type,
            status=SiteStatus.PLANNED,
            sectors=self.sectors,
        )
