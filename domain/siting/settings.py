"""Siting Bounded Context - tunable constants.

Defaults reproduce the greedy expansion engine of the planning tool. The
mesh-continuity band has no physical derivation; it is a planning
heuristic and is tuned here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.network.value_objects import TowerType


class PlacementSettings(BaseModel):
    """Knobs for ``suggest_sites``.

    Score per grid point::

        coverage_weight * max(0, coverage_reference_dbm - rsrp)
        + mesh_weight * mesh(rsrp)
        + demand_weight * demand / 100   (only while rsrp < coverage_reference_dbm)

    ``mesh`` is 1.0 at ``mesh_peak_dbm``, falls linearly to 0 at both band
    edges and is 0 outside the band.

    With the default weights a dead-zone point (-150 dBm) scores a 50 point
    deficit, above the 15 + 10 ceiling of the mesh and demand terms. While
    the search box still contains uncovered points every candidate is tagged
    ``coverage_gap`` and demand only breaks ties among them; mesh continuity
    and capacity demand lead once the box has no dead zones.
    """

    target_count: int = Field(default=10, ge=0)
    grid_steps: int = Field(default=30, ge=1)
    search_margin_deg: float = Field(default=0.04, gt=0)
    min_separation_m: float = Field(default=500.0, ge=0)

    coverage_weight: float = Field(default=1.0, ge=0)
    mesh_weight: float = Field(default=15.0, ge=0)
    demand_weight: float = Field(default=10.0, ge=0)

    coverage_reference_dbm: float = -100.0
    mesh_low_dbm: float = -118.0
    mesh_high_dbm: float = -100.0
    mesh_peak_dbm: float = -109.0

    # Synthesized candidate site
    candidate_tower_height_m: float = Field(default=30.0, gt=0)
    candidate_tower_type: TowerType = TowerType.MONOPOLE
    candidate_sector_count: int = Field(default=3, ge=1)
    candidate_tx_power_dbm: float = 44.0
    candidate_frequency_mhz: float = Field(default=1800.0, gt=0)
    candidate_electrical_tilt_deg: float = 6.0
    candidate_antenna_id: str | None = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_mesh_band(self) -> "PlacementSettings":
        if not self.mesh_low_dbm < self.mesh_peak_dbm < self.mesh_high_dbm:
            raise ValueError(
                "Mesh band must satisfy low < peak < high, got "
                f"{self.mesh_low_dbm} / {self.mesh_peak_dbm} / {self.mesh_high_dbm}"
            )
        return self


class SectorSettings(BaseModel):
    """Knobs for ``optimize_sectors``."""

    probe_count: int = Field(default=12, ge=1)
    probe_radius_m: float = Field(default=1000.0, gt=0)
    min_tilt_deg: float = 2.0
    max_tilt_deg: float = 6.0
    tall_tower_threshold_m: float = Field(default=45.0, gt=0)
    tall_tower_tilt_bonus_deg: float = 1.5
    tilt_decimals: int = Field(default=1, ge=0)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_tilt_range(self) -> "SectorSettings":
        if self.min_tilt_deg > self.max_tilt_deg:
            raise ValueError(
                f"Invalid tilt range: {self.min_tilt_deg} > {self.max_tilt_deg}"
            )
        return self


DEFAULT_PLACEMENT_SETTINGS = PlacementSettings()
DEFAULT_SECTOR_SETTINGS = SectorSettings()
