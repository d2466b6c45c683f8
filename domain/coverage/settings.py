"""Coverage Bounded Context - tunable constants.

Every threshold of the propagation engine is a named field here so callers
can override it per call.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------
NO_SIGNAL_DBM = -150.0  # Out of range / floor; never a real measurement
UNKNOWN_ANTENNA_DBM = -140.0  # Sector references an antenna missing from the catalog
VISIBILITY_FLOOR_DBM = -120.0  # Sweep drops samples at or below this level


class PropagationSettings(BaseModel):
    """Knobs for the link budget, grid sampler and serving-cell selector."""

    # Cheap squared-degree pre-filters (1 deg ~ 111 km)
    link_prefilter_deg_sq: float = Field(default=0.01, gt=0)
    site_prefilter_deg_sq: float = Field(default=0.015, gt=0)
    probe_prefilter_deg_sq: float = Field(default=0.05, gt=0)

    max_range_km: float = Field(default=10.0, gt=0)
    near_field_km: float = Field(default=0.01, gt=0)
    rx_height_m: float = Field(default=1.5, gt=0)

    # Antenna pattern (parabolic falloff, dB per (offset / half-beamwidth)^2)
    pattern_slope_db: float = Field(default=12.0, gt=0)
    front_to_back_db: float = Field(default=35.0, gt=0)
    vertical_loss_cap_db: float = Field(default=25.0, gt=0)

    diffraction_samples: int = Field(default=4, ge=1)

    no_signal_dbm: float = NO_SIGNAL_DBM
    unknown_antenna_dbm: float = UNKNOWN_ANTENNA_DBM
    visibility_floor_dbm: float = VISIBILITY_FLOOR_DBM

    sweep_padding_deg: float = Field(default=0.1, gt=0)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_sentinels(self) -> "PropagationSettings":
        if self.unknown_antenna_dbm < self.no_signal_dbm:
            raise ValueError(
                f"unknown_antenna_dbm ({self.unknown_antenna_dbm}) must not be "
                f"below no_signal_dbm ({self.no_signal_dbm})"
            )
        if self.visibility_floor_dbm < self.no_signal_dbm:
            raise ValueError(
                f"visibility_floor_dbm ({self.visibility_floor_dbm}) must not be "
                f"below no_signal_dbm ({self.no_signal_dbm})"
            )
        return self


DEFAULT_PROPAGATION_SETTINGS = PropagationSettings()
