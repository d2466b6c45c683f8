"""Coverage Bounded Context - Value Objects.

Results produced by the link budget, grid sampler and serving-cell selector.
All are frozen Pydantic models: once a sweep or probe has produced them they
never change.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Signal quality bands
# ---------------------------------------------------------------------------
class SignalQuality(str, Enum):
    """RSRP quality band, best first.

    Lower bounds (inclusive): excellent -75, good -90, fair -105, poor -115.
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NO_SERVICE = "no_service"

    @classmethod
    def from_rsrp(cls, rsrp_dbm: float) -> "SignalQuality":
        for quality, lower_bound in _QUALITY_LOWER_BOUNDS_DBM:
            if rsrp_dbm >= lower_bound:
                return quality
        return cls.NO_SERVICE


_QUALITY_LOWER_BOUNDS_DBM: tuple[tuple[SignalQuality, float], ...] = (
    (SignalQuality.EXCELLENT, -75.0),
    (SignalQuality.GOOD, -90.0),
    (SignalQuality.FAIR, -105.0),
    (SignalQuality.POOR, -115.0),
)


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Link budget breakdown
# ---------------------------------------------------------------------------
class LinkBudget(BaseModel):
    """Every term of one site/sector -> point budget (Value Object).

    ``rsrp_dbm = tx_power_dbm + antenna_gain_dbi + pattern_gain_db
    - path_loss_db - clutter_loss_db - diffraction_loss_db``, floored at the
    no-signal sentinel.
    """

    distance_km: float = Field(ge=0)
    bearing_deg: float = Field(ge=0, le=360)
    horizontal_loss_db: float = Field(ge=0)
    vertical_loss_db: float = Field(ge=0)
    pattern_gain_db: float = Field(le=0)
    antenna_gain_dbi: float
    tx_power_dbm: float
    path_loss_db: float = Field(ge=0)
    clutter_loss_db: float = Field(ge=0)
    diffraction_loss_db: float = Field(ge=0)
    rsrp_dbm: float

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# CoveragePoint
# ---------------------------------------------------------------------------
class CoveragePoint(BaseModel):
    """Best-server signal at one grid sample (Value Object)."""

    latitude: float
    longitude: float
    rsrp_dbm: float

    model_config = ConfigDict(frozen=True)

    @property
    def quality(self) -> SignalQuality:
        return SignalQuality.from_rsrp(self.rsrp_dbm)


# ---------------------------------------------------------------------------
# Serving cell / device state
# ---------------------------------------------------------------------------
class NeighborCell(BaseModel):
    """A non-serving sector audible at the probe point."""

    site_id: str
    site_name: str
    cell_id: str
    rsrp_dbm: float

    model_config = ConfigDict(frozen=True)


class SignalProfile(BaseModel):
    """Snapshot of what a handset would see at a probe point (Value Object).

    A profile without a serving cell is the defined "no service" state:
    RSRP at the no-signal sentinel and SINR -20 dB.
    """

    latitude: float
    longitude: float
    rsrp_dbm: float
    sinr_db: float
    serving_site_id: str | None = None
    serving_site_name: str | None = None
    serving_cell_id: str | None = None
    neighbors: tuple[NeighborCell, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def has_service(self) -> bool:
        return self.serving_cell_id is not None

    @property
    def quality(self) -> SignalQuality:
        return SignalQuality.from_rsrp(self.rsrp_dbm)


class DeviceState(BaseModel):
    """A SignalProfile plus handover bookkeeping for a moving probe."""

    profile: SignalProfile
    handover_count: int = Field(default=0, ge=0)
    last_handover_at: float | None = None

    model_config = ConfigDict(frozen=True)


class LinkDiagnosis(BaseModel):
    """Human-readable assessment of a SignalProfile."""

    severity: Severity
    remarks: str
    effects: str

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Coverage summary
# ---------------------------------------------------------------------------
class CoverageSummary(BaseModel):
    """Aggregate statistics over a set of CoveragePoints.

    ``band_counts`` and ``band_percentages`` always carry every
    SignalQuality key. RSRP statistics are None for an empty set.
    """

    point_count: int = Field(ge=0)
    band_counts: dict[SignalQuality, int]
    band_percentages: dict[SignalQuality, float]
    mean_rsrp_dbm: float | None = None
    min_rsrp_dbm: float | None = None
    max_rsrp_dbm: float | None = None

    model_config = ConfigDict(frozen=True)
