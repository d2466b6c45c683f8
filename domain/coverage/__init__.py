"""Coverage Bounded Context.

Responsible for RF propagation and signal analysis:
- Value Objects: LinkBudget, CoveragePoint, SignalProfile, DeviceState,
  LinkDiagnosis, CoverageSummary, SignalQuality
- Settings: PropagationSettings
- Services: rsrp/link_budget, best_rsrp_at/sweep, signal_profile,
  diagnose, track_device, summarize
"""

from domain.coverage.analysis import summarize
from domain.coverage.grid import CoverageSweep, best_rsrp_at, sweep
from domain.coverage.link_budget import link_budget, rsrp
from domain.coverage.serving_cell import diagnose, signal_profile, track_device
from domain.coverage.settings import (
    DEFAULT_PROPAGATION_SETTINGS,
    NO_SIGNAL_DBM,
    UNKNOWN_ANTENNA_DBM,
    PropagationSettings,
)
from domain.coverage.value_objects import (
    CoveragePoint,
    CoverageSummary,
    DeviceState,
    LinkBudget,
    LinkDiagnosis,
    NeighborCell,
    Severity,
    SignalProfile,
    SignalQuality,
)

__all__ = [
    "DEFAULT_PROPAGATION_SETTINGS",
    "NO_SIGNAL_DBM",
    "UNKNOWN_ANTENNA_DBM",
    "CoveragePoint",
    "CoverageSummary",
    "CoverageSweep",
    "DeviceState",
    "LinkBudget",
    "LinkDiagnosis",
    "NeighborCell",
    "PropagationSettings",
    "Severity",
    "SignalProfile",
    "SignalQuality",
    "best_rsrp_at",
    "diagnose",
    "link_budget",
    "rsrp",
    "signal_profile",
    "summarize",
    "sweep",
    "track_device",
]
