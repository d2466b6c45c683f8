"""Siting Bounded Context.

Responsible for proposing and tuning sites:
- Value Objects: SiteCandidate, Justification
- Settings: PlacementSettings, SectorSettings
- Services: suggest_sites (greedy placement), optimize_sectors,
  traffic_density (synthetic demand)
"""

from domain.siting.demand import traffic_density
from domain.siting.placement import PlacementRun, mesh_bonus, suggest_sites
from domain.siting.sectors import optimize_sectors
from domain.siting.settings import PlacementSettings, SectorSettings
from domain.siting.value_objects import Justification, SiteCandidate

__all__ = [
    "Justification",
    "PlacementRun",
    "PlacementSettings",
    "SectorSettings",
    "SiteCandidate",
    "mesh_bonus",
    "optimize_sectors",
    "suggest_sites",
    "traffic_density",
]
