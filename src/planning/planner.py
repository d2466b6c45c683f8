"""Application service binding catalog, terrain and settings once.

The domain functions take their collaborators as keyword arguments on every
call. CoveragePlanner holds them so callers (UI handlers, batch jobs) can
work with sites and coordinates only.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from domain.coverage.analysis import summarize
from domain.coverage.grid import CoverageSweep, best_rsrp_at, sweep
from domain.coverage.link_budget import link_budget, rsrp
from domain.coverage.serving_cell import diagnose, signal_profile, track_device
from domain.coverage.settings import DEFAULT_PROPAGATION_SETTINGS, PropagationSettings
from domain.coverage.value_objects import (
    CoveragePoint,
    CoverageSummary,
    DeviceState,
    LinkBudget,
    LinkDiagnosis,
    SignalProfile,
)
from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import Sector, Site
from domain.siting.placement import suggest_sites
from domain.siting.sectors import optimize_sectors
from domain.siting.settings import (
    DEFAULT_PLACEMENT_SETTINGS,
    DEFAULT_SECTOR_SETTINGS,
    PlacementSettings,
    SectorSettings,
)
from domain.siting.value_objects import SiteCandidate
from domain.terrain.ports import TerrainModel
from domain.terrain.synthetic import SyntheticTerrainModel
from src.planning.parallel import parallel_sweep

logger = logging.getLogger(__name__)


class CoveragePlanner:
    """Facade over the propagation and siting services.

    Example:
        >>> planner = CoveragePlanner(catalog)
        >>> profile = planner.signal_profile(sites, 40.7128, -74.0060)
        >>> candidates = planner.suggest_sites(sites)
    """

    def __init__(
        self,
        catalog: AntennaCatalog,
        terrain: TerrainModel | None = None,
        propagation: PropagationSettings = DEFAULT_PROPAGATION_SETTINGS,
        placement: PlacementSettings = DEFAULT_PLACEMENT_SETTINGS,
        sectors: SectorSettings = DEFAULT_SECTOR_SETTINGS,
        use_terrain: bool = True,
    ) -> None:
        self.catalog = catalog
        self.terrain = terrain if terrain is not None else SyntheticTerrainModel()
        self.propagation = propagation
        self.placement = placement
        self.sectors = sectors
        self.use_terrain = use_terrain

    def rsrp(self, site: Site, sector: Sector, latitude: float, longitude: float) -> float:
        return rsrp(
            site,
            sector,
            latitude,
            longitude,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            settings=self.propagation,
        )

    def link_budget(
        self, site: Site, sector: Sector, latitude: float, longitude: float
    ) -> LinkBudget | None:
        return link_budget(
            site,
            sector,
            latitude,
            longitude,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            settings=self.propagation,
        )

    def best_rsrp_at(self, sites: Sequence[Site], latitude: float, longitude: float) -> float:
        return best_rsrp_at(
            sites,
            latitude,
            longitude,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            settings=self.propagation,
        )

    def sweep(self, sites: Sequence[Site], step_deg: float) -> CoverageSweep:
        return sweep(
            sites,
            step_deg,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            settings=self.propagation,
        )

    def coverage_map(
        self,
        sites: Sequence[Site],
        step_deg: float,
        max_workers: int | None = 1,
    ) -> list[CoveragePoint]:
        """Materialized sweep, optionally evaluated across worker processes."""
        return parallel_sweep(self.sweep(sites, step_deg), max_workers=max_workers)

    def summarize(
        self, sites: Sequence[Site], step_deg: float, max_workers: int | None = 1
    ) -> CoverageSummary:
        return summarize(self.coverage_map(sites, step_deg, max_workers))

    def signal_profile(
        self, sites: Sequence[Site], latitude: float, longitude: float
    ) -> SignalProfile:
        return signal_profile(
            sites,
            latitude,
            longitude,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            settings=self.propagation,
        )

    def probe(
        self,
        sites: Sequence[Site],
        latitude: float,
        longitude: float,
        timestamp: float,
        previous: DeviceState | None = None,
    ) -> tuple[DeviceState, LinkDiagnosis]:
        """Move a simulated handset and report its state and diagnosis."""
        profile = self.signal_profile(sites, latitude, longitude)
        return track_device(previous, profile, timestamp), diagnose(profile)

    def optimize_sectors(self, site: Site, all_sites: Sequence[Site]) -> tuple[Sector, ...]:
        return optimize_sectors(
            site,
            all_sites,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            propagation=self.propagation,
            settings=self.sectors,
        )

    def suggest_sites(self, sites: Sequence[Site]) -> list[SiteCandidate]:
        candidates = suggest_sites(
            sites,
            self.use_terrain,
            catalog=self.catalog,
            terrain=self.terrain,
            propagation=self.propagation,
            settings=self.placement,
            sector_settings=self.sectors,
        )
        logger.info("Suggested %d candidate sites for %d sites", len(candidates), len(sites))
        return candidates
