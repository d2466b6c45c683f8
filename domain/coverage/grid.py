"""Coverage Bounded Context - Coverage Grid Sampler.

Best-server signal at a point and lazy sweeps over a padded bounding box.
Grid coordinates are generated from integer indices (``start + i * step``)
so two sweeps with the same inputs visit bit-identical coordinates.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Sequence

from domain.coverage.link_budget import DEFAULT_TERRAIN, rsrp
from domain.coverage.settings import DEFAULT_PROPAGATION_SETTINGS, PropagationSettings
from domain.coverage.value_objects import CoveragePoint
from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import Site
from domain.terrain.ports import TerrainModel
from domain.terrain.services import planar_distance_sq
from domain.terrain.value_objects import BoundingBox

logger = logging.getLogger(__name__)

# Absorbs float error when (stop - start) / step lands just below an integer
_AXIS_EPSILON = 1e-9


def grid_axis(start: float, stop: float, step: float) -> list[float]:
    """Evenly spaced values ``start, start + step, ...`` not exceeding ``stop``.

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError("step must be positive")
    if stop < start:
        return []
    count = int(math.floor((stop - start) / step + _AXIS_EPSILON)) + 1
    return [start + i * step for i in range(count)]


# ---------------------------------------------------------------------------
# Best server at a point
# ---------------------------------------------------------------------------
def best_rsrp_at(
    sites: Iterable[Site],
    latitude: float,
    longitude: float,
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    settings: PropagationSettings | None = None,
) -> float:
    """Strongest single-sector RSRP at a point (no combining gain).

    Sites whose squared-degree distance exceeds
    ``settings.site_prefilter_deg_sq`` are skipped without evaluating any
    sector. Returns ``settings.no_signal_dbm`` when nothing is in range.
    """
    terrain = terrain if terrain is not None else DEFAULT_TERRAIN
    settings = settings if settings is not None else DEFAULT_PROPAGATION_SETTINGS

    best = settings.no_signal_dbm
    for site in sites:
        if (
            planar_distance_sq(site.latitude, site.longitude, latitude, longitude)
            > settings.site_prefilter_deg_sq
        ):
            continue
        for sector in site.sectors:
            level = rsrp(
                site,
                sector,
                latitude,
                longitude,
                use_terrain,
                catalog=catalog,
                terrain=terrain,
                settings=settings,
            )
            if level > best:
                best = level
    return best


# ---------------------------------------------------------------------------
# Sweep
# ---------------------------------------------------------------------------
class CoverageSweep:
    """Lazy, finite, restartable coverage map over the sites' padded extent.

    Iterating yields CoveragePoints row by row (south to north, west to east)
    for every sample whose best RSRP exceeds the visibility floor. Each call
    to ``iter()`` restarts the scan; nothing is cached.

    Rows are independent, so ``row(lat)`` can be evaluated in parallel by an
    application-level executor.
    """

    def __init__(
        self,
        sites: Sequence[Site],
        step_deg: float,
        use_terrain: bool = True,
        *,
        catalog: AntennaCatalog,
        terrain: TerrainModel | None = None,
        settings: PropagationSettings | None = None,
    ) -> None:
        if step_deg <= 0:
            raise ValueError("step_deg must be positive")

        self.sites: tuple[Site, ...] = tuple(sites)
        self.step_deg = step_deg
        self.use_terrain = use_terrain
        self.catalog = catalog
        self.terrain = terrain if terrain is not None else DEFAULT_TERRAIN
        self.settings = settings if settings is not None else DEFAULT_PROPAGATION_SETTINGS

        self.bounds: BoundingBox | None = None
        if self.sites:
            self.bounds = BoundingBox.around(
                ((s.latitude, s.longitude) for s in self.sites),
                self.settings.sweep_padding_deg,
            )

    def latitudes(self) -> list[float]:
        if self.bounds is None:
            return []
        return grid_axis(self.bounds.min_y, self.bounds.max_y, self.step_deg)

    def longitudes(self) -> list[float]:
        if self.bounds is None:
            return []
        return grid_axis(self.bounds.min_x, self.bounds.max_x, self.step_deg)

    def sample_count(self) -> int:
        """Number of grid samples evaluated by a full scan."""
        return len(self.latitudes()) * len(self.longitudes())

    def row(self, latitude: float) -> list[CoveragePoint]:
        """Visible samples along one latitude row."""
        points: list[CoveragePoint] = []
        for longitude in self.longitudes():
            level = best_rsrp_at(
                self.sites,
                latitude,
                longitude,
                self.use_terrain,
                catalog=self.catalog,
                terrain=self.terrain,
                settings=self.settings,
            )
            if level > self.settings.visibility_floor_dbm:
                points.append(
                    CoveragePoint(latitude=latitude, longitude=longitude, rsrp_dbm=level)
                )
        return points

    def __iter__(self) -> Iterator[CoveragePoint]:
        logger.debug(
            "Coverage sweep: %d sites, %d samples at %.5f deg",
            len(self.sites),
            self.sample_count(),
            self.step_deg,
        )
        for latitude in self.latitudes():
            yield from self.row(latitude)


def sweep(
    sites: Sequence[Site],
    step_deg: float,
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    settings: PropagationSettings | None = None,
) -> CoverageSweep:
    """Coverage map over the sites' bounding box padded by 0.1 deg.

    Args:
        sites: Sites to evaluate (an empty sequence yields an empty sweep)
        step_deg: Grid spacing in degrees (> 0)
        use_terrain: Include terrain diffraction
        catalog: Antenna reference table
        terrain: Elevation/clutter model (synthetic by default)
        settings: Engine thresholds (defaults if None)

    Returns:
        A restartable iterable of CoveragePoints above the visibility floor.

    Raises:
        ValueError: If step_deg is not positive

    Example:
        >>> points = list(sweep(sites, 0.002, catalog=catalog))
    """
    return CoverageSweep(
        sites,
        step_deg,
        use_terrain,
        catalog=catalog,
        terrain=terrain,
        settings=settings,
    )
