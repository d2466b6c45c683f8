"""Tests for the greedy site placement optimizer."""

from __future__ import annotations

import itertools

import pytest

from domain.coverage.grid import best_rsrp_at
from domain.network.catalog import AntennaCatalog
from domain.network.errors import InvalidInputError
from domain.network.value_objects import SiteStatus
from domain.siting.demand import traffic_density
from domain.siting.placement import (
    PlacementRun,
    PointScore,
    mesh_bonus,
    score_point,
    search_grid,
    suggest_sites,
)
from domain.siting.settings import PlacementSettings
from domain.siting.value_objects import Justification, SiteCandidate
from domain.terrain.services import haversine_km
from tests.conftest_utils import OMNI_ID, PANEL_ID, SCENARIO_LAT, SCENARIO_LNG, create_three_sector_site

# Small grid keeps the search fast while exercising every step
FAST_SETTINGS = PlacementSettings(grid_steps=6, target_count=3)


def create_test_network():
    return [create_three_sector_site("alpha", SCENARIO_LAT, SCENARIO_LNG)]


def run_fast(sites, catalog, terrain, settings: PlacementSettings = FAST_SETTINGS):
    return suggest_sites(sites, False, catalog=catalog, terrain=terrain, settings=settings)


def separation_m(a, b) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude) * 1000


# ===========================================================================
# suggest_sites
# ===========================================================================
class TestSuggestSites:
    def test_empty_network_returns_empty(self, catalog):
        assert suggest_sites([], catalog=catalog) == []

    def test_respects_target_count(self, catalog, flat_terrain):
        candidates = run_fast(create_test_network(), catalog, flat_terrain)

        assert 1 <= len(candidates) <= 3
        assert all(isinstance(c, SiteCandidate) for c in candidates)

    def test_separation_constraint(self, catalog, flat_terrain):
        sites = create_test_network()

        candidates = run_fast(sites, catalog, flat_terrain)

        for candidate, site in itertools.product(candidates, sites):
            assert separation_m(candidate, site) >= 500.0
        for a, b in itertools.combinations(candidates, 2):
            assert separation_m(a, b) >= 500.0

    def test_candidates_inside_search_box(self, catalog, flat_terrain):
        sites = create_test_network()
        latitudes, longitudes = search_grid(sites, FAST_SETTINGS)

        for candidate in run_fast(sites, catalog, flat_terrain):
            assert candidate.latitude in latitudes
            assert candidate.longitude in longitudes

    def test_candidate_sites_synthesized(self, catalog, flat_terrain):
        candidate = run_fast(create_test_network(), catalog, flat_terrain)[0]

        assert candidate.site_id == "candidate-1"
        assert candidate.score > 0
        assert candidate.justification in set(Justification)
        assert candidate.reason == candidate.justification.description
        assert len(candidate.sectors) == 3
        azimuths = sorted(s.azimuth_deg for s in candidate.sectors)
        assert azimuths[1] - azimuths[0] == pytest.approx(120.0)
        assert azimuths[2] - azimuths[1] == pytest.approx(120.0)
        for index, sector in enumerate(candidate.sectors, start=1):
            assert sector.id == f"candidate-1-s{index}"
            assert sector.antenna_id == PANEL_ID
            assert sector.tx_power_dbm == 44.0
            assert sector.frequency_mhz == 1800.0
            assert sector.height_m == 28.0
            assert sector.mechanical_tilt_deg == 0.0

    def test_first_candidate_is_weak_spot(self, catalog, flat_terrain):
        candidate = run_fast(create_test_network(), catalog, flat_terrain)[0]

        assert candidate.rsrp_dbm < -100.0
        assert 0.0 <= candidate.demand <= 100.0

    def test_nearest_site_distance_reported(self, catalog, flat_terrain):
        sites = create_test_network()

        candidates = run_fast(sites, catalog, flat_terrain)

        first = candidates[0]
        assert first.nearest_site_m == pytest.approx(separation_m(first, sites[0]), rel=0.01)
        for index, candidate in enumerate(candidates):
            earlier = sites + [c.to_site() for c in candidates[:index]]
            nearest = min(separation_m(candidate, other) for other in earlier)
            assert candidate.nearest_site_m == pytest.approx(nearest, rel=0.01)

    def test_deterministic(self, catalog, flat_terrain):
        first = run_fast(create_test_network(), catalog, flat_terrain)
        second = run_fast(create_test_network(), catalog, flat_terrain)

        assert first == second

    def test_caller_list_untouched(self, catalog, flat_terrain):
        sites = create_test_network()
        before = [site.model_dump() for site in sites]

        run_fast(sites, catalog, flat_terrain)

        assert len(sites) == 1
        assert [site.model_dump() for site in sites] == before

    def test_fully_covered_region_stops_early(self, catalog, flat_terrain, caplog):
        settings = PlacementSettings(
            grid_steps=4,
            target_count=3,
            coverage_reference_dbm=-200.0,
            mesh_low_dbm=-300.0,
            mesh_peak_dbm=-290.0,
            mesh_high_dbm=-280.0,
        )

        with caplog.at_level("WARNING", logger="domain.siting.placement"):
            candidates = run_fast(create_test_network(), catalog, flat_terrain, settings)

        assert candidates == []
        assert "stopped after 0 of 3" in caplog.text

    def test_empty_catalog_rejected(self, flat_terrain):
        with pytest.raises(InvalidInputError, match="catalog is empty"):
            run_fast(create_test_network(), AntennaCatalog(), flat_terrain)

    def test_candidate_antenna_override(self, catalog, flat_terrain):
        settings = FAST_SETTINGS.model_copy(
            update={"candidate_antenna_id": OMNI_ID, "target_count": 1}
        )

        candidates = run_fast(create_test_network(), catalog, flat_terrain, settings)

        assert all(s.antenna_id == OMNI_ID for s in candidates[0].sectors)

    def test_zero_target_count(self, catalog, flat_terrain):
        settings = FAST_SETTINGS.model_copy(update={"target_count": 0})

        assert run_fast(create_test_network(), catalog, flat_terrain, settings) == []

    def test_candidate_id_avoids_existing_ids(self, catalog, flat_terrain):
        sites = [create_three_sector_site("candidate-1", SCENARIO_LAT, SCENARIO_LNG)]
        settings = FAST_SETTINGS.model_copy(update={"target_count": 1})

        candidate = run_fast(sites, catalog, flat_terrain, settings)[0]

        assert candidate.site_id == "candidate-1-2"


# ===========================================================================
# Scoring pieces
# ===========================================================================
class TestMeshBonus:
    def test_peak(self):
        assert mesh_bonus(-109.0) == pytest.approx(1.0)

    @pytest.mark.parametrize("rsrp_dbm", [-118.0, -100.0, -130.0, -80.0])
    def test_zero_at_and_outside_edges(self, rsrp_dbm):
        assert mesh_bonus(rsrp_dbm) == 0.0

    def test_linear_slopes(self):
        assert mesh_bonus(-113.5) == pytest.approx(0.5)
        assert mesh_bonus(-104.5) == pytest.approx(0.5)


def score_at(run, latitude, longitude, catalog, terrain, settings=FAST_SETTINGS):
    return score_point(
        run,
        latitude,
        longitude,
        False,
        catalog=catalog,
        terrain=terrain,
        propagation=None,
        settings=settings,
    )


def level_at(run, latitude, longitude, catalog, terrain) -> float:
    return best_rsrp_at(run.sites, latitude, longitude, False, catalog=catalog, terrain=terrain)


class TestScorePoint:
    # ~1.7 km north of the site: well clear of the separation radius
    FAR_LAT = SCENARIO_LAT + 0.015

    def test_covered_point_scores_zero(self, catalog, flat_terrain):
        run = PlacementRun(create_test_network())
        level = level_at(run, self.FAR_LAT, SCENARIO_LNG, catalog, flat_terrain)
        assert level >= -100.0

        score = score_at(run, self.FAR_LAT, SCENARIO_LNG, catalog, flat_terrain)

        assert score.demand_term == 0.0
        assert score.coverage == 0.0
        assert score.mesh == 0.0
        assert score.total == 0.0
        assert score.demand == pytest.approx(traffic_density(self.FAR_LAT, SCENARIO_LNG))

    def test_inside_separation_radius_scores_zero(self, catalog, flat_terrain):
        run = PlacementRun(create_test_network())
        latitude = SCENARIO_LAT + 0.003  # ~330 m
        # Every reading is a large deficit against a 0 dBm reference
        settings = FAST_SETTINGS.model_copy(update={"coverage_reference_dbm": 0.0})

        score = score_at(run, latitude, SCENARIO_LNG, catalog, flat_terrain, settings)

        assert score.total == 0.0
        assert score.coverage == 0.0
        assert score.rsrp_dbm < 0.0

    def test_mesh_band_peak_tags_mesh_continuity(self, catalog, flat_terrain):
        run = PlacementRun(create_test_network())
        level = level_at(run, self.FAR_LAT, SCENARIO_LNG, catalog, flat_terrain)
        # Band centred on the local level; reference 1 dB above it
        settings = FAST_SETTINGS.model_copy(
            update={
                "coverage_reference_dbm": level + 1.0,
                "mesh_low_dbm": level - 9.0,
                "mesh_peak_dbm": level,
                "mesh_high_dbm": level + 9.0,
            }
        )

        score = score_at(run, self.FAR_LAT, SCENARIO_LNG, catalog, flat_terrain, settings)

        assert score.coverage == pytest.approx(1.0)
        assert score.mesh == pytest.approx(15.0)
        assert score.demand_term == pytest.approx(10.0 * score.demand / 100.0)
        assert score.total == pytest.approx(score.coverage + score.mesh + score.demand_term)
        assert score.justification is Justification.MESH_CONTINUITY

    def test_high_demand_tags_capacity_demand(self, catalog, flat_terrain):
        run = PlacementRun(create_test_network())
        latitude, longitude = next(
            (self.FAR_LAT + i * 0.0003, SCENARIO_LNG + i * 0.00037)
            for i in range(100)
            if traffic_density(self.FAR_LAT + i * 0.0003, SCENARIO_LNG + i * 0.00037) > 30.0
        )
        level = level_at(run, latitude, longitude, catalog, flat_terrain)
        # Just under the reference, mesh band out of reach
        settings = FAST_SETTINGS.model_copy(
            update={
                "coverage_reference_dbm": level + 0.5,
                "mesh_low_dbm": level + 10.0,
                "mesh_peak_dbm": level + 15.0,
                "mesh_high_dbm": level + 20.0,
            }
        )

        score = score_at(run, latitude, longitude, catalog, flat_terrain, settings)

        assert score.coverage == pytest.approx(0.5)
        assert score.mesh == 0.0
        assert score.demand_term > 3.0
        assert score.justification is Justification.CAPACITY_DEMAND


class TestPointScoreJustification:
    @staticmethod
    def create_test_score(coverage, mesh, demand_term) -> PointScore:
        total = coverage + mesh + demand_term
        return PointScore(0.0, 0.0, total, coverage, mesh, demand_term, -110.0, 50.0)

    def test_mesh_dominates(self):
        score = self.create_test_score(coverage=9.0, mesh=15.0, demand_term=5.0)

        assert score.justification is Justification.MESH_CONTINUITY

    def test_demand_dominates(self):
        score = self.create_test_score(coverage=1.0, mesh=1.6, demand_term=9.0)

        assert score.justification is Justification.CAPACITY_DEMAND

    def test_coverage_dominates(self):
        score = self.create_test_score(coverage=50.0, mesh=0.0, demand_term=10.0)

        assert score.justification is Justification.COVERAGE_GAP

    def test_ties_prefer_coverage_then_mesh(self):
        assert self.create_test_score(5.0, 5.0, 5.0).justification is Justification.COVERAGE_GAP
        assert self.create_test_score(1.0, 5.0, 5.0).justification is Justification.MESH_CONTINUITY


class TestPlacementSettings:
    def test_mesh_band_ordering_enforced(self):
        with pytest.raises(ValueError, match="Mesh band"):
            PlacementSettings(mesh_low_dbm=-100.0, mesh_peak_dbm=-109.0, mesh_high_dbm=-90.0)

    def test_search_grid_size(self):
        latitudes, longitudes = search_grid(create_test_network(), FAST_SETTINGS)

        assert len(latitudes) == len(longitudes) == 7
        assert latitudes[0] == pytest.approx(SCENARIO_LAT - 0.04)
        assert latitudes[-1] == pytest.approx(SCENARIO_LAT + 0.04)


def test_placement_run_min_separation():
    run = PlacementRun(create_test_network())

    assert run.min_separation_m(SCENARIO_LAT, SCENARIO_LNG) == 0.0
    assert PlacementRun([]).min_separation_m(0.0, 0.0) == float("inf")
    assert PlacementRun([]).nearest_site_m(0.0, 0.0) is None
    assert run.nearest_site_m(SCENARIO_LAT, SCENARIO_LNG) == pytest.approx(0.0, abs=1e-6)


# ===========================================================================
# SiteCandidate
# ===========================================================================
def test_candidate_to_site(catalog, flat_terrain):
    candidate = run_fast(create_test_network(), catalog, flat_terrain)[0]

    site = candidate.to_site(site_id="new-1", name="North Hill")

    assert site.id == "new-1"
    assert site.name == "North Hill"
    assert site.status is SiteStatus.PLANNED
    assert site.sectors == candidate.sectors
    assert (site.latitude, site.longitude) == (candidate.latitude, candidate.longitude)
    assert candidate.to_site().id == candidate.site_id
