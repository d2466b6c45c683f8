"""Tests for signal quality bands and coverage summaries."""

from __future__ import annotations

import pytest

from domain.coverage.analysis import summarize
from domain.coverage.grid import sweep
from domain.coverage.value_objects import CoveragePoint, SignalQuality
from tests.conftest_utils import create_scenario_site


def create_test_points(*levels: float) -> list[CoveragePoint]:
    return [
        CoveragePoint(latitude=0.0, longitude=i * 0.001, rsrp_dbm=level)
        for i, level in enumerate(levels)
    ]


class TestSignalQuality:
    @pytest.mark.parametrize(
        ("rsrp_dbm", "quality"),
        [
            (-60.0, SignalQuality.EXCELLENT),
            (-75.0, SignalQuality.EXCELLENT),
            (-75.1, SignalQuality.GOOD),
            (-90.0, SignalQuality.GOOD),
            (-104.9, SignalQuality.FAIR),
            (-115.0, SignalQuality.POOR),
            (-115.1, SignalQuality.NO_SERVICE),
            (-150.0, SignalQuality.NO_SERVICE),
        ],
    )
    def test_band_lower_bounds_inclusive(self, rsrp_dbm, quality):
        assert SignalQuality.from_rsrp(rsrp_dbm) is quality

    def test_point_quality_property(self):
        point = CoveragePoint(latitude=0.0, longitude=0.0, rsrp_dbm=-80.0)

        assert point.quality is SignalQuality.GOOD


class TestSummarize:
    def test_one_point_per_band(self):
        summary = summarize(create_test_points(-70.0, -80.0, -95.0, -110.0, -118.0))

        assert summary.point_count == 5
        assert all(count == 1 for count in summary.band_counts.values())
        assert summary.band_percentages[SignalQuality.FAIR] == pytest.approx(20.0)
        assert summary.mean_rsrp_dbm == pytest.approx(-94.6)
        assert summary.min_rsrp_dbm == -118.0
        assert summary.max_rsrp_dbm == -70.0

    def test_empty(self):
        summary = summarize([])

        assert summary.point_count == 0
        assert set(summary.band_counts) == set(SignalQuality)
        assert all(value == 0.0 for value in summary.band_percentages.values())
        assert summary.mean_rsrp_dbm is None

    def test_percentages_sum_to_hundred(self):
        summary = summarize(create_test_points(-70.0, -70.0, -100.0))

        assert sum(summary.band_percentages.values()) == pytest.approx(100.0)
        assert summary.band_counts[SignalQuality.EXCELLENT] == 2

    def test_accepts_lazy_sweep(self, catalog):
        result = sweep([create_scenario_site()], 0.02, catalog=catalog)

        summary = summarize(result)

        assert summary.point_count == len(list(result))
        assert summary.band_counts[SignalQuality.NO_SERVICE] >= 0
