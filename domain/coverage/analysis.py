"""Coverage statistics over sweep output."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from domain.coverage.value_objects import CoveragePoint, CoverageSummary, SignalQuality


def summarize(points: Iterable[CoveragePoint]) -> CoverageSummary:
    """Count points per quality band and compute RSRP statistics.

    Accepts any iterable, including a lazy CoverageSweep (consumed once).

    Returns:
        CoverageSummary; an empty input gives zero counts and None statistics.
    """
    levels = np.fromiter((p.rsrp_dbm for p in points), dtype=np.float64)
    total = int(levels.size)

    counts = {quality: 0 for quality in SignalQuality}
    for level in levels:
        counts[SignalQuality.from_rsrp(float(level))] += 1

    if total == 0:
        return CoverageSummary(
            point_count=0,
            band_counts=counts,
            band_percentages={quality: 0.0 for quality in SignalQuality},
        )

    percentages = {quality: 100.0 * count / total for quality, count in counts.items()}
    return CoverageSummary(
        point_count=total,
        band_counts=counts,
        band_percentages=percentages,
        mean_rsrp_dbm=float(levels.mean()),
        min_rsrp_dbm=float(levels.min()),
        max_rsrp_dbm=float(levels.max()),
    )
