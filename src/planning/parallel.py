"""Process-parallel coverage sweep.

Latitude rows of a CoverageSweep are independent, so they are farmed out to
a ProcessPoolExecutor. ``executor.map`` returns rows in submission order,
which keeps the result point-for-point identical to ``list(sweep)``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor

from domain.coverage.grid import CoverageSweep
from domain.coverage.value_objects import CoveragePoint

logger = logging.getLogger(__name__)


def parallel_sweep(
    coverage_sweep: CoverageSweep,
    max_workers: int | None = None,
    chunksize: int = 1,
) -> list[CoveragePoint]:
    """Materialize a sweep using worker processes.

    Args:
        coverage_sweep: Sweep to evaluate (its inputs must be picklable)
        max_workers: Worker process count; 1 runs in-process, None lets the
            executor pick
        chunksize: Rows handed to a worker per task

    Returns:
        Points in the same order as iterating the sweep sequentially.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    latitudes = coverage_sweep.latitudes()
    if max_workers == 1 or len(latitudes) <= 1:
        return list(coverage_sweep)

    logger.debug(
        "Parallel sweep: %d rows on %s workers", len(latitudes), max_workers or "default"
    )
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        rows = executor.map(coverage_sweep.row, latitudes, chunksize=chunksize)
        return [point for row in rows for point in row]
