"""Application services for coverage planning.

- CoveragePlanner: facade binding catalog, terrain and settings
- parallel_sweep: process-parallel coverage sweep
"""

from .parallel import parallel_sweep
from .planner import CoveragePlanner

__all__ = ["CoveragePlanner", "parallel_sweep"]
