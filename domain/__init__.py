"""RF Site Planner Domain Layer.

This package contains the core business logic organized by bounded contexts:
- terrain: Geodesy, elevation and clutter models
- network: Antennas, sectors, sites and the antenna catalog
- coverage: Link budget, coverage sweeps, serving-cell selection
- siting: Greedy site placement and sector optimization
"""

# Imports alphabetized per project style (isort)
from domain import coverage, network, siting, terrain

__all__ = ["coverage", "network", "siting", "terrain"]
