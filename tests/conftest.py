"""Root pytest configuration for all tests.

Domain values are built directly (no I/O); only the catalog adapter tests
touch the filesystem, through ``tmp_path``. Builders live in
tests/conftest_utils.py so test modules can import them too.
"""

from __future__ import annotations

import pytest

from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import Site
from domain.terrain.synthetic import FlatTerrainModel
from tests.conftest_utils import create_scenario_site, create_test_catalog


@pytest.fixture
def catalog() -> AntennaCatalog:
    return create_test_catalog()


@pytest.fixture
def scenario_site() -> Site:
    return create_scenario_site()


@pytest.fixture
def flat_terrain() -> FlatTerrainModel:
    return FlatTerrainModel()
