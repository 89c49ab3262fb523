"""
Test Configuration
==================

Pytest fixtures and helpers shared by the safe walk routing tests.
"""

import json

import pytest

from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.data.grid_store import DensityGrid, GridStore
from safe_walk_routing.data.models import CandidateRoute, Coordinate, ScoredRoute

GRID_SIZE = 0.001

# A point well inside one 0.001 degree cell near West 12th Ave, Vancouver
CELL_CENTRE = Coordinate(49.2635, -123.1675)


def make_route(distance: float = 1000.0, duration: float = 720.0, geometry=None) -> CandidateRoute:
    if geometry is None:
        geometry = (Coordinate(49.2630, -123.1680), Coordinate(49.2640, -123.1680))
    return CandidateRoute(tuple(geometry), duration, distance)


def make_scored(safety_score: int = 50, duration: float = 600.0) -> ScoredRoute:
    return ScoredRoute(make_route(duration=duration), safety_score, 50, 50)


def cell_of(point: Coordinate, grid_size: float = GRID_SIZE):
    return DensityGrid.empty(grid_size).cell_id(point.lat, point.lng)


def write_grid(path, cells, grid_size=GRID_SIZE, **extra):
    """Write a grid resource in the on-disk format ('latCell_lngCell' keys)."""
    payload = {
        'grid': {f"{lat_cell}_{lng_cell}": count for (lat_cell, lng_cell), count in cells.items()},
        'gridSize': grid_size
    }
    payload.update(extra)
    path.write_text(json.dumps(payload))
    return path


class FakeProvider:
    """
    Scripted routing provider.

    ``direct`` answers two-waypoint queries; ``via`` answers the following
    three-waypoint queries in order. Exceptions in either are raised.
    """

    def __init__(self, direct=None, via=None):
        self.direct = direct if direct is not None else []
        self.via = list(via or [])
        self.calls = []

    def fetch_routes(self, waypoints, alternatives=True, timeout=None):
        self.calls.append({'waypoints': list(waypoints), 'alternatives': alternatives, 'timeout': timeout})

        if len(waypoints) == 2:
            response = self.direct
        else:
            response = self.via.pop(0) if self.via else []

        if isinstance(response, Exception):
            raise response
        return list(response)


@pytest.fixture
def config():
    return RoutingConfig(enable_cache=False, scoring_workers=1)


@pytest.fixture
def empty_grids(config):
    return GridStore.from_grids(DensityGrid.empty(GRID_SIZE), DensityGrid.empty(GRID_SIZE), config)


@pytest.fixture
def grid_files(tmp_path):
    """Valid crime and lighting grid resources on disk."""
    crime = write_grid(tmp_path / 'crime-grid.json', {cell_of(CELL_CENTRE): 10, (49270, -123100): 3})
    lighting = write_grid(tmp_path / 'lighting.json', {cell_of(CELL_CENTRE): 4},
                          poles=[[-123.1675, 49.2635]])
    return crime, lighting


@pytest.fixture
def cell_route():
    """A ~120m route whose sample points all fall in the CELL_CENTRE cell."""
    return make_route(
        distance=120.0,
        duration=90.0,
        geometry=(Coordinate(49.26305, -123.16795), Coordinate(49.26395, -123.16705))
    )
