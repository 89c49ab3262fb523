"""
Data containers, grid loading and distance utilities for safe walk routing.

This module contains:
- Route and score data models
- Crime and lighting density grids
- Distance calculations
"""

from .models import (
    Coordinate,
    CandidateRoute,
    ScoredPoint,
    SegmentScore,
    DangerPoint,
    ScoredRoute,
    RankedResult
)
from .grid_store import DensityGrid, GridStore, load_grid_file, parse_density_grid
from .distance_utils import haversine_distance, midpoint, planar_offset_basis

__all__ = [
    'Coordinate',
    'CandidateRoute',
    'ScoredPoint',
    'SegmentScore',
    'DangerPoint',
    'ScoredRoute',
    'RankedResult',
    'DensityGrid',
    'GridStore',
    'load_grid_file',
    'parse_density_grid',
    'haversine_distance',
    'midpoint',
    'planar_offset_basis'
]
