"""
Load-once, read-many access to the crime and street-lighting density grids.
"""

import json
import logging
import math
import os
import threading
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from ..config.routing_config import RoutingConfig

logger = logging.getLogger(__name__)

CellId = Tuple[int, int]


@dataclass(frozen=True)
class DensityGrid:
    """Sparse count grid keyed by (floor(lat / grid_size), floor(lng / grid_size))."""

    cells: Mapping[CellId, int]
    grid_size: float

    @property
    def max_count(self) -> int:
        # Floored at 1 so that log1p(max_count) is never zero
        return max(max(self.cells.values(), default=0), 1)

    def cell_id(self, lat: float, lng: float) -> CellId:
        return math.floor(lat / self.grid_size), math.floor(lng / self.grid_size)

    def count_at(self, lat: float, lng: float) -> int:
        return self.cells.get(self.cell_id(lat, lng), 0)

    def neighbourhood_sum(self, lat: float, lng: float, radius_cells: int) -> int:
        """Sum counts over the (2r+1) x (2r+1) block of cells centred on the point."""
        lat_cell, lng_cell = self.cell_id(lat, lng)
        total = 0
        for di in range(-radius_cells, radius_cells + 1):
            for dj in range(-radius_cells, radius_cells + 1):
                total += self.cells.get((lat_cell + di, lng_cell + dj), 0)
        return total

    @classmethod
    def empty(cls, grid_size: float) -> 'DensityGrid':
        return cls({}, grid_size)


def parse_density_grid(payload: Dict, default_grid_size: float) -> DensityGrid:
    """
    Build a DensityGrid from a decoded grid resource.

    Args:
        payload: Decoded JSON object with a 'grid' mapping of "latCell_lngCell" -> count
            and an optional 'gridSize' in degrees
        default_grid_size: Grid size used when the resource omits one

    Returns:
        Parsed DensityGrid

    Raises:
        ValueError: If the resource structure or any cell is invalid
    """
    if not isinstance(payload, dict) or not isinstance(payload.get('grid'), dict):
        raise ValueError("Grid resource must be an object with a 'grid' mapping")

    grid_size = float(payload.get('gridSize') or default_grid_size)
    if grid_size <= 0:
        raise ValueError(f"Grid size must be positive, got {grid_size}")

    cells: Dict[CellId, int] = {}
    for key, value in payload['grid'].items():
        parts = key.split('_')
        if len(parts) != 2:
            raise ValueError(f"Invalid cell id: {key!r}")
        try:
            cell = (int(parts[0]), int(parts[1]))
        except ValueError:
            raise ValueError(f"Invalid cell id: {key!r}")

        if (isinstance(value, bool) or not isinstance(value, (int, float))
                or not math.isfinite(value) or value < 0):
            raise ValueError(f"Invalid count for cell {key!r}: {value!r}")
        cells[cell] = int(value)

    return DensityGrid(cells, grid_size)


def load_grid_file(path: str, default_grid_size: float) -> DensityGrid:
    """
    Load a density grid resource from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid grid resource
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Grid resource not found: {path}")

    try:
        with open(path, 'r') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in grid resource {path}: {e}")

    return parse_density_grid(payload, default_grid_size)


class GridStore:
    """
    Holds the crime and lighting grids for the lifetime of the process.

    The first call to load() reads both resources behind a lock. If either one
    is missing or corrupt the store switches permanently to degraded mode and
    every caller sees ``data_unavailable`` as True; nothing is raised.
    """

    def __init__(self, crime_grid_path: Optional[str] = None,
                 lighting_grid_path: Optional[str] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize grid store.

        Args:
            crime_grid_path: Path to the crime grid JSON (defaults to the configured data dir)
            lighting_grid_path: Path to the lighting grid JSON (defaults to the configured data dir)
            config: Routing configuration
        """
        self.config = config or RoutingConfig()
        self.crime_grid_path = crime_grid_path or self.config.crime_grid_path
        self.lighting_grid_path = lighting_grid_path or self.config.lighting_grid_path

        self.crime_grid: Optional[DensityGrid] = None
        self.lighting_grid: Optional[DensityGrid] = None
        self.max_crime = 1
        self.max_lights = 1

        self._lock = threading.Lock()
        self._loaded = False
        self._unavailable = False
        self.unavailable_reason: Optional[str] = None

    @classmethod
    def from_grids(cls, crime_grid: DensityGrid, lighting_grid: DensityGrid,
                   config: Optional[RoutingConfig] = None) -> 'GridStore':
        """Create an already-loaded store from in-memory grids."""
        store = cls(config=config)
        store._install(crime_grid, lighting_grid)
        return store

    def load(self) -> bool:
        """
        Load both grids once.

        Returns:
            True if grid data is available after the call
        """
        if self._loaded or self._unavailable:
            return not self._unavailable

        with self._lock:
            if self._loaded or self._unavailable:
                return not self._unavailable

            try:
                crime_grid = load_grid_file(self.crime_grid_path, self.config.default_grid_size)
                lighting_grid = load_grid_file(self.lighting_grid_path, self.config.default_grid_size)
            except (OSError, ValueError, TypeError, OverflowError) as e:
                self._mark_unavailable_locked(str(e))
                return False

            self._install(crime_grid, lighting_grid)
            logger.info(f"Loaded crime grid ({len(crime_grid.cells)} cells, max {self.max_crime}) "
                        f"and lighting grid ({len(lighting_grid.cells)} cells, max {self.max_lights})")
            return True

    def mark_unavailable(self, reason: str) -> None:
        """Force degraded mode for the rest of the process lifetime."""
        with self._lock:
            self._mark_unavailable_locked(reason)

    def _mark_unavailable_locked(self, reason: str) -> None:
        if self._unavailable:
            return
        self._unavailable = True
        self.unavailable_reason = reason
        logger.warning(f"Safety grid data unavailable, scoring degraded to neutral: {reason}")

    def _install(self, crime_grid: DensityGrid, lighting_grid: DensityGrid) -> None:
        self.crime_grid = crime_grid
        self.lighting_grid = lighting_grid
        self.max_crime = crime_grid.max_count
        self.max_lights = lighting_grid.max_count
        self._loaded = True

    @property
    def data_unavailable(self) -> bool:
        """True when grids failed to load (after attempting a lazy load)."""
        if not self._loaded and not self._unavailable:
            self.load()
        return self._unavailable

    def crime_at(self, lat: float, lng: float) -> int:
        """Crime count of the cell containing the point (0 when absent)."""
        if self.data_unavailable:
            return 0
        return self.crime_grid.count_at(lat, lng)

    def lighting_at(self, lat: float, lng: float, radius_m: Optional[float] = None) -> int:
        """
        Count lights in the square cell neighbourhood around a point.

        Args:
            lat, lng: Point coordinates
            radius_m: Neighbourhood radius in meters (defaults to config.light_radius_m)

        Returns:
            Summed lighting count
        """
        if self.data_unavailable:
            return 0
        if radius_m is None:
            radius_m = self.config.light_radius_m
        radius_cells = math.ceil(radius_m * self.config.meters_to_degrees / self.lighting_grid.grid_size)
        return self.lighting_grid.neighbourhood_sum(lat, lng, radius_cells)

    def get_statistics(self) -> Dict[str, object]:
        """Get grid statistics for health reporting."""
        available = not self.data_unavailable
        return {
            'data_available': available,
            'crime_cells': len(self.crime_grid.cells) if available else 0,
            'lighting_cells': len(self.lighting_grid.cells) if available else 0,
            'max_crime': self.max_crime,
            'max_lights': self.max_lights,
            'reason': self.unavailable_reason
        }
