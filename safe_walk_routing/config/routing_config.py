"""
Configuration management for safety scoring and route diversity parameters.
"""

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv


DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'data', 'grids')


@dataclass
class RoutingConfig:
    """Configuration parameters for safety scoring, augmentation and ranking."""

    # Canonical safety formula: clamp(round(offset + avg_local_safety * scale), 0, 100)
    safety_score_offset: float = 60.0
    safety_score_scale: float = 120.0
    neutral_score: int = 50  # returned when data is unavailable or geometry is degenerate

    # Time-of-day weights (by day crime dominates, at night lighting counts as much as crime)
    day_lighting_weight: float = 0.1
    day_crime_weight: float = 0.9
    night_lighting_weight: float = 0.5
    night_crime_weight: float = 0.5

    # Sampling and grid lookup
    sample_interval_m: float = 50.0  # meters between sample points along a route
    light_radius_m: float = 75.0  # meters - lighting neighbourhood radius
    meters_to_degrees: float = 1 / 111320  # valid near 49N only
    default_grid_size: float = 0.001  # degrees (~100m) when a resource omits gridSize
    danger_threshold: float = 0.4  # normalized crime above this is a hotspot

    # Route diversity
    min_alternatives: int = 3  # augment when the provider returns fewer routes
    max_routes: int = 4  # stop augmenting once this many routes are collected
    via_offset_ratio: float = 0.15  # via-point offset as a fraction of straight-line distance
    duplicate_tolerance_m: float = 5.0  # routes whose distances differ less are the same path

    # Ranking
    top_n_options: int = 3

    # Routing provider
    osrm_base_url: str = 'https://router.project-osrm.org'
    osrm_profile: str = 'foot'
    osrm_alternatives: int = 3
    provider_timeout_s: float = 10.0

    # Route cache
    enable_cache: bool = True
    cache_ttl_s: float = 600.0  # 10 minutes
    cache_precision: int = 4  # decimal places (~11m)

    # Performance
    scoring_workers: int = 4

    # Grid resources
    data_dir: str = DEFAULT_DATA_DIR
    crime_grid_file: str = 'crime-grid.json'
    lighting_grid_file: str = 'lighting.json'

    def validate(self) -> None:
        """Validate configuration parameters."""
        for name in ('day_lighting_weight', 'day_crime_weight',
                     'night_lighting_weight', 'night_crime_weight'):
            if not 0 <= getattr(self, name) <= 1:
                raise ValueError(f"{name} must be between 0 and 1")
        if self.safety_score_scale <= 0:
            raise ValueError("safety_score_scale must be positive")
        if not 0 <= self.neutral_score <= 100:
            raise ValueError("neutral_score must be between 0 and 100")
        if self.sample_interval_m <= 0:
            raise ValueError("sample_interval_m must be positive")
        if self.light_radius_m < 0:
            raise ValueError("light_radius_m must not be negative")
        if self.default_grid_size <= 0:
            raise ValueError("default_grid_size must be positive")
        if not 0 <= self.danger_threshold <= 1:
            raise ValueError("danger_threshold must be between 0 and 1")
        if self.max_routes < 1:
            raise ValueError("max_routes must be at least 1")
        if self.top_n_options < 1:
            raise ValueError("top_n_options must be at least 1")
        if self.provider_timeout_s <= 0:
            raise ValueError("provider_timeout_s must be positive")
        if self.cache_ttl_s <= 0:
            raise ValueError("cache_ttl_s must be positive")
        if self.scoring_workers < 1:
            raise ValueError("scoring_workers must be at least 1")

    def weights_for(self, night: bool) -> Tuple[float, float]:
        """
        Get the (lighting_weight, crime_weight) pair for a time of day.

        Args:
            night: Whether the route is walked at night

        Returns:
            Tuple of lighting weight and crime weight
        """
        if night:
            return self.night_lighting_weight, self.night_crime_weight
        return self.day_lighting_weight, self.day_crime_weight

    @property
    def crime_grid_path(self) -> str:
        return os.path.join(self.data_dir, self.crime_grid_file)

    @property
    def lighting_grid_path(self) -> str:
        return os.path.join(self.data_dir, self.lighting_grid_file)

    @classmethod
    def create_default_config(cls) -> 'RoutingConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def create_offline_config(cls, data_dir: str) -> 'RoutingConfig':
        """
        Create configuration for scripts and tests that must not hold state between calls.

        Disables the route cache and scores routes on a single worker.
        """
        return cls(
            data_dir=data_dir,
            enable_cache=False,
            scoring_workers=1
        )

    @classmethod
    def from_env(cls) -> 'RoutingConfig':
        """
        Create configuration from environment variables (and a .env file if present).

        Recognised variables:
            OSRM_BASE_URL, SAFE_ROUTING_DATA_DIR,
            SAFE_ROUTING_PROVIDER_TIMEOUT, SAFE_ROUTING_CACHE_TTL
        """
        load_dotenv()
        config = cls()
        config.osrm_base_url = os.getenv('OSRM_BASE_URL', config.osrm_base_url)
        config.data_dir = os.getenv('SAFE_ROUTING_DATA_DIR', config.data_dir)

        timeout = os.getenv('SAFE_ROUTING_PROVIDER_TIMEOUT')
        if timeout:
            config.provider_timeout_s = float(timeout)

        ttl = os.getenv('SAFE_ROUTING_CACHE_TTL')
        if ttl:
            config.cache_ttl_s = float(ttl)

        config.validate()
        return config
