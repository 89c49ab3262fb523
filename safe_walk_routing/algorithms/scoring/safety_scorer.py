"""
Safety scoring of walking routes against crime and street-lighting density grids.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import haversine_distance
from ...data.grid_store import GridStore
from ...data.models import (
    CandidateRoute,
    Coordinate,
    DangerPoint,
    ScoredPoint,
    ScoredRoute,
    SegmentScore
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round to the nearest integer and clamp to [0, 100]."""
    return max(0, min(100, round_half_up(value)))


class SafetyScorer:
    """
    Scores candidate routes by sampling their geometry against the density grids.

    Each sample point gets a signed local safety value::

        local_safety = lighting_weight * normalized_light - crime_weight * normalized_crime

    where both densities are log-compressed against the grid maxima. The
    route score maps the mean local safety onto 0-100 with the configured
    offset and scale. Scoring never raises for bad data: with grids
    unavailable or fewer than two vertices the route gets the neutral score.
    """

    def __init__(self, grid_store: GridStore, config: Optional[RoutingConfig] = None):
        """
        Initialize safety scorer.

        Args:
            grid_store: Loaded (or lazily loadable) crime and lighting grids
            config: Routing configuration
        """
        self.grid_store = grid_store
        self.config = config or grid_store.config

    def sample_points(self, geometry: Sequence[Coordinate],
                      interval_m: Optional[float] = None) -> List[Coordinate]:
        """
        Interpolate sample points along a route.

        Every vertex pair is split into max(1, floor(distance / interval)) equal
        steps and contributes both of its endpoints plus the intermediate points.
        The final vertex is then appended once more.

        Args:
            geometry: Route vertices in order
            interval_m: Target spacing in meters (defaults to config.sample_interval_m)

        Returns:
            Ordered sample points covering the whole route
        """
        if interval_m is None:
            interval_m = self.config.sample_interval_m

        points: List[Coordinate] = []
        for start, end in zip(geometry, geometry[1:]):
            segment_distance = haversine_distance(start.lat, start.lng, end.lat, end.lng)
            steps = max(1, math.floor(segment_distance / interval_m))

            t = np.arange(steps + 1) / steps
            lats = start.lat + t * (end.lat - start.lat)
            lngs = start.lng + t * (end.lng - start.lng)
            points.extend(Coordinate(float(lat), float(lng)) for lat, lng in zip(lats, lngs))

        if geometry:
            points.append(geometry[-1])

        return points

    def normalize_crime(self, count: int) -> float:
        return math.log1p(count) / math.log1p(self.grid_store.max_crime)

    def normalize_light(self, count: int) -> float:
        return math.log1p(count) / math.log1p(self.grid_store.max_lights)

    def score_point(self, point: Coordinate, night: bool) -> ScoredPoint:
        """
        Score one sample point.

        Args:
            point: Sample point
            night: Whether to use night-time weights

        Returns:
            ScoredPoint with normalized densities and local safety
        """
        crime = self.grid_store.crime_at(point.lat, point.lng)
        lights = self.grid_store.lighting_at(point.lat, point.lng)

        normalized_crime = self.normalize_crime(crime)
        normalized_light = self.normalize_light(lights)

        lighting_weight, crime_weight = self.config.weights_for(night)
        local_safety = lighting_weight * normalized_light - crime_weight * normalized_crime

        return ScoredPoint(point.lat, point.lng, normalized_crime, normalized_light, local_safety)

    def safety_from_local(self, local_safety: float) -> int:
        """Map a (mean) local safety value onto the 0-100 safety scale."""
        return clamp_score(self.config.safety_score_offset +
                           local_safety * self.config.safety_score_scale)

    def neutral_score(self, route: CandidateRoute) -> ScoredRoute:
        neutral = self.config.neutral_score
        return ScoredRoute(route, neutral, neutral, neutral)

    def score_route(self, route: CandidateRoute, night: bool = False) -> ScoredRoute:
        """
        Calculate safety, crime and lighting scores plus segments and danger points.

        Args:
            route: Candidate route from the routing provider
            night: Whether to use night-time weights

        Returns:
            ScoredRoute (neutral when data is unavailable or the geometry is degenerate)
        """
        if self.grid_store.data_unavailable or route.is_degenerate:
            return self.neutral_score(route)

        scored_points = [self.score_point(point, night)
                         for point in self.sample_points(route.geometry)]

        local_safety = np.array([p.local_safety for p in scored_points])
        crime = np.array([p.normalized_crime for p in scored_points])
        light = np.array([p.normalized_light for p in scored_points])

        safety_score = self.safety_from_local(float(local_safety.mean()))
        crime_score = clamp_score((1 - float(crime.mean())) * 100)
        lighting_score = clamp_score(float(light.mean()) * 100)

        danger_points = tuple(
            DangerPoint(p.lat, p.lng, p.normalized_crime)
            for p in scored_points
            if p.normalized_crime > self.config.danger_threshold
        )

        segments = tuple(
            SegmentScore(
                Coordinate(a.lat, a.lng),
                Coordinate(b.lat, b.lng),
                self.safety_from_local((a.local_safety + b.local_safety) / 2)
            )
            for a, b in zip(scored_points, scored_points[1:])
        )

        logger.debug(f"Scored route ({route.distance_meters:.0f}m, {len(scored_points)} samples): "
                     f"safety={safety_score} crime={crime_score} lighting={lighting_score}")

        return ScoredRoute(route, safety_score, crime_score, lighting_score, segments, danger_points)

    def score_routes(self, routes: Sequence[CandidateRoute], night: bool = False,
                     max_workers: Optional[int] = None) -> List[ScoredRoute]:
        """
        Score several routes concurrently, preserving input order.

        Routes only read the immutable grids, so no locking is needed.
        """
        if not routes:
            return []

        # Trigger the one-time load before fanning out
        self.grid_store.load()

        workers = min(max_workers or self.config.scoring_workers, len(routes))
        if workers <= 1:
            return [self.score_route(route, night) for route in routes]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda route: self.score_route(route, night), routes))
