"""
Route diversity: synthesizes via-point detours when the provider returns too few alternatives.
"""

import logging
from typing import List, Optional

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import midpoint, planar_offset_basis
from ...data.models import CandidateRoute, Coordinate
from ...errors import NoRouteFoundError, RoutingProviderError
from ...mapping.osrm_client import RoutingProvider

logger = logging.getLogger(__name__)


class RouteAugmenter:
    """
    Collects candidate routes for a from/to pair.

    The direct query must succeed. If it yields fewer than
    ``config.min_alternatives`` routes, two via-points are placed either side
    of the midpoint, perpendicular to the straight line, at
    ``config.via_offset_ratio`` of its length. Each detour's first route is
    kept unless a collected route has a total distance within
    ``config.duplicate_tolerance_m`` of it.
    """

    def __init__(self, provider: RoutingProvider, config: Optional[RoutingConfig] = None):
        self.provider = provider
        self.config = config or RoutingConfig()

    def via_points(self, start: Coordinate, end: Coordinate) -> List[Coordinate]:
        """
        Two detour waypoints, one on each side of the start->end line.

        Args:
            start: Route start
            end: Route end

        Returns:
            [mid + offset * perp, mid - offset * perp]
        """
        mid = midpoint(start, end)
        length, perp_lat, perp_lng = planar_offset_basis(start, end)
        offset = length * self.config.via_offset_ratio

        return [
            Coordinate(mid.lat + perp_lat * offset, mid.lng + perp_lng * offset),
            Coordinate(mid.lat - perp_lat * offset, mid.lng - perp_lng * offset)
        ]

    def is_duplicate(self, candidate: CandidateRoute, routes: List[CandidateRoute]) -> bool:
        """Distance-proximity proxy for 'same path'."""
        return any(
            abs(route.distance_meters - candidate.distance_meters) < self.config.duplicate_tolerance_m
            for route in routes
        )

    def collect_routes(self, start: Coordinate, end: Coordinate,
                       timeout: Optional[float] = None) -> List[CandidateRoute]:
        """
        Get at least the direct routes, augmented with via-point detours when needed.

        Args:
            start: Route start
            end: Route end
            timeout: Per provider call timeout in seconds

        Returns:
            Between 1 and max(direct count, config.max_routes) candidate routes

        Raises:
            NoRouteFoundError: If the direct query fails or returns no routes
        """
        timeout = timeout or self.config.provider_timeout_s

        try:
            routes = list(self.provider.fetch_routes([start, end], alternatives=True, timeout=timeout))
        except RoutingProviderError as e:
            logger.error(f"Direct routing query failed: {e}")
            raise NoRouteFoundError() from e

        if not routes:
            raise NoRouteFoundError()

        if len(routes) >= self.config.min_alternatives:
            return routes

        logger.info(f"Provider returned {len(routes)} route(s), adding via-point detours")

        for via in self.via_points(start, end):
            try:
                via_routes = self.provider.fetch_routes([start, via, end], alternatives=False, timeout=timeout)
            except RoutingProviderError as e:
                logger.warning(f"Skipping via-point ({via.lat:.5f}, {via.lng:.5f}): {e}")
                via_routes = []

            if via_routes:
                candidate = via_routes[0]
                if self.is_duplicate(candidate, routes):
                    logger.debug(f"Discarding detour of {candidate.distance_meters:.0f}m as a duplicate")
                else:
                    routes.append(candidate)

            if len(routes) >= self.config.max_routes:
                break

        return routes
