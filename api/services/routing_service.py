"""
Service layer for the safe walk routing API.
"""

import logging
from typing import Optional

from safe_walk_routing import __version__
from safe_walk_routing.algorithms.optimization.safe_route_optimizer import SafeRouteOptimizer
from safe_walk_routing.algorithms.scoring.safety_scorer import round_half_up
from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.data.models import Coordinate, RankedResult, ScoredRoute
from api.schemas.routing import (
    DangerPointModel,
    HealthResponse,
    RouteResponse,
    ScoredRouteModel,
    SegmentModel
)

logger = logging.getLogger(__name__)


class SafeRoutingService:
    """
    Service class that provides ranked safe walking routes for the API.
    """

    def __init__(self, optimizer: Optional[SafeRouteOptimizer] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the routing service.

        Args:
            optimizer: Pre-built optimizer (built from config when None)
            config: Routing configuration (read from the environment when None)
        """
        if optimizer is None:
            optimizer = SafeRouteOptimizer(config=config or RoutingConfig.from_env())
        self.optimizer = optimizer

    @property
    def grid_store(self):
        return self.optimizer.grid_store

    def warm_up(self) -> bool:
        """Load the safety grids ahead of the first request."""
        return self.grid_store.load()

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the routing service."""
        stats = self.grid_store.get_statistics()
        return HealthResponse(
            status="healthy" if stats['data_available'] else "degraded",
            version=__version__,
            safety_data_loaded=stats['data_available'],
            crime_cells=stats['crime_cells'],
            lighting_cells=stats['lighting_cells']
        )

    def calculate_routes(self, start: Coordinate, end: Coordinate, night: bool = False) -> RouteResponse:
        """
        Calculate ranked safe walking routes between two points.

        Args:
            start: Starting location
            end: Destination
            night: Whether to use night-time safety weights

        Returns:
            RouteResponse with scored routes and safest/fastest selections

        Raises:
            NoRouteFoundError: If the routing provider finds no route
        """
        result = self.optimizer.find_routes(start, end, night)
        return self._convert_to_response(result)

    def _convert_to_response(self, result: RankedResult) -> RouteResponse:
        """Convert optimizer result to API response format."""
        return RouteResponse(
            routes=[self._route_to_model(route) for route in result.routes],
            recommended=result.recommended,
            fastest=result.fastest,
            safest_options=list(result.safest_options),
            fastest_options=list(result.fastest_options)
        )

    def _route_to_model(self, scored: ScoredRoute) -> ScoredRouteModel:
        return ScoredRouteModel(
            geometry=dict(scored.route.to_geojson()),
            duration=round_half_up(scored.duration_seconds),
            distance=round_half_up(scored.distance_meters),
            safety_score=scored.safety_score,
            crime_score=scored.crime_score,
            lighting_score=scored.lighting_score,
            segments=[SegmentModel(**segment.to_dict()) for segment in scored.segments],
            danger_points=[DangerPointModel(**point.to_dict()) for point in scored.danger_points]
        )


# Global service instance
routing_service = SafeRoutingService()
