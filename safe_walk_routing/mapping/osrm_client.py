"""
OSRM routing provider client.

Talks to an OSRM server over HTTP and returns CandidateRoutes. Encapsulates
the OSRM-specific details: (lng,lat) coordinate formatting, URL construction,
timeouts and parsing of the GeoJSON route geometry.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ..config.routing_config import RoutingConfig
from ..data.models import CandidateRoute, Coordinate
from ..errors import RoutingProviderError

logger = logging.getLogger(__name__)


class RoutingProvider(Protocol):
    """Anything that can turn an ordered waypoint list into candidate routes."""

    def fetch_routes(self, waypoints: Sequence[Coordinate], alternatives: bool = True,
                     timeout: Optional[float] = None) -> List[CandidateRoute]:
        ...


class OSRMClient:
    """
    OSRM /route client for walking routes.

    Failures (transport errors, timeouts, non-2xx responses and OSRM codes
    other than "Ok") raise RoutingProviderError. An "Ok" answer without
    routes returns an empty list.
    """

    def __init__(self, config: Optional[RoutingConfig] = None,
                 base_url: Optional[str] = None,
                 profile: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or RoutingConfig()
        self.base_url = (base_url or self.config.osrm_base_url).rstrip('/')
        self.profile = profile or self.config.osrm_profile
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("OSRM base URL not set")

    @staticmethod
    def format_coordinates(waypoints: Sequence[Coordinate]) -> str:
        """Convert waypoints to OSRM format 'lng,lat;lng,lat;...'"""
        return ';'.join(f"{point.lng},{point.lat}" for point in waypoints)

    def build_url(self, waypoints: Sequence[Coordinate]) -> str:
        return f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(waypoints)}"

    def fetch_routes(self, waypoints: Sequence[Coordinate], alternatives: bool = True,
                     timeout: Optional[float] = None) -> List[CandidateRoute]:
        """
        Query OSRM for routes through the given waypoints.

        Args:
            waypoints: Ordered waypoints (start, optional via-points, end)
            alternatives: Whether to ask OSRM for alternative routes
            timeout: Request timeout in seconds (defaults to config.provider_timeout_s)

        Returns:
            Candidate routes in OSRM order

        Raises:
            ValueError: If fewer than two waypoints are given
            RoutingProviderError: If OSRM cannot be reached or reports an error
        """
        if len(waypoints) < 2:
            raise ValueError("At least two waypoints are required to compute a route.")

        params = {
            'alternatives': str(self.config.osrm_alternatives) if alternatives else 'false',
            'geometries': 'geojson',
            'overview': 'full'
        }

        try:
            response = self.session.get(
                self.build_url(waypoints),
                params=params,
                timeout=timeout or self.config.provider_timeout_s
            )
        except requests.RequestException as e:
            raise RoutingProviderError(f"OSRM request failed: {e}") from e

        if not response.ok:
            raise RoutingProviderError(f"OSRM error: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingProviderError(f"OSRM returned invalid JSON: {e}") from e

        if data.get('code') != 'Ok':
            raise RoutingProviderError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")

        routes = [self._parse_route(route) for route in data.get('routes', [])]
        logger.debug(f"OSRM returned {len(routes)} routes for {len(waypoints)} waypoints")
        return routes

    @staticmethod
    def _parse_route(route: Dict[str, Any]) -> CandidateRoute:
        """Normalize an OSRM route object into a CandidateRoute."""
        try:
            coordinates = route['geometry']['coordinates']
            geometry = tuple(Coordinate(float(lat), float(lng)) for lng, lat in coordinates)
            return CandidateRoute(
                geometry=geometry,
                duration_seconds=float(route['duration']),
                distance_meters=float(route['distance'])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RoutingProviderError(f"Malformed OSRM route: {e}") from e
