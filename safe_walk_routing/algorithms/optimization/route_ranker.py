"""
Ranking of scored routes by safety and by duration.
"""

from typing import List, Optional, Sequence

from ...config.routing_config import RoutingConfig
from ...data.models import RankedResult, ScoredRoute
from ..scoring.safety_scorer import round_half_up


class RouteRanker:
    """Orders scored routes and selects the top safest and fastest options."""

    def __init__(self, config: Optional[RoutingConfig] = None):
        self.config = config or RoutingConfig()

    def safest_options(self, routes: Sequence[ScoredRoute]) -> List[int]:
        """Indices by safety score, highest first (ties keep input order)."""
        order = sorted(range(len(routes)), key=lambda i: -routes[i].safety_score)
        return order[:self.config.top_n_options]

    def fastest_options(self, routes: Sequence[ScoredRoute]) -> List[int]:
        """Indices by whole-second duration, shortest first (ties keep input order)."""
        order = sorted(range(len(routes)), key=lambda i: round_half_up(routes[i].duration_seconds))
        return order[:self.config.top_n_options]

    def rank(self, routes: Sequence[ScoredRoute]) -> RankedResult:
        """
        Build the ranked result for a set of scored routes.

        Args:
            routes: Scored routes in provider order

        Returns:
            RankedResult; with no routes both selections are empty and the
            recommended/fastest indices default to 0
        """
        safest = self.safest_options(routes)
        fastest = self.fastest_options(routes)

        return RankedResult(
            routes=tuple(routes),
            recommended=safest[0] if safest else 0,
            fastest=fastest[0] if fastest else 0,
            safest_options=tuple(safest),
            fastest_options=tuple(fastest)
        )
