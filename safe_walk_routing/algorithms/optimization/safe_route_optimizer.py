"""
Safe route optimizer: candidate collection, safety scoring and ranking in one call.
"""

import logging
from typing import List, Optional

from ...config.routing_config import RoutingConfig
from ...data.grid_store import GridStore
from ...data.models import CandidateRoute, Coordinate, RankedResult
from ...mapping.cache.route_cache import RouteCache
from ...mapping.osrm_client import OSRMClient, RoutingProvider
from ..routing.route_augmenter import RouteAugmenter
from ..scoring.safety_scorer import SafetyScorer
from .route_ranker import RouteRanker

logger = logging.getLogger(__name__)


class SafeRouteOptimizer:
    """
    Finds walking routes and ranks them by safety and by duration.

    Candidate routes come from the route cache when possible, otherwise from
    the RouteAugmenter. Each candidate is scored against the shared GridStore
    and the scored set is ranked.
    """

    def __init__(self, grid_store: Optional[GridStore] = None,
                 provider: Optional[RoutingProvider] = None,
                 config: Optional[RoutingConfig] = None,
                 cache: Optional[RouteCache] = None):
        """
        Initialize safe route optimizer.

        Args:
            grid_store: Density grids (a store over the configured data dir if None)
            provider: Routing provider (an OSRMClient if None)
            config: Routing configuration parameters
            cache: Route cache; created when None and config.enable_cache is set
        """
        self.config = config or RoutingConfig()
        self.config.validate()

        self.grid_store = grid_store or GridStore(config=self.config)
        self.provider = provider or OSRMClient(self.config)
        if cache is None and self.config.enable_cache:
            cache = RouteCache(self.config)
        self.cache = cache

        self.augmenter = RouteAugmenter(self.provider, self.config)
        self.scorer = SafetyScorer(self.grid_store, self.config)
        self.ranker = RouteRanker(self.config)

        logger.info(f"SafeRouteOptimizer initialized (cache: {'enabled' if self.cache else 'disabled'})")

    def find_routes(self, start: Coordinate, end: Coordinate, night: bool = False) -> RankedResult:
        """
        Find, score and rank walking routes between two points.

        Args:
            start: Route start
            end: Route end
            night: Whether to use night-time safety weights

        Returns:
            RankedResult with scored routes and safest/fastest selections

        Raises:
            NoRouteFoundError: If the routing provider returns no route
        """
        logger.info(f"Finding routes from ({start.lat}, {start.lng}) to ({end.lat}, {end.lng}) "
                    f"[{'night' if night else 'day'}]")

        # Step 1: Candidate routes (cache or provider)
        candidates = self._get_candidates(start, end)

        # Step 2: Safety scoring
        scored = self.scorer.score_routes(candidates, night)

        # Step 3: Ranking
        result = self.ranker.rank(scored)

        logger.info(f"Ranked {len(result.routes)} routes: recommended={result.recommended}, "
                    f"fastest={result.fastest}")
        return result

    def _get_candidates(self, start: Coordinate, end: Coordinate) -> List[CandidateRoute]:
        if self.cache is not None:
            cached = self.cache.get(start.lat, start.lng, end.lat, end.lng)
            if cached:
                logger.debug("Using cached candidate routes")
                return cached

        candidates = self.augmenter.collect_routes(start, end, timeout=self.config.provider_timeout_s)

        if self.cache is not None and candidates:
            self.cache.set(start.lat, start.lng, end.lat, end.lng, candidates)

        return candidates

    def clear_cache(self) -> None:
        """Clear cached candidate routes."""
        if self.cache is not None:
            self.cache.clear()
