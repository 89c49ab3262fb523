"""
In-memory TTL cache for routing provider results.

Keys are the four endpoint coordinates rounded to 4 decimal places (~11m),
so nearby repeat searches reuse the same candidate routes and the public
routing server sees less load.
"""

import logging
import math
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from ...config.routing_config import RoutingConfig
from ...data.models import CandidateRoute

logger = logging.getLogger(__name__)

CacheKey = Tuple[float, float, float, float]


def round_coordinate(value: float, precision: int = 4) -> float:
    """Round half up to `precision` decimal places."""
    factor = 10 ** precision
    return math.floor(value * factor + 0.5) / factor


class RouteCache:
    """Thread-safe TTL cache of candidate route lists."""

    def __init__(self, config: Optional[RoutingConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize route cache.

        Args:
            config: Routing configuration (cache_ttl_s, cache_precision)
            clock: Monotonic time source in seconds
        """
        self.config = config or RoutingConfig()
        self.ttl = self.config.cache_ttl_s
        self.precision = self.config.cache_precision
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, List[CandidateRoute]]] = {}
        self._lock = threading.Lock()

    def make_key(self, from_lat: float, from_lng: float, to_lat: float, to_lng: float) -> CacheKey:
        return tuple(round_coordinate(value, self.precision)
                     for value in (from_lat, from_lng, to_lat, to_lng))

    def get(self, from_lat: float, from_lng: float,
            to_lat: float, to_lng: float) -> Optional[List[CandidateRoute]]:
        """
        Look up cached routes.

        Returns:
            The cached routes, or None on a miss or an expired entry
        """
        key = self.make_key(from_lat, from_lng, to_lat, to_lng)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, routes = entry
            if self._clock() > expires_at:
                del self._entries[key]
                logger.debug(f"Route cache entry expired for {key}")
                return None

            return list(routes)

    def set(self, from_lat: float, from_lng: float, to_lat: float, to_lng: float,
            routes: List[CandidateRoute]) -> None:
        """Store routes for a from/to pair for the configured TTL."""
        key = self.make_key(from_lat, from_lng, to_lat, to_lng)
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl, list(routes))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
