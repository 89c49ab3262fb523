"""
Route ranking and end-to-end optimization.
"""

from .route_ranker import RouteRanker
from .safe_route_optimizer import SafeRouteOptimizer

__all__ = [
    'RouteRanker',
    'SafeRouteOptimizer'
]
