"""
Caching of routing provider results.
"""

from .route_cache import RouteCache, round_coordinate

__all__ = [
    'RouteCache',
    'round_coordinate'
]
