"""
Routing provider access and result caching.

This module contains:
- OSRM routing provider client
- In-memory TTL route cache
"""

from .osrm_client import OSRMClient, RoutingProvider
from .cache import RouteCache, round_coordinate

__all__ = [
    'OSRMClient',
    'RoutingProvider',
    'RouteCache',
    'round_coordinate'
]
