"""
Candidate route collection.
"""

from .route_augmenter import RouteAugmenter

__all__ = [
    'RouteAugmenter'
]
