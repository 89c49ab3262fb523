"""
Scoring, augmentation and ranking algorithms.

This module contains:
- Safety scoring against crime and lighting grids
- Via-point route augmentation
- Route ranking and the end-to-end optimizer
"""

from .scoring.safety_scorer import SafetyScorer
from .routing.route_augmenter import RouteAugmenter
from .optimization.route_ranker import RouteRanker
from .optimization.safe_route_optimizer import SafeRouteOptimizer

__all__ = [
    'SafetyScorer',
    'RouteAugmenter',
    'RouteRanker',
    'SafeRouteOptimizer'
]
