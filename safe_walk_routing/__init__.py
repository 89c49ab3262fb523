"""
Safe Walk Routing

Finds walking routes between two points and ranks them by a safety score
built from crime-incident density and street-lighting density (weighted by
time of day), alongside the usual duration ranking.

## Quick Start

```python
from safe_walk_routing import SafeRouteOptimizer, RoutingConfig, Coordinate

config = RoutingConfig.from_env()
optimizer = SafeRouteOptimizer(config=config)

result = optimizer.find_routes(
    Coordinate(49.263, -123.168),  # West 12th & Trutch
    Coordinate(49.263, -123.150),  # West 12th & MacDonald
    night=True
)
best = result.routes[result.recommended]
```

## Main Components

- **GridStore**: Load-once crime and lighting density grids
- **SafetyScorer**: Route, segment and hotspot scoring
- **RouteAugmenter**: Via-point detours for route diversity
- **RouteRanker**: Safest and fastest selections
- **SafeRouteOptimizer**: Main interface tying the stages together

## Architecture

- `algorithms/`: Scoring, augmentation and ranking
- `mapping/`: Routing provider client and route cache
- `data/`: Data models, grid loading and distance utilities
- `config/`: Configuration management
"""

from .algorithms import SafetyScorer, RouteAugmenter, RouteRanker, SafeRouteOptimizer
from .config import RoutingConfig
from .data import Coordinate, CandidateRoute, ScoredRoute, RankedResult, GridStore, DensityGrid
from .mapping import OSRMClient, RouteCache
from .errors import SafeRoutingError, InvalidCoordinateError, RoutingProviderError, NoRouteFoundError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    'SafeRouteOptimizer',
    'RoutingConfig',

    # Pipeline stages
    'GridStore',
    'SafetyScorer',
    'RouteAugmenter',
    'RouteRanker',

    # Collaborators
    'OSRMClient',
    'RouteCache',

    # Data
    'Coordinate',
    'CandidateRoute',
    'ScoredRoute',
    'RankedResult',
    'DensityGrid',

    # Errors
    'SafeRoutingError',
    'InvalidCoordinateError',
    'RoutingProviderError',
    'NoRouteFoundError',

    '__version__'
]
