"""
Exceptions raised by the safe walk routing system.

Grid data problems are never raised; they put the GridStore into
degraded mode instead (see ``GridStore.data_unavailable``).
"""


class SafeRoutingError(Exception):
    """Base class for safe walk routing errors."""
    pass


class InvalidCoordinateError(SafeRoutingError, ValueError):
    """A coordinate could not be parsed or is out of range."""
    pass


class RoutingProviderError(SafeRoutingError):
    """The routing provider failed to answer a query."""
    pass


class NoRouteFoundError(SafeRoutingError):
    """The direct routing query failed or returned no routes."""

    def __init__(self, message: str = "No route found"):
        super().__init__(message)
