"""Exception hierarchy for route clustering."""

from __future__ import annotations


class RouteClusterError(Exception):
    """Base class for all route clustering errors."""


class InvalidRouteError(RouteClusterError, ValueError):
    """A point sequence cannot be turned into a route (bad shape or values)."""


class DegenerateRouteError(RouteClusterError, ValueError):
    """A route has fewer than two points or no measurable arc length."""


class GeometryComputationError(RouteClusterError, ValueError):
    """Distance or interpolation math produced an unusable result.

    Raised inside the similarity computation and always converted to a failed
    match at that boundary.
    """


class ConfigError(RouteClusterError, ValueError):
    """A clustering parameter is out of range."""


class RouteBudgetExceededError(RouteClusterError):
    """The route list is larger than the configured recompute budget."""
