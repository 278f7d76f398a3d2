"""Utilities for clustering user-drawn routes and summarising each cluster.

This package provides the building blocks to interpolate routes by arc length,
test one-directional coverage similarity, greedily partition a route list, and
compute a mean "median line" per cluster.
"""

from route_clusters.clustering import Cluster, build_clusters, cluster_labels
from route_clusters.config import ClusterConfig
from route_clusters.errors import (
    ConfigError,
    DegenerateRouteError,
    GeometryComputationError,
    InvalidRouteError,
    RouteBudgetExceededError,
    RouteClusterError,
)
from route_clusters.interpolation import interpolate_route
from route_clusters.median import compute_median_lines, median_line
from route_clusters.pipeline import ClusterResult, RouteStore, recompute
from route_clusters.similarity import SimilarityDiagnostics, coverage_fraction, routes_are_similar

__all__ = [
    "Cluster",
    "ClusterConfig",
    "ClusterResult",
    "ConfigError",
    "DegenerateRouteError",
    "GeometryComputationError",
    "InvalidRouteError",
    "RouteBudgetExceededError",
    "RouteClusterError",
    "RouteStore",
    "build_clusters",
    "cluster_labels",
    "compute_median_lines",
    "coverage_fraction",
    "interpolate_route",
    "median_line",
    "recompute",
    "routes_are_similar",
]
