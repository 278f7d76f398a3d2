"""Greedy, order-sensitive clustering of routes.

Routes are visited in input order and compared against the representative
(first member) of each existing cluster in creation order. A route joins the
first cluster whose representative covers it and otherwise starts a new
cluster. Reordering the input can change the partition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from route_clusters.config import ClusterConfig
from route_clusters.errors import DegenerateRouteError
from route_clusters.interpolation import interpolate_route
from route_clusters.similarity import SimilarityDiagnostics, is_covered


@dataclass
class Cluster:
    """Routes assigned together, with their positions in the route list.

    The first member is the representative used for every similarity test.
    """

    routes: List[np.ndarray] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    @property
    def representative(self) -> np.ndarray:
        return self.routes[0]

    def add(self, index: int, route: np.ndarray) -> None:
        self.indices.append(index)
        self.routes.append(route)

    def __len__(self) -> int:
        return len(self.routes)


def _safe_interpolate(index: int, route: np.ndarray, n_points: int) -> Optional[np.ndarray]:
    try:
        return interpolate_route(route, n_points)
    except (DegenerateRouteError, ValueError) as exc:
        logging.warning("Route %d cannot be interpolated; it will not match any cluster: %s", index, exc)
        return None


def build_clusters(
    routes: Sequence[np.ndarray],
    config: ClusterConfig | None = None,
    diagnostics: SimilarityDiagnostics | None = None,
) -> List[Cluster]:
    """Partition ``routes`` into clusters, in creation order.

    Each route is interpolated once; the partition is identical to comparing
    freshly interpolated routes pair by pair.
    """

    config = config or ClusterConfig()
    if diagnostics is None:
        diagnostics = SimilarityDiagnostics()

    interpolated = [_safe_interpolate(i, route, config.n_points) for i, route in enumerate(routes)]
    clusters: List[Cluster] = []
    for index, route in enumerate(routes):
        candidate = interpolated[index]
        assigned = False
        for cluster in clusters:
            rep = interpolated[cluster.indices[0]]
            if candidate is None or rep is None:
                diagnostics.evaluations += 1
                diagnostics.suppressed_failures += 1
                continue
            if is_covered(candidate, rep, config.threshold, config.match_radius_km, diagnostics):
                cluster.add(index, route)
                assigned = True
                break
        if not assigned:
            clusters.append(Cluster(routes=[route], indices=[index]))

    logging.info(
        "Clustered %d routes into %d clusters (%d similarity tests, %d suppressed failures)",
        len(routes),
        len(clusters),
        diagnostics.evaluations,
        diagnostics.suppressed_failures,
    )
    return clusters


def cluster_labels(clusters: Sequence[Cluster], n_routes: int) -> np.ndarray:
    """Label each route index with the position of its cluster."""

    labels = np.full(n_routes, -1, dtype=int)
    for cluster_id, cluster in enumerate(clusters):
        labels[cluster.indices] = cluster_id
    return labels
