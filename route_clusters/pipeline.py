"""Full recompute of clusters and median lines from a route list.

``recompute`` is a pure function of a route list snapshot and a config.
``RouteStore`` is the holder a collecting layer can use instead: it appends
routes and republishes the result synchronously, swapping routes and result
together so a reader never sees them from different generations.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from route_clusters.clustering import Cluster, build_clusters
from route_clusters.config import ClusterConfig
from route_clusters.errors import DegenerateRouteError, RouteBudgetExceededError
from route_clusters.geometry import as_route
from route_clusters.median import compute_median_lines
from route_clusters.similarity import SimilarityDiagnostics


@dataclass(frozen=True)
class ClusterResult:
    """Clusters and median lines computed from one route list version."""

    clusters: Tuple[Cluster, ...] = ()
    median_lines: Tuple[np.ndarray, ...] = ()
    version: int = 0
    suppressed_failures: int = 0
    evaluations: int = 0

    @property
    def cluster_count(self) -> int:
        return len(self.clusters)


def recompute(
    routes: Sequence[np.ndarray],
    config: ClusterConfig | None = None,
    version: int = 0,
) -> ClusterResult:
    """Cluster ``routes`` and compute a median line per cluster."""

    config = config or ClusterConfig()
    snapshot = tuple(routes)
    if config.max_routes is not None and len(snapshot) > config.max_routes:
        raise RouteBudgetExceededError(
            f"{len(snapshot)} routes exceed the recompute budget of {config.max_routes}."
        )

    started = time.perf_counter()
    diagnostics = SimilarityDiagnostics()
    clusters = build_clusters(snapshot, config, diagnostics)
    medians = compute_median_lines(clusters, config.n_points)
    elapsed = time.perf_counter() - started

    if diagnostics.suppressed_failures:
        logging.warning(
            "Version %d: %d similarity evaluations failed and were treated as non-matches",
            version,
            diagnostics.suppressed_failures,
        )
    logging.info(
        "Recomputed version %d: %d routes, %d clusters in %.3fs",
        version,
        len(snapshot),
        len(clusters),
        elapsed,
    )
    return ClusterResult(
        clusters=tuple(clusters),
        median_lines=tuple(medians),
        version=version,
        suppressed_failures=diagnostics.suppressed_failures,
        evaluations=diagnostics.evaluations,
    )


@dataclass
class RouteStore:
    """Append-only route list with its published clustering result."""

    config: ClusterConfig = field(default_factory=ClusterConfig)
    _routes: Tuple[np.ndarray, ...] = field(default=(), init=False, repr=False)
    _result: ClusterResult = field(default_factory=ClusterResult, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _write_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def add_route(self, points) -> ClusterResult:
        """Validate and append a route, then recompute before returning."""

        route = as_route(points)
        if len(route) < 2:
            raise DegenerateRouteError(f"A route needs at least two points, got {len(route)}.")

        # Appends are serialised; readers only wait for the snapshot and the swap.
        with self._write_lock:
            current_routes, current_result = self.snapshot()
            routes = current_routes + (route,)
            result = recompute(routes, self.config, version=current_result.version + 1)
            with self._lock:
                self._routes, self._result = routes, result
        return result

    def snapshot(self) -> Tuple[Tuple[np.ndarray, ...], ClusterResult]:
        """Routes and result of the same generation."""

        with self._lock:
            return self._routes, self._result

    @property
    def routes(self) -> Tuple[np.ndarray, ...]:
        return self.snapshot()[0]

    @property
    def result(self) -> ClusterResult:
        return self.snapshot()[1]

    @property
    def version(self) -> int:
        return self.result.version

    @property
    def clusters(self) -> List[Cluster]:
        return list(self.result.clusters)

    @property
    def median_lines(self) -> List[np.ndarray]:
        return list(self.result.median_lines)
