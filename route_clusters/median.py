"""Median line computation from clustered routes.

The median line of a cluster is the per-step arithmetic mean of latitude and
longitude across its members, each interpolated to the same number of points.
It is a mean trajectory rather than a geometric median, so a single outlying
member pulls the whole line.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
import pandas as pd

from route_clusters.clustering import Cluster
from route_clusters.config import DEFAULT_N_POINTS
from route_clusters.errors import DegenerateRouteError
from route_clusters.interpolation import interpolate_route


def median_line(routes: Sequence[np.ndarray], n_points: int = DEFAULT_N_POINTS) -> np.ndarray:
    """Mean [lat, lng] per interpolation step; an empty cluster yields shape (0, 2)."""

    if len(routes) == 0:
        return np.empty((0, 2), dtype=float)

    stacked = np.stack([interpolate_route(route, n_points) for route in routes])
    # Longitudes are unwrapped against the first member before averaging.
    ref_lng = stacked[0, :, 1]
    lng = stacked[:, :, 1]
    lng = np.where(lng - ref_lng > 180.0, lng - 360.0, lng)
    lng = np.where(lng - ref_lng < -180.0, lng + 360.0, lng)

    mean_lng = lng.mean(axis=0)
    mean_lng = np.where(mean_lng > 180.0, mean_lng - 360.0, mean_lng)
    mean_lng = np.where(mean_lng < -180.0, mean_lng + 360.0, mean_lng)
    return np.column_stack([stacked[:, :, 0].mean(axis=0), mean_lng])


def compute_median_lines(clusters: Sequence[Cluster], n_points: int = DEFAULT_N_POINTS) -> List[np.ndarray]:
    """One median line per cluster; clusters with an unusable member get an empty line."""

    medians: List[np.ndarray] = []
    for cluster_id, cluster in enumerate(clusters):
        try:
            medians.append(median_line(cluster.routes, n_points))
        except DegenerateRouteError as exc:
            logging.warning("Skipping median line for cluster %d: %s", cluster_id, exc)
            medians.append(np.empty((0, 2), dtype=float))
    return medians


def median_lines_frame(clusters: Sequence[Cluster], medians: Sequence[np.ndarray]) -> pd.DataFrame:
    """
    Flatten median lines into rows of (cluster_id, step, latitude, longitude, n_routes).
    """

    rows = []
    for cluster_id, (cluster, line) in enumerate(zip(clusters, medians)):
        for step, (lat, lng) in enumerate(line):
            rows.append(
                {
                    "cluster_id": cluster_id,
                    "step": step,
                    "latitude": float(lat),
                    "longitude": float(lng),
                    "n_routes": len(cluster),
                }
            )

    return pd.DataFrame(rows, columns=["cluster_id", "step", "latitude", "longitude", "n_routes"])
