"""Arc-length resampling of routes to a fixed number of points.

Each route is parameterised by cumulative haversine distance along its
segments and sampled at evenly spaced distances, so every resampled route has
the same length regardless of how densely the user drew it. Samples inside a
segment lie on the great circle between its endpoints.
"""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from route_clusters.config import DEFAULT_N_POINTS
from route_clusters.errors import DegenerateRouteError
from route_clusters.geometry import along_great_circle, segment_lengths_km

MIN_PATH_LENGTH_KM = 1e-9


def interpolate_route(route: np.ndarray, n_points: int = DEFAULT_N_POINTS) -> np.ndarray:
    """Resample a route to ``n_points`` points evenly spaced by arc length.

    Parameters
    ----------
    route:
        Array of shape (T, 2) with [lat, lng] rows, T >= 2.
    n_points:
        Number of output points, at least 2.

    Returns
    -------
    np.ndarray
        Array of shape (n_points, 2). The first and last rows are exactly the
        route's first and last points.

    Raises
    ------
    DegenerateRouteError
        If the route has fewer than two points or no measurable length.
    """

    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")

    route = np.asarray(route, dtype=float)
    if route.ndim != 2 or route.shape[0] < 2:
        raise DegenerateRouteError(f"Route needs at least two points, got shape {route.shape}.")

    seg_lengths = segment_lengths_km(route)
    total = float(seg_lengths.sum())
    if not np.isfinite(total) or total < MIN_PATH_LENGTH_KM:
        raise DegenerateRouteError(f"Route has no measurable arc length ({total!r} km).")

    cumulative = np.concatenate(([0.0], np.cumsum(seg_lengths)))
    targets = np.linspace(0.0, total, n_points)

    # Zero-length segments (repeated vertices) are skipped by searchsorted.
    seg_idx = np.searchsorted(cumulative, targets, side="right") - 1
    seg_idx = np.clip(seg_idx, 0, len(seg_lengths) - 1)
    seg_len = seg_lengths[seg_idx]
    offset = targets - cumulative[seg_idx]
    offset = np.clip(offset, 0.0, seg_len)

    resampled = along_great_circle(route[seg_idx], route[seg_idx + 1], offset)
    resampled[0] = route[0]
    resampled[-1] = route[-1]
    return resampled


def interpolate_routes(routes: Iterable[np.ndarray], n_points: int = DEFAULT_N_POINTS) -> List[np.ndarray]:
    """Resample every route in order."""

    return [interpolate_route(route, n_points) for route in routes]
