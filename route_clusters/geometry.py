"""Geographic distance helpers on [lat, lng] arrays.

Distances use the haversine formula on a spherical Earth, a short-range
approximation that stays within sub-metre error over spans up to ~100 km.
Positions along a segment follow the great circle on the same sphere.
Routes are NumPy arrays shaped (T, 2) holding latitude and longitude in
degrees.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from pyproj import Geod
from sklearn.metrics.pairwise import haversine_distances

from route_clusters.errors import DegenerateRouteError, InvalidRouteError

EARTH_RADIUS_KM = 6371.0088

# Sphere matching the haversine radius, so geodesic and haversine lengths agree.
SPHERE = Geod(a=EARTH_RADIUS_KM * 1000.0, b=EARTH_RADIUS_KM * 1000.0)

Route = np.ndarray  # shape (T, 2), columns [lat, lng] in degrees


def as_route(points: Sequence[Sequence[float]] | np.ndarray) -> Route:
    """Validate a point sequence and return it as a read-only (T, 2) array."""

    try:
        arr = np.array(points, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidRouteError(f"Route points must be numeric (lat, lng) pairs: {exc}") from exc
    if arr.ndim >= 1 and arr.shape[0] == 0:
        raise DegenerateRouteError("Route has no points.")
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidRouteError(f"Route must have shape (T, 2), got {arr.shape}.")
    if not np.isfinite(arr).all():
        raise InvalidRouteError("Route contains NaN or infinite coordinates.")
    if (np.abs(arr[:, 0]) > 90.0).any():
        raise InvalidRouteError("Route latitude values must lie within [-90, 90].")
    arr.setflags(write=False)
    return arr


def haversine_km(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise great-circle distance in km between [lat, lng] arrays."""

    a_rad = np.radians(np.asarray(a, dtype=float))
    b_rad = np.radians(np.asarray(b, dtype=float))
    dlat = b_rad[..., 0] - a_rad[..., 0]
    dlng = b_rad[..., 1] - a_rad[..., 1]
    h = np.sin(dlat / 2.0) ** 2 + np.cos(a_rad[..., 0]) * np.cos(b_rad[..., 0]) * np.sin(dlng / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))


def pairwise_haversine_km(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Distance matrix of shape (len(a), len(b)) in km."""

    return haversine_distances(np.radians(a), np.radians(b)) * EARTH_RADIUS_KM


def segment_lengths_km(route: np.ndarray) -> np.ndarray:
    """Length in km of each consecutive segment of a route."""

    route = np.asarray(route, dtype=float)
    if len(route) < 2:
        return np.zeros(0, dtype=float)
    return haversine_km(route[:-1], route[1:])


def path_length_km(route: np.ndarray) -> float:
    """Total arc length in km along the route's great-circle segments."""

    return float(segment_lengths_km(route).sum())


def along_great_circle(start: np.ndarray, end: np.ndarray, offset_km: np.ndarray) -> np.ndarray:
    """Points ``offset_km`` from each ``start`` towards the matching ``end``.

    Longitudes come back normalised to [-180, 180], so segments crossing the
    antimeridian take the short way round.
    """

    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)
    azimuth, _, _ = SPHERE.inv(start[:, 1], start[:, 0], end[:, 1], end[:, 0])
    lng, lat, _ = SPHERE.fwd(start[:, 1], start[:, 0], azimuth, np.asarray(offset_km, dtype=float) * 1000.0)
    return np.column_stack([np.asarray(lat, dtype=float), np.asarray(lng, dtype=float)])
