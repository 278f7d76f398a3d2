"""Coverage similarity between two routes.

Coverage of A by B is the fraction of A's interpolated points that have at
least one of B's interpolated points within the match radius. The measure is
directional: a long route B can fully cover a short route A while A covers
only part of B.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from route_clusters.config import DEFAULT_MATCH_RADIUS_KM, DEFAULT_N_POINTS
from route_clusters.errors import DegenerateRouteError, GeometryComputationError
from route_clusters.geometry import pairwise_haversine_km
from route_clusters.interpolation import interpolate_route


@dataclass
class SimilarityDiagnostics:
    """Counters for similarity evaluations and suppressed failures."""

    evaluations: int = 0
    suppressed_failures: int = 0


def coverage_fraction(
    interp_a: np.ndarray,
    interp_b: np.ndarray,
    radius_km: float = DEFAULT_MATCH_RADIUS_KM,
) -> float:
    """Fraction of points in ``interp_a`` with a point of ``interp_b`` within ``radius_km``."""

    interp_a = np.asarray(interp_a, dtype=float)
    interp_b = np.asarray(interp_b, dtype=float)
    if interp_a.ndim != 2 or interp_b.ndim != 2 or interp_a.shape[1] != 2 or interp_b.shape[1] != 2:
        raise GeometryComputationError(f"Expected (N, 2) arrays, got {interp_a.shape} and {interp_b.shape}.")
    if len(interp_a) == 0 or len(interp_a) != len(interp_b):
        raise GeometryComputationError(
            f"Interpolated routes must be non-empty and equally sized, got {len(interp_a)} and {len(interp_b)}."
        )

    dist = pairwise_haversine_km(interp_a, interp_b)
    if not np.isfinite(dist).all():
        raise GeometryComputationError("Distance matrix contains non-finite values.")

    matched = (dist <= radius_km).any(axis=1)
    return float(np.count_nonzero(matched)) / len(interp_a)


def is_covered(
    interp_a: np.ndarray,
    interp_b: np.ndarray,
    threshold: float,
    radius_km: float = DEFAULT_MATCH_RADIUS_KM,
    diagnostics: Optional[SimilarityDiagnostics] = None,
) -> bool:
    """Fail-closed coverage test on already interpolated routes."""

    if diagnostics is not None:
        diagnostics.evaluations += 1
    try:
        return coverage_fraction(interp_a, interp_b, radius_km) >= threshold
    except (GeometryComputationError, ValueError, FloatingPointError) as exc:
        if diagnostics is not None:
            diagnostics.suppressed_failures += 1
        logging.warning("Similarity evaluation failed, treating routes as dissimilar: %s", exc)
        return False


def routes_are_similar(
    route_a: np.ndarray,
    route_b: np.ndarray,
    threshold: float,
    radius_km: float = DEFAULT_MATCH_RADIUS_KM,
    n_points: int = DEFAULT_N_POINTS,
    diagnostics: Optional[SimilarityDiagnostics] = None,
) -> bool:
    """Return True iff ``route_a`` is covered by ``route_b`` at ``threshold``.

    Both routes are interpolated to ``n_points`` first. Any failure while
    interpolating or measuring is logged, counted on ``diagnostics`` and
    reported as ``False``; it never propagates.
    """

    try:
        interp_a = interpolate_route(route_a, n_points)
        interp_b = interpolate_route(route_b, n_points)
    except (DegenerateRouteError, ValueError) as exc:
        if diagnostics is not None:
            diagnostics.evaluations += 1
            diagnostics.suppressed_failures += 1
        logging.warning("Similarity evaluation failed, treating routes as dissimilar: %s", exc)
        return False
    return is_covered(interp_a, interp_b, threshold, radius_km, diagnostics)
