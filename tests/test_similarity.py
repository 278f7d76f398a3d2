import numpy as np
import pytest

from route_clusters.errors import GeometryComputationError
from route_clusters.interpolation import interpolate_route
from route_clusters.similarity import SimilarityDiagnostics, coverage_fraction, routes_are_similar

LINE = np.array([[0.0, 0.0], [0.0, 0.01]])
LINE_WITH_DETOUR = np.array([[0.0, 0.0], [0.0, 0.01], [0.05, 0.01]])


def test_route_is_similar_to_itself():
    route = np.array([[43.65, -79.39], [43.652, -79.385], [43.655, -79.38]])
    assert routes_are_similar(route, route, threshold=1.0)


def test_similarity_is_not_symmetric():
    a = interpolate_route(LINE)
    b = interpolate_route(LINE_WITH_DETOUR)
    assert coverage_fraction(a, b) == 1.0
    assert coverage_fraction(b, a) < 1.0
    assert routes_are_similar(LINE, LINE_WITH_DETOUR, threshold=0.5)
    assert not routes_are_similar(LINE_WITH_DETOUR, LINE, threshold=0.5)


def test_small_shift_is_similar():
    a = np.array([[0.0, 0.0], [0.0, 1.0]])
    b = np.array([[0.0, 0.0005], [0.0, 1.0005]])
    assert coverage_fraction(interpolate_route(a), interpolate_route(b), radius_km=0.2) >= 0.5
    assert routes_are_similar(a, b, threshold=0.5, radius_km=0.2, n_points=100)


def test_parallel_routes_far_apart_have_zero_coverage():
    a = np.array([[0.0, 0.0], [0.0, 1.0]])
    b = np.array([[1.0, 0.0], [1.0, 1.0]])
    assert coverage_fraction(interpolate_route(a), interpolate_route(b)) == 0.0
    assert not routes_are_similar(a, b, threshold=0.5)


def test_threshold_zero_always_passes():
    a = np.array([[0.0, 0.0], [0.0, 1.0]])
    b = np.array([[1.0, 0.0], [1.0, 1.0]])
    assert routes_are_similar(a, b, threshold=0.0)


def test_unequal_lengths_raise():
    a = interpolate_route(LINE, n_points=10)
    b = interpolate_route(LINE, n_points=20)
    with pytest.raises(GeometryComputationError):
        coverage_fraction(a, b)


def test_degenerate_route_fails_closed_and_is_counted():
    diagnostics = SimilarityDiagnostics()
    degenerate = np.array([[0.0, 0.0], [0.0, 0.0]])
    assert not routes_are_similar(degenerate, LINE, threshold=0.0, diagnostics=diagnostics)
    assert diagnostics.suppressed_failures == 1
    assert diagnostics.evaluations == 1
