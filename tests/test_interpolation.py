import numpy as np
import pytest

from route_clusters.errors import DegenerateRouteError
from route_clusters.geometry import haversine_km, path_length_km
from route_clusters.interpolation import interpolate_route, interpolate_routes


def test_interpolation_has_n_points_and_keeps_endpoints():
    route = np.array([[43.65, -79.39], [43.652, -79.385], [43.655, -79.38]])
    out = interpolate_route(route, n_points=100)
    assert out.shape == (100, 2)
    assert np.allclose(out[0], route[0])
    assert np.allclose(out[-1], route[-1])


def test_interpolation_spacing_is_uniform_across_corner():
    # Equator leg then meridian leg of equal length; the corner is sample 5.
    route = np.array([[0.0, 0.0], [0.0, 0.5], [0.5, 0.5]])
    out = interpolate_route(route, n_points=11)
    spacing = haversine_km(out[:-1], out[1:])
    assert np.allclose(spacing, path_length_km(route) / 10, rtol=1e-6)
    assert np.allclose(out[5], [0.0, 0.5])


def test_repeated_vertices_are_ignored():
    route = np.array([[0.0, 0.0], [0.0, 0.0], [0.0, 1.0], [0.0, 1.0]])
    out = interpolate_route(route, n_points=5)
    assert np.allclose(out[:, 1], [0.0, 0.25, 0.5, 0.75, 1.0])
    assert np.allclose(out[:, 0], 0.0)


def test_zero_length_route_raises():
    with pytest.raises(DegenerateRouteError):
        interpolate_route(np.array([[1.0, 1.0], [1.0, 1.0]]))


def test_single_point_route_raises():
    with pytest.raises(DegenerateRouteError):
        interpolate_route(np.array([[1.0, 1.0]]))


def test_n_points_below_two_raises():
    with pytest.raises(ValueError):
        interpolate_route(np.array([[0.0, 0.0], [0.0, 1.0]]), n_points=1)


def test_interpolate_routes_preserves_order():
    routes = [np.array([[0.0, 0.0], [0.0, 1.0]]), np.array([[1.0, 0.0], [1.0, 1.0]])]
    out = interpolate_routes(routes, n_points=10)
    assert len(out) == 2
    assert np.allclose(out[1][:, 0], 1.0)


def test_diagonal_spacing_is_uniform_at_high_latitude():
    route = np.array([[60.0, 0.0], [60.6, 1.2]])
    out = interpolate_route(route, n_points=100)
    spacing = haversine_km(out[:-1], out[1:])
    assert np.allclose(spacing, path_length_km(route) / 99, rtol=1e-6)


def test_route_crossing_antimeridian_takes_short_way():
    route = np.array([[0.0, 179.95], [0.0, -179.95]])
    out = interpolate_route(route, n_points=11)
    spacing = haversine_km(out[:-1], out[1:])
    assert path_length_km(route) == pytest.approx(11.12, abs=0.01)
    assert np.allclose(spacing, path_length_km(route) / 10, rtol=1e-6)
    assert abs(out[5, 1]) == pytest.approx(180.0)
    assert (np.abs(out[:, 1]) >= 179.95 - 1e-9).all()


def test_empty_route_is_degenerate():
    with pytest.raises(DegenerateRouteError):
        interpolate_route(np.empty((0, 2)))
