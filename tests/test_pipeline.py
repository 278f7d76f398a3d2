import threading

import numpy as np
import pytest

from route_clusters import pipeline
from route_clusters.config import ClusterConfig
from route_clusters.errors import DegenerateRouteError, InvalidRouteError, RouteBudgetExceededError
from route_clusters.pipeline import RouteStore, recompute

A = [[0.0, 0.0], [0.0, 1.0]]
A_SHIFTED = [[0.0, 0.0005], [0.0, 1.0005]]
B = [[1.0, 0.0], [1.0, 1.0]]


def test_recompute_returns_clusters_and_medians():
    routes = [np.array(A), np.array(A_SHIFTED), np.array(B)]
    result = recompute(routes, ClusterConfig(n_points=20), version=3)
    assert result.version == 3
    assert result.cluster_count == 2
    assert len(result.median_lines) == 2
    assert all(line.shape == (20, 2) for line in result.median_lines)
    assert np.allclose(result.median_lines[0][:, 1], np.linspace(0.00025, 1.00025, 20))


def test_recompute_reports_suppressed_failures():
    routes = [np.array(A), np.array([[0.0, 0.0], [0.0, 0.0]])]
    result = recompute(routes)
    assert result.cluster_count == 2
    assert result.suppressed_failures == 1
    assert result.median_lines[1].shape == (0, 2)


def test_recompute_enforces_route_budget():
    routes = [np.array(A), np.array(B)]
    with pytest.raises(RouteBudgetExceededError):
        recompute(routes, ClusterConfig(max_routes=1))


def test_store_recomputes_on_every_append():
    store = RouteStore(ClusterConfig(n_points=20))
    assert store.version == 0
    assert store.clusters == []

    store.add_route(A)
    assert store.version == 1
    assert len(store.clusters) == 1

    store.add_route(B)
    store.add_route(A_SHIFTED)
    routes, result = store.snapshot()
    assert len(routes) == 3
    assert result.version == 3
    assert [c.indices for c in result.clusters] == [[0, 2], [1]]
    assert len(store.median_lines) == 2


def test_store_routes_are_read_only():
    store = RouteStore()
    store.add_route(A)
    with pytest.raises(ValueError):
        store.routes[0][0, 0] = 5.0


def test_store_rejects_bad_routes_without_publishing():
    store = RouteStore()
    with pytest.raises(DegenerateRouteError):
        store.add_route([[0.0, 0.0]])
    with pytest.raises(InvalidRouteError):
        store.add_route([[0.0, float("nan")], [0.0, 1.0]])
    assert store.version == 0
    assert store.routes == ()


def test_store_keeps_previous_generation_when_budget_exceeded():
    store = RouteStore(ClusterConfig(max_routes=1))
    store.add_route(A)
    with pytest.raises(RouteBudgetExceededError):
        store.add_route(B)
    assert len(store.routes) == 1
    assert store.version == 1


def test_store_rejects_empty_route_as_degenerate():
    store = RouteStore()
    with pytest.raises(DegenerateRouteError):
        store.add_route([])
    assert store.version == 0


def test_readers_see_previous_generation_during_recompute(monkeypatch):
    store = RouteStore(ClusterConfig(n_points=20))
    store.add_route(A)
    seen = []
    real_recompute = pipeline.recompute

    def recompute_with_reader(routes, config, version):
        reader = threading.Thread(target=lambda: seen.append(store.snapshot()))
        reader.start()
        reader.join(timeout=5)
        return real_recompute(routes, config, version=version)

    monkeypatch.setattr(pipeline, "recompute", recompute_with_reader)
    store.add_route(B)

    assert len(seen) == 1
    routes, result = seen[0]
    assert len(routes) == 1
    assert result.version == 1
    assert store.version == 2
    assert len(store.routes) == 2
