"""Input/output helpers for route clustering.

Covers loading route lists from CSV or JSON, required-column checks, the
per-route assignment table, and CSV saving.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from route_clusters.geometry import as_route

REQUIRED_COLUMNS: List[str] = [
    "route_id",
    "latitude",
    "longitude",
]


def ensure_required_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Validate that the DataFrame contains the required columns."""

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    return df


def routes_from_frame(df: pd.DataFrame) -> Tuple[List[str], List[np.ndarray]]:
    """
    Split a point table into routes, ordered by first appearance of route_id.
    Points within a route follow the optional 'seq' column, else file order.
    """

    df = ensure_required_columns(df)
    route_ids: List[str] = []
    routes: List[np.ndarray] = []
    for route_id, group in df.groupby("route_id", sort=False):
        if "seq" in group.columns:
            group = group.sort_values("seq", kind="stable")
        route_ids.append(str(route_id))
        routes.append(as_route(group[["latitude", "longitude"]].to_numpy(dtype=float)))
    return route_ids, routes


def load_routes_csv(path: str | Path) -> Tuple[List[str], List[np.ndarray]]:
    """Load routes from a CSV of (route_id, [seq,] latitude, longitude) rows."""

    df = pd.read_csv(path)
    route_ids, routes = routes_from_frame(df)
    logging.info("Loaded %d routes (%d points) from %s", len(routes), len(df), path)
    return route_ids, routes


def load_routes_json(path: str | Path) -> Tuple[List[str], List[np.ndarray]]:
    """Load routes from a JSON array of routes, each an array of [lat, lng] pairs."""

    with Path(path).open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of routes in {path}")

    routes = [as_route(points) for points in data]
    route_ids = [str(i) for i in range(len(routes))]
    logging.info("Loaded %d routes from %s", len(routes), path)
    return route_ids, routes


def load_routes(path: str | Path) -> Tuple[List[str], List[np.ndarray]]:
    """Dispatch on file suffix (.json or .csv)."""

    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_routes_json(path)
    if suffix == ".csv":
        return load_routes_csv(path)
    raise ValueError(f"Unsupported route file type: {suffix}")


def clusters_frame(route_ids: Sequence[str], labels: np.ndarray) -> pd.DataFrame:
    """One row per route with its cluster_id and whether it is the representative."""

    df = pd.DataFrame({"route_id": list(route_ids), "cluster_id": np.asarray(labels, dtype=int)})
    df["is_representative"] = ~df.duplicated(subset=["cluster_id"], keep="first")
    return df


def save_dataframe(df: pd.DataFrame, path: str | Path) -> None:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info("Saved %d rows to %s", len(df), path)
