"""Optional plotting utilities for inspecting clusters.

Draws saved routes coloured by cluster with each cluster's median line on top,
using longitude on the x axis and latitude on the y axis.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from route_clusters.pipeline import ClusterResult


def plot_clusters(
    routes: Sequence[np.ndarray],
    result: ClusterResult,
    output_path: Path,
    show_routes: bool = True,
) -> None:
    """Plot routes by cluster and the median line of each cluster."""

    if not result.clusters:
        return

    fig, ax = plt.subplots(figsize=(7, 7))
    cmap = plt.get_cmap("tab10")
    for cluster_id, (cluster, median) in enumerate(zip(result.clusters, result.median_lines)):
        color = cmap(cluster_id % 10)
        if show_routes:
            for index in cluster.indices:
                route = routes[index]
                ax.plot(route[:, 1], route[:, 0], color=color, alpha=0.5, linewidth=1)
        if len(median):
            ax.plot(median[:, 1], median[:, 0], color="black", linewidth=2)
            ax.annotate(f"Median {cluster_id + 1}", (median[0, 1], median[0, 0]), fontsize=8)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"{len(routes)} routes, {result.cluster_count} clusters")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
