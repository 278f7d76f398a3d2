"""CLI entry point for the route clustering pipeline.

Loads a saved route list, clusters it, computes median lines, and writes the
per-route assignments and median tracks, with optional plotting.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict

from route_clusters.clustering import cluster_labels
from route_clusters.config import ClusterConfig, get_nested, load_config
from route_clusters.io import clusters_frame, load_routes, save_dataframe
from route_clusters.median import median_lines_frame
from route_clusters.pipeline import recompute


def configure_logging(log_cfg: Dict[str, object]) -> None:
    """Configure root logger with both file and console handlers."""

    log_dir = Path(log_cfg.get("dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    filename = log_cfg.get("filename", "route_clusters.log")
    log_path = log_dir / filename
    level_name = str(log_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s - %(levelname)s - %(message)s"
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt))
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(fmt))

    root.addHandler(file_handler)
    root.addHandler(stream_handler)
    root.info("Logging to %s (level=%s)", log_path, level_name)


def main(config_path: str = "config/route_clusters.yaml") -> None:
    cfg = load_config(config_path)

    configure_logging(get_nested(cfg, ["logging"], {}) or {})
    cluster_cfg = ClusterConfig.from_dict(cfg)
    logging.info(
        "Clustering with n_points=%d, match_radius_km=%.3f, threshold=%.2f",
        cluster_cfg.n_points,
        cluster_cfg.match_radius_km,
        cluster_cfg.threshold,
    )

    routes_path = get_nested(cfg, ["input", "routes"], "data/routes.json")
    route_ids, routes = load_routes(routes_path)
    if not routes:
        logging.warning("No routes found in %s; exiting.", routes_path)
        return

    result = recompute(routes, cluster_cfg, version=1)

    output_dir = Path(get_nested(cfg, ["output", "dir"], "output"))
    exp_name = str(get_nested(cfg, ["output", "experiment_name"], "routes"))
    logging.info("Using output directory %s (experiment=%s)", output_dir, exp_name)

    labels = cluster_labels(result.clusters, len(routes))
    if get_nested(cfg, ["output", "save_assignments"], True):
        save_dataframe(clusters_frame(route_ids, labels), output_dir / f"clusters_{exp_name}.csv")

    medians = median_lines_frame(result.clusters, result.median_lines)
    if get_nested(cfg, ["output", "save_medians"], True) and not medians.empty:
        save_dataframe(medians, output_dir / f"median_lines_{exp_name}.csv")

    if get_nested(cfg, ["output", "save_plots"], False):
        import matplotlib

        matplotlib.use("Agg")
        from route_clusters.plots import plot_clusters

        plot_clusters(routes, result, output_dir / f"clusters_{exp_name}.png")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Route clustering pipeline.")
    parser.add_argument(
        "-c",
        "--config",
        default="config/route_clusters.yaml",
        help="Path to YAML config file.",
    )
    args = parser.parse_args()
    main(args.config)
