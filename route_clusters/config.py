"""Configuration helpers for route clustering.

Provides YAML loading, nested lookups with defaults, and the typed
:class:`ClusterConfig` carrying the tunables of a recompute.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from route_clusters.errors import ConfigError

DEFAULT_N_POINTS = 100
DEFAULT_MATCH_RADIUS_KM = 0.2
DEFAULT_THRESHOLD = 0.5


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load a YAML configuration file."""

    with Path(path).open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def get_nested(config: Dict[str, Any], keys: list[str], default: Any) -> Any:
    """Retrieve a nested value from a config dict with a default."""

    current: Any = config
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


@dataclass(frozen=True)
class ClusterConfig:
    """Tunables for interpolation, similarity and clustering.

    ``max_routes`` caps the route list size accepted by a recompute, since the
    full pass is quadratic in both the route count and ``n_points``. ``None``
    disables the cap.
    """

    n_points: int = DEFAULT_N_POINTS
    match_radius_km: float = DEFAULT_MATCH_RADIUS_KM
    threshold: float = DEFAULT_THRESHOLD
    max_routes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.n_points < 2:
            raise ConfigError(f"n_points must be at least 2, got {self.n_points}")
        if not self.match_radius_km > 0:
            raise ConfigError(f"match_radius_km must be positive, got {self.match_radius_km}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(f"threshold must lie in [0, 1], got {self.threshold}")
        if self.max_routes is not None and self.max_routes < 1:
            raise ConfigError(f"max_routes must be positive or None, got {self.max_routes}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "ClusterConfig":
        """Build a config from the ``clustering`` section of a loaded YAML file."""

        section = cfg.get("clustering", {}) or {}
        max_routes = section.get("max_routes")
        try:
            return cls(
                n_points=int(section.get("n_points", DEFAULT_N_POINTS)),
                match_radius_km=float(section.get("match_radius_km", DEFAULT_MATCH_RADIUS_KM)),
                threshold=float(section.get("threshold", DEFAULT_THRESHOLD)),
                max_routes=int(max_routes) if max_routes is not None else None,
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, ConfigError):
                raise
            raise ConfigError(f"Invalid clustering config: {exc}") from exc
