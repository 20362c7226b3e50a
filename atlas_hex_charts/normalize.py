from __future__ import annotations

from typing import Tuple

import numpy as np
import pandas as pd

from .config import HexChartConfig
from .errors import ConfigError


def clamp(values, bounds: Tuple[float, float]):
    lo, hi = bounds
    if lo > hi:
        raise ConfigError(f"Lower clamp bound {lo} exceeds upper bound {hi}")
    return np.clip(values, lo, hi)


def radius_factors(attempts, min_radius_factor: float, max_attempts: int | None = None) -> np.ndarray:
    """Log-scaled hexagon size per cell.

    The busiest cell (``max_attempts``, default: the largest value in
    ``attempts``) gets 1.0; the factor never falls below
    ``min_radius_factor``.
    """
    attempts = np.asarray(attempts, dtype=float)
    if attempts.size == 0:
        return attempts
    if max_attempts is None:
        max_attempts = attempts.max()
    scale = np.log(attempts + 1.0) / np.log(max_attempts + 1.0)
    return min_radius_factor + (1.0 - min_radius_factor) * scale


def adjust_polygon(polygon, centroid, radius_factor: float) -> np.ndarray:
    """Shrink polygon vertices uniformly toward the centroid."""
    polygon = np.asarray(polygon, dtype=float)
    centroid = np.asarray(centroid, dtype=float)
    return centroid + radius_factor * (polygon - centroid)


def apply_display_metrics(frame: pd.DataFrame, config: HexChartConfig, max_attempts: int) -> pd.DataFrame:
    """Add ``radius_factor`` and the three clamped colour metrics."""
    out = frame.copy()
    out["radius_factor"] = radius_factors(
        out["cell_attempts"], config.min_radius_factor, max_attempts=max_attempts
    )
    out["rate_differential"] = clamp(
        out["zone_success_rate"] - out["baseline_success_rate"], config.rate_diff_bounds
    )
    out["bounded_success_rate"] = clamp(out["zone_success_rate"], config.rate_bounds)
    out["bounded_points_per_attempt"] = clamp(out["zone_points_per_attempt"], config.pps_bounds)
    return out
