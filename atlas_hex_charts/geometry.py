from __future__ import annotations

import logging

import pandas as pd

from .aggregation import ZONE_KEY
from .lattice import Lattice

logger = logging.getLogger(__name__)


def build_cell_geometry(lattice: Lattice, cells: pd.DataFrame) -> pd.DataFrame:
    """Attach lattice centroids to per-cell stats (indexed by ``cell_id``).

    Vertices are not stored per row: every cell shares the same six
    offsets from ``lattice.hexagon_offsets()``.
    """
    center_x, center_y = lattice.centers(cells.index.to_numpy())
    out = cells.copy()
    out["center_x"] = center_x
    out["center_y"] = center_y
    return out


def join_zone_stats(
    cells: pd.DataFrame,
    zones: pd.DataFrame,
    baseline: pd.DataFrame,
) -> pd.DataFrame:
    """Inner-join cells with their zone's subject and baseline statistics.

    Cells whose representative zone has no subject stats or no defined
    baseline rate are dropped, not reported as errors.
    """
    joined = (
        cells.reset_index()
        .merge(zones, on=ZONE_KEY, how="inner")
        .merge(baseline, on=ZONE_KEY, how="inner")
    )
    dropped = len(cells) - len(joined)
    if dropped:
        logger.debug("Dropped %d of %d cells without a zone baseline", dropped, len(cells))
    return joined.sort_values("cell_id", kind="mergesort").reset_index(drop=True)
