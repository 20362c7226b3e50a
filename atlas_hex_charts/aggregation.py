"""Cell-level and zone-level shot statistics.

All reductions are counts, sums and means, so they do not depend on the
order of the input rows. The only choice that could depend on order, the
representative zone of a cell, is resolved by an explicit sort.
"""
from __future__ import annotations

import logging

import pandas as pd

logger = logging.getLogger(__name__)

ZONE_KEY = ["zone_range", "zone_area"]


def _shot_summary(grouped, prefix: str) -> pd.DataFrame:
    out = grouped.agg(
        attempts=("made", "size"),
        success_rate=("made", "mean"),
        points_scored=("points", "sum"),
        points_per_attempt=("points", "mean"),
    )
    out["attempts"] = out["attempts"].astype(int)
    out["points_scored"] = out["points_scored"].astype(float)
    return out.add_prefix(prefix)


def with_points(shots: pd.DataFrame) -> pd.DataFrame:
    """Add the ``points`` column (``made * value``) used by every summary."""
    return shots.assign(points=shots["made"] * shots["value"])


def representative_zones(shots: pd.DataFrame) -> pd.DataFrame:
    """Most common zone key per cell.

    Ties on the number of shots go to the lexicographically smallest
    ``(zone_range, zone_area)`` so the winner never depends on row order.
    """
    counts = (
        shots.groupby(["cell_id"] + ZONE_KEY, sort=True)
        .size()
        .reset_index(name="zone_shots")
    )
    counts = counts.sort_values(
        ["cell_id", "zone_shots"] + ZONE_KEY,
        ascending=[True, False, True, True],
        kind="mergesort",
    )
    winners = counts.drop_duplicates("cell_id", keep="first")
    return winners.set_index("cell_id")[ZONE_KEY]


def cell_stats(shots: pd.DataFrame) -> pd.DataFrame:
    """Per-cell statistics plus the cell's representative zone.

    ``shots`` needs ``cell_id``, ``made``, ``points`` and the zone columns.
    Only occupied cells appear, indexed by ``cell_id``.
    """
    stats = _shot_summary(shots.groupby("cell_id", sort=True), "cell_")
    return stats.join(representative_zones(shots), how="inner")


def zone_stats(shots: pd.DataFrame) -> pd.DataFrame:
    """Per-zone statistics over the whole shot population."""
    stats = _shot_summary(shots.groupby(ZONE_KEY, sort=True), "zone_")
    return stats.reset_index()


def has_baseline(baseline: pd.DataFrame) -> pd.Series:
    """Zones whose baseline success rate is defined (non-zero attempts)."""
    return baseline["baseline_attempts_total"] > 0


def baseline_zone_stats(baseline: pd.DataFrame) -> pd.DataFrame:
    """League success rate per zone, ``sum(made) / sum(total)``.

    Zones with zero total attempts have no defined rate and are left out;
    cells mapping to them are dropped later by the zone join.
    """
    summed = (
        baseline.groupby(ZONE_KEY, sort=True)[["attempts_made", "attempts_total"]]
        .sum()
        .add_prefix("baseline_")
        .reset_index()
    )
    defined = has_baseline(summed)
    if not defined.all():
        logger.debug(
            "Dropping %d baseline zones with zero attempts: %s",
            int((~defined).sum()),
            summed.loc[~defined, ZONE_KEY].to_records(index=False).tolist(),
        )
    summed = summed[defined].copy()
    summed["baseline_success_rate"] = (
        summed["baseline_attempts_made"] / summed["baseline_attempts_total"]
    )
    return summed
