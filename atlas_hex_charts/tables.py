from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidEventError
from .models import SHOT_VALUES, BaselineRecord, Event, OutputRecord

SHOT_COLUMNS = ["loc_x", "loc_y", "made", "value", "zone_range", "zone_area"]
BASELINE_COLUMNS = ["zone_range", "zone_area", "attempts_made", "attempts_total"]

# stats.nba.com shot chart / league average column names
SHOT_COLUMN_ALIASES: Dict[str, str] = {
    "LOC_X": "loc_x",
    "LOC_Y": "loc_y",
    "SHOT_MADE_FLAG": "made",
    "shot_made_flag": "made",
    "shot_made_numeric": "made",
    "shot_value": "value",
    "SHOT_ZONE_RANGE": "zone_range",
    "shot_zone_range": "zone_range",
    "SHOT_ZONE_AREA": "zone_area",
    "shot_zone_area": "zone_area",
}
BASELINE_COLUMN_ALIASES: Dict[str, str] = {
    "SHOT_ZONE_RANGE": "zone_range",
    "shot_zone_range": "zone_range",
    "SHOT_ZONE_AREA": "zone_area",
    "shot_zone_area": "zone_area",
    "FGM": "attempts_made",
    "fgm": "attempts_made",
    "FGA": "attempts_total",
    "fga": "attempts_total",
}


def _require_columns(df: pd.DataFrame, required: Sequence[str], what: str) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise InvalidEventError(f"{what} frame is missing columns: {', '.join(missing)}")


def normalize_shot_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename stats-API style columns and derive ``value`` from shot type."""
    df = df.rename(columns=SHOT_COLUMN_ALIASES)
    if "value" not in df.columns:
        shot_type = next((c for c in ("SHOT_TYPE", "shot_type") if c in df.columns), None)
        if shot_type is not None:
            is_three = df[shot_type].astype(str).str.lower().str.startswith("3pt")
            df = df.assign(value=np.where(is_three, 3, 2))
    return df


def validate_shots_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Return the canonical shots frame, raising on schema problems."""
    _require_columns(df, SHOT_COLUMNS, "Shots")
    df = df[SHOT_COLUMNS].copy()
    coords = df[["loc_x", "loc_y"]].to_numpy(dtype=float)
    if not np.isfinite(coords).all():
        raise InvalidEventError("Shot locations must be finite")
    if not df["value"].isin(SHOT_VALUES).all():
        bad = sorted(set(df.loc[~df["value"].isin(SHOT_VALUES), "value"].tolist()))
        raise InvalidEventError(f"Shot values must be 2 or 3, got {bad}")
    if df["made"].isna().any():
        raise InvalidEventError("Shot outcomes must not be missing")
    if df[["zone_range", "zone_area"]].isna().any().any():
        raise InvalidEventError("Shot zone labels must not be missing")
    df["loc_x"] = df["loc_x"].astype(float)
    df["loc_y"] = df["loc_y"].astype(float)
    df["made"] = df["made"].astype(bool).astype(int)
    df["value"] = df["value"].astype(int)
    return df


def validate_baseline_frame(df: pd.DataFrame) -> pd.DataFrame:
    _require_columns(df, BASELINE_COLUMNS, "Baseline")
    df = df[BASELINE_COLUMNS].copy()
    counts = df[["attempts_made", "attempts_total"]]
    if counts.isna().any().any() or (counts < 0).any().any():
        raise InvalidEventError("Baseline counts must be non-negative integers")
    df["attempts_made"] = df["attempts_made"].astype(int)
    df["attempts_total"] = df["attempts_total"].astype(int)
    return df


def events_to_frame(events: Iterable[Event]) -> pd.DataFrame:
    rows = [
        {
            "loc_x": e.location[0],
            "loc_y": e.location[1],
            "made": int(e.made),
            "value": e.value,
            "zone_range": e.zone_range,
            "zone_area": e.zone_area,
        }
        for e in events
    ]
    return pd.DataFrame.from_records(rows, columns=SHOT_COLUMNS)


def baseline_to_frame(records: Iterable[BaselineRecord]) -> pd.DataFrame:
    rows = [
        {
            "zone_range": r.zone_range,
            "zone_area": r.zone_area,
            "attempts_made": r.attempts_made,
            "attempts_total": r.attempts_total,
        }
        for r in records
    ]
    return pd.DataFrame.from_records(rows, columns=BASELINE_COLUMNS)


def frame_to_events(df: pd.DataFrame) -> List[Event]:
    df = validate_shots_frame(normalize_shot_columns(df))
    return [
        Event(
            location=(float(r.loc_x), float(r.loc_y)),
            made=bool(r.made),
            value=int(r.value),
            zone_range=str(r.zone_range),
            zone_area=str(r.zone_area),
        )
        for r in df.itertuples()
    ]


def normalize_baseline_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns=BASELINE_COLUMN_ALIASES)


def frame_to_baseline(df: pd.DataFrame) -> List[BaselineRecord]:
    df = validate_baseline_frame(normalize_baseline_columns(df))
    return [
        BaselineRecord(
            zone_range=str(r.zone_range),
            zone_area=str(r.zone_area),
            attempts_made=int(r.attempts_made),
            attempts_total=int(r.attempts_total),
        )
        for r in df.itertuples()
    ]


def read_shots_csv(path: str | Path) -> List[Event]:
    """Load shots from a CSV with canonical or stats-API column names."""
    return frame_to_events(pd.read_csv(path))


def read_baseline_csv(path: str | Path) -> List[BaselineRecord]:
    """Load league zone averages (``FGM``/``FGA`` per zone) from CSV."""
    return frame_to_baseline(pd.read_csv(path))


_RECORD_METRICS = [
    "cell_attempts",
    "cell_success_rate",
    "cell_points_scored",
    "cell_points_per_attempt",
    "zone_range",
    "zone_area",
    "zone_attempts",
    "zone_success_rate",
    "zone_points_per_attempt",
    "baseline_success_rate",
    "radius_factor",
    "rate_differential",
    "bounded_success_rate",
    "bounded_points_per_attempt",
]


def records_to_frame(records: Sequence[OutputRecord], vertices: bool = False) -> pd.DataFrame:
    """Flatten output records for a drawing layer.

    With ``vertices=True`` each cell contributes six rows (one per hexagon
    vertex) carrying raw ``x``/``y`` and size-adjusted ``adj_x``/``adj_y``
    so the frame can be fed straight into a polygon plot grouped by
    ``hexbin_id``.
    """
    rows: List[dict] = []
    for rec in records:
        metrics = {name: getattr(rec, name) for name in _RECORD_METRICS}
        base = {"hexbin_id": rec.cell_id, "center_x": rec.centroid[0], "center_y": rec.centroid[1]}
        if not vertices:
            rows.append({**base, **metrics})
            continue
        for (x, y), (adj_x, adj_y) in zip(rec.polygon, rec.adjusted_polygon):
            rows.append({**base, "x": x, "y": y, "adj_x": adj_x, "adj_y": adj_y, **metrics})

    columns = ["hexbin_id", "center_x", "center_y"]
    if vertices:
        columns += ["x", "y", "adj_x", "adj_y"]
    return pd.DataFrame.from_records(rows, columns=columns + _RECORD_METRICS)


def write_output_csv(records: Sequence[OutputRecord], path: str | Path, vertices: bool = True) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records_to_frame(records, vertices=vertices).to_csv(path, index=False)
    return path
