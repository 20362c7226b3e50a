from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

import numpy as np
import pandas as pd

from .aggregation import baseline_zone_stats, cell_stats, with_points, zone_stats
from .config import HexChartConfig, load_config
from .errors import EmptyInputError
from .geometry import build_cell_geometry, join_zone_stats
from .lattice import Lattice, build_lattice
from .models import BaselineRecord, Event, OutputRecord
from .normalize import adjust_polygon, apply_display_metrics
from .tables import (
    baseline_to_frame,
    events_to_frame,
    normalize_baseline_columns,
    normalize_shot_columns,
    read_baseline_csv,
    read_shots_csv,
    validate_baseline_frame,
    validate_shots_frame,
    write_output_csv,
)

logger = logging.getLogger(__name__)


def _as_points(vertices: np.ndarray):
    return tuple((float(x), float(y)) for x, y in vertices)


def build_records(joined: pd.DataFrame, lattice: Lattice) -> List[OutputRecord]:
    """Turn the joined, normalised cell frame into immutable records."""
    offsets = lattice.hexagon_offsets()
    records: List[OutputRecord] = []
    for row in joined.itertuples(index=False):
        centroid = np.array([row.center_x, row.center_y])
        polygon = centroid + offsets
        adjusted = adjust_polygon(polygon, centroid, row.radius_factor)
        records.append(
            OutputRecord(
                cell_id=int(row.cell_id),
                centroid=(float(row.center_x), float(row.center_y)),
                polygon=_as_points(polygon),
                adjusted_polygon=_as_points(adjusted),
                cell_attempts=int(row.cell_attempts),
                cell_success_rate=float(row.cell_success_rate),
                cell_points_scored=float(row.cell_points_scored),
                cell_points_per_attempt=float(row.cell_points_per_attempt),
                zone_range=str(row.zone_range),
                zone_area=str(row.zone_area),
                zone_attempts=int(row.zone_attempts),
                zone_success_rate=float(row.zone_success_rate),
                zone_points_per_attempt=float(row.zone_points_per_attempt),
                baseline_success_rate=float(row.baseline_success_rate),
                radius_factor=float(row.radius_factor),
                rate_differential=float(row.rate_differential),
                bounded_success_rate=float(row.bounded_success_rate),
                bounded_points_per_attempt=float(row.bounded_points_per_attempt),
            )
        )
    return records


def aggregate_frame(
    shots: pd.DataFrame,
    baseline: pd.DataFrame,
    config: HexChartConfig,
) -> List[OutputRecord]:
    """Hexbin a shots frame and join it against baseline zone averages.

    shots columns: loc_x, loc_y, made, value, zone_range, zone_area
    baseline columns: zone_range, zone_area, attempts_made, attempts_total
    """
    config.validate()
    if shots.empty:
        raise EmptyInputError("No shots supplied")
    shots = with_points(validate_shots_frame(normalize_shot_columns(shots)))
    baseline = validate_baseline_frame(normalize_baseline_columns(baseline))

    # 1. Lattice and cell assignment
    lattice = build_lattice(shots["loc_x"], shots["loc_y"], config.bin_width)
    shots["cell_id"] = lattice.assign(shots["loc_x"], shots["loc_y"])

    # 2. Cell and zone statistics
    cells = build_cell_geometry(lattice, cell_stats(shots))
    zones = zone_stats(shots)
    league = baseline_zone_stats(baseline)

    # 3. Zone join; size scaling is relative to the busiest occupied cell
    max_attempts = int(cells["cell_attempts"].max())
    joined = join_zone_stats(cells, zones, league)
    logger.info(
        "Binned %d shots into %d cells (%d kept after zone join, busiest cell %d shots)",
        len(shots),
        len(cells),
        len(joined),
        max_attempts,
    )
    if joined.empty:
        return []

    # 4. Radius factor and clamped colour metrics
    joined = apply_display_metrics(joined, config, max_attempts=max_attempts)
    return build_records(joined, lattice)


def aggregate(
    events: Sequence[Event],
    baseline_records: Sequence[BaselineRecord],
    config: HexChartConfig,
) -> List[OutputRecord]:
    """Build one output record per occupied hexagon that has a zone baseline."""
    if len(events) == 0:
        raise EmptyInputError("No shots supplied")
    return aggregate_frame(events_to_frame(events), baseline_to_frame(baseline_records), config)


def run_full_pipeline(project_root: str | Path, config_path: str | Path) -> Path:
    """End-to-end run: read shot and league CSVs, write the hexbin vertex CSV."""
    project_root = Path(project_root)
    cfg = load_config(config_path)

    events = read_shots_csv(cfg.resolve_path(project_root, cfg.shots_path))
    baseline = read_baseline_csv(cfg.resolve_path(project_root, cfg.baseline_path))
    logger.info("Loaded %d shots and %d baseline rows", len(events), len(baseline))

    records = aggregate(events, baseline, cfg)

    output_path = write_output_csv(records, cfg.resolve_path(project_root, cfg.output_csv))
    logger.info("Wrote %d hexbins to %s", len(records), output_path)
    return output_path
