from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidEventError

Point = Tuple[float, float]
ZoneKey = Tuple[str, str]

SHOT_VALUES = (2, 3)


@dataclass(frozen=True)
class Event:
    """A single shot attempt in court coordinates.

    ``zone_range`` / ``zone_area`` are the coarse zone labels supplied with
    the shot (e.g. ``"8-16 ft."`` / ``"Center(C)"``), independent of the
    hexagonal lattice.
    """

    location: Point
    made: bool
    value: int
    zone_range: str
    zone_area: str

    def __post_init__(self):
        x, y = self.location
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidEventError(f"Shot location must be finite, got {self.location!r}")
        if self.value not in SHOT_VALUES:
            raise InvalidEventError(f"Shot value must be 2 or 3, got {self.value!r}")

    @property
    def zone_key(self) -> ZoneKey:
        return (self.zone_range, self.zone_area)


@dataclass(frozen=True)
class BaselineRecord:
    """Pre-aggregated league (baseline) counts for one zone."""

    zone_range: str
    zone_area: str
    attempts_made: int
    attempts_total: int

    def __post_init__(self):
        if self.attempts_made < 0 or self.attempts_total < 0:
            raise InvalidEventError(
                f"Baseline counts must be non-negative for zone {self.zone_key!r}"
            )

    @property
    def zone_key(self) -> ZoneKey:
        return (self.zone_range, self.zone_area)


@dataclass(frozen=True)
class OutputRecord:
    """One occupied hexagon joined with its zone and baseline statistics.

    ``polygon`` and ``adjusted_polygon`` hold six unclosed vertices; the
    adjusted set is the raw hexagon scaled toward ``centroid`` by
    ``radius_factor``.
    """

    cell_id: int
    centroid: Point
    polygon: Tuple[Point, ...]
    adjusted_polygon: Tuple[Point, ...]

    cell_attempts: int
    cell_success_rate: float
    cell_points_scored: float
    cell_points_per_attempt: float

    zone_range: str
    zone_area: str
    zone_attempts: int
    zone_success_rate: float
    zone_points_per_attempt: float
    baseline_success_rate: float

    radius_factor: float
    rate_differential: float
    bounded_success_rate: float
    bounded_points_per_attempt: float

    @property
    def zone_key(self) -> ZoneKey:
        return (self.zone_range, self.zone_area)
