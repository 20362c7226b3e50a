"""Hexagonal lattice over a rectangle of court coordinates.

The lattice follows the classic hexbin layout: hexagon centres sit on two
interleaved rectangular grids ("even" rows on integer scaled coordinates,
"odd" rows shifted by half a bin in both directions). Cell ids are 0-based
and row-major over the doubled lattice, so the id of a point only depends
on the lattice parameters and the point itself.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .errors import DegenerateLatticeError, EmptyInputError

SQRT3 = math.sqrt(3.0)

# Bounds are pushed outward so no shot sits exactly on a lattice edge.
BOUND_EPSILON = 1e-6

# Squared scaled distance thresholds for choosing between the even-row and
# odd-row candidate centres.
_EVEN_ROW_SURE = 0.25
_ODD_ROW_SURE = 1.0 / 3.0

# Unit hexagon vertex pattern, multiplied by (dx, dy).
_HEX_PATTERN = np.array(
    [
        [1.0, 1.0],
        [1.0, -1.0],
        [0.0, -2.0],
        [-1.0, -1.0],
        [-1.0, 1.0],
        [0.0, 2.0],
    ]
)


@dataclass(frozen=True)
class Lattice:
    """Bounds and bin counts of a hexagonal lattice.

    ``shape`` (``y_bins / x_bins``) sets the hexagon aspect so that cells
    are regular in the (possibly anisotropic) court units.
    """

    x_bounds: Tuple[float, float]
    y_bounds: Tuple[float, float]
    x_bins: float
    y_bins: float

    @property
    def shape(self) -> float:
        return self.y_bins / self.x_bins

    @property
    def x_span(self) -> float:
        return self.x_bounds[1] - self.x_bounds[0]

    @property
    def y_span(self) -> float:
        return self.y_bounds[1] - self.y_bounds[0]

    @property
    def x_scale(self) -> float:
        return self.x_bins / self.x_span

    @property
    def y_scale(self) -> float:
        return self.x_bins * self.shape / (self.y_span * SQRT3)

    @property
    def n_cols(self) -> int:
        return int(math.floor(self.x_bins + 1.5001))

    def assign(self, xs, ys) -> np.ndarray:
        """Vectorised cell assignment for arrays of coordinates."""
        sx = (np.asarray(xs, dtype=float) - self.x_bounds[0]) * self.x_scale
        sy = (np.asarray(ys, dtype=float) - self.y_bounds[0]) * self.y_scale

        j1 = np.floor(sx + 0.5)
        i1 = np.floor(sy + 0.5)
        j2 = np.floor(sx)
        i2 = np.floor(sy)
        d1 = (sx - j1) ** 2 + 3.0 * (sy - i1) ** 2
        d2 = (sx - j2 - 0.5) ** 2 + 3.0 * (sy - i2 - 0.5) ** 2

        even = (d1 < _EVEN_ROW_SURE) | ((d1 <= _ODD_ROW_SURE) & (d1 <= d2))
        even_ids = 2 * i1 * self.n_cols + j1
        odd_ids = (2 * i2 + 1) * self.n_cols + j2
        return np.where(even, even_ids, odd_ids).astype(np.int64)

    def center(self, cell_id: int) -> Tuple[float, float]:
        row, col = divmod(int(cell_id), self.n_cols)
        offset = 0.5 if row % 2 else 0.0
        x = self.x_bounds[0] + (col + offset) / self.x_scale
        y = self.y_bounds[0] + row / (2.0 * self.y_scale)
        return float(x), float(y)

    def centers(self, cell_ids) -> Tuple[np.ndarray, np.ndarray]:
        ids = np.asarray(cell_ids, dtype=np.int64)
        rows, cols = np.divmod(ids, self.n_cols)
        xs = self.x_bounds[0] + (cols + 0.5 * (rows % 2)) / self.x_scale
        ys = self.y_bounds[0] + rows / (2.0 * self.y_scale)
        return xs, ys

    def hexagon_offsets(self) -> np.ndarray:
        """Six vertex offsets (unclosed) of a cell around its centre."""
        dx = 1.0 / (2.0 * self.x_scale)
        dy = 1.0 / (6.0 * self.y_scale)
        return _HEX_PATTERN * np.array([dx, dy])

    def polygon(self, cell_id: int) -> np.ndarray:
        cx, cy = self.center(cell_id)
        return self.hexagon_offsets() + np.array([cx, cy])


def _check_bin_width(width: float, axis: str) -> float:
    width = float(width)
    if not math.isfinite(width) or width <= 0:
        raise DegenerateLatticeError(f"Bin width along {axis} must be positive, got {width}")
    return width


def hex_bounds(values: np.ndarray, binwidth: float) -> Tuple[float, float]:
    """Round the extent outward to a multiple of ``binwidth`` plus epsilon."""
    lo = math.floor(float(values.min()) / binwidth) * binwidth - BOUND_EPSILON
    hi = math.ceil(float(values.max()) / binwidth) * binwidth + BOUND_EPSILON
    return lo, hi


def build_lattice(xs, ys, bin_width: Sequence[float]) -> Lattice:
    """Derive the lattice covering all points for the given bin widths."""
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if xs.size == 0 or ys.size == 0:
        raise EmptyInputError("Cannot build a hexagonal lattice without any shots")
    if xs.shape != ys.shape:
        raise ValueError(f"x/y coordinate arrays differ in shape: {xs.shape} vs {ys.shape}")

    width_x, width_y = bin_width
    width_x = _check_bin_width(width_x, "x")
    width_y = _check_bin_width(width_y, "y")
    if not (np.isfinite(xs).all() and np.isfinite(ys).all()):
        raise DegenerateLatticeError("Shot coordinates must all be finite")

    x_bounds = hex_bounds(xs, width_x)
    y_bounds = hex_bounds(ys, width_y)
    x_bins = (x_bounds[1] - x_bounds[0]) / width_x
    y_bins = (y_bounds[1] - y_bounds[0]) / width_y
    if not (x_bins > 0 and y_bins > 0):
        raise DegenerateLatticeError(
            f"Shot extent produces no bins (x_bins={x_bins}, y_bins={y_bins})"
        )
    return Lattice(x_bounds=x_bounds, y_bounds=y_bounds, x_bins=x_bins, y_bins=y_bins)


def assign_cell(lattice: Lattice, x: float, y: float) -> int:
    """Hexagonal cell id of a single point.

    The nearest even-row centre wins outright when it is within 1/2 scaled
    units (squared distance < 1/4); beyond sqrt(1/3) the odd-row centre
    wins; in between the two candidates are compared directly.
    """
    sx = (x - lattice.x_bounds[0]) * lattice.x_scale
    sy = (y - lattice.y_bounds[0]) * lattice.y_scale

    j1 = math.floor(sx + 0.5)
    i1 = math.floor(sy + 0.5)
    d1 = (sx - j1) ** 2 + 3.0 * (sy - i1) ** 2
    if d1 < _EVEN_ROW_SURE:
        return 2 * i1 * lattice.n_cols + j1

    j2 = math.floor(sx)
    i2 = math.floor(sy)
    if d1 <= _ODD_ROW_SURE:
        d2 = (sx - j2 - 0.5) ** 2 + 3.0 * (sy - i2 - 0.5) ** 2
        if d1 <= d2:
            return 2 * i1 * lattice.n_cols + j1
    return (2 * i2 + 1) * lattice.n_cols + j2
