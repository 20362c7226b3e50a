import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import yaml

from .errors import ConfigError, DegenerateLatticeError

Bounds = Tuple[float, float]


@dataclass
class HexChartConfig:
    """Top-level configuration for building a hexbin shot chart.

    Paths are relative to the project root unless absolute. The metric
    bounds are the fixed colour-scale ranges, so charts for different
    players stay comparable.
    """

    # Inputs: the player's shots and league zone averages
    shots_path: str = "data/shots.csv"
    baseline_path: str = "data/league_averages.csv"

    # Output vertex table for the drawing layer
    output_csv: str = "outputs/hexbins.csv"

    # Bin width in court units along (x, y)
    bin_width: Bounds = (1.0, 1.0)

    # Smallest hexagon size relative to the full cell, for single-shot cells
    min_radius_factor: float = 0.6

    # Display ranges for the three colour metrics
    rate_diff_bounds: Bounds = (-0.12, 0.12)
    rate_bounds: Bounds = (0.2, 0.7)
    pps_bounds: Bounds = (0.5, 1.5)

    def __post_init__(self):
        # YAML hands back lists
        for name in ("bin_width", "rate_diff_bounds", "rate_bounds", "pps_bounds"):
            value = getattr(self, name)
            if len(value) != 2:
                raise ConfigError(f"{name} must have exactly two values, got {value!r}")
            setattr(self, name, (float(value[0]), float(value[1])))

    def validate(self) -> "HexChartConfig":
        for axis, width in zip("xy", self.bin_width):
            if not width > 0:
                raise DegenerateLatticeError(f"Bin width along {axis} must be positive, got {width}")
        if not 0.0 <= self.min_radius_factor <= 1.0:
            raise ConfigError(
                f"min_radius_factor must be within [0, 1], got {self.min_radius_factor}"
            )
        for name in ("rate_diff_bounds", "rate_bounds", "pps_bounds"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ConfigError(f"{name} lower bound {lo} exceeds upper bound {hi}")
        return self

    def resolve_path(self, root: Path, path: str) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return root / p


def load_config(path: str | Path) -> HexChartConfig:
    """Load HexChartConfig from a YAML file."""
    p = Path(path)
    with p.open("r") as f:
        raw = yaml.safe_load(f) or {}
    known = {f.name for f in dataclasses.fields(HexChartConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {p}: {', '.join(unknown)}")
    cfg = HexChartConfig(**raw)
    return cfg.validate()


def save_default_config(path: str | Path) -> None:
    """Write a default config YAML if you want a starting point."""
    cfg = HexChartConfig()
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    raw = dataclasses.asdict(cfg)
    for name in ("bin_width", "rate_diff_bounds", "rate_bounds", "pps_bounds"):
        raw[name] = list(raw[name])
    with p.open("w") as f:
        yaml.safe_dump(raw, f, sort_keys=False)
