"""Tests for radius scaling and metric clamping."""

import math

import numpy as np
import pandas as pd
import pytest

from atlas_hex_charts.config import HexChartConfig
from atlas_hex_charts.errors import ConfigError
from atlas_hex_charts.normalize import adjust_polygon, apply_display_metrics, clamp, radius_factors


class TestRadiusFactors:
    def test_busiest_cell_is_full_size(self):
        factors = radius_factors([1, 5, 40], min_radius_factor=0.25)
        assert factors[-1] == pytest.approx(1.0)

    def test_known_value(self):
        factors = radius_factors([1, 3], min_radius_factor=0.25)
        expected = 0.25 + 0.75 * math.log(2) / math.log(4)
        assert factors[0] == pytest.approx(expected)
        assert factors[0] == pytest.approx(0.625)

    def test_monotone_in_attempts(self):
        attempts = np.arange(1, 200)
        factors = radius_factors(attempts, min_radius_factor=0.4)
        assert (np.diff(factors) >= 0).all()
        assert factors.min() >= 0.4

    def test_floor_is_approached_by_small_cells(self):
        factors = radius_factors([1, 10_000], min_radius_factor=0.3)
        assert 0.3 < factors[0] < 0.36

    def test_explicit_max_attempts(self):
        factors = radius_factors([4], min_radius_factor=0.5, max_attempts=4)
        assert factors[0] == pytest.approx(1.0)
        factors = radius_factors([4], min_radius_factor=0.5, max_attempts=99)
        assert factors[0] < 1.0

    def test_empty_input(self):
        assert radius_factors([], min_radius_factor=0.5).size == 0


class TestClamp:
    def test_values_stay_within_bounds(self):
        values = np.array([-10.0, -0.1, 0.0, 0.1, 7.5, np.inf, -np.inf])
        clamped = clamp(values, (-0.15, 0.15))
        assert clamped.min() >= -0.15
        assert clamped.max() <= 0.15
        assert clamped[2] == 0.0

    def test_differential_is_clamped_to_upper_bound(self):
        assert clamp(0.40, (-0.15, 0.15)) == pytest.approx(0.15)

    def test_inverted_bounds_raise(self):
        with pytest.raises(ConfigError):
            clamp([0.1], (0.5, 0.2))


class TestAdjustPolygon:
    def test_vertices_scale_toward_centroid(self):
        polygon = np.array([[1.0, 1.0], [1.0, -1.0], [0.0, -2.0], [-1.0, -1.0], [-1.0, 1.0], [0.0, 2.0]])
        centroid = np.array([10.0, 20.0])
        adjusted = adjust_polygon(polygon + centroid, centroid, 0.5)
        assert adjusted - centroid == pytest.approx(polygon * 0.5)

    def test_full_factor_is_identity(self):
        polygon = np.array([[0.0, 0.0], [2.0, 0.0], [1.0, 1.0]])
        adjusted = adjust_polygon(polygon, (1.0, 0.5), 1.0)
        assert adjusted == pytest.approx(polygon)


class TestApplyDisplayMetrics:
    def test_adds_clamped_columns(self):
        cfg = HexChartConfig(
            min_radius_factor=0.5,
            rate_diff_bounds=(-0.1, 0.1),
            rate_bounds=(0.3, 0.6),
            pps_bounds=(0.8, 1.2),
        )
        frame = pd.DataFrame(
            {
                "cell_attempts": [1, 9],
                "zone_success_rate": [0.9, 0.1],
                "baseline_success_rate": [0.4, 0.4],
                "zone_points_per_attempt": [2.7, 0.2],
            }
        )
        out = apply_display_metrics(frame, cfg, max_attempts=9)
        assert out["rate_differential"].tolist() == pytest.approx([0.1, -0.1])
        assert out["bounded_success_rate"].tolist() == pytest.approx([0.6, 0.3])
        assert out["bounded_points_per_attempt"].tolist() == pytest.approx([1.2, 0.8])
        assert out["radius_factor"].iloc[1] == pytest.approx(1.0)
        assert "radius_factor" not in frame.columns
