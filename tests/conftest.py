"""Shared fixtures and factory helpers for the hexbin chart tests."""

import pytest

from atlas_hex_charts.config import HexChartConfig
from atlas_hex_charts.models import BaselineRecord, Event


def make_event(
    x: float = 0.0,
    y: float = 0.0,
    made: bool = True,
    value: int = 2,
    zone_range: str = "8-16 ft.",
    zone_area: str = "Center(C)",
) -> Event:
    """Create a shot Event for testing."""
    return Event(location=(x, y), made=made, value=value, zone_range=zone_range, zone_area=zone_area)


def make_baseline(
    zone_range: str = "8-16 ft.",
    zone_area: str = "Center(C)",
    attempts_made: int = 50,
    attempts_total: int = 100,
) -> BaselineRecord:
    """Create a BaselineRecord for testing."""
    return BaselineRecord(
        zone_range=zone_range,
        zone_area=zone_area,
        attempts_made=attempts_made,
        attempts_total=attempts_total,
    )


@pytest.fixture
def config() -> HexChartConfig:
    return HexChartConfig(
        bin_width=(1.0, 1.0),
        min_radius_factor=0.25,
        rate_diff_bounds=(-0.15, 0.15),
        rate_bounds=(0.2, 0.7),
        pps_bounds=(0.5, 1.5),
    )


@pytest.fixture
def scattered_events() -> list:
    """Shots spread over two zones and several cells."""
    events = []
    for i in range(12):
        events.append(make_event(x=0.2 * i, y=0.1 * i, made=i % 3 == 0, value=2))
    for i in range(8):
        events.append(
            make_event(
                x=6.0 + 0.3 * i,
                y=4.0 - 0.2 * i,
                made=i % 2 == 0,
                value=3,
                zone_range="24+ ft.",
                zone_area="Right Side Center(RC)",
            )
        )
    return events


@pytest.fixture
def scattered_baseline() -> list:
    return [
        make_baseline(attempts_made=40, attempts_total=100),
        make_baseline(
            zone_range="24+ ft.",
            zone_area="Right Side Center(RC)",
            attempts_made=35,
            attempts_total=100,
        ),
    ]
