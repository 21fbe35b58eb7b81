#!/usr/bin/env python3
"""
Tests for standard-size snapping and the velocity/diameter relations.
"""

import math
import os
import sys

import pytest

# Add src directory to path
CURRENT_DIR = os.path.dirname(__file__)
SRC_DIR = os.path.join(CURRENT_DIR, 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from calculations.duct_sizing import (
    round_to_standard_size, duct_diameter_from_flow_velocity, velocity_from_flow_diameter,
    flow_from_diameter_velocity, InvalidVelocity, InvalidDiameter, LEVEngineError
)
from calculations.lev_constants import STANDARD_DUCT_DIAMETERS_MM, round_half_up


def test_round_to_nearest_standard_size():
    assert round_to_standard_size(151) == 150
    assert round_to_standard_size(230) == 224
    assert round_to_standard_size(312) == 315


def test_round_tie_prefers_smaller_size():
    """170 is equally close to 160 and 180; the first table entry wins."""
    assert round_to_standard_size(170) == 160
    assert round_to_standard_size(90) == 80


def test_round_at_and_beyond_table_bounds():
    assert round_to_standard_size(800) == 800
    assert round_to_standard_size(1200) == 800
    assert round_to_standard_size(80) == 80
    assert round_to_standard_size(0) == 80


def test_standard_sizes_are_fixed_points():
    for size in STANDARD_DUCT_DIAMETERS_MM:
        assert round_to_standard_size(size) == size


def test_diameter_from_flow_and_velocity():
    """700 m³/h at 21.5 m/s needs ~107 mm, which snaps to 100 mm."""
    raw_mm = math.sqrt(4 * (700 / 3600) / (math.pi * 21.5)) * 1000
    assert 107 < raw_mm < 108
    assert duct_diameter_from_flow_velocity(700, 21.5) == 100


def test_diameter_zero_velocity_is_invalid():
    with pytest.raises(InvalidVelocity):
        duct_diameter_from_flow_velocity(500, 0)
    with pytest.raises(InvalidVelocity):
        duct_diameter_from_flow_velocity(500, -3)


def test_velocity_zero_diameter_is_invalid():
    with pytest.raises(InvalidDiameter):
        velocity_from_flow_diameter(500, 0)


def test_error_kinds_are_value_errors():
    assert issubclass(InvalidVelocity, ValueError)
    assert issubclass(InvalidDiameter, LEVEngineError)


def test_velocity_from_flow_and_diameter():
    # 1000 m³/h through 200 mm
    expected = (1000 / 3600) / (math.pi * 0.1 ** 2)
    assert velocity_from_flow_diameter(1000, 200) == pytest.approx(expected)
    assert velocity_from_flow_diameter(0, 200) == 0


@pytest.mark.parametrize("diameter", [100, 250, 630])
def test_velocity_round_trip_on_standard_diameter(diameter):
    flow = flow_from_diameter_velocity(diameter, 18.0)
    assert velocity_from_flow_diameter(flow, diameter) == pytest.approx(18.0)
    assert duct_diameter_from_flow_velocity(flow, 18.0) == diameter


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4999) == 2
    assert round_half_up(0) == 0
