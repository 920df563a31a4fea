"""
Unit tests for the phon / dB SPL conversions.
"""
import math

import numpy as np
import pytest

from loudness_engine.contours import (
    DEFAULT_TABLE,
    ContourTable,
    decibel_for_phon,
    level_on_contour,
    levels_at_frequency,
    phon_for_decibel,
)
from loudness_engine.exceptions import InvalidInputError


FREQUENCIES_IN_RANGE = [20, 25, 31.5, 45, 100, 150, 700, 1000, 1414.2, 2500, 3000, 6000, 10000, 14000, 18000, 20000]


def test_tabulated_points_are_exact():
    """Every tabulated (frequency, phon) pair returns the tabulated level."""
    for point in DEFAULT_TABLE:
        for phon in DEFAULT_TABLE.phon_indices:
            assert level_on_contour(point.frequency, phon) == point.levels[phon]


def test_log_linear_interpolation_between_points():
    # Geometric midpoint of 1000 Hz and 2000 Hz: halfway on a log axis
    frequency = math.sqrt(1000 * 2000)
    assert level_on_contour(frequency, 60) == pytest.approx(58.5)
    assert level_on_contour(frequency, 0) == pytest.approx(1.0)

    # 150 Hz lies log2(1.5) of the way from 100 Hz to 200 Hz
    t = math.log10(1.5) / math.log10(2)
    assert level_on_contour(150, 60) == pytest.approx(78 + t * (69 - 78))


def test_flat_extrapolation_below_and_above_table():
    for phon in DEFAULT_TABLE.phon_indices:
        assert level_on_contour(19, phon) == level_on_contour(20, phon)
        assert level_on_contour(0.001, phon) == level_on_contour(20, phon)
        assert level_on_contour(25000, phon) == level_on_contour(20000, phon)
        assert level_on_contour(1e9, phon) == level_on_contour(20000, phon)


def test_levels_at_frequency_ordered_by_phon():
    curve = levels_at_frequency(1000)
    assert [phon for phon, _ in curve] == [0, 20, 40, 60, 80, 100]
    assert [db for _, db in curve] == [3, 20, 40, 60, 80, 100]


def test_reference_scenarios():
    assert decibel_for_phon(1000, 60) == 60
    assert decibel_for_phon(1000, 50) == 50
    assert phon_for_decibel(1000, 60) == 60
    assert decibel_for_phon(20, 0) == 74
    assert decibel_for_phon(20, 100) == 141
    assert decibel_for_phon(25000, 60) == decibel_for_phon(20000, 60)


def test_decibel_for_phon_interpolates_within_band():
    # 10 phon at 1 kHz: halfway between 3 dB (0 phon) and 20 dB (20 phon)
    assert decibel_for_phon(1000, 10) == pytest.approx(11.5)
    assert decibel_for_phon(100, 70) == pytest.approx(87.0)


def test_decibel_for_phon_clamps_target():
    assert decibel_for_phon(1000, -10) == decibel_for_phon(1000, 0) == 3
    assert decibel_for_phon(1000, 150) == decibel_for_phon(1000, 100) == 100
    assert decibel_for_phon(63, 1000) == 118


def test_decibel_for_phon_top_contour_is_exact():
    for point in DEFAULT_TABLE:
        assert decibel_for_phon(point.frequency, 100) == point.levels[100]


def test_decibel_for_phon_is_monotonic_in_phon():
    phons = np.linspace(0, 100, 201)
    for frequency in FREQUENCIES_IN_RANGE:
        levels = np.array([decibel_for_phon(frequency, p) for p in phons])
        assert np.all(np.diff(levels) >= 0)


def test_phon_for_decibel_inverts_decibel_for_phon():
    for frequency in FREQUENCIES_IN_RANGE:
        for phon in np.linspace(0, 100, 41):
            level = decibel_for_phon(frequency, phon)
            assert abs(phon_for_decibel(frequency, level) - phon) < 1e-6


def test_phon_for_decibel_below_range_floors_at_zero():
    assert phon_for_decibel(1000, 2) == 0
    assert phon_for_decibel(20, 0) == 0
    assert phon_for_decibel(3000, -50) == 0


def test_phon_for_decibel_above_range_one_phon_per_db():
    assert phon_for_decibel(1000, 110) == pytest.approx(110)
    assert phon_for_decibel(20, 150) == pytest.approx(109)
    assert phon_for_decibel(1000, 130) == 120
    assert phon_for_decibel(1000, 500) == 120


def test_phon_for_decibel_below_range_with_raised_lowest_contour():
    table = ContourTable.from_records([
        {"frequency": 100, "20": 10, "40": 30},
        {"frequency": 1000, "20": 20, "40": 40},
    ])
    # 5 dB under the 20 phon contour at 100 Hz
    assert phon_for_decibel(100, 5, table) == pytest.approx(15)
    assert phon_for_decibel(100, -50, table) == 0


def test_phon_for_decibel_equal_adjacent_contours():
    table = ContourTable.from_records([
        {"frequency": 100, "0": 10, "20": 10, "40": 30},
        {"frequency": 1000, "0": 0, "20": 20, "40": 40},
    ])
    assert phon_for_decibel(100, 10, table) == 0
    assert phon_for_decibel(100, 20, table) == pytest.approx(30)


def test_uneven_phon_spacing():
    table = ContourTable.from_records([
        {"frequency": 100, "0": 10, "10": 20, "40": 50},
        {"frequency": 1000, "0": 0, "10": 10, "40": 40},
    ])
    assert decibel_for_phon(100, 25, table) == pytest.approx(35)
    assert decibel_for_phon(100, 10, table) == 20
    assert phon_for_decibel(100, 35, table) == pytest.approx(25)


@pytest.mark.parametrize("frequency", [0, -100, float("nan"), float("inf"), float("-inf"), "1000", None, True])
def test_invalid_frequency_rejected(frequency):
    with pytest.raises(InvalidInputError):
        decibel_for_phon(frequency, 60)
    with pytest.raises(InvalidInputError):
        phon_for_decibel(frequency, 60)
    with pytest.raises(InvalidInputError):
        level_on_contour(frequency, 60)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "60", None])
def test_invalid_level_and_phon_rejected(value):
    with pytest.raises(InvalidInputError):
        decibel_for_phon(1000, value)
    with pytest.raises(InvalidInputError):
        phon_for_decibel(1000, value)


def test_untabulated_phon_index_rejected():
    with pytest.raises(InvalidInputError):
        level_on_contour(1000, 30)
    with pytest.raises(InvalidInputError):
        level_on_contour(1000, float("nan"))


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        phon_for_decibel(-1, 60)


def test_numpy_scalars_accepted():
    assert decibel_for_phon(np.float64(1000), np.int64(60)) == 60
    assert level_on_contour(np.int64(1000), np.int64(40)) == 40
