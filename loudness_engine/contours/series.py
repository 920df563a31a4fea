"""
Plot-ready contour data for chart renderers.
"""
from typing import Dict, Iterable

import numpy as np

from loudness_engine.contours.data import DEFAULT_TABLE
from loudness_engine.contours.interpolation import (
    decibel_for_phon,
    level_on_contour,
    phon_for_decibel,
)
from loudness_engine.contours.table import ContourTable, Number


def log_frequency_grid(table: ContourTable = DEFAULT_TABLE, num_points: int = 200) -> np.ndarray:
    """
    Log-spaced frequencies covering the table, endpoints included exactly.
    """
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")

    grid = np.logspace(
        np.log10(table.min_frequency),
        np.log10(table.max_frequency),
        num_points,
    )
    grid[0] = table.min_frequency
    grid[-1] = table.max_frequency
    return grid


def contour_series(
    table: ContourTable = DEFAULT_TABLE,
    num_points: int = 200
) -> Dict[Number, Dict[str, np.ndarray]]:
    """
    Densely sampled curve for each tabulated contour.

    Returns:
        Mapping of phon index -> {"frequencies": array, "levels": array}
    """
    frequencies = log_frequency_grid(table, num_points)
    series = {}
    for phon in table.phon_indices:
        levels = np.array([level_on_contour(float(f), phon, table) for f in frequencies])
        series[phon] = {"frequencies": frequencies, "levels": levels}
    return series


def equal_loudness_curve(
    target_phon: float,
    frequencies: Iterable[float],
    table: ContourTable = DEFAULT_TABLE
) -> np.ndarray:
    """dB SPL along the (possibly untabulated) target_phon contour."""
    frequencies = np.asarray(list(frequencies), dtype=float)
    return np.array([decibel_for_phon(float(f), target_phon, table) for f in frequencies])


def probe_marker(
    frequency: float,
    decibel_level: float,
    table: ContourTable = DEFAULT_TABLE
) -> Dict[str, float]:
    """Reference-line marker for the point currently being inspected."""
    return {
        "frequency": float(frequency),
        "decibel_level": float(decibel_level),
        "phon": phon_for_decibel(frequency, decibel_level, table),
    }
