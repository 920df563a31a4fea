"""
Equal-loudness contour table and phon/dB conversions.
"""
from .data import CONTOUR_RECORDS, DEFAULT_TABLE, PHON_INDICES, REFERENCE_FREQUENCY
from .interpolation import (
    PHON_CEILING,
    PHON_FLOOR,
    decibel_for_phon,
    level_on_contour,
    levels_at_frequency,
    phon_for_decibel,
)
from .series import contour_series, equal_loudness_curve, log_frequency_grid, probe_marker
from .table import ContourPoint, ContourTable, load_contour_table, validate_contour_points

__all__ = [
    'CONTOUR_RECORDS',
    'DEFAULT_TABLE',
    'PHON_INDICES',
    'REFERENCE_FREQUENCY',
    'PHON_CEILING',
    'PHON_FLOOR',
    'decibel_for_phon',
    'level_on_contour',
    'levels_at_frequency',
    'phon_for_decibel',
    'contour_series',
    'equal_loudness_curve',
    'log_frequency_grid',
    'probe_marker',
    'ContourPoint',
    'ContourTable',
    'load_contour_table',
    'validate_contour_points',
]
