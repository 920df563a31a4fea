"""
Equal-loudness explorer: phon/dB SPL conversions over equal-loudness contours,
plus the probe, tone and insight collaborators built on them.
"""
from .config import ToneConfig
from .contours import (
    DEFAULT_TABLE,
    ContourPoint,
    ContourTable,
    decibel_for_phon,
    level_on_contour,
    load_contour_table,
    phon_for_decibel,
)
from .exceptions import (
    AudioSessionError,
    DataIntegrityError,
    InvalidInputError,
    LoudnessEngineError,
)
from .probe import ProbeSession

__all__ = [
    'ToneConfig',
    'DEFAULT_TABLE',
    'ContourPoint',
    'ContourTable',
    'decibel_for_phon',
    'level_on_contour',
    'load_contour_table',
    'phon_for_decibel',
    'AudioSessionError',
    'DataIntegrityError',
    'InvalidInputError',
    'LoudnessEngineError',
    'ProbeSession',
]
