"""
Tone synthesis and measurement for listening to probe points.
"""
from .loudness import audiosegment_to_float, measure_integrated_lufs, measure_peak_dbfs
from .tone import ToneSession, level_to_gain, render_tone

__all__ = [
    'audiosegment_to_float',
    'measure_integrated_lufs',
    'measure_peak_dbfs',
    'ToneSession',
    'level_to_gain',
    'render_tone',
]
