"""
Bundled equal-loudness contour table.

Approximate dB SPL for the 0-100 phon contours (ISO 226 style), coarse enough
for exploration only. At 1000 Hz each contour's level equals its phon value,
apart from the hearing threshold.
"""
from typing import Dict, List

from loudness_engine.contours.table import ContourTable


PHON_INDICES = (0, 20, 40, 60, 80, 100)

REFERENCE_FREQUENCY = 1000.0  # Hz, where phon and dB SPL coincide

CONTOUR_RECORDS: List[Dict[str, float]] = [
    # -------------------------------------------------------------------------
    # Bass: steep rise towards the low end
    # -------------------------------------------------------------------------
    {"frequency": 20,    "0": 74, "20": 88, "40": 104, "60": 118, "80": 130, "100": 141},
    {"frequency": 31.5,  "0": 58, "20": 74, "40": 90,  "60": 106, "80": 120, "100": 132},
    {"frequency": 63,    "0": 38, "20": 53, "40": 70,  "60": 88,  "80": 104, "100": 118},
    {"frequency": 100,   "0": 26, "20": 41, "40": 59,  "60": 78,  "80": 96,  "100": 111},
    {"frequency": 200,   "0": 14, "20": 30, "40": 49,  "60": 69,  "80": 88,  "100": 105},
    {"frequency": 500,   "0": 6,  "20": 22, "40": 42,  "60": 63,  "80": 83,  "100": 100},

    # -------------------------------------------------------------------------
    # Reference and most sensitive region
    # -------------------------------------------------------------------------
    {"frequency": 1000,  "0": 3,  "20": 20, "40": 40,  "60": 60,  "80": 80,  "100": 100},
    {"frequency": 2000,  "0": -1, "20": 17, "40": 37,  "60": 57,  "80": 77,  "100": 96},
    {"frequency": 3000,  "0": -6, "20": 12, "40": 32,  "60": 53,  "80": 73,  "100": 93},
    {"frequency": 4000,  "0": -4, "20": 14, "40": 34,  "60": 55,  "80": 75,  "100": 95},

    # -------------------------------------------------------------------------
    # Treble: sensitivity falls off again
    # -------------------------------------------------------------------------
    {"frequency": 8000,  "0": 15, "20": 32, "40": 52,  "60": 72,  "80": 92,  "100": 111},
    {"frequency": 12500, "0": 18, "20": 30, "40": 55,  "60": 80,  "80": 100, "100": 115},
    {"frequency": 16000, "0": 50, "20": 65, "40": 85,  "60": 105, "80": 120, "100": 135},
    {"frequency": 20000, "0": 80, "20": 95, "40": 115, "60": 130, "80": 145, "100": 155},
]

DEFAULT_TABLE = ContourTable.from_records(CONTOUR_RECORDS)
