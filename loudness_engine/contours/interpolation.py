"""
Conversions between dB SPL and phon over a ContourTable.

Frequencies are interpolated log-linearly (log10 on the frequency axis, linear
in dB) with flat extrapolation past either end of the table. Between contours
the phon/dB relationship is treated as linear within one band.
"""
import math
from bisect import bisect_left, bisect_right
from typing import List, Tuple

from loudness_engine.contours.data import DEFAULT_TABLE
from loudness_engine.contours.table import ContourTable, Number
from loudness_engine.exceptions import InvalidInputError
from loudness_engine.validation import require_finite, require_frequency


# Bounds for the 1 dB per phon extrapolation outside the tabulated contours
PHON_FLOOR = 0.0
PHON_CEILING = 120.0


def level_on_contour(
    frequency: float,
    phon_index: Number,
    table: ContourTable = DEFAULT_TABLE
) -> float:
    """
    dB SPL of the tabulated phon_index contour at an arbitrary frequency.
    """
    frequency = require_frequency(frequency)
    require_finite(phon_index, "phon_index")
    if phon_index not in table.phon_indices:
        raise InvalidInputError(
            f"phon_index {phon_index} is not tabulated; expected one of {list(table.phon_indices)}"
        )

    frequencies = table.frequencies
    i = bisect_left(frequencies, frequency)

    if i == len(frequencies):
        return float(table[-1].levels[phon_index])
    if i == 0:
        return float(table[0].levels[phon_index])

    p1 = table[i - 1]
    p2 = table[i]
    if p2.frequency == frequency:
        return float(p2.levels[phon_index])

    log_f = math.log10(frequency)
    log_f1 = math.log10(p1.frequency)
    log_f2 = math.log10(p2.frequency)
    t = (log_f - log_f1) / (log_f2 - log_f1)

    db1 = p1.levels[phon_index]
    db2 = p2.levels[phon_index]
    return db1 + t * (db2 - db1)


def levels_at_frequency(
    frequency: float,
    table: ContourTable = DEFAULT_TABLE
) -> List[Tuple[Number, float]]:
    """
    (phon_index, dB SPL) for every tabulated contour at frequency, by ascending phon.
    """
    return [(phon, level_on_contour(frequency, phon, table)) for phon in table.phon_indices]


def decibel_for_phon(
    frequency: float,
    target_phon: float,
    table: ContourTable = DEFAULT_TABLE
) -> float:
    """
    dB SPL needed at frequency to be perceived as loud as target_phon.

    target_phon is clamped to the table's phon range first.
    """
    frequency = require_frequency(frequency)
    target_phon = require_finite(target_phon, "target_phon")

    phon_indices = table.phon_indices
    phon = min(max(target_phon, phon_indices[0]), phon_indices[-1])

    # Bracketing contours; equals floor(phon / step) * step for an evenly spaced table
    position = bisect_right(phon_indices, phon) - 1
    lower = phon_indices[position]
    if phon == lower:
        return level_on_contour(frequency, lower, table)
    upper = phon_indices[position + 1]

    db_low = level_on_contour(frequency, lower, table)
    db_high = level_on_contour(frequency, upper, table)

    t = (phon - lower) / (upper - lower)
    return db_low + (db_high - db_low) * t


def phon_for_decibel(
    frequency: float,
    decibel_level: float,
    table: ContourTable = DEFAULT_TABLE
) -> float:
    """
    Estimated loudness in phon of a tone at frequency and decibel_level dB SPL.

    Outside the tabulated contours the estimate moves 1 phon per dB, floored at
    PHON_FLOOR and capped at PHON_CEILING.
    """
    frequency = require_frequency(frequency)
    decibel_level = require_finite(decibel_level, "decibel_level")

    curve = levels_at_frequency(frequency, table)

    for (low_phon, low_db), (high_phon, high_db) in zip(curve, curve[1:]):
        if low_db <= decibel_level <= high_db:
            if high_db == low_db:
                return float(low_phon)
            t = (decibel_level - low_db) / (high_db - low_db)
            return low_phon + (high_phon - low_phon) * t

    lowest_phon, lowest_db = curve[0]
    if decibel_level < lowest_db:
        return max(PHON_FLOOR, lowest_phon - (lowest_db - decibel_level))

    highest_phon, highest_db = curve[-1]
    return min(PHON_CEILING, highest_phon + (decibel_level - highest_db))
