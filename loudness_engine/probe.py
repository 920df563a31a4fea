"""
ProbeSession: the point a listener is inspecting, with an equal-loudness lock.

The session owns the mutable (frequency, level, target phon) state; every
conversion it needs goes through the pure contour functions.
"""
from typing import Optional

from loudness_engine.contours import (
    DEFAULT_TABLE,
    REFERENCE_FREQUENCY,
    ContourTable,
    decibel_for_phon,
    phon_for_decibel,
)
from loudness_engine.utils.logger import get_logger

logger = get_logger(__name__)


def _round_level(decibel_level: float) -> float:
    return round(decibel_level * 10) / 10


class ProbeSession:
    """
    Tracks the probe point and keeps its loudness constant while locked.

    Unlocked, changing the frequency keeps the level and recomputes the
    loudness. Locked, changing the frequency keeps the loudness and moves the
    level along the target contour.
    """

    def __init__(
        self,
        frequency: float = REFERENCE_FREQUENCY,
        decibel_level: float = 60.0,
        table: ContourTable = DEFAULT_TABLE
    ):
        self.table = table
        self.frequency = float(frequency)
        self.decibel_level = float(decibel_level)
        self.target_phon = phon_for_decibel(self.frequency, self.decibel_level, table)
        self.equal_loudness_mode = False
        self._saved_level: Optional[float] = None

    def set_frequency(self, frequency: float) -> None:
        if self.equal_loudness_mode:
            level = decibel_for_phon(frequency, self.target_phon, self.table)
            self.frequency = float(frequency)
            self.decibel_level = _round_level(level)
        else:
            self.target_phon = phon_for_decibel(frequency, self.decibel_level, self.table)
            self.frequency = float(frequency)

    def set_level(self, decibel_level: float) -> None:
        # Also shifts the contour followed while locked
        self.target_phon = phon_for_decibel(self.frequency, decibel_level, self.table)
        self.decibel_level = float(decibel_level)

    def select_point(self, frequency: float, decibel_level: float) -> None:
        """Move to a point picked on the chart."""
        self.set_frequency(frequency)
        self.set_level(decibel_level)

    def toggle_equal_loudness(self) -> bool:
        """
        Switch the equal-loudness lock and return the new mode.

        Enabling takes the loudness that the current level would have at the
        1 kHz reference and jumps the level to match it at the current
        frequency. Disabling restores the level from before the lock.
        """
        if not self.equal_loudness_mode:
            self._saved_level = self.decibel_level
            reference_phon = phon_for_decibel(REFERENCE_FREQUENCY, self.decibel_level, self.table)
            self.target_phon = reference_phon
            self.decibel_level = _round_level(
                decibel_for_phon(self.frequency, reference_phon, self.table)
            )
            self.equal_loudness_mode = True
            logger.debug(
                f"Equal-loudness lock on at {self.target_phon:.1f} phon "
                f"({self.frequency:.0f} Hz -> {self.decibel_level:.1f} dB)"
            )
        else:
            restored = self._saved_level if self._saved_level is not None else self.decibel_level
            self.decibel_level = restored
            self.target_phon = phon_for_decibel(self.frequency, restored, self.table)
            self._saved_level = None
            self.equal_loudness_mode = False
            logger.debug(f"Equal-loudness lock off, level restored to {restored:.1f} dB")

        return self.equal_loudness_mode

    def __repr__(self) -> str:
        return (
            f"ProbeSession(frequency={self.frequency}, decibel_level={self.decibel_level}, "
            f"target_phon={self.target_phon:.2f}, equal_loudness_mode={self.equal_loudness_mode})"
        )
