"""
Contour table: equal-loudness contours sampled at a fixed set of frequencies.

A table is validated once when it is built and is read-only afterwards, so the
interpolation functions never re-check its invariants.
"""
import json
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from loudness_engine.exceptions import DataIntegrityError
from loudness_engine.utils.logger import get_logger
from loudness_engine.validation import is_real_number

logger = get_logger(__name__)


Number = Union[int, float]

# Accepted spellings of the frequency column in dataset records
FREQUENCY_KEYS = ("frequency", "freq")


def _parse_phon_key(key: Any) -> Number:
    phon = float(key)
    if not math.isfinite(phon):
        raise ValueError(f"phon index must be finite, got {key!r}")
    return int(phon) if phon.is_integer() else phon


@dataclass(frozen=True)
class ContourPoint:
    """
    One table row: the dB SPL of every tabulated contour at a single frequency.
    """
    frequency: Number
    levels: Mapping[Number, Number] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))


def validate_contour_points(points: Sequence[ContourPoint]) -> List[str]:
    """
    Check the table invariants and return every violation found.

    Frequencies must be finite, positive and strictly increasing, every point
    must carry the same phon indices, and at each frequency the levels must be
    non-decreasing as the phon index increases.
    """
    errors = []

    not_points = [row for row, point in enumerate(points) if not isinstance(point, ContourPoint)]
    if not_points:
        errors.append(f"rows {not_points} are not ContourPoint instances")
        return errors

    if len(points) < 2:
        errors.append(f"table needs at least 2 points, got {len(points)}")
        return errors

    expected = set(points[0].levels)
    if len(expected) < 2:
        errors.append(f"table needs at least 2 phon indices, got {len(expected)}")
    for phon in expected:
        if not is_real_number(phon) or not math.isfinite(phon):
            errors.append(f"phon index must be a finite number, got {phon!r}")
    if errors:
        return errors

    phon_indices = sorted(expected)
    previous_frequency = None

    for row, point in enumerate(points):
        frequency = point.frequency
        if not is_real_number(frequency) or not math.isfinite(frequency) or frequency <= 0:
            errors.append(f"row {row}: frequency must be a finite positive number, got {frequency!r}")
            frequency = None
        elif previous_frequency is not None and frequency <= previous_frequency:
            errors.append(
                f"row {row}: frequencies must be strictly increasing "
                f"({frequency} Hz follows {previous_frequency} Hz)"
            )
        if frequency is not None:
            previous_frequency = frequency

        if set(point.levels) != expected:
            errors.append(
                f"row {row}: phon indices {sorted(point.levels)} differ from {phon_indices}"
            )
            continue

        bad_levels = [
            phon for phon in phon_indices
            if not is_real_number(point.levels[phon]) or not math.isfinite(point.levels[phon])
        ]
        if bad_levels:
            errors.append(f"row {row}: levels for phon {bad_levels} must be finite numbers")
            continue

        for low, high in zip(phon_indices, phon_indices[1:]):
            if point.levels[high] < point.levels[low]:
                errors.append(
                    f"row {row}: level for {high} phon ({point.levels[high]} dB) is below "
                    f"level for {low} phon ({point.levels[low]} dB)"
                )

    return errors


class ContourTable:
    """
    Immutable, validated sequence of ContourPoints sorted by frequency.
    """

    def __init__(self, points: Iterable[ContourPoint]):
        points = tuple(points)
        errors = validate_contour_points(points)
        if errors:
            raise DataIntegrityError(
                "Contour table validation failed:\n" + "\n".join(errors)
            )

        self._points: Tuple[ContourPoint, ...] = points
        self._frequencies: Tuple[Number, ...] = tuple(p.frequency for p in points)
        self._phon_indices: Tuple[Number, ...] = tuple(sorted(points[0].levels))

        logger.debug(
            f"Loaded contour table: {len(points)} points, "
            f"{self.min_frequency}-{self.max_frequency} Hz, phons {list(self._phon_indices)}"
        )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> 'ContourTable':
        """
        Build a table from dataset records such as
        {"frequency": 1000, "0": 3, "20": 20, ...}.
        """
        points = []
        errors = []

        for row, record in enumerate(records):
            if not isinstance(record, Mapping):
                errors.append(f"row {row}: record must be a mapping, got {type(record).__name__}")
                continue

            freq_keys = [k for k in FREQUENCY_KEYS if k in record]
            if len(freq_keys) != 1:
                errors.append(f"row {row}: record needs exactly one of {list(FREQUENCY_KEYS)}")
                continue

            levels: Dict[Number, Any] = {}
            for key, value in record.items():
                if key in FREQUENCY_KEYS:
                    continue
                try:
                    phon = _parse_phon_key(key)
                except (TypeError, ValueError):
                    errors.append(f"row {row}: unexpected column {key!r}")
                    continue
                if phon in levels:
                    errors.append(f"row {row}: duplicate phon column {key!r} for {phon} phon")
                    continue
                levels[phon] = value

            points.append(ContourPoint(frequency=record[freq_keys[0]], levels=levels))

        if errors:
            raise DataIntegrityError(
                "Contour table validation failed:\n" + "\n".join(errors)
            )

        return cls(points)

    def to_records(self) -> List[Dict[str, Number]]:
        """Return the table in dataset record form."""
        records = []
        for point in self._points:
            record: Dict[str, Number] = {"frequency": point.frequency}
            for phon in self._phon_indices:
                record[str(phon)] = point.levels[phon]
            records.append(record)
        return records

    @property
    def points(self) -> Tuple[ContourPoint, ...]:
        return self._points

    @property
    def frequencies(self) -> Tuple[Number, ...]:
        return self._frequencies

    @property
    def phon_indices(self) -> Tuple[Number, ...]:
        return self._phon_indices

    @property
    def min_frequency(self) -> Number:
        return self._frequencies[0]

    @property
    def max_frequency(self) -> Number:
        return self._frequencies[-1]

    @property
    def min_phon(self) -> Number:
        return self._phon_indices[0]

    @property
    def max_phon(self) -> Number:
        return self._phon_indices[-1]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ContourPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> ContourPoint:
        return self._points[index]

    def __repr__(self) -> str:
        return (
            f"ContourTable(points={len(self._points)}, "
            f"frequencies={self.min_frequency}-{self.max_frequency} Hz, "
            f"phons={list(self._phon_indices)})"
        )


def load_contour_table(path: str) -> ContourTable:
    """
    Load a contour table from a JSON file holding a list of dataset records.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        raise DataIntegrityError(f"Contour table {path} is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise DataIntegrityError(
            f"Contour table {path} must hold a list of records, got {type(records).__name__}"
        )

    table = ContourTable.from_records(records)
    logger.info(f"Loaded contour table from {path}: {len(table)} points")
    return table
