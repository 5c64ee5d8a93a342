"""
Quality bucketing against a descending threshold table.

A score lands in the first (highest) threshold it satisfies, using
``score >= threshold``. With the conventional trailing 0 every MAPQ has a bucket.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from samcompare.constants import MAPQ_MAX
from samcompare.exceptions import InvalidConfiguration


def bucket_index(thresholds: Sequence[int], score: int) -> Optional[int]:
    """Return the index of the first threshold satisfied by ``score``, or None."""
    for index, threshold in enumerate(thresholds):
        if score >= threshold:
            return index
    return None


def validate_thresholds(thresholds: Iterable[int]) -> list[int]:
    """Check a threshold table and return it as a list.

    Raises:
        InvalidConfiguration: If the table is empty, holds values outside
            0..255, or is not strictly descending.
    """
    table = list(thresholds)
    if not table:
        raise InvalidConfiguration("Quality threshold list is empty")
    for value in table:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"Quality threshold is not an integer: {value!r}")
        if value < 0 or value > MAPQ_MAX:
            raise InvalidConfiguration(f"Quality threshold out of range 0..{MAPQ_MAX}: {value}")
    for higher, lower in zip(table, table[1:]):
        if lower >= higher:
            raise InvalidConfiguration(
                f"Quality thresholds must be strictly descending: {table}"
            )
    return table


def parse_thresholds(text: str) -> list[int]:
    """Parse a comma-separated threshold list such as ``"60,10,1,0"``."""
    values = []
    for item in str(text).split(","):
        item = item.strip()
        if not item:
            continue
        try:
            values.append(int(item))
        except ValueError:
            raise InvalidConfiguration(f"Invalid quality threshold: {item!r}") from None
    return validate_thresholds(values)


class QualityHistogram:
    """Counts indexed in parallel with a threshold table."""

    def __init__(self, thresholds: Sequence[int]) -> None:
        self.thresholds = list(thresholds)
        self.counts = [0] * len(self.thresholds)
        self.unbucketed = 0

    def add(self, score: int) -> Optional[int]:
        index = bucket_index(self.thresholds, score)
        if index is None:
            self.unbucketed += 1
        else:
            self.counts[index] += 1
        return index

    @property
    def total(self) -> int:
        return sum(self.counts)

    def items(self) -> list[tuple[int, int]]:
        return list(zip(self.thresholds, self.counts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QualityHistogram):
            return NotImplemented
        return (
            self.thresholds == other.thresholds
            and self.counts == other.counts
            and self.unbucketed == other.unbucketed
        )

    def __repr__(self) -> str:
        return f"QualityHistogram({self.items()!r})"
