"""
Tolerance-based comparison of a test primary against a target primary.

Every mode starts from the same positional test: same reference, same strand,
and overlapping windows of ``distance`` bases around each start. The modes
differ in what happens next:

- ``all``        primaries must agree and every target secondary needs a
                 matching test secondary
- ``prim_tgt``   a disagreeing primary is rescued by any test secondary or
                 supplementary that lands on the target primary
- ``prim``       primaries only
- ``prim_supp``  a disagreeing primary is rescued by a test supplementary only
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Union

from samcompare.core.records import MappedRecord, Secondary, Strand, Supplementary
from samcompare.exceptions import InvalidConfiguration


class RescueSource(Enum):
    """Test sub-alignments allowed to stand in for a disagreeing primary."""

    NONE = "none"
    SECONDARIES = "secondaries"
    SUPPLEMENTARIES = "supplementaries"
    BOTH = "both"


class ComparisonMode(Enum):
    ALL = "all"
    PRIM_TGT = "prim_tgt"
    PRIM = "prim"
    PRIM_SUPP = "prim_supp"

    @classmethod
    def parse(cls, value: Union[str, "ComparisonMode"]) -> "ComparisonMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidConfiguration(
                f"Unknown comparison mode: {value!r} (choose from {choices})"
            ) from None

    @property
    def rescue(self) -> RescueSource:
        return _RESCUE[self]

    @property
    def requires_secondaries(self) -> bool:
        return self is ComparisonMode.ALL


_RESCUE = {
    ComparisonMode.ALL: RescueSource.NONE,
    ComparisonMode.PRIM_TGT: RescueSource.BOTH,
    ComparisonMode.PRIM: RescueSource.NONE,
    ComparisonMode.PRIM_SUPP: RescueSource.SUPPLEMENTARIES,
}


def tolerance(distance_fraction: float, read_length: int) -> int:
    """Absolute positional tolerance in bases for a read of ``read_length``."""
    return math.ceil(distance_fraction * read_length)


def positions_agree(
    target_rname: str,
    target_pos: int,
    target_strand: Strand,
    test_rname: str,
    test_pos: int,
    test_strand: Strand,
    distance: int,
) -> bool:
    """Interval-overlap test, written additively so no side goes below zero."""
    return (
        test_rname == target_rname
        and test_strand == target_strand
        and test_pos + distance >= target_pos
        and test_pos <= target_pos + distance
    )


def _lands_on(
    target: Union[MappedRecord, Secondary],
    candidate: Union[MappedRecord, Secondary, Supplementary],
    distance: int,
) -> bool:
    return positions_agree(
        target.rname,
        target.pos,
        target.strand,
        candidate.rname,
        candidate.pos,
        candidate.strand,
        distance,
    )


def _rescue_candidates(test: MappedRecord, source: RescueSource) -> Iterable:
    if source in (RescueSource.SECONDARIES, RescueSource.BOTH):
        yield from test.secondaries
    if source in (RescueSource.SUPPLEMENTARIES, RescueSource.BOTH):
        yield from test.supplementaries


def is_concordant(
    target: MappedRecord,
    test: MappedRecord,
    mode: ComparisonMode,
    distance_fraction: float,
) -> bool:
    """Decide whether ``test`` agrees with ``target`` under ``mode``."""
    distance = tolerance(distance_fraction, target.read_length)

    if not _lands_on(target, test, distance):
        return any(
            _lands_on(target, candidate, distance)
            for candidate in _rescue_candidates(test, mode.rescue)
        )

    if mode.requires_secondaries:
        for secondary in target.secondaries:
            if not any(_lands_on(secondary, s, distance) for s in test.secondaries):
                return False
    return True
