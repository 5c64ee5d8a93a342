"""
Record model for one read's alignment outcome.

A read is either Mapped (primary placement plus any attached secondary and
supplementary sub-alignments) or Unmapped. ``Record`` is the closed union of
the two; callers dispatch with ``isinstance`` and treat anything else as a
programming error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from samcompare.constants import FLAG_REVERSE


class Strand(Enum):
    """Alignment orientation."""

    FORWARD = "+"
    REVERSE = "-"

    @classmethod
    def from_flag(cls, flag: int) -> "Strand":
        return cls.REVERSE if flag & FLAG_REVERSE else cls.FORWARD

    def __str__(self) -> str:
        return self.value


@dataclass
class Secondary:
    """Alternative, lower-confidence placement of a read."""

    rname: str
    pos: int
    strand: Strand
    alignment_score: Optional[int] = None

    def describe(self) -> str:
        als = "" if self.alignment_score is None else self.alignment_score
        return f"[{self.rname}\t{self.pos}\t{self.strand}\t{als}]"


@dataclass
class Supplementary:
    """One segment of a split/chimeric alignment of a read."""

    rname: str
    pos: int
    strand: Strand
    length: int
    alignment_score: Optional[int] = None

    def describe(self) -> str:
        return f"{{{self.rname}\t{self.pos}\t{self.strand}\t{self.length}}}"


@dataclass
class MappedRecord:
    """A read with a primary alignment."""

    qname: str
    read_length: int
    rname: str
    pos: int
    strand: Strand
    mapq: int
    alignment_score: Optional[int] = None
    secondaries: list[Secondary] = field(default_factory=list)
    supplementaries: list[Supplementary] = field(default_factory=list)

    is_mapped = True

    @property
    def span(self) -> tuple[int, int]:
        """Lowest and highest start position over the primary and its supplementaries."""
        positions = [self.pos] + [s.pos for s in self.supplementaries if s.rname == self.rname]
        return min(positions), max(positions)

    def describe(self) -> str:
        """One tab-separated line summarising the record and its sub-alignments."""
        als = "" if self.alignment_score is None else self.alignment_score
        parts = [
            f"{self.qname}\t{self.read_length}\t{self.rname}\t{self.pos}"
            f"\t{self.strand}\t{self.mapq}\t{als}"
        ]
        parts.extend(s.describe() for s in self.secondaries)
        parts.extend(s.describe() for s in self.supplementaries)
        return "\t".join(parts)


@dataclass
class UnmappedRecord:
    """A read the aligner could not place."""

    qname: str
    read_length: int

    is_mapped = False

    def describe(self) -> str:
        return f"{self.qname}\t{self.read_length}"


Record = Union[MappedRecord, UnmappedRecord]
