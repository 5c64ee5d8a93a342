"""
SAM stream parser.

Reduces the alignment lines of one file to an ordered list of records, one per
primary or unmapped line. Secondary and supplementary lines are folded into the
Mapped primary that precedes them. The parser keeps an explicit cursor on that
primary instead of keying by read name, so aligner output must emit all lines
of a read contiguously.

Flag handling is an exhaustive case analysis:

- 0 / 16         primary alignment (forward / reverse)
- bit 0x100 set  secondary alignment
- bit 0x800 set  supplementary alignment
- 4              unmapped read
- anything else  MalformedRecord
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from samcompare.constants import (
    COL_CIGAR,
    COL_FLAG,
    COL_MAPQ,
    COL_POS,
    COL_QNAME,
    COL_RNAME,
    COL_SEQ,
    FLAG_MAX,
    FLAG_SECONDARY,
    FLAG_SUPPLEMENTARY,
    FLAG_UNMAPPED,
    HEADER_SIGIL,
    MAPQ_MAX,
    MIN_SAM_FIELDS,
)
from samcompare.core.quality import QualityHistogram
from samcompare.core.records import (
    MappedRecord,
    Record,
    Secondary,
    Strand,
    Supplementary,
    UnmappedRecord,
)
from samcompare.exceptions import MalformedRecord, OrphanSubAlignment

_CIGAR_OP = re.compile(r"(\d+)([MIDNSHP=X])")
# Operations that consume query bases
_QUERY_OPS = set("MIS=X")
# Unsigned decimal integers only
_UNSIGNED = re.compile(r"[0-9]+")
_ALIGNMENT_SCORE_TAG = "AS:i:"


def query_length_from_cigar(cigar: str) -> int:
    """Number of query bases described by a CIGAR string (0 for ``*``)."""
    if cigar == "*":
        return 0
    ops = _CIGAR_OP.findall(cigar)
    if "".join(f"{n}{op}" for n, op in ops) != cigar:
        raise ValueError(f"invalid CIGAR string: {cigar}")
    return sum(int(n) for n, op in ops if op in _QUERY_OPS)


class SamStreamParser:
    """Incremental parser for the lines of one SAM file.

    Feed lines with :meth:`feed` (or all at once with :meth:`parse`) and read
    the result from :attr:`records`. When ``thresholds`` is given, the parser
    also counts Mapped primaries per quality bucket in :attr:`mapped_histogram`.
    """

    def __init__(self, thresholds: Optional[Sequence[int]] = None) -> None:
        self.records: list[Record] = []
        self.mapped_histogram: Optional[QualityHistogram] = (
            QualityHistogram(thresholds) if thresholds is not None else None
        )
        # Index of the Mapped record that sub-alignments attach to
        self._cursor: Optional[int] = None
        self._line_number = 0

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    def parse(self, lines: Iterable[str]) -> list[Record]:
        for line in lines:
            self.feed(line)
        return self.records

    def feed(self, line: str) -> None:
        self._line_number += 1
        line = line.rstrip("\r\n")
        if not line or line.startswith(HEADER_SIGIL):
            return

        fields = line.split("\t")
        if len(fields) < MIN_SAM_FIELDS:
            raise self._malformed(
                f"expected at least {MIN_SAM_FIELDS} tab-separated fields, found {len(fields)}",
                line,
            )

        flag = self._int_field(fields, COL_FLAG, "flag field", line)
        if flag > FLAG_MAX:
            raise self._malformed(f"flag out of range 0..{FLAG_MAX}: {flag}", line)

        if flag == 0 or flag == 16:
            self._push_primary(fields, flag, line)
        elif flag & FLAG_SECONDARY:
            parent = self._attach_target(fields, "secondary", line)
            parent.secondaries.append(
                Secondary(
                    rname=fields[COL_RNAME],
                    pos=self._int_field(fields, COL_POS, "position", line),
                    strand=Strand.from_flag(flag),
                    alignment_score=_alignment_score(fields),
                )
            )
        elif flag & FLAG_SUPPLEMENTARY:
            parent = self._attach_target(fields, "supplementary", line)
            parent.supplementaries.append(
                Supplementary(
                    rname=fields[COL_RNAME],
                    pos=self._int_field(fields, COL_POS, "position", line),
                    strand=Strand.from_flag(flag),
                    length=self._read_length(fields, line),
                    alignment_score=_alignment_score(fields),
                )
            )
        elif flag == FLAG_UNMAPPED:
            self.records.append(
                UnmappedRecord(qname=fields[COL_QNAME], read_length=self._read_length(fields, line))
            )
            self._cursor = None
        else:
            raise self._malformed(f"unknown flag: {flag}", line)

    def _push_primary(self, fields: list[str], flag: int, line: str) -> None:
        mapq = self._int_field(fields, COL_MAPQ, "mapping quality", line)
        if mapq > MAPQ_MAX:
            raise self._malformed(f"mapping quality out of range 0..{MAPQ_MAX}: {mapq}", line)
        record = MappedRecord(
            qname=fields[COL_QNAME],
            read_length=self._read_length(fields, line),
            rname=fields[COL_RNAME],
            pos=self._int_field(fields, COL_POS, "position", line),
            strand=Strand.from_flag(flag),
            mapq=mapq,
            alignment_score=_alignment_score(fields),
        )
        self.records.append(record)
        self._cursor = len(self.records) - 1
        if self.mapped_histogram is not None:
            self.mapped_histogram.add(mapq)

    def _attach_target(self, fields: list[str], kind: str, line: str) -> MappedRecord:
        qname = fields[COL_QNAME]
        if not self.records:
            raise OrphanSubAlignment(
                f"{kind} alignment of {qname} with no preceding record",
                self._line_number,
                line,
            )
        if self._cursor is None:
            raise OrphanSubAlignment(
                f"Unmapped sequence with a {kind} alignment: {self.records[-1].qname}",
                self._line_number,
                line,
            )
        parent = self.records[self._cursor]
        if parent.qname != qname:
            raise OrphanSubAlignment(
                f"{kind} alignment of {qname} follows the primary of {parent.qname}",
                self._line_number,
                line,
            )
        return parent

    def _read_length(self, fields: list[str], line: str) -> int:
        seq = fields[COL_SEQ]
        if seq != "*":
            return len(seq)
        try:
            return query_length_from_cigar(fields[COL_CIGAR])
        except ValueError as exc:
            raise self._malformed(str(exc), line) from None

    def _int_field(self, fields: list[str], column: int, name: str, line: str) -> int:
        raw = fields[column]
        if not _UNSIGNED.fullmatch(raw):
            raise self._malformed(f"unparsable {name}: {raw!r}", line)
        return int(raw)

    def _malformed(self, reason: str, line: str) -> MalformedRecord:
        return MalformedRecord(reason, self._line_number, line)


def _alignment_score(fields: list[str]) -> Optional[int]:
    for tag in fields[MIN_SAM_FIELDS:]:
        if tag.startswith(_ALIGNMENT_SCORE_TAG):
            try:
                return int(tag[len(_ALIGNMENT_SCORE_TAG):])
            except ValueError:
                return None
    return None


def parse_lines(lines: Iterable[str]) -> list[Record]:
    """Parse SAM lines into records in encounter order."""
    return SamStreamParser().parse(lines)
