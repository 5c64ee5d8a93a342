"""
Pairing and classification of target/test records.

Records are paired purely by position in their lists: record i of the target
corresponds to record i of the test. Each pair ends in exactly one outcome:

- (Unmapped, Unmapped)  concordant, nothing counted
- (Unmapped, Mapped)    gain, bucketed by the test MAPQ
- (Mapped, Unmapped)    loss, bucketed by the target MAPQ
- (Mapped, Mapped)      decided by the comparison mode; a discordant pair is
                        bucketed by the target MAPQ
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Sequence, Union

from samcompare.core.modes import ComparisonMode, is_concordant
from samcompare.core.quality import QualityHistogram
from samcompare.core.records import MappedRecord, Record, UnmappedRecord
from samcompare.exceptions import RecordCountMismatch
from samcompare.utils.logging import LogTemplates, get_logger


class Outcome(Enum):
    CONCORDANT = "concordant"
    GAIN = "gain"
    LOSS = "loss"
    DIFF = "diff"


class OutcomeSink(Protocol):
    def write(self, outcome: Outcome, record: Record) -> None: ...


@dataclass
class ComparisonResult:
    """Histograms and read names accumulated over one comparison run."""

    thresholds: list[int]
    keep_names: bool = True
    gain: QualityHistogram = field(init=False)
    loss: QualityHistogram = field(init=False)
    diff: QualityHistogram = field(init=False)
    names: dict[Outcome, list[str]] = field(init=False)
    outcome_counts: dict[Outcome, int] = field(init=False)
    concordant: int = 0
    both_unmapped: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        self.gain = QualityHistogram(self.thresholds)
        self.loss = QualityHistogram(self.thresholds)
        self.diff = QualityHistogram(self.thresholds)
        self.names = {Outcome.GAIN: [], Outcome.LOSS: [], Outcome.DIFF: []}
        self.outcome_counts = {Outcome.GAIN: 0, Outcome.LOSS: 0, Outcome.DIFF: 0}

    def histogram(self, outcome: Outcome) -> QualityHistogram:
        if outcome is Outcome.GAIN:
            return self.gain
        if outcome is Outcome.LOSS:
            return self.loss
        if outcome is Outcome.DIFF:
            return self.diff
        raise KeyError(outcome)

    def record(self, outcome: Outcome, record: MappedRecord) -> None:
        """Count a non-concordant read and, with ``keep_names``, remember its name."""
        self.histogram(outcome).add(record.mapq)
        self.outcome_counts[outcome] += 1
        if self.keep_names:
            self.names[outcome].append(record.qname)


def classify_pair(
    target: Record,
    test: Record,
    mode: ComparisonMode,
    distance_fraction: float,
) -> Outcome:
    """Classify one target/test pair."""
    if isinstance(target, UnmappedRecord):
        if isinstance(test, UnmappedRecord):
            return Outcome.CONCORDANT
        if isinstance(test, MappedRecord):
            return Outcome.GAIN
    elif isinstance(target, MappedRecord):
        if isinstance(test, UnmappedRecord):
            return Outcome.LOSS
        if isinstance(test, MappedRecord):
            if is_concordant(target, test, mode, distance_fraction):
                return Outcome.CONCORDANT
            return Outcome.DIFF
    raise TypeError(f"Cannot classify {type(target).__name__} against {type(test).__name__}")


def classify(
    target: Sequence[Record],
    test: Sequence[Record],
    mode: Union[ComparisonMode, str],
    distance_fraction: float,
    thresholds: Sequence[int],
    writer: Optional[OutcomeSink] = None,
    logger: Optional[logging.Logger] = None,
    keep_names: bool = True,
) -> ComparisonResult:
    """Pair ``target`` and ``test`` by position and classify every read.

    Args:
        target: Records of the reference mapping
        test: Records of the mapping under evaluation
        mode: Comparison mode used for Mapped/Mapped pairs
        distance_fraction: Positional tolerance as a fraction of read length
        thresholds: Descending quality thresholds for the histograms
        writer: Optional sink receiving each gained, lost or discordant read
            as it is classified
        logger: Logger instance (creates one if None)
        keep_names: Keep gained, lost and discordant read names in the
            result.

    Returns:
        ComparisonResult with the gain/loss/diff histograms

    Raises:
        RecordCountMismatch: If the two sequences differ in length
    """
    logger = logger or get_logger("engine")
    if len(target) != len(test):
        raise RecordCountMismatch(len(target), len(test))

    mode = ComparisonMode.parse(mode)
    result = ComparisonResult(thresholds=list(thresholds), keep_names=keep_names)

    for tgt, tst in zip(target, test):
        result.total += 1
        outcome = classify_pair(tgt, tst, mode, distance_fraction)
        if outcome is Outcome.CONCORDANT:
            result.concordant += 1
            if isinstance(tgt, UnmappedRecord):
                result.both_unmapped += 1
            continue

        # The gained read is only mapped in the test file
        counted = tst if outcome is Outcome.GAIN else tgt
        result.record(outcome, counted)
        if writer is not None:
            writer.write(outcome, counted)

    logger.info(
        LogTemplates.CLASSIFY_STATS.format(
            total=result.total,
            concordant=result.concordant,
            gain=result.outcome_counts[Outcome.GAIN],
            loss=result.outcome_counts[Outcome.LOSS],
            diff=result.outcome_counts[Outcome.DIFF],
        )
    )
    return result
