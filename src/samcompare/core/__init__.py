"""Record model, parser and classification engine."""

from samcompare.core.engine import ComparisonResult, Outcome, classify, classify_pair
from samcompare.core.modes import ComparisonMode, is_concordant, positions_agree, tolerance
from samcompare.core.parser import SamStreamParser, parse_lines
from samcompare.core.quality import QualityHistogram, bucket_index, parse_thresholds
from samcompare.core.records import (
    MappedRecord,
    Record,
    Secondary,
    Strand,
    Supplementary,
    UnmappedRecord,
)

__all__ = [
    "ComparisonMode",
    "ComparisonResult",
    "MappedRecord",
    "Outcome",
    "QualityHistogram",
    "Record",
    "SamStreamParser",
    "Secondary",
    "Strand",
    "Supplementary",
    "UnmappedRecord",
    "bucket_index",
    "classify",
    "classify_pair",
    "is_concordant",
    "parse_lines",
    "parse_thresholds",
    "positions_agree",
    "tolerance",
]
