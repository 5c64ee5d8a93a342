"""
Input sources for alignment records.

SAM text is read directly (optionally gzip-compressed); BAM files go through
pysam and each record is rendered back to its SAM line so that every input
takes the same path through the stream parser.
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from samcompare.core.parser import SamStreamParser
from samcompare.core.quality import QualityHistogram
from samcompare.core.records import Record
from samcompare.exceptions import InputLineError, InputOpenError, ParseError
from samcompare.utils.logging import LogTemplates, get_logger

PathLike = Union[str, Path]


def _is_bam(path: Path) -> bool:
    return path.suffix.lower() == ".bam"


def _iter_text_lines(path: Path) -> Iterator[str]:
    try:
        if path.suffix.lower() == ".gz":
            handle = gzip.open(path, "rt", encoding="utf-8")
        else:
            handle = open(path, "r", encoding="utf-8")
    except OSError as exc:
        raise InputOpenError(f"open {path}: {exc}", path=path) from exc

    line_number = 0
    with handle:
        try:
            for line in handle:
                line_number += 1
                yield line
        except (OSError, UnicodeDecodeError, EOFError) as exc:
            raise InputLineError(
                f"read {path} after line {line_number}: {exc}",
                path=path,
                line_number=line_number + 1,
            ) from exc


def _iter_bam_lines(path: Path) -> Iterator[str]:
    import pysam

    try:
        bam = pysam.AlignmentFile(str(path), "rb", check_sq=False)
    except (OSError, ValueError) as exc:
        raise InputOpenError(f"open {path}: {exc}", path=path) from exc

    count = 0
    with bam:
        try:
            for segment in bam:
                count += 1
                yield segment.to_string()
        except (OSError, ValueError) as exc:
            raise InputLineError(
                f"read {path} after record {count}: {exc}", path=path, line_number=count + 1
            ) from exc


def iter_alignment_lines(path: PathLike) -> Iterator[str]:
    """Yield the SAM lines of ``path`` (SAM, SAM.gz or BAM)."""
    path = Path(path)
    if not path.is_file():
        raise InputOpenError(f"Input file not found: {path}", path=path)
    if _is_bam(path):
        return _iter_bam_lines(path)
    return _iter_text_lines(path)


class LoadedAlignments:
    """Records of one input file and, optionally, its mapped-quality histogram."""

    def __init__(self, path: Path, records: list[Record], mapped: Optional[QualityHistogram]):
        self.path = path
        self.records = records
        self.mapped = mapped

    def __len__(self) -> int:
        return len(self.records)


def load_records(
    path: PathLike,
    thresholds: Optional[Sequence[int]] = None,
    logger: Optional[logging.Logger] = None,
) -> LoadedAlignments:
    """Parse every alignment line of ``path`` into records.

    Args:
        path: SAM, SAM.gz or BAM file
        thresholds: When given, Mapped primaries are also counted per quality bucket
        logger: Logger instance (creates one if None)

    Returns:
        LoadedAlignments holding the records in file order
    """
    logger = logger or get_logger("sources")
    path = Path(path)
    parser = SamStreamParser(thresholds=thresholds)
    logger.debug(f"Parsing alignments from {path}")
    try:
        parser.parse(iter_alignment_lines(path))
    except ParseError:
        logger.error(f"Failed to parse {path}")
        raise
    logger.debug(LogTemplates.FILE_LOADED.format(count=len(parser.records), path=path))
    return LoadedAlignments(path, parser.records, parser.mapped_histogram)
