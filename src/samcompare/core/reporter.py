"""
Reporting of comparison results.

- ``CategoryWriter`` streams gained/lost/discordant read names to
  ``<prefix>_gain.txt``, ``<prefix>_loss.txt`` and ``<prefix>_diff.txt``
- ``format_histograms`` renders the tab-separated G/L/D blocks for stdout
- ``summary_frame`` collects the same counts in a pandas DataFrame
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, Union

import pandas as pd

from samcompare.constants import (
    DIFF_SUFFIX,
    GAIN_SUFFIX,
    LOSS_SUFFIX,
    TAG_DIFF,
    TAG_GAIN,
    TAG_LOSS,
    TAG_TARGET_MAPPED,
    TAG_TEST_MAPPED,
)
from samcompare.core.engine import ComparisonResult, Outcome
from samcompare.core.quality import QualityHistogram
from samcompare.core.records import Record
from samcompare.exceptions import OutputWriteError
from samcompare.utils.logging import LogTemplates, get_logger

_SUFFIXES = {
    Outcome.GAIN: GAIN_SUFFIX,
    Outcome.LOSS: LOSS_SUFFIX,
    Outcome.DIFF: DIFF_SUFFIX,
}


def category_paths(prefix: Union[str, Path]) -> dict[Outcome, Path]:
    """Output file for each non-concordant category."""
    return {outcome: Path(f"{prefix}{suffix}") for outcome, suffix in _SUFFIXES.items()}


class CategoryWriter:
    """Write one line per gained, lost or discordant read.

    All three files are created when the writer opens, so an unwritable
    location fails before any read is classified. With ``detailed`` set, the
    full record description is written instead of the bare read name.
    """

    def __init__(
        self,
        prefix: Union[str, Path],
        detailed: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.prefix = str(prefix)
        self.detailed = detailed
        self.logger = logger or get_logger(self.__class__.__name__)
        self.paths = category_paths(prefix)
        self._handles: dict[Outcome, IO[str]] = {}

    def open(self) -> "CategoryWriter":
        self.logger.info(LogTemplates.CATEGORY_FILES.format(prefix=self.prefix))
        for outcome, path in self.paths.items():
            try:
                self._handles[outcome] = open(path, "w", encoding="utf-8")
            except OSError as exc:
                self.close()
                raise OutputWriteError(f"create {path}: {exc}", path=path) from exc
        return self

    def write(self, outcome: Outcome, record: Record) -> None:
        handle = self._handles.get(outcome)
        if handle is None:
            raise OutputWriteError(f"No open output for {outcome.value} reads")
        text = record.describe() if self.detailed else record.qname
        try:
            handle.write(f"{text}\n")
        except OSError as exc:
            raise OutputWriteError(
                f"write {self.paths[outcome]}: {exc}", path=self.paths[outcome]
            ) from exc

    def close(self) -> None:
        errors = []
        for outcome, handle in self._handles.items():
            try:
                handle.close()
            except OSError as exc:
                errors.append(f"{self.paths[outcome]}: {exc}")
        self._handles = {}
        if errors:
            raise OutputWriteError("close " + "; ".join(errors))

    def __enter__(self) -> "CategoryWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _block(tag: str, histogram: QualityHistogram) -> list[str]:
    return [f"{tag}\t{threshold}\t{count}" for threshold, count in histogram.items()]


def format_histograms(
    result: ComparisonResult,
    target_mapped: Optional[QualityHistogram] = None,
    test_mapped: Optional[QualityHistogram] = None,
) -> str:
    """Render the report: one block per tag, blocks separated by a blank line."""
    blocks = [
        _block(TAG_GAIN, result.gain),
        _block(TAG_LOSS, result.loss),
        _block(TAG_DIFF, result.diff),
    ]
    if target_mapped is not None:
        blocks.append(_block(TAG_TARGET_MAPPED, target_mapped))
    if test_mapped is not None:
        blocks.append(_block(TAG_TEST_MAPPED, test_mapped))
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


def summary_frame(
    result: ComparisonResult,
    target_mapped: Optional[QualityHistogram] = None,
    test_mapped: Optional[QualityHistogram] = None,
) -> pd.DataFrame:
    """Per-threshold counts as a DataFrame, one row per threshold."""
    data = {
        "threshold": result.thresholds,
        "gain": result.gain.counts,
        "loss": result.loss.counts,
        "diff": result.diff.counts,
    }
    if target_mapped is not None:
        data["target_mapped"] = target_mapped.counts
    if test_mapped is not None:
        data["test_mapped"] = test_mapped.counts
    return pd.DataFrame(data)


def write_summary(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write a summary DataFrame as TSV."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, sep="\t", index=False)
    except OSError as exc:
        raise OutputWriteError(f"write {path}: {exc}", path=path) from exc
    return path

