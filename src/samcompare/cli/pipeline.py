"""Shared comparison execution helpers for the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from samcompare.config import Config, coerce_thresholds, load_config
from samcompare.core.engine import ComparisonResult, classify
from samcompare.core.reporter import (
    CategoryWriter,
    format_histograms,
    summary_frame,
    write_summary,
)
from samcompare.core.sources import load_records
from samcompare.exceptions import RecordCountMismatch
from samcompare.utils.logging import LogTemplates, level_from_name, setup_logging


@dataclass
class CompareOptions:
    """Container for CLI options; None means use config or default."""

    target: Path
    test: Path
    output_prefix: Optional[str] = None
    distance: Optional[float] = None
    quality: Optional[str] = None
    mode: Optional[str] = None
    config_path: Optional[Path] = None
    detailed: bool = False
    report_mapped: bool = False
    summary: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: int = 0


def build_config(opts: CompareOptions) -> Config:
    """Merge defaults, the YAML config file and CLI overrides, then validate."""
    cfg = load_config(opts.config_path) if opts.config_path else Config()

    cfg.target = opts.target
    cfg.test = opts.test
    if opts.output_prefix is not None:
        cfg.compare.output_prefix = opts.output_prefix
    if opts.distance is not None:
        cfg.compare.distance_fraction = opts.distance
    if opts.quality is not None:
        cfg.compare.thresholds = coerce_thresholds(opts.quality)
    if opts.mode is not None:
        cfg.compare.mode = opts.mode.lower()
    if opts.detailed:
        cfg.compare.detailed_output = True
    if opts.report_mapped:
        cfg.compare.report_mapped = True
    if opts.summary is not None:
        cfg.compare.summary_file = opts.summary
    if opts.log_file is not None:
        cfg.runtime.log_file = opts.log_file

    cfg.validate()
    return cfg


def run_comparison(cfg: Config, logger: logging.Logger) -> ComparisonResult:
    """Load both inputs, classify every read and print the report to stdout."""
    compare = cfg.compare
    mapped_thresholds = compare.thresholds if compare.report_mapped else None

    target = load_records(cfg.target, thresholds=mapped_thresholds, logger=logger)
    test = load_records(cfg.test, thresholds=mapped_thresholds, logger=logger)

    # Checked before any output file is created
    if len(target) != len(test):
        raise RecordCountMismatch(len(target), len(test))
    logger.info(LogTemplates.READ_COUNT.format(count=len(target)))

    if compare.output_prefix:
        with CategoryWriter(compare.output_prefix, detailed=compare.detailed_output) as writer:
            result = classify(
                target.records,
                test.records,
                cfg.comparison_mode,
                compare.distance_fraction,
                compare.thresholds,
                writer=writer,
                logger=logger,
                keep_names=False,
            )
    else:
        result = classify(
            target.records,
            test.records,
            cfg.comparison_mode,
            compare.distance_fraction,
            compare.thresholds,
            logger=logger,
            keep_names=False,
        )

    click.echo(format_histograms(result, target.mapped, test.mapped), nl=False)

    if compare.summary_file:
        path = write_summary(summary_frame(result, target.mapped, test.mapped), compare.summary_file)
        logger.info(f"Summary table written to {path}")

    return result


def execute_comparison(opts: CompareOptions, logger: logging.Logger) -> ComparisonResult:
    """Build the configuration, reconfigure logging from it and run the comparison."""
    cfg = build_config(opts)

    # CLI verbosity wins over the config file
    if opts.verbose == 0:
        config_level = level_from_name(cfg.runtime.log_level)
        config_log_file = cfg.runtime.log_file
        if config_level != logging.WARNING or (config_log_file and config_log_file != opts.log_file):
            setup_logging(level=config_level, log_file=config_log_file)

    return run_comparison(cfg, logger)
