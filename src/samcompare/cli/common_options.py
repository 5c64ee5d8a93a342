"""Shared Click options for the samcompare CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

from samcompare.core.modes import ComparisonMode

F = TypeVar("F", bound=Callable[..., None])


def output_option(func: F) -> F:
    """Prefix for the gain/loss/diff read-name files."""
    return click.option(
        "-o",
        "--output",
        "output_prefix",
        metavar="NAME",
        default=None,
        help="Generate gain, loss and diff files and output them with the prefix NAME",
    )(func)


def distance_option(func: F) -> F:
    return click.option(
        "-d",
        "--distance",
        type=float,
        default=None,
        help="Positional tolerance as a fraction of the read length [default: 1.0]",
    )(func)


def quality_option(func: F) -> F:
    return click.option(
        "-q",
        "--quality",
        metavar="LIST",
        default=None,
        help="Comma-separated descending MAPQ thresholds [default: 60,10,1,0]",
    )(func)


def mode_option(func: F) -> F:
    return click.option(
        "-m",
        "--mode",
        type=click.Choice([m.value for m in ComparisonMode], case_sensitive=False),
        default=None,
        help="Comparison mode [default: all]",
    )(func)


def config_option(func: F) -> F:
    """Configuration file option."""
    return click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file (YAML)",
    )(func)


def verbose_option(func: F) -> F:
    return click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )(func)


def log_file_option(func: F) -> F:
    return click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Path for log file output",
    )(func)
