"""Click application entrypoint for samcompare."""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Optional

import click

from samcompare import __version__
from samcompare.cli.exit_codes import EXIT_ERROR, EXIT_SIGINT, EXIT_SIGTERM, EXIT_SUCCESS
from samcompare.exceptions import SamCompareError
from samcompare.utils.logging import get_logger, level_from_verbosity, setup_logging

from .common_options import (
    config_option,
    distance_option,
    log_file_option,
    mode_option,
    output_option,
    quality_option,
    verbose_option,
)
from .pipeline import CompareOptions, execute_comparison


class SignalInterrupt(KeyboardInterrupt):
    """KeyboardInterrupt raised from a signal handler, remembering the signal."""

    def __init__(self, signum: int) -> None:
        self.signum = signum
        super().__init__(f"{signal.Signals(signum).name} received")


def _interrupt_exit_code(exc: KeyboardInterrupt) -> int:
    if getattr(exc, "signum", None) == signal.SIGTERM:
        return EXIT_SIGTERM
    return EXIT_SIGINT


def _handle_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Handle interrupt signals for graceful shutdown."""
    sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
    click.echo(f"\n{sig_name} received, stopping...", err=True)
    raise SignalInterrupt(signum)


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"samcompare {__version__}")
        ctx.exit()


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("test", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
@output_option
@distance_option
@quality_option
@mode_option
@config_option
@click.option(
    "--detailed",
    is_flag=True,
    help="Write full record descriptions instead of read names to the output files",
)
@click.option(
    "--report-mapped",
    is_flag=True,
    help="Also report mapped reads per quality threshold for each input (tags T and S)",
)
@click.option(
    "--summary",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the per-threshold counts as a TSV table",
)
@verbose_option
@log_file_option
def cli(
    target: Path,
    test: Path,
    output_prefix: Optional[str],
    distance: Optional[float],
    quality: Optional[str],
    mode: Optional[str],
    config: Optional[Path],
    detailed: bool,
    report_mapped: bool,
    summary: Optional[Path],
    verbose: int,
    log_file: Optional[Path],
) -> None:
    """Compare a test SAM file against a target SAM file.

    Reads are paired by their order in the two files and counted as gained,
    lost or discordant per MAPQ threshold.
    """
    setup_logging(level=level_from_verbosity(verbose), log_file=log_file)
    logger = get_logger("cli")

    try:
        opts = CompareOptions(
            target=target,
            test=test,
            output_prefix=output_prefix,
            distance=distance,
            quality=quality,
            mode=mode,
            config_path=config,
            detailed=detailed,
            report_mapped=report_mapped,
            summary=summary,
            log_file=log_file,
            verbose=verbose,
        )
        execute_comparison(opts, logger)

    except KeyboardInterrupt as exc:
        logger.info("Comparison interrupted by user")
        sys.exit(_interrupt_exit_code(exc))
    except SamCompareError as exc:
        logger.error(str(exc))
        sys.exit(EXIT_ERROR)
    except Exception as exc:
        logger.exception(f"Unexpected error: {exc}")
        sys.exit(EXIT_ERROR)


def main(argv: list[str] | None = None) -> int:
    """Main entry point with signal handling."""
    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        cli(argv)
        return EXIT_SUCCESS
    except KeyboardInterrupt as exc:
        return _interrupt_exit_code(exc)
    except SystemExit as exc:
        # Preserve explicit exit codes from cli()
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
