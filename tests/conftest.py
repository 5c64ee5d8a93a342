"""Pytest configuration for samcompare tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _sam_line(
    qname,
    flag,
    rname="chr1",
    pos=100,
    mapq=60,
    seq="A" * 50,
    cigar=None,
    tags=(),
):
    """Build one tab-separated SAM alignment line."""
    if cigar is None:
        cigar = "*" if flag == 4 else f"{len(seq)}M" if seq != "*" else "*"
    fields = [qname, str(flag), rname, str(pos), str(mapq), cigar, "*", "0", "0", seq, "*"]
    fields.extend(tags)
    return "\t".join(fields)


@pytest.fixture
def sam_line():
    """Factory for SAM alignment lines."""
    return _sam_line


@pytest.fixture
def write_sam(tmp_path):
    """Write SAM lines (with a minimal header) to a file under tmp_path."""

    def _write(name, lines):
        path = tmp_path / name
        header = ["@HD\tVN:1.6\tSO:unsorted", "@SQ\tSN:chr1\tLN:100000", "@SQ\tSN:chr2\tLN:100000"]
        path.write_text("\n".join(header + list(lines)) + "\n")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging_after_test():
    """Reset samcompare logger state after each test.

    Tests that call setup_logging() set propagate=False, which breaks caplog
    in subsequent tests.
    """
    yield
    app_logger = logging.getLogger("samcompare")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
