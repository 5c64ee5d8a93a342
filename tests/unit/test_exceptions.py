"""Tests for the exception hierarchy."""

import pytest

from samcompare.exceptions import (
    ConfigurationError,
    InputLineError,
    InputOpenError,
    InvalidConfiguration,
    MalformedRecord,
    OrphanSubAlignment,
    OutputWriteError,
    ParseError,
    RecordCountMismatch,
    SamCompareError,
)


@pytest.mark.parametrize(
    "exc_type",
    [
        InputOpenError,
        InputLineError,
        InvalidConfiguration,
        OutputWriteError,
        ParseError,
    ],
)
def test_all_errors_share_a_base(exc_type):
    assert issubclass(exc_type, SamCompareError)


def test_parse_error_subclasses():
    assert issubclass(MalformedRecord, ParseError)
    assert issubclass(OrphanSubAlignment, ParseError)


def test_configuration_error_alias():
    assert ConfigurationError is InvalidConfiguration


def test_parse_error_message_names_line():
    exc = MalformedRecord("unknown flag: 3", 7, "r1\t3\tchr1")
    assert exc.reason == "unknown flag: 3"
    assert exc.line_number == 7
    assert str(exc) == "line 7: unknown flag: 3 [r1\t3\tchr1]"


def test_parse_error_without_location():
    assert str(ParseError("bad")) == "bad"


def test_record_count_mismatch_message():
    exc = RecordCountMismatch(100, 99)
    assert "target: 100" in str(exc)
    assert "test: 99" in str(exc)
    assert isinstance(exc, SamCompareError)


def test_io_errors_keep_path():
    assert InputOpenError("x", path="a.sam").path == "a.sam"
    assert InputLineError("x", path="a.sam", line_number=3).line_number == 3
    assert OutputWriteError("x", path="o_gain.txt").path == "o_gain.txt"
