"""Custom exceptions for samcompare."""

from __future__ import annotations

from typing import Optional


class SamCompareError(Exception):
    """Base exception for all samcompare errors."""

    pass


class InvalidConfiguration(SamCompareError):
    """Raised when a distance, threshold list or mode is invalid."""

    pass


# Name used by the config layer
ConfigurationError = InvalidConfiguration


class InputOpenError(SamCompareError):
    """Raised when an input alignment file cannot be opened."""

    def __init__(self, message="", path=None):
        super().__init__(message)
        self.path = path


class InputLineError(SamCompareError):
    """Raised when reading an input file fails part way through."""

    def __init__(self, message="", path=None, line_number=None):
        super().__init__(message)
        self.path = path
        self.line_number = line_number


class ParseError(SamCompareError):
    """Raised when an alignment line cannot be turned into a record."""

    def __init__(self, reason: str, line_number: Optional[int] = None, line: Optional[str] = None):
        """Initialize ParseError with the offending line.

        Args:
            reason: Why the line was rejected
            line_number: 1-based line number within the input stream
            line: The raw line content
        """
        self.reason = reason
        self.line_number = line_number
        self.line = line
        location = f"line {line_number}: " if line_number is not None else ""
        message = f"{location}{reason}"
        if line is not None:
            message = f"{message} [{line}]"
        super().__init__(message)


class MalformedRecord(ParseError):
    """Raised for unparsable numeric fields or an unrecognized flag."""

    pass


class OrphanSubAlignment(ParseError):
    """Raised when a secondary/supplementary line has no Mapped primary to attach to."""

    pass


class RecordCountMismatch(SamCompareError):
    """Raised when target and test do not hold the same number of reads."""

    def __init__(self, target_count: int, test_count: int):
        super().__init__(
            "Not the same number of reads in each SAM file "
            f"(target: {target_count} and test: {test_count})"
        )
        self.target_count = target_count
        self.test_count = test_count


class OutputWriteError(SamCompareError):
    """Raised when a result file cannot be created or written."""

    def __init__(self, message="", path=None):
        super().__init__(message)
        self.path = path
