"""Tests for exit_codes module."""

from samcompare.cli.exit_codes import (
    EXIT_SUCCESS,
    EXIT_ERROR,
    EXIT_USAGE,
    EXIT_SIGINT,
    EXIT_SIGTERM,
)


class TestExitCodes:
    """Test exit code constants."""

    def test_exit_success_is_zero(self):
        assert EXIT_SUCCESS == 0

    def test_exit_error_is_one(self):
        assert EXIT_ERROR == 1

    def test_exit_usage_is_two(self):
        """EXIT_USAGE should be 2 (shell convention for usage errors)."""
        assert EXIT_USAGE == 2

    def test_signal_codes(self):
        assert EXIT_SIGINT == 128 + 2
        assert EXIT_SIGTERM == 128 + 15

    def test_exit_codes_are_unique(self):
        codes = [EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_SIGINT, EXIT_SIGTERM]
        assert len(codes) == len(set(codes))
        assert all(0 <= code <= 255 for code in codes)
