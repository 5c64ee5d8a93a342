"""Tests for quality bucketing."""

import pytest

from samcompare.core.quality import (
    QualityHistogram,
    bucket_index,
    parse_thresholds,
    validate_thresholds,
)
from samcompare.exceptions import InvalidConfiguration

DEFAULT = [60, 10, 1, 0]


class TestBucketIndex:
    @pytest.mark.parametrize(
        "score,expected",
        [(255, 0), (60, 0), (59, 1), (10, 1), (9, 2), (1, 2), (0, 3)],
    )
    def test_first_satisfied_threshold_wins(self, score, expected):
        assert bucket_index(DEFAULT, score) == expected

    def test_total_when_table_ends_in_zero(self):
        for table in ([60, 10, 1, 0], [0], [255, 0], [30, 20, 10, 0]):
            for score in range(256):
                index = bucket_index(table, score)
                assert index is not None
                assert score >= table[index]
                # No higher threshold is satisfied
                assert all(score < t for t in table[:index])

    def test_none_when_no_threshold_satisfied(self):
        assert bucket_index([60, 10], 5) is None


class TestValidateThresholds:
    def test_accepts_strictly_descending(self):
        assert validate_thresholds((60, 10, 1, 0)) == DEFAULT

    @pytest.mark.parametrize("table", [[], [10, 10, 0], [0, 10], [60, 1, 10]])
    def test_rejects_empty_or_not_descending(self, table):
        with pytest.raises(InvalidConfiguration):
            validate_thresholds(table)

    @pytest.mark.parametrize("table", [[-1], [256, 0], ["60"], [True]])
    def test_rejects_out_of_range_or_non_integer(self, table):
        with pytest.raises(InvalidConfiguration):
            validate_thresholds(table)


class TestParseThresholds:
    def test_comma_separated(self):
        assert parse_thresholds("60,10,1,0") == DEFAULT

    def test_whitespace_tolerated(self):
        assert parse_thresholds(" 30 , 0 ") == [30, 0]

    def test_unparsable_value(self):
        with pytest.raises(InvalidConfiguration, match="x"):
            parse_thresholds("60,x,0")


class TestQualityHistogram:
    def test_add_counts_into_bucket(self):
        histogram = QualityHistogram(DEFAULT)
        for score in (60, 42, 3, 0, 0):
            histogram.add(score)
        assert histogram.counts == [1, 1, 1, 2]
        assert histogram.total == 5
        assert histogram.items() == [(60, 1), (10, 1), (1, 1), (0, 2)]

    def test_unbucketed_scores_are_tracked_separately(self):
        histogram = QualityHistogram([20])
        assert histogram.add(5) is None
        assert histogram.counts == [0]
        assert histogram.unbucketed == 1

    def test_equality(self):
        a = QualityHistogram(DEFAULT)
        b = QualityHistogram(DEFAULT)
        a.add(7)
        assert a != b
        b.add(7)
        assert a == b
