"""Tests for the reporter."""

import pandas as pd
import pytest

from samcompare.core.engine import Outcome, classify
from samcompare.core.quality import QualityHistogram
from samcompare.core.records import MappedRecord, Strand, UnmappedRecord
from samcompare.core.reporter import (
    CategoryWriter,
    category_paths,
    format_histograms,
    summary_frame,
    write_summary,
)
from samcompare.exceptions import OutputWriteError

THRESHOLDS = [60, 10, 1, 0]


def mapped(qname, pos=100, mapq=60):
    return MappedRecord(qname, 50, "chr1", pos, Strand.FORWARD, mapq)


def unmapped(qname):
    return UnmappedRecord(qname, 50)


@pytest.fixture
def result():
    target = [unmapped("g1"), mapped("l1", mapq=60), mapped("d1", pos=100, mapq=5), mapped("c1")]
    test = [mapped("g1", mapq=12), unmapped("l1"), mapped("d1", pos=5000), mapped("c1")]
    return classify(target, test, "all", 1.0, THRESHOLDS)


def test_category_paths():
    paths = category_paths("out/run1")
    assert str(paths[Outcome.GAIN]) == "out/run1_gain.txt"
    assert str(paths[Outcome.LOSS]) == "out/run1_loss.txt"
    assert str(paths[Outcome.DIFF]) == "out/run1_diff.txt"


def test_format_histograms(result):
    assert format_histograms(result) == (
        "G\t60\t0\nG\t10\t1\nG\t1\t0\nG\t0\t0\n"
        "\n"
        "L\t60\t1\nL\t10\t0\nL\t1\t0\nL\t0\t0\n"
        "\n"
        "D\t60\t0\nD\t10\t0\nD\t1\t1\nD\t0\t0\n"
    )


def test_format_histograms_with_mapped_blocks(result):
    target_mapped = QualityHistogram(THRESHOLDS)
    test_mapped = QualityHistogram(THRESHOLDS)
    target_mapped.add(60)
    test_mapped.add(0)
    text = format_histograms(result, target_mapped, test_mapped)
    blocks = text.rstrip("\n").split("\n\n")
    assert len(blocks) == 5
    assert blocks[3].splitlines() == ["T\t60\t1", "T\t10\t0", "T\t1\t0", "T\t0\t0"]
    assert blocks[4].splitlines() == ["S\t60\t0", "S\t10\t0", "S\t1\t0", "S\t0\t1"]


def test_category_writer_writes_names(tmp_path):
    prefix = tmp_path / "cmp"
    target = [unmapped("g1"), mapped("l1"), mapped("d1", pos=100), mapped("d2", pos=100)]
    test = [mapped("g1"), unmapped("l1"), mapped("d1", pos=800), mapped("d2", pos=900)]
    with CategoryWriter(prefix) as writer:
        classify(target, test, "prim", 1.0, THRESHOLDS, writer=writer)

    assert (tmp_path / "cmp_gain.txt").read_text() == "g1\n"
    assert (tmp_path / "cmp_loss.txt").read_text() == "l1\n"
    assert (tmp_path / "cmp_diff.txt").read_text() == "d1\nd2\n"


def test_category_writer_creates_empty_files(tmp_path):
    prefix = tmp_path / "empty"
    with CategoryWriter(prefix) as writer:
        classify([mapped("c")], [mapped("c")], "all", 1.0, THRESHOLDS, writer=writer)
    for suffix in ("_gain.txt", "_loss.txt", "_diff.txt"):
        assert (tmp_path / f"empty{suffix}").read_text() == ""


def test_category_writer_detailed(tmp_path):
    prefix = tmp_path / "detail"
    with CategoryWriter(prefix, detailed=True) as writer:
        classify([mapped("l1", mapq=33)], [unmapped("l1")], "all", 1.0, THRESHOLDS, writer=writer)
    assert (tmp_path / "detail_loss.txt").read_text() == "l1\t50\tchr1\t100\t+\t33\t\n"


def test_identical_runs_write_identical_files(tmp_path):
    target = [unmapped("g"), mapped("l"), mapped("d", pos=100)]
    test = [mapped("g"), unmapped("l"), mapped("d", pos=700)]
    contents = []
    for name in ("a", "b"):
        with CategoryWriter(tmp_path / name) as writer:
            classify(target, test, "all", 1.0, THRESHOLDS, writer=writer)
        contents.append(
            [(tmp_path / f"{name}{s}").read_text() for s in ("_gain.txt", "_loss.txt", "_diff.txt")]
        )
    assert contents[0] == contents[1]


def test_category_writer_unwritable_location(tmp_path):
    writer = CategoryWriter(tmp_path / "missing_dir" / "cmp")
    with pytest.raises(OutputWriteError):
        writer.open()


def test_write_without_open_fails(tmp_path):
    writer = CategoryWriter(tmp_path / "cmp")
    with pytest.raises(OutputWriteError):
        writer.write(Outcome.GAIN, mapped("g"))


def test_summary_frame(result):
    frame = summary_frame(result)
    assert list(frame.columns) == ["threshold", "gain", "loss", "diff"]
    assert frame["threshold"].tolist() == THRESHOLDS
    assert frame["gain"].tolist() == [0, 1, 0, 0]
    assert frame["loss"].tolist() == [1, 0, 0, 0]
    assert frame["diff"].tolist() == [0, 0, 1, 0]


def test_summary_frame_with_mapped(result):
    target_mapped = QualityHistogram(THRESHOLDS)
    target_mapped.add(61)
    frame = summary_frame(result, target_mapped=target_mapped)
    assert "target_mapped" in frame.columns
    assert "test_mapped" not in frame.columns
    assert frame["target_mapped"].tolist() == [1, 0, 0, 0]


def test_write_summary_tsv(result, tmp_path):
    path = write_summary(summary_frame(result), tmp_path / "reports" / "summary.tsv")
    loaded = pd.read_csv(path, sep="\t")
    pd.testing.assert_frame_equal(loaded, summary_frame(result))
