"""Tests for the pybedgraph command-line interface."""

import io
import logging
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

import pybedgraph as pbg
from pybedgraph import cli
from pybedgraph.cli import build_parser, main

DATA_DIR = Path(__file__).resolve().parent / "data"
SMALL = str(DATA_DIR / "small.bedgraph")
COV = str(DATA_DIR / "cov.bedgraph")


def _read_output(text):
    return pbg.read_bedgraph(io.StringIO(text))


class TestCli:
    def test_filter(self, capsys):
        assert main(["filter", SMALL, "pBRP02", "0", "10"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "pBRP02\t0\t5\t-1.1957696376198523",
            "pBRP02\t5\t10\t-0.386565212080191",
        ]

    def test_contigs(self, capsys):
        assert main(["contigs", SMALL]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "CP064350.1\t15",
            "CP064351.1\t15",
            "pBRP02\t15",
        ]

    def test_roll_mean_to_file(self, tmp_path):
        dest = tmp_path / "rolled.bedgraph"
        assert main(["roll", SMALL, "-w", "3", "--circular", "-o", str(dest)]) == 0
        rolled = pbg.read_bedgraph(dest)
        expected = pbg.roll_mean(pbg.read_bedgraph(SMALL), 3, circular=True)
        np.testing.assert_allclose(rolled.scores(), expected.scores())

    def test_roll_median(self, capsys):
        assert main(["roll", SMALL, "-w", "3", "--stat", "median"]) == 0
        rolled = _read_output(capsys.readouterr().out)
        assert rolled == pbg.roll_median(pbg.read_bedgraph(SMALL), 3)

    def test_even_window_fails_without_exiting(self, capsys, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["roll", SMALL, "-w", "4"]) == 1
        assert capsys.readouterr().out == ""
        assert "odd" in caplog.text

    def test_bad_recompute_every_fails_without_exiting(self, capsys, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["roll", SMALL, "-w", "3", "--recompute-every", "0"]) == 1
        assert capsys.readouterr().out == ""
        assert "recompute_every must be a positive integer" in caplog.text

    @pytest.mark.parametrize(
        "argv, debug, level",
        [
            (["contigs", SMALL], False, logging.WARNING),
            (["-v", "contigs", SMALL], False, logging.DEBUG),
            (["contigs", SMALL], True, logging.DEBUG),
        ],
    )
    def test_log_level(self, monkeypatch, argv, debug, level):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        pbg.CONFIG["debug"] = debug
        assert main(argv) == 0
        assert calls[0]["level"] == level

    def test_cpm(self, capsys):
        assert main(["cpm", COV]) == 0
        result = _read_output(capsys.readouterr().out)
        assert result.scores().sum() == pytest.approx(1_000_000)

    def test_robust_z(self, capsys):
        assert main(["robust-z", SMALL]) == 0
        result = _read_output(capsys.readouterr().out)
        expected = pbg.robust_z_track(pbg.read_bedgraph(SMALL))
        np.testing.assert_allclose(result.scores(), expected.scores())

    def test_degenerate_flag(self, tmp_path, capsys):
        src = tmp_path / "flat.bedgraph"
        src.write_text("a\t0\t5\t1.0\na\t5\t10\t1.0\n")
        assert main(["robust-z", str(src)]) == 1
        with pytest.warns(RuntimeWarning):
            assert main(["--degenerate", "propagate", "robust-z", str(src)]) == 0
        assert "nan" in capsys.readouterr().out

    def test_merge_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO("chr1\t0\t5\nchr1\t5\t10\nchr1\t20\t25\nchr2\t0\t5\n"))
        assert main(["merge"]) == 0
        assert capsys.readouterr().out == "chr1\t0\t10\nchr1\t20\t25\nchr2\t0\t5\n"

    def test_summary(self, capsys):
        assert main(["summary", SMALL]) == 0
        lines = dict(line.split("\t") for line in capsys.readouterr().out.splitlines())
        assert lines["Records"] == "9"
        assert lines["Contigs"] == "3"
        assert float(lines["Min"]) == pbg.read_bedgraph(SMALL).scores().min()

    def test_summary_keeps_full_precision(self, monkeypatch, capsys):
        big = pd.Series(
            [1_234_567.0, 24.0, -3.5, 987654.3210987, 762078123456.75, 617283.1234567, 0.1, 0.2],
            index=["Records", "Contigs", "Min", "Max", "Sum", "Mean", "Median", "MAD"],
        )
        monkeypatch.setattr(cli, "summarize", lambda bgd: big)
        assert main(["summary", SMALL]) == 0
        lines = dict(line.split("\t") for line in capsys.readouterr().out.splitlines())
        assert lines["Records"] == "1234567"
        assert lines["Contigs"] == "24"
        assert lines["Max"] == "987654.3210987"
        assert lines["Sum"] == "762078123456.75"
        assert float(lines["Mean"]) == 617283.1234567

    def test_summary_of_empty_track(self, tmp_path, capsys):
        src = tmp_path / "empty.bedgraph"
        src.write_text("")
        assert main(["summary", str(src)]) == 0
        lines = dict(line.split("\t") for line in capsys.readouterr().out.splitlines())
        assert lines["Records"] == "0"
        assert lines["Mean"] == "nan"

    def test_missing_file(self, tmp_path, caplog):
        assert main(["contigs", str(tmp_path / "missing.bedgraph")]) == 1
        assert "missing.bedgraph" in caplog.text

    def test_format_error(self, tmp_path, caplog):
        src = tmp_path / "bad.bedgraph"
        src.write_text("chr1\t0\t5\n")
        assert main(["contigs", str(src)]) == 1
        assert "expected 4 tab-separated fields" in caplog.text

    def test_no_order_check(self, tmp_path, capsys):
        src = tmp_path / "interleaved.bedgraph"
        src.write_text("a\t0\t5\t1\nb\t0\t5\t1\na\t5\t10\t1\n")
        assert main(["contigs", str(src)]) == 1
        assert main(["--no-order-check", "contigs", str(src)]) == 0
        assert capsys.readouterr().out.splitlines() == ["a\t10", "b\t5"]

    def test_usage_error(self):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["roll", SMALL])
        assert excinfo.value.code == 2
