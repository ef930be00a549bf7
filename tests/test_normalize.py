"""Tests for counts-per-million normalization."""

import warnings

import numpy as np
import pytest

import pybedgraph as pbg

CPM_EXPECTED = [
    17133.54, 17133.54, 17133.54,
    159880.08, 214033.18, 124028.77,
    307175.93, 99303.01, 44178.41,
]


class TestGetCpm:
    def test_values(self, cov_bgd):
        np.testing.assert_allclose(pbg.get_cpm(cov_bgd), CPM_EXPECTED, atol=1e-2)

    def test_does_not_mutate(self, cov_bgd):
        before = cov_bgd.scores()
        cov_bgd.get_cpm()
        np.testing.assert_array_equal(cov_bgd.scores(), before)

    def test_whole_track_not_per_contig(self, cov_bgd):
        cpm = pbg.get_cpm(cov_bgd)
        chr_a = len(cov_bgd.filter("chrA"))
        # Neither contig sums to a million on its own.
        assert cpm[:chr_a].sum() < 1_000_000
        assert cpm.sum() == pytest.approx(1_000_000)

    def test_sums_to_one_million(self, random_bgd):
        shifted = random_bgd.with_scores(np.abs(random_bgd.scores()) + 0.1)
        assert pbg.get_cpm(shifted).sum() == pytest.approx(1_000_000, rel=1e-12)

    def test_zero_sum_raises(self):
        bgd = pbg.BedGraphData.from_records([("a", 0, 5, 1.0), ("a", 5, 10, -1.0)])
        with pytest.raises(pbg.DegenerateTrackError, match="sum to zero"):
            pbg.get_cpm(bgd)

    def test_empty_track_is_degenerate(self):
        with pytest.raises(pbg.DegenerateTrackError):
            pbg.get_cpm(pbg.BedGraphData())

    def test_zero_sum_propagate(self):
        bgd = pbg.BedGraphData.from_records([("a", 0, 5, 0.0), ("a", 5, 10, 2.0), ("a", 10, 15, -2.0)])
        with pytest.warns(RuntimeWarning, match="sum to zero"):
            cpm = pbg.get_cpm(bgd, degenerate="propagate")
        assert np.isnan(cpm[0])
        assert cpm[1] == np.inf
        assert cpm[2] == -np.inf


class TestToCpm:
    def test_in_place(self, cov_bgd):
        result = pbg.to_cpm(cov_bgd)
        assert result is cov_bgd
        np.testing.assert_allclose(cov_bgd.scores(), CPM_EXPECTED, atol=1e-2)

    def test_method_form(self, cov_bgd):
        cov_bgd.to_cpm()
        assert cov_bgd.scores().sum() == pytest.approx(1_000_000)

    def test_intervals_untouched(self, cov_bgd):
        before = [(r.seqname, r.start, r.end) for r in cov_bgd]
        pbg.to_cpm(cov_bgd)
        assert [(r.seqname, r.start, r.end) for r in cov_bgd] == before

    def test_failure_leaves_store_unchanged(self):
        bgd = pbg.BedGraphData.from_records([("a", 0, 5, 1.0), ("a", 5, 10, -1.0)])
        with pytest.raises(pbg.DegenerateTrackError):
            pbg.to_cpm(bgd)
        np.testing.assert_array_equal(bgd.scores(), [1.0, -1.0])

    def test_filtered_copy_is_independent(self, cov_bgd):
        part = cov_bgd.filter("chrB")
        pbg.to_cpm(part)
        assert part.scores().sum() == pytest.approx(1_000_000)
        assert cov_bgd.filter("chrB")[0].score == 124.02877


class TestCpmTrack:
    def test_copy(self, cov_bgd):
        result = pbg.cpm_track(cov_bgd)
        assert result is not cov_bgd
        np.testing.assert_allclose(result.scores(), CPM_EXPECTED, atol=1e-2)
        assert cov_bgd[0].score == 17.13354

    def test_propagate_from_config(self):
        pbg.CONFIG["degenerate"] = "propagate"
        bgd = pbg.BedGraphData.from_records([("a", 0, 5, 0.0)])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            result = pbg.cpm_track(bgd)
        assert np.isnan(result[0].score)
