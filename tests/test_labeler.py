"""Tests for labeling candidate pairs against known loops."""

import pytest

from motifloop.labeling import LoopLabeler
from motifloop.motifs import KnownLoop
from motifloop.pairs import CandidatePair, LoopLabel
from tests.conftest import make_motif


@pytest.fixture
def known_loops():
    return [
        KnownLoop("chr1", 1000, 2000, "chr1", 50000, 51000),
        KnownLoop("chr1", 90000, 91000, "chr2", 10000, 11000),
    ]


def pair(start1, start2, chrom="chr1"):
    return CandidatePair(make_motif(start1, chrom=chrom), make_motif(start2, chrom=chrom))


class TestLoopLabeler:
    def test_negative_tolerance(self, known_loops):
        with pytest.raises(ValueError):
            LoopLabeler(known_loops, tolerance=-1)

    def test_both_anchors_overlap(self, known_loops):
        labeler = LoopLabeler(known_loops)
        assert labeler.label(pair(1500, 50500)).label is LoopLabel.LOOP

    def test_one_anchor_is_not_enough(self, known_loops):
        labeler = LoopLabeler(known_loops)
        assert labeler.label(pair(1500, 70000)).label is LoopLabel.NO_LOOP

    def test_both_anchors_in_same_side_is_not_a_loop(self, known_loops):
        labeler = LoopLabeler(known_loops)
        assert labeler.label(pair(1100, 1500)).label is LoopLabel.NO_LOOP

    def test_order_insensitive(self):
        reversed_loop = [KnownLoop("chr1", 50000, 51000, "chr1", 1000, 2000)]
        labeler = LoopLabeler(reversed_loop)
        assert labeler.is_loop(pair(1500, 50500))

    def test_tolerance_widens_anchors(self, known_loops):
        # motif [2100, 2119) misses [1000, 2000) by 100 bp
        candidate = pair(2100, 50500)
        assert not LoopLabeler(known_loops, tolerance=100).is_loop(candidate)
        assert LoopLabeler(known_loops, tolerance=101).is_loop(candidate)

    def test_other_chromosome(self, known_loops):
        labeler = LoopLabeler(known_loops)
        assert labeler.label(pair(1500, 50500, chrom="chr3")).label is LoopLabel.NO_LOOP

    def test_inter_chromosomal_loops_ignored(self, known_loops):
        labeler = LoopLabeler(known_loops)
        assert labeler.n_loops == 1
        assert not labeler.is_loop(pair(90500, 100000))

    def test_label_all(self, known_loops):
        labeled = LoopLabeler(known_loops).label_all([pair(1500, 50500), pair(1500, 30000)])
        assert [p.label for p in labeled] == [LoopLabel.LOOP, LoopLabel.NO_LOOP]
