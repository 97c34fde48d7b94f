"""Tests for distance-windowed candidate pair enumeration."""

import itertools
import random
from collections import Counter

import pytest

from motifloop.motifs import MotifIndex
from motifloop.pairs import CandidatePair, PairGenerator
from tests.conftest import make_motif


def brute_force_pairs(motifs, max_dist):
    expected = Counter()
    for m1, m2 in itertools.permutations(motifs, 2):
        if m1.chrom == m2.chrom and 0 < m2.start - m1.start <= max_dist:
            expected[(m1.chrom, m1.start, m2.start)] += 1
    return expected


def coords(pairs):
    return [(p.chrom, p.anchor1.start, p.anchor2.start) for p in pairs]


class TestPairGenerator:
    @pytest.mark.parametrize("max_dist", [0, -10])
    def test_max_dist_must_be_positive(self, max_dist):
        with pytest.raises(ValueError):
            PairGenerator(max_dist)

    @pytest.mark.parametrize("max_dist", [1.5, "1000", None, True])
    def test_max_dist_must_be_integer(self, max_dist):
        with pytest.raises(ValueError):
            PairGenerator(max_dist)

    def test_scenario_single_pair(self, scenario_index):
        pairs = PairGenerator(2000).generate(scenario_index)
        assert coords(pairs) == [("chr1", 100, 900)]

    def test_boundary_inclusive(self):
        index = MotifIndex([make_motif(0), make_motif(1000), make_motif(2001)])
        pairs = PairGenerator(1000).generate(index)
        # 0-1000 is exactly max_dist; 1000-2001 is max_dist + 1
        assert coords(pairs) == [("chr1", 0, 1000)]

    def test_no_cross_chromosome_pairs(self):
        index = MotifIndex([make_motif(100, chrom="chr1"), make_motif(200, chrom="chr2")])
        assert PairGenerator(10_000).generate(index) == []

    def test_equal_starts_never_pair(self):
        index = MotifIndex([make_motif(100, "+"), make_motif(100, "-"), make_motif(150)])
        pairs = PairGenerator(1000).generate(index)
        assert coords(pairs) == [("chr1", 100, 150), ("chr1", 100, 150)]
        assert all(p.anchor1.start < p.anchor2.start for p in pairs)

    def test_canonical_order(self):
        motifs = [make_motif(s, chrom=c) for c in ("chr2", "chr1") for s in (300, 100, 200)]
        pairs = PairGenerator(1000).generate(MotifIndex(motifs))
        assert coords(pairs) == [
            ("chr1", 100, 200), ("chr1", 100, 300), ("chr1", 200, 300),
            ("chr2", 100, 200), ("chr2", 100, 300), ("chr2", 200, 300),
        ]

    def test_matches_brute_force(self):
        rng = random.Random(11)
        motifs = [
            make_motif(rng.randrange(0, 20000), chrom=rng.choice(["chr1", "chr2", "chr3"]))
            for _ in range(300)
        ]
        pairs = PairGenerator(750).generate(MotifIndex(motifs))

        assert Counter(coords(pairs)) == brute_force_pairs(motifs, 750)
        assert all(p.anchor2.start - p.anchor1.start <= 750 for p in pairs)

    def test_stable_under_input_reordering(self):
        rng = random.Random(3)
        motifs = [make_motif(rng.randrange(0, 5000)) for _ in range(100)]
        shuffled = list(motifs)
        rng.shuffle(shuffled)

        first = PairGenerator(400).generate(MotifIndex(motifs))
        second = PairGenerator(400).generate(MotifIndex(shuffled))
        assert len(first) == len(second)
        assert coords(first) == coords(second)

    def test_iter_pairs_matches_generate(self, scenario_index):
        generator = PairGenerator(60_000)
        assert list(generator.iter_pairs(scenario_index)) == generator.generate(scenario_index)

    def test_parallel_matches_serial(self):
        motifs = [make_motif(s, chrom=c) for c in ("chr1", "chr2", "chr3") for s in range(0, 5000, 250)]
        index = MotifIndex(motifs)
        generator = PairGenerator(1000)
        assert coords(generator.generate(index, n_jobs=2)) == coords(generator.generate(index))

    def test_generated_pairs_have_no_features(self, scenario_index):
        pair = PairGenerator(2000).generate(scenario_index)[0]
        assert pair.distance is None
        assert pair.correlation is None


class TestCandidatePair:
    def test_rejects_reversed_anchors(self):
        with pytest.raises(ValueError):
            CandidatePair(make_motif(900), make_motif(100))

    def test_rejects_cross_chromosome(self):
        with pytest.raises(ValueError):
            CandidatePair(make_motif(100, chrom="chr1"), make_motif(900, chrom="chr2"))

    def test_is_immutable(self, annotated_pair):
        with pytest.raises(AttributeError):
            annotated_pair.distance = 5
