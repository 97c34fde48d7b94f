"""Tests for pairwise motif feature annotation."""

import pytest

from motifloop.exceptions import InvalidMotifError
from motifloop.motifs import MotifIndex
from motifloop.pairs import (CandidatePair, FeatureAnnotator, PairGenerator,
                             StrandOrientation, orientation_dummies,
                             strand_orientation)
from tests.conftest import make_motif


class TestStrandOrientation:
    @pytest.mark.parametrize("strands, expected", [
        (("+", "+"), StrandOrientation.SAME_FORWARD),
        (("-", "-"), StrandOrientation.SAME_REVERSE),
        (("+", "-"), StrandOrientation.CONVERGENT),
        (("-", "+"), StrandOrientation.DIVERGENT),
    ])
    def test_all_combinations(self, strands, expected):
        assert strand_orientation(*strands) is expected

    def test_categories_distinct(self):
        combos = [("+", "+"), ("-", "-"), ("+", "-"), ("-", "+")]
        assert len({strand_orientation(*c) for c in combos}) == 4

    def test_invalid_strand(self):
        with pytest.raises(InvalidMotifError):
            strand_orientation("+", ".")

    def test_follows_genomic_order_not_input_order(self):
        upstream_minus = make_motif(100, "-")
        downstream_plus = make_motif(900, "+")

        for motifs in ([upstream_minus, downstream_plus], [downstream_plus, upstream_minus]):
            pair = PairGenerator(2000).generate(MotifIndex(motifs))[0]
            annotated = FeatureAnnotator().annotate(pair)
            assert annotated.anchor1.start == 100
            assert annotated.strand_orientation is StrandOrientation.DIVERGENT

    def test_dummies_use_convergent_baseline(self):
        assert set(orientation_dummies(StrandOrientation.CONVERGENT).values()) == {0.0}
        divergent = orientation_dummies(StrandOrientation.DIVERGENT)
        assert divergent == {
            "orientation_same_forward": 0.0,
            "orientation_same_reverse": 0.0,
            "orientation_divergent": 1.0,
        }


class TestFeatureAnnotator:
    def test_scenario_features(self, annotated_pair):
        assert annotated_pair.distance == 800
        assert annotated_pair.strand_orientation is StrandOrientation.CONVERGENT
        assert annotated_pair.score_min == 3.0
        assert annotated_pair.score_max == 5.0

    def test_returns_new_record(self):
        pair = CandidatePair(make_motif(100), make_motif(300))
        annotated = FeatureAnnotator().annotate(pair)
        assert annotated is not pair
        assert pair.distance is None
        assert annotated.distance == 200

    def test_annotate_all_preserves_order(self):
        pairs = [
            CandidatePair(make_motif(100), make_motif(300)),
            CandidatePair(make_motif(100), make_motif(700)),
        ]
        annotated = FeatureAnnotator().annotate_all(pairs)
        assert [p.distance for p in annotated] == [200, 600]
