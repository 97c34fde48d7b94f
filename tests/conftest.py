"""Shared fixtures for the motifloop test suite."""

import numpy as np
import pytest

from motifloop.motifs import Motif, MotifIndex
from motifloop.pairs import CandidatePair, FeatureAnnotator
from motifloop.signal import ArrayTrack


def make_motif(start, strand="+", score=5.0, chrom="chr1", length=19, name=None):
    return Motif(chrom=chrom, start=start, end=start + length, strand=strand,
                 score=score, name=name)


@pytest.fixture
def motif_factory():
    return make_motif


@pytest.fixture
def scenario_motifs():
    """Three chr1 motifs: two within 2 kb of each other, one far away."""
    return [
        make_motif(100, "+", 5.0),
        make_motif(900, "-", 3.0),
        make_motif(50000, "+", 1.0),
    ]


@pytest.fixture
def scenario_index(scenario_motifs):
    return MotifIndex(scenario_motifs)


@pytest.fixture
def annotated_pair():
    pair = CandidatePair(make_motif(100, "+", 5.0), make_motif(900, "-", 3.0))
    return FeatureAnnotator().annotate(pair)


@pytest.fixture
def random_track():
    rng = np.random.default_rng(7)
    return ArrayTrack({
        "chr1": rng.random(60000),
        "chr2": rng.random(20000),
    })
