"""
Candidate pair generation and pairwise feature annotation
"""

from .features import (BASELINE_ORIENTATION, ORIENTATION_FEATURES,
                       FeatureAnnotator, orientation_dummies,
                       strand_orientation)
from .frame import PAIR_COLUMNS, pairs_to_dataframe
from .generator import PairGenerator, window_pairs
from .models import (UNDEFINED_CORRELATION, CandidatePair, LoopLabel,
                     StrandOrientation, UndefinedCorrelation, is_defined)

__all__ = [
    "CandidatePair",
    "StrandOrientation",
    "LoopLabel",
    "UNDEFINED_CORRELATION",
    "UndefinedCorrelation",
    "is_defined",
    "PairGenerator",
    "window_pairs",
    "FeatureAnnotator",
    "strand_orientation",
    "orientation_dummies",
    "BASELINE_ORIENTATION",
    "ORIENTATION_FEATURES",
    "pairs_to_dataframe",
    "PAIR_COLUMNS",
]
