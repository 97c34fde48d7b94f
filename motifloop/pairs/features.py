"""
Pairwise motif features: distance, strand orientation, motif strength
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List

from ..exceptions import InvalidMotifError
from .models import CandidatePair, StrandOrientation

logger = logging.getLogger(__name__)

_ORIENTATIONS = {
    ("+", "+"): StrandOrientation.SAME_FORWARD,
    ("-", "-"): StrandOrientation.SAME_REVERSE,
    ("+", "-"): StrandOrientation.CONVERGENT,
    ("-", "+"): StrandOrientation.DIVERGENT,
}

BASELINE_ORIENTATION = StrandOrientation.CONVERGENT

# Indicator feature name per non-baseline level
ORIENTATION_FEATURES = {
    StrandOrientation.SAME_FORWARD: "orientation_same_forward",
    StrandOrientation.SAME_REVERSE: "orientation_same_reverse",
    StrandOrientation.DIVERGENT: "orientation_divergent",
}


def strand_orientation(strand1: str, strand2: str) -> StrandOrientation:
    """Orientation category of an (upstream, downstream) strand combination"""
    try:
        return _ORIENTATIONS[(strand1, strand2)]
    except KeyError:
        raise InvalidMotifError(
            f"Unrecognized strand combination: ({strand1!r}, {strand2!r})"
        )


def orientation_dummies(orientation: StrandOrientation) -> Dict[str, float]:
    """Treatment-coded indicators with convergent as the reference level"""
    return {
        name: 1.0 if orientation is level else 0.0
        for level, name in ORIENTATION_FEATURES.items()
    }


class FeatureAnnotator:
    """Attach distance, strand orientation and motif score features to pairs"""

    def annotate(self, pair: CandidatePair) -> CandidatePair:
        anchor1, anchor2 = pair.anchor1, pair.anchor2
        return replace(
            pair,
            distance=anchor2.start - anchor1.start,
            strand_orientation=strand_orientation(anchor1.strand, anchor2.strand),
            score_min=min(anchor1.score, anchor2.score),
            score_max=max(anchor1.score, anchor2.score),
        )

    def annotate_all(self, pairs: Iterable[CandidatePair]) -> List[CandidatePair]:
        annotated = [self.annotate(pair) for pair in pairs]
        logger.debug(f"Annotated {len(annotated)} pairs with motif features")
        return annotated
