"""
Training labels from experimentally observed loops
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List

import numpy as np

from ..motifs.models import KnownLoop, Motif
from ..pairs.models import CandidatePair, LoopLabel

logger = logging.getLogger(__name__)


class LoopLabeler:
    """
    Label candidate pairs as loop / no-loop against a known loop set

    A pair is a loop when its two anchors overlap the two anchor regions of
    the same known loop, in either order. Known anchors are widened by
    ``tolerance`` bp on both sides to absorb imprecise anchor calls.
    """

    def __init__(self, known_loops: Iterable[KnownLoop], tolerance: int = 0):
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        self.tolerance = int(tolerance)

        by_chrom: Dict[str, List[KnownLoop]] = {}
        n_trans = 0
        for loop in known_loops:
            if not loop.is_intra_chromosomal:
                n_trans += 1
                continue
            by_chrom.setdefault(loop.chrom1, []).append(loop)

        if n_trans:
            logger.warning(f"Ignoring {n_trans} inter-chromosomal known loops")

        # Per chromosome: (n_loops, 2) start/end arrays for each loop side
        self._anchors: Dict[str, tuple] = {}
        for chrom, loops in by_chrom.items():
            side1 = np.array([(l.start1, l.end1) for l in loops], dtype=np.int64)
            side2 = np.array([(l.start2, l.end2) for l in loops], dtype=np.int64)
            self._anchors[chrom] = (side1, side2)

        self.n_loops = sum(len(loops) for loops in by_chrom.values())
        logger.debug(f"Indexed {self.n_loops} known loops (tolerance={self.tolerance} bp)")

    def _overlaps(self, side: np.ndarray, motif: Motif) -> np.ndarray:
        return (side[:, 0] - self.tolerance < motif.end) & (
            motif.start < side[:, 1] + self.tolerance
        )

    def is_loop(self, pair: CandidatePair) -> bool:
        anchors = self._anchors.get(pair.chrom)
        if anchors is None:
            return False

        side1, side2 = anchors
        forward = self._overlaps(side1, pair.anchor1) & self._overlaps(side2, pair.anchor2)
        reverse = self._overlaps(side2, pair.anchor1) & self._overlaps(side1, pair.anchor2)
        return bool(np.any(forward | reverse))

    def label(self, pair: CandidatePair) -> CandidatePair:
        label = LoopLabel.LOOP if self.is_loop(pair) else LoopLabel.NO_LOOP
        return replace(pair, label=label)

    def label_all(self, pairs: Iterable[CandidatePair]) -> List[CandidatePair]:
        labeled = [self.label(pair) for pair in pairs]
        n_loops = sum(1 for pair in labeled if pair.label is LoopLabel.LOOP)
        logger.info(f"Labeled {n_loops}/{len(labeled)} candidate pairs as loops")
        return labeled
