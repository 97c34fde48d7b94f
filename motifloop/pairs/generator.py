"""
Distance-bounded enumeration of candidate motif pairs
"""

import logging
import numbers
from typing import Iterator, List, Optional, Sequence

from ..motifs.index import MotifIndex
from ..motifs.models import Motif
from ..utils.parallel import run_parallel
from .models import CandidatePair

logger = logging.getLogger(__name__)


def window_pairs(motifs: Sequence[Motif], max_dist: int) -> Iterator[CandidatePair]:
    """
    Yield every pair of a start-sorted motif sequence within ``max_dist``

    Two monotone pointers bound the window of partners for motif ``i``:
    ``lo`` skips motifs sharing its start, ``hi`` stops past ``start + max_dist``.
    Runs in O(n + P) for P emitted pairs.
    """
    n = len(motifs)
    lo = 0
    hi = 0

    for i, anchor1 in enumerate(motifs):
        if lo <= i:
            lo = i + 1
        while lo < n and motifs[lo].start == anchor1.start:
            lo += 1

        if hi < lo:
            hi = lo
        limit = anchor1.start + max_dist
        while hi < n and motifs[hi].start <= limit:
            hi += 1

        for j in range(lo, hi):
            yield CandidatePair(anchor1=anchor1, anchor2=motifs[j])


class PairGenerator:
    """Enumerate cis motif pairs whose starts lie within ``max_dist`` bp"""

    def __init__(self, max_dist: int):
        if isinstance(max_dist, bool) or not isinstance(max_dist, numbers.Integral):
            raise ValueError(f"max_dist must be an integer, got {max_dist!r}")
        if max_dist <= 0:
            raise ValueError(f"max_dist must be positive, got {max_dist}")
        self.max_dist = int(max_dist)

    def _chrom_pairs(self, motifs: Sequence[Motif]) -> List[CandidatePair]:
        return list(window_pairs(motifs, self.max_dist))

    def iter_pairs(self, index: MotifIndex) -> Iterator[CandidatePair]:
        """Lazily yield pairs grouped by chromosome, anchor1, anchor2"""
        for chrom in index.chromosomes():
            yield from window_pairs(index[chrom], self.max_dist)

    def generate(
        self, index: MotifIndex, n_jobs: Optional[int] = 1
    ) -> List[CandidatePair]:
        """
        Enumerate all candidate pairs

        Args:
            index: Sorted motif collection
            n_jobs: Number of workers; chromosomes are processed independently

        Returns:
            Pairs in canonical order (chromosome, anchor1, anchor2)
        """
        chroms = index.chromosomes()
        per_chrom = run_parallel(
            self._chrom_pairs, [index[chrom] for chrom in chroms], n_jobs=n_jobs
        )

        pairs = []
        for chrom, chrom_pairs in zip(chroms, per_chrom):
            logger.debug(f"{chrom}: {len(chrom_pairs)} candidate pairs")
            pairs.extend(chrom_pairs)

        logger.info(
            f"Generated {len(pairs)} candidate pairs from {len(index)} motifs "
            f"(max_dist={self.max_dist:,} bp)"
        )
        return pairs
