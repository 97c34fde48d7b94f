"""
Orientation-normalized signal extraction around motif sites
"""

import logging
import numbers
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..exceptions import SignalUnavailableError
from ..motifs.models import Motif
from ..pairs.models import CandidatePair
from .track import TrackAccessor

logger = logging.getLogger(__name__)

UNAVAILABLE_POLICIES = ("raise", "skip")


class SignalAligner:
    """
    Extract a fixed-width signal window centred on each motif

    For minus-strand motifs the window is reversed, so position 0 always lies
    upstream in the motif's own direction and vectors from both strands can be
    compared position by position.
    """

    def __init__(self, track: TrackAccessor, window: int = 1000, zero_fill: bool = False):
        """
        Args:
            track: Signal-track accessor ``(chrom, start, end) -> values``
            window: Window width in bp
            zero_fill: Substitute zeros for unavailable signal instead of raising.
                Bases before position 0 and missing trailing values are padded;
                a read the track refuses, such as one past the chromosome end,
                becomes an all-zero window
        """
        if isinstance(window, bool) or not isinstance(window, numbers.Integral):
            raise ValueError(f"window must be an integer, got {window!r}")
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")

        self.track = track
        self.window = int(window)
        self.zero_fill = zero_fill

    def window_bounds(self, motif: Motif):
        """Genomic interval [start, end) read for a motif"""
        start = motif.center - self.window // 2
        return start, start + self.window

    def _read(self, chrom: str, start: int, end: int) -> np.ndarray:
        if start < 0:
            if not self.zero_fill:
                raise SignalUnavailableError(chrom, start, end, "window extends before position 0")
            padding = np.zeros(min(-start, end - start))
            if end <= 0:
                return padding
            return np.concatenate([padding, self._read(chrom, 0, end)])

        # Past the chromosome end the aligner has no length to clip against,
        # so a zero-filled read there replaces the whole window
        try:
            values = np.asarray(self.track(chrom, start, end), dtype=np.float64)
        except SignalUnavailableError as e:
            if not self.zero_fill:
                raise
            logger.debug(f"Zero-filling unavailable signal: {e}")
            return np.zeros(end - start)

        expected = end - start
        values = values.ravel()
        if values.size > expected:
            return values[:expected]
        if values.size < expected:
            if not self.zero_fill:
                raise SignalUnavailableError(
                    chrom, start, end,
                    f"track returned {values.size} values for {expected} bases",
                )
            return np.concatenate([values, np.zeros(expected - values.size)])

        return values

    def extract(self, motif: Motif) -> np.ndarray:
        """Read-only signal vector for one motif, in motif orientation"""
        start, end = self.window_bounds(motif)
        values = self._read(motif.chrom, start, end)

        if motif.strand == "-":
            values = values[::-1]

        values = np.array(values, dtype=np.float64)
        values.setflags(write=False)
        return values

    def align_pair(self, pair: CandidatePair) -> CandidatePair:
        return replace(
            pair,
            signal1=self.extract(pair.anchor1),
            signal2=self.extract(pair.anchor2),
        )

    def align_pairs(
        self,
        pairs: Iterable[CandidatePair],
        n_workers: int = 4,
        on_unavailable: str = "raise",
    ) -> List[CandidatePair]:
        """
        Attach signal vectors to many pairs

        Each distinct motif is read once, with at most ``n_workers``
        concurrent track reads.

        Args:
            pairs: Candidate pairs
            n_workers: Size of the bounded reader pool
            on_unavailable: ``"raise"`` to abort on the first unavailable
                interval, ``"skip"`` to drop only the affected pairs

        Returns:
            Pairs with ``signal1``/``signal2`` set, in input order
        """
        if on_unavailable not in UNAVAILABLE_POLICIES:
            raise ValueError(
                f"on_unavailable must be one of {UNAVAILABLE_POLICIES}, got {on_unavailable!r}"
            )
        if n_workers <= 0:
            raise ValueError(f"n_workers must be positive, got {n_workers}")

        pairs = list(pairs)
        motifs = {}
        for pair in pairs:
            motifs.setdefault(pair.anchor1, None)
            motifs.setdefault(pair.anchor2, None)

        vectors: Dict[Motif, Optional[np.ndarray]] = {}
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            futures = {executor.submit(self.extract, motif): motif for motif in motifs}
            for future in as_completed(futures):
                motif = futures[future]
                try:
                    vectors[motif] = future.result()
                except SignalUnavailableError as e:
                    if on_unavailable == "raise":
                        for pending in futures:
                            pending.cancel()
                        raise
                    logger.warning(f"Skipping pairs anchored at {motif}: {e}")
                    vectors[motif] = None

        aligned = []
        for pair in pairs:
            signal1 = vectors[pair.anchor1]
            signal2 = vectors[pair.anchor2]
            if signal1 is None or signal2 is None:
                continue
            aligned.append(replace(pair, signal1=signal1, signal2=signal2))

        if len(aligned) < len(pairs):
            logger.warning(
                f"Dropped {len(pairs) - len(aligned)}/{len(pairs)} pairs without signal"
            )
        logger.info(f"Aligned signal for {len(aligned)} pairs ({len(motifs)} motifs)")
        return aligned
