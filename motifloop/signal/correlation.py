"""
Pearson correlation between anchor signal vectors
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Sequence

import numpy as np

from ..exceptions import MissingFeatureError
from ..pairs.models import UNDEFINED_CORRELATION, CandidatePair, CorrelationValue

logger = logging.getLogger(__name__)


def pearson(v1: Sequence[float], v2: Sequence[float]) -> CorrelationValue:
    """
    Pearson correlation coefficient of two equal-length vectors

    Returns UNDEFINED_CORRELATION when either vector has zero variance,
    fewer than two points, or non-finite values.
    """
    x = np.asarray(v1, dtype=np.float64)
    y = np.asarray(v2, dtype=np.float64)

    if x.shape != y.shape or x.ndim != 1:
        raise ValueError(
            f"Signal vectors must be one-dimensional and of equal length, got {x.shape} and {y.shape}"
        )
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        return UNDEFINED_CORRELATION

    # Constant vectors are checked exactly; a computed mean may carry rounding
    if x.size < 2 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return UNDEFINED_CORRELATION

    dx = x - x.mean()
    dy = y - y.mean()
    ssx = float(np.dot(dx, dx))
    ssy = float(np.dot(dy, dy))

    if ssx == 0.0 or ssy == 0.0:
        return UNDEFINED_CORRELATION

    r = float(np.dot(dx, dy)) / np.sqrt(ssx * ssy)
    return float(min(1.0, max(-1.0, r)))


class CorrelationEngine:
    """Compute the signal correlation feature of each pair independently"""

    def correlate(self, pair: CandidatePair) -> CandidatePair:
        if pair.signal1 is None or pair.signal2 is None:
            raise MissingFeatureError(
                "signal", f"Pair {pair} has no aligned signal vectors"
            )
        return replace(pair, correlation=pearson(pair.signal1, pair.signal2))

    def correlate_all(self, pairs: Iterable[CandidatePair]) -> List[CandidatePair]:
        correlated = [self.correlate(pair) for pair in pairs]

        n_undefined = sum(1 for p in correlated if p.correlation is UNDEFINED_CORRELATION)
        if n_undefined:
            logger.info(f"{n_undefined}/{len(correlated)} pairs have undefined correlation")
        return correlated
