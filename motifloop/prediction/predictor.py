"""
Logistic loop scoring and cutoff filtering
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from scipy.special import expit

from ..exceptions import MissingFeatureError
from ..pairs.models import UNDEFINED_CORRELATION, CandidatePair
from .model import ScoringModel, default_scoring_model

logger = logging.getLogger(__name__)

UNDEFINED_POLICIES = ("na", "zero", "raise")


class LoopPredictor:
    """
    Score candidate pairs with a logistic model and apply a probability cutoff

    ``cutoff`` is an absolute probability threshold: pairs scoring below it
    are dropped, pairs scoring exactly at it are kept.

    Undefined correlations are handled by ``undefined_correlation``:
    ``"na"`` leaves the probability unset (the pair is dropped when a cutoff
    applies), ``"zero"`` scores the feature as 0.0 and ``"raise"`` raises
    MissingFeatureError.
    """

    def __init__(
        self,
        model: Optional[ScoringModel] = None,
        cutoff: Optional[float] = None,
        undefined_correlation: str = "na",
    ):
        if cutoff is not None and not 0.0 <= cutoff <= 1.0:
            raise ValueError(f"cutoff must lie in [0, 1] or be None, got {cutoff}")
        if undefined_correlation not in UNDEFINED_POLICIES:
            raise ValueError(
                f"undefined_correlation must be one of {UNDEFINED_POLICIES}, "
                f"got {undefined_correlation!r}"
            )

        self.model = model if model is not None else default_scoring_model()
        self.cutoff = cutoff
        self.undefined_correlation = undefined_correlation

    def linear_predictor(self, pair: CandidatePair) -> Optional[float]:
        """``z`` for a pair, or None when an undefined value is left as NA"""
        # Every accessor runs first so a missing feature raises under any policy
        values = [(term, term.accessor(pair)) for term in self.model.terms]

        z = self.model.intercept
        for term, value in values:
            if value is UNDEFINED_CORRELATION:
                if self.undefined_correlation == "raise":
                    raise MissingFeatureError(
                        term.name, f"Feature '{term.name}' is undefined for pair {pair}"
                    )
                if self.undefined_correlation == "na":
                    return None
                value = 0.0

            z += term.coefficient * float(value)

        return z

    @staticmethod
    def probability(z: float) -> float:
        return float(expit(z))

    def score(self, pair: CandidatePair) -> CandidatePair:
        z = self.linear_predictor(pair)
        probability = None if z is None else self.probability(z)
        return replace(pair, predicted_probability=probability)

    def _passes(self, pair: CandidatePair) -> bool:
        if self.cutoff is None:
            return True
        probability = pair.predicted_probability
        return probability is not None and probability >= self.cutoff

    def predict(self, pairs: Iterable[CandidatePair]) -> List[CandidatePair]:
        """
        Score pairs and apply the cutoff

        Args:
            pairs: Pairs carrying every feature the model uses

        Returns:
            Scored pairs in input order, restricted to those passing the cutoff
        """
        scored = [self.score(pair) for pair in pairs]
        kept = [pair for pair in scored if self._passes(pair)]

        n_na = sum(1 for pair in scored if pair.predicted_probability is None)
        if n_na:
            logger.info(f"{n_na} pairs left unscored because of undefined features")
        if self.cutoff is not None:
            logger.info(
                f"Kept {len(kept)}/{len(scored)} pairs with probability >= {self.cutoff}"
            )
        return kept
