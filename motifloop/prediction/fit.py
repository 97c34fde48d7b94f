"""
Fit scoring-model coefficients from labelled candidate pairs
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np
from sklearn.linear_model import LogisticRegression

from ..pairs.models import UNDEFINED_CORRELATION, CandidatePair, LoopLabel
from .model import DEFAULT_FEATURES, FeatureAccessor, ScoringModel

logger = logging.getLogger(__name__)


def feature_matrix(
    pairs: Sequence[CandidatePair],
    features: Sequence[str],
    accessors: Optional[Mapping[str, FeatureAccessor]] = None,
):
    """
    Design matrix for ``features`` over pairs

    Rows containing an undefined value are excluded; the returned mask
    marks the pairs that were kept.
    """
    # Unknown names raise MissingFeatureError here
    terms = ScoringModel.from_lists(list(features), [0.0] * len(features), 0.0, accessors).terms

    rows = []
    mask = np.zeros(len(pairs), dtype=bool)
    for i, pair in enumerate(pairs):
        values = [term.accessor(pair) for term in terms]
        if any(value is UNDEFINED_CORRELATION for value in values):
            continue
        rows.append([float(value) for value in values])
        mask[i] = True

    X = np.array(rows, dtype=np.float64).reshape(len(rows), len(features))
    return X, mask


def fit_scoring_model(
    pairs: Iterable[CandidatePair],
    features: Sequence[str] = DEFAULT_FEATURES,
    accessors: Optional[Mapping[str, FeatureAccessor]] = None,
    max_iter: int = 1000,
) -> ScoringModel:
    """
    Fit an unpenalized logistic regression on labelled pairs

    Args:
        pairs: Pairs carrying labels and every requested feature
        features: Ordered feature names
        accessors: Extra feature accessors
        max_iter: Solver iteration limit

    Returns:
        ScoringModel with the fitted coefficients and intercept
    """
    pairs = list(pairs)
    unlabeled = sum(1 for pair in pairs if pair.label is None)
    if unlabeled:
        raise ValueError(f"{unlabeled} pairs have no label; run LoopLabeler first")

    X, mask = feature_matrix(pairs, features, accessors)
    y = np.array(
        [pair.label is LoopLabel.LOOP for pair, keep in zip(pairs, mask) if keep],
        dtype=int,
    )

    if len(np.unique(y)) < 2:
        raise ValueError("Training data must contain both loop and no-loop pairs")

    logger.info(
        f"Fitting logistic model on {len(y)} pairs ({int(y.sum())} loops, "
        f"{len(pairs) - len(y)} excluded for undefined features)"
    )

    regression = LogisticRegression(penalty=None, solver="lbfgs", max_iter=max_iter)
    regression.fit(X, y)

    return ScoringModel.from_lists(
        list(features),
        regression.coef_[0].tolist(),
        float(regression.intercept_[0]),
        accessors,
    )
