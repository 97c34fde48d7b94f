"""
Scoring models and logistic loop prediction
"""

from .fit import feature_matrix, fit_scoring_model
from .model import (DEFAULT_COEFFICIENTS, DEFAULT_FEATURES, DEFAULT_INTERCEPT,
                    FEATURE_ACCESSORS, ModelTerm, ScoringModel,
                    default_scoring_model)
from .predictor import UNDEFINED_POLICIES, LoopPredictor

__all__ = [
    "ScoringModel",
    "ModelTerm",
    "FEATURE_ACCESSORS",
    "DEFAULT_COEFFICIENTS",
    "DEFAULT_FEATURES",
    "DEFAULT_INTERCEPT",
    "default_scoring_model",
    "LoopPredictor",
    "UNDEFINED_POLICIES",
    "fit_scoring_model",
    "feature_matrix",
]
