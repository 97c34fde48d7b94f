"""
Linear scoring model: ordered feature terms, coefficients and intercept
"""

import logging
import math
from dataclasses import dataclass
from typing import (Any, Callable, Dict, Mapping, Optional, Sequence, Tuple,
                    Union)

from ..exceptions import MissingFeatureError
from ..pairs.features import ORIENTATION_FEATURES
from ..pairs.models import CandidatePair, StrandOrientation

logger = logging.getLogger(__name__)

FeatureAccessor = Callable[[CandidatePair], Any]


def _attribute(name: str) -> FeatureAccessor:
    def accessor(pair: CandidatePair):
        value = getattr(pair, name)
        if value is None:
            raise MissingFeatureError(name, f"Feature '{name}' not computed for pair {pair}")
        return value

    accessor.__name__ = f"get_{name}"
    return accessor


def _orientation_indicator(level: StrandOrientation) -> FeatureAccessor:
    name = ORIENTATION_FEATURES[level]

    def accessor(pair: CandidatePair) -> float:
        if pair.strand_orientation is None:
            raise MissingFeatureError(
                name, f"Feature 'strand_orientation' not computed for pair {pair}"
            )
        return 1.0 if pair.strand_orientation is level else 0.0

    accessor.__name__ = f"get_{name}"
    return accessor


FEATURE_ACCESSORS: Dict[str, FeatureAccessor] = {
    "correlation": _attribute("correlation"),
    "distance": _attribute("distance"),
    "score_min": _attribute("score_min"),
    "score_max": _attribute("score_max"),
}
for _level, _name in ORIENTATION_FEATURES.items():
    FEATURE_ACCESSORS[_name] = _orientation_indicator(_level)

DEFAULT_INTERCEPT = -4.6
DEFAULT_COEFFICIENTS = {
    "correlation": 5.8,
    "distance": -2.1e-06,
    "orientation_same_forward": -1.4,
    "orientation_same_reverse": -1.4,
    "orientation_divergent": -2.9,
    "score_min": 0.32,
}
DEFAULT_FEATURES = list(DEFAULT_COEFFICIENTS)


@dataclass(frozen=True)
class ModelTerm:
    name: str
    accessor: FeatureAccessor
    coefficient: float


@dataclass(frozen=True)
class ScoringModel:
    """
    Immutable linear predictor ``z = intercept + sum(coefficient * feature)``

    Feature names are resolved to accessor functions once, at construction,
    so unknown features fail before any pair is scored.
    """

    terms: Tuple[ModelTerm, ...]
    intercept: float = 0.0

    def __post_init__(self):
        names = [term.name for term in self.terms]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model features: {duplicates}")

        for term in self.terms:
            if not math.isfinite(term.coefficient):
                raise ValueError(f"Coefficient for '{term.name}' is not finite")
        if not math.isfinite(self.intercept):
            raise ValueError("Intercept is not finite")

    @classmethod
    def from_coefficients(
        cls,
        coefficients: Union[Mapping[str, float], Sequence[Tuple[str, float]]],
        intercept: float = 0.0,
        accessors: Optional[Mapping[str, FeatureAccessor]] = None,
    ) -> "ScoringModel":
        """
        Build a model from feature-name/coefficient bindings

        Args:
            coefficients: Ordered mapping (or pairs) of feature name to coefficient
            intercept: Model intercept
            accessors: Extra feature accessors, overriding the built-in ones

        Returns:
            Validated ScoringModel
        """
        registry = dict(FEATURE_ACCESSORS)
        if accessors:
            registry.update(accessors)

        items = coefficients.items() if isinstance(coefficients, Mapping) else coefficients
        terms = []
        for name, coefficient in items:
            if name not in registry:
                raise MissingFeatureError(
                    name,
                    f"Unknown feature '{name}'. Available: {sorted(registry)}",
                )
            terms.append(ModelTerm(name, registry[name], float(coefficient)))

        logger.debug(f"Scoring model features: {[term.name for term in terms]}")
        return cls(terms=tuple(terms), intercept=float(intercept))

    @classmethod
    def from_lists(
        cls,
        features: Sequence[str],
        coefficients: Sequence[float],
        intercept: float = 0.0,
        accessors: Optional[Mapping[str, FeatureAccessor]] = None,
    ) -> "ScoringModel":
        if len(features) != len(coefficients):
            raise ValueError(
                f"Got {len(features)} features but {len(coefficients)} coefficients"
            )
        return cls.from_coefficients(list(zip(features, coefficients)), intercept, accessors)

    @classmethod
    def from_dict(
        cls,
        model_dict: Mapping[str, Any],
        accessors: Optional[Mapping[str, FeatureAccessor]] = None,
    ) -> "ScoringModel":
        """Build from ``{"intercept": ..., "coefficients": {...}}``"""
        if "coefficients" not in model_dict:
            raise ValueError("Model definition needs a 'coefficients' mapping")
        return cls.from_coefficients(
            model_dict["coefficients"], model_dict.get("intercept", 0.0), accessors
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intercept": self.intercept,
            "coefficients": {term.name: term.coefficient for term in self.terms},
        }

    @property
    def features(self) -> Tuple[str, ...]:
        return tuple(term.name for term in self.terms)

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return tuple(term.coefficient for term in self.terms)


def default_scoring_model() -> ScoringModel:
    """Packaged model over correlation, distance, strand orientation and score_min"""
    return ScoringModel.from_coefficients(DEFAULT_COEFFICIENTS, DEFAULT_INTERCEPT)
