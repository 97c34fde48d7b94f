"""
Candidate pair record and its categorical attributes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

from ..motifs.models import Motif


class StrandOrientation(str, Enum):
    """Relative orientation of the two anchors' strands"""

    CONVERGENT = "convergent"  # (+, -), baseline level
    DIVERGENT = "divergent"  # (-, +)
    SAME_FORWARD = "same_forward"  # (+, +)
    SAME_REVERSE = "same_reverse"  # (-, -)


class LoopLabel(str, Enum):
    LOOP = "loop"
    NO_LOOP = "no_loop"


class UndefinedCorrelation:
    """Sentinel for a correlation that cannot be computed (zero variance)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED_CORRELATION"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (UndefinedCorrelation, ())


UNDEFINED_CORRELATION = UndefinedCorrelation()

CorrelationValue = Union[float, UndefinedCorrelation]


def is_defined(correlation: Any) -> bool:
    """True for a computed, numeric correlation value"""
    return correlation is not None and correlation is not UNDEFINED_CORRELATION


@dataclass(frozen=True)
class CandidatePair:
    """
    Two motifs on the same chromosome considered as a potential loop

    ``anchor1`` always starts before ``anchor2``. The remaining attributes are
    filled by successive pipeline stages, each returning a new record.
    """

    anchor1: Motif
    anchor2: Motif
    distance: Optional[int] = None
    strand_orientation: Optional[StrandOrientation] = None
    score_min: Optional[float] = None
    score_max: Optional[float] = None
    signal1: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    signal2: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    correlation: Optional[CorrelationValue] = None
    label: Optional[LoopLabel] = None
    predicted_probability: Optional[float] = None

    def __post_init__(self):
        if self.anchor1.chrom != self.anchor2.chrom:
            raise ValueError(
                f"Anchors lie on different chromosomes: {self.anchor1}, {self.anchor2}"
            )
        if self.anchor1.start >= self.anchor2.start:
            raise ValueError(
                f"anchor1 must start before anchor2: {self.anchor1}, {self.anchor2}"
            )

    @property
    def chrom(self) -> str:
        return self.anchor1.chrom

    def __str__(self) -> str:
        return f"{self.anchor1}<->{self.anchor2}"
