"""
Signal-track access, orientation-aware alignment, and signal correlation
"""

from .aligner import SignalAligner
from .correlation import CorrelationEngine, pearson
from .track import ArrayTrack, BigWigTrack, CachedTrack, TrackAccessor

__all__ = [
    "TrackAccessor",
    "ArrayTrack",
    "BigWigTrack",
    "CachedTrack",
    "SignalAligner",
    "CorrelationEngine",
    "pearson",
]
