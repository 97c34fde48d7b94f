"""
motifloop: chromatin loop prediction from motif pairs and protein-binding signal

motifloop enumerates pairs of oriented motif sites (typically CTCF) within a
genomic distance bound, annotates them with distance, strand orientation and
motif strength, correlates the orientation-normalized ChIP-seq signal around
both anchors, and scores each pair with a logistic model.

Main Components:
- MotifIndex: sorted per-chromosome motif collection
- PairGenerator: distance-windowed pair enumeration
- FeatureAnnotator: distance, strand orientation and motif score features
- SignalAligner / CorrelationEngine: anchor signal correlation
- LoopLabeler: training labels from known loops
- LoopPredictor: logistic scoring with a probability cutoff

Example:
    >>> from motifloop import LoopPredictionPipeline
    >>> pipeline = LoopPredictionPipeline("config.yaml")
    >>> loops = pipeline.run()
"""

import logging
import sys
from importlib import metadata
from typing import Any, Dict

try:
    __version__ = metadata.version("motifloop")
except metadata.PackageNotFoundError:
    __version__ = "0.1.0-dev"

from .config import Config, load_config
from .core import LoopPredictionPipeline
from .exceptions import (InvalidMotifError, MissingFeatureError,
                         MotifLoopError, SignalUnavailableError)
from .labeling import LoopLabeler
from .motifs import KnownLoop, Motif, MotifIndex, load_known_loops, load_motifs
from .pairs import (UNDEFINED_CORRELATION, CandidatePair, FeatureAnnotator,
                    LoopLabel, PairGenerator, StrandOrientation, is_defined,
                    pairs_to_dataframe)
from .prediction import (LoopPredictor, ScoringModel, default_scoring_model,
                         fit_scoring_model)
from .signal import (ArrayTrack, BigWigTrack, CachedTrack, CorrelationEngine,
                     SignalAligner, pearson)
from .utils import setup_logging, validate_environment

__all__ = [
    "__version__",
    "LoopPredictionPipeline",
    "Config",
    "load_config",
    "setup_logging",
    "validate_environment",
    "MotifLoopError",
    "InvalidMotifError",
    "SignalUnavailableError",
    "MissingFeatureError",
    "Motif",
    "KnownLoop",
    "MotifIndex",
    "load_motifs",
    "load_known_loops",
    "CandidatePair",
    "StrandOrientation",
    "LoopLabel",
    "UNDEFINED_CORRELATION",
    "is_defined",
    "PairGenerator",
    "FeatureAnnotator",
    "pairs_to_dataframe",
    "ArrayTrack",
    "BigWigTrack",
    "CachedTrack",
    "SignalAligner",
    "CorrelationEngine",
    "pearson",
    "LoopLabeler",
    "ScoringModel",
    "default_scoring_model",
    "fit_scoring_model",
    "LoopPredictor",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def get_info() -> Dict[str, Any]:
    """Get package information."""
    return {
        "name": "motifloop",
        "version": __version__,
        "description": "Chromatin loop prediction from motif pairs and ChIP-seq signal",
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "modules": ["motifs", "pairs", "signal", "labeling", "prediction", "config", "utils"],
    }
