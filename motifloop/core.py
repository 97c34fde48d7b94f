"""
Core motifloop pipeline orchestrator
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from .config import Config, load_config, validate_config
from .labeling import LoopLabeler
from .motifs import KnownLoop, MotifIndex, load_known_loops, load_motifs
from .pairs import (CandidatePair, FeatureAnnotator, PairGenerator,
                    pairs_to_dataframe)
from .prediction import LoopPredictor, ScoringModel, fit_scoring_model
from .signal import (BigWigTrack, CachedTrack, CorrelationEngine,
                     SignalAligner, TrackAccessor)
from .utils import get_logger, log_execution_time

logger = get_logger(__name__)


class LoopPredictionPipeline:
    """
    Orchestrates loop prediction from motifs and a signal track

    Stages: motif index -> candidate pairs -> motif features ->
    signal alignment and correlation -> (labels) -> logistic scoring.
    """

    def __init__(
        self,
        config: Union[str, Path, Config, Dict[str, Any], None] = None,
        model: Optional[ScoringModel] = None,
    ):
        """
        Args:
            config: Configuration file path, Config object, or config dict
            model: Scoring model overriding the one in the configuration
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, (str, Path)):
            self.config = load_config(config)
        elif isinstance(config, dict):
            self.config = Config(**config)
        elif isinstance(config, Config):
            self.config = config
        else:
            raise ValueError(
                "Invalid config type. Expected str, Path, dict, or Config object"
            )

        issues = validate_config(self.config)
        if issues:
            for issue in issues:
                logger.error(f"  - {issue}")
            raise ValueError(f"Invalid configuration: {'; '.join(issues)}")

        self.model = model or ScoringModel.from_dict(self.config.prediction["model"])

        self.generator = PairGenerator(self.config.pairs["max_dist"])
        self.annotator = FeatureAnnotator()
        self.correlation_engine = CorrelationEngine()
        self.predictor = LoopPredictor(
            self.model,
            cutoff=self.config.prediction["cutoff"],
            undefined_correlation=self.config.prediction["undefined_correlation"],
        )

    def load_motifs(self, motifs=None) -> MotifIndex:
        """Load motifs from the argument or the configured motif file"""
        source = motifs if motifs is not None else self.config.motif_file
        if source is None:
            raise ValueError("No motif source given and config.motif_file is unset")
        if isinstance(source, MotifIndex):
            return source
        if not isinstance(source, (str, Path, pd.DataFrame)):
            return MotifIndex(source, min_score=self.config.motifs["min_score"])

        return load_motifs(
            source,
            score_column=self.config.motifs["score_column"],
            min_score=self.config.motifs["min_score"],
        )

    def open_track(self, track=None) -> TrackAccessor:
        """Wrap the given accessor or configured bigWig in an LRU cache"""
        if track is None:
            if self.config.signal_file is None:
                raise ValueError("No signal track given and config.signal_file is unset")
            track = BigWigTrack(self.config.signal_file)
        elif isinstance(track, (str, Path)):
            track = BigWigTrack(track)

        if isinstance(track, CachedTrack):
            return track
        return CachedTrack(track, max_size=self.config.signal["cache_size"])

    @log_execution_time
    def prepare_pairs(self, motifs) -> List[CandidatePair]:
        """Candidate pairs with distance, orientation and score features"""
        index = self.load_motifs(motifs)
        pairs = self.generator.generate(index, n_jobs=self.config.n_jobs)
        return self.annotator.annotate_all(pairs)

    @log_execution_time
    def add_signal_correlation(
        self, pairs: Iterable[CandidatePair], track=None
    ) -> List[CandidatePair]:
        """Align anchor signal and compute the correlation feature"""
        aligner = SignalAligner(
            self.open_track(track),
            window=self.config.signal["window"],
            zero_fill=self.config.signal["zero_fill"],
        )
        aligned = aligner.align_pairs(
            pairs,
            n_workers=self.config.signal["n_workers"],
            on_unavailable=self.config.signal["on_unavailable"],
        )
        return self.correlation_engine.correlate_all(aligned)

    def label_pairs(
        self,
        pairs: Iterable[CandidatePair],
        known_loops: Union[str, Path, Iterable[KnownLoop], None] = None,
    ) -> List[CandidatePair]:
        """Attach loop / no-loop labels from a known loop set"""
        if known_loops is None:
            known_loops = self.config.known_loops_file
        if known_loops is None:
            raise ValueError("No known loops given and config.known_loops_file is unset")
        if isinstance(known_loops, (str, Path)):
            known_loops = load_known_loops(known_loops)

        labeler = LoopLabeler(known_loops, tolerance=self.config.labeling["tolerance"])
        return labeler.label_all(pairs)

    def predict(self, pairs: Iterable[CandidatePair]) -> List[CandidatePair]:
        return self.predictor.predict(pairs)

    @log_execution_time
    def run(self, motifs=None, track=None, known_loops=None) -> List[CandidatePair]:
        """
        Run the full pipeline

        Args:
            motifs: MotifIndex, Motif iterable, BED path or DataFrame
            track: Signal accessor or bigWig path
            known_loops: Optional known loops; when given, pairs are labelled

        Returns:
            Scored pairs passing the configured cutoff
        """
        logger.info("=" * 60)
        logger.info(f"Starting loop prediction: {self.config.project_name}")
        logger.info("=" * 60)

        pairs = self.prepare_pairs(motifs)
        pairs = self.add_signal_correlation(pairs, track)
        if known_loops is not None:
            pairs = self.label_pairs(pairs, known_loops)
        predicted = self.predict(pairs)

        logger.info(f"Predicted {len(predicted)} loops from {len(pairs)} candidates")
        return predicted

    def training_pairs(self, motifs=None, track=None, known_loops=None) -> List[CandidatePair]:
        """Labelled, fully featured pairs for model fitting"""
        pairs = self.prepare_pairs(motifs)
        pairs = self.add_signal_correlation(pairs, track)
        return self.label_pairs(pairs, known_loops)

    def fit(self, pairs: Iterable[CandidatePair]) -> ScoringModel:
        """Refit the model on labelled pairs and use it from now on"""
        self.model = fit_scoring_model(pairs, features=self.model.features)
        self.predictor = LoopPredictor(
            self.model,
            cutoff=self.predictor.cutoff,
            undefined_correlation=self.predictor.undefined_correlation,
        )
        return self.model

    @staticmethod
    def to_dataframe(pairs: Iterable[CandidatePair]) -> pd.DataFrame:
        return pairs_to_dataframe(pairs)
