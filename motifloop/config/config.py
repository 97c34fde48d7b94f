"""
Core configuration management for motifloop
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..prediction.model import (DEFAULT_COEFFICIENTS, DEFAULT_INTERCEPT,
                                FEATURE_ACCESSORS)

logger = logging.getLogger(__name__)

SECTIONS = ("motifs", "pairs", "signal", "labeling", "prediction")


@dataclass
class Config:
    """Main configuration class for a motifloop run"""

    # General settings
    project_name: str = "motifloop_run"
    n_jobs: int = 1

    # Input/Output paths
    motif_file: Optional[str] = None
    signal_file: Optional[str] = None
    known_loops_file: Optional[str] = None

    # Stage parameters
    motifs: Dict[str, Any] = field(default_factory=dict)
    pairs: Dict[str, Any] = field(default_factory=dict)
    signal: Dict[str, Any] = field(default_factory=dict)
    labeling: Dict[str, Any] = field(default_factory=dict)
    prediction: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Fill in defaults for any stage section left empty"""
        for section in SECTIONS:
            values = getattr(self, section)
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{section}' must be a mapping, got {values!r}")
            defaults = getattr(self, f"_get_default_{section}")()
            setattr(self, section, {**defaults, **values})

    def _get_default_motifs(self) -> Dict[str, Any]:
        return {"score_column": "score", "min_score": None}

    def _get_default_pairs(self) -> Dict[str, Any]:
        return {"max_dist": 1_000_000}

    def _get_default_signal(self) -> Dict[str, Any]:
        return {
            "window": 1000,
            "zero_fill": False,
            "n_workers": 4,
            "cache_size": 100_000,
            "on_unavailable": "skip",
        }

    def _get_default_labeling(self) -> Dict[str, Any]:
        return {"tolerance": 1000}

    def _get_default_prediction(self) -> Dict[str, Any]:
        return {
            "cutoff": 0.5,
            "undefined_correlation": "na",
            "model": {
                "intercept": DEFAULT_INTERCEPT,
                "coefficients": dict(DEFAULT_COEFFICIENTS),
            },
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_file: Union[str, Path]) -> Config:
    """Load configuration from YAML or JSON file"""
    config_path = Path(config_file)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, "r") as f:
        if config_path.suffix.lower() in [".yaml", ".yml"]:
            config_dict = yaml.safe_load(f) or {}
        elif config_path.suffix.lower() == ".json":
            config_dict = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    unknown = sorted(set(config_dict) - {f.name for f in fields(Config)})
    if unknown:
        raise ValueError(f"Unknown configuration keys in {config_path}: {unknown}")

    return Config(**config_dict)


def save_config(config: Config, output_file: Union[str, Path]) -> None:
    """Save configuration to a YAML or JSON file, chosen by suffix"""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.to_dict()

    with open(output_path, "w") as f:
        if output_path.suffix.lower() == ".json":
            json.dump(config_dict, f, indent=2)
        else:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

    logger.info(f"Configuration saved to {output_path}")


def validate_config(config: Config) -> List[str]:
    """Validate configuration and return list of issues"""
    issues = []

    for name in ("motif_file", "signal_file", "known_loops_file"):
        path = getattr(config, name)
        if path and not Path(path).exists():
            issues.append(f"{name} does not exist: {path}")

    n_jobs = config.n_jobs
    if not isinstance(n_jobs, int) or isinstance(n_jobs, bool) or n_jobs == 0:
        issues.append(f"n_jobs must be a non-zero integer, got {n_jobs!r}")

    max_dist = config.pairs.get("max_dist")
    if not isinstance(max_dist, int) or isinstance(max_dist, bool) or max_dist <= 0:
        issues.append(f"pairs.max_dist must be a positive integer, got {max_dist!r}")

    window = config.signal.get("window")
    if not isinstance(window, int) or isinstance(window, bool) or window <= 0:
        issues.append(f"signal.window must be a positive integer, got {window!r}")

    for key in ("n_workers", "cache_size"):
        value = config.signal.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            issues.append(f"signal.{key} must be a positive integer, got {value!r}")

    if config.signal.get("on_unavailable") not in ("raise", "skip"):
        issues.append("signal.on_unavailable must be 'raise' or 'skip'")

    tolerance = config.labeling.get("tolerance")
    if not isinstance(tolerance, int) or isinstance(tolerance, bool) or tolerance < 0:
        issues.append(f"labeling.tolerance must be a non-negative integer, got {tolerance!r}")

    cutoff = config.prediction.get("cutoff")
    if cutoff is not None and not (
        isinstance(cutoff, (int, float)) and 0.0 <= cutoff <= 1.0
    ):
        issues.append(f"prediction.cutoff must lie in [0, 1] or be null, got {cutoff!r}")

    if config.prediction.get("undefined_correlation") not in ("na", "zero", "raise"):
        issues.append("prediction.undefined_correlation must be 'na', 'zero' or 'raise'")

    model = config.prediction.get("model") or {}
    coefficients = model.get("coefficients") if isinstance(model, dict) else None
    if not isinstance(coefficients, dict) or not coefficients:
        issues.append("prediction.model.coefficients must be a non-empty mapping")
    else:
        unknown = [name for name in coefficients if name not in FEATURE_ACCESSORS]
        if unknown:
            issues.append(f"Unknown model features: {unknown}")

    return issues


def get_default_config() -> Config:
    """Get default configuration object"""
    return Config()
