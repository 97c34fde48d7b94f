"""
Tabular view of candidate pairs
"""

from typing import Iterable

import pandas as pd

from .models import CandidatePair, LoopLabel, is_defined

PAIR_COLUMNS = [
    "chrom",
    "start1",
    "end1",
    "strand1",
    "score1",
    "start2",
    "end2",
    "strand2",
    "score2",
    "distance",
    "strand_orientation",
    "score_min",
    "score_max",
    "correlation",
    "label",
    "predicted_probability",
]


def pairs_to_dataframe(pairs: Iterable[CandidatePair]) -> pd.DataFrame:
    """
    Flatten candidate pairs into a DataFrame, one row per pair

    Undefined or missing correlations become NaN; labels become booleans
    (True for loop) when present.
    """
    rows = []
    for pair in pairs:
        a1, a2 = pair.anchor1, pair.anchor2
        rows.append(
            {
                "chrom": pair.chrom,
                "start1": a1.start,
                "end1": a1.end,
                "strand1": a1.strand,
                "score1": a1.score,
                "start2": a2.start,
                "end2": a2.end,
                "strand2": a2.strand,
                "score2": a2.score,
                "distance": pair.distance,
                "strand_orientation": (
                    pair.strand_orientation.value if pair.strand_orientation else None
                ),
                "score_min": pair.score_min,
                "score_max": pair.score_max,
                "correlation": (
                    float(pair.correlation)
                    if is_defined(pair.correlation)
                    else float("nan")
                ),
                "label": (
                    pair.label is LoopLabel.LOOP if pair.label is not None else None
                ),
                "predicted_probability": pair.predicted_probability,
            }
        )

    return pd.DataFrame(rows, columns=PAIR_COLUMNS)
