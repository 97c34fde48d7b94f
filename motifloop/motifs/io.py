"""
Loaders for motif sets (BED) and known loops (BEDPE)
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ..exceptions import InvalidMotifError
from .index import MotifIndex
from .models import KnownLoop, Motif

logger = logging.getLogger(__name__)

BED6_COLUMNS = ["chrom", "start", "end", "name", "score", "strand"]
BEDPE_COLUMNS = ["chrom1", "start1", "end1", "chrom2", "start2", "end2"]


def _has_header(path: Path) -> bool:
    with open(path, "r") as f:
        for line in f:
            if line.startswith(("#", "track", "browser")) or not line.strip():
                continue
            fields = line.rstrip("\n").split("\t")
            return len(fields) > 1 and not fields[1].strip().isdigit()
    return False


def read_motif_table(motif_file: Union[str, Path]) -> pd.DataFrame:
    """
    Read a BED6-like motif file into a DataFrame

    Files with a header row are read as-is; headerless files are assumed to
    follow the BED6 column order (chrom, start, end, name, score, strand).
    """
    motif_path = Path(motif_file)

    if not motif_path.exists():
        raise FileNotFoundError(f"Motif file not found: {motif_path}")

    if _has_header(motif_path):
        return pd.read_csv(motif_path, sep="\t", comment="#")

    sample_df = pd.read_csv(motif_path, sep="\t", nrows=1, header=None, comment="#")
    n_cols = len(sample_df.columns)
    if n_cols < 6:
        raise InvalidMotifError(
            f"Motif file must have at least 6 columns (BED6), found {n_cols}: {motif_path}"
        )

    names = BED6_COLUMNS + [f"col{i}" for i in range(7, n_cols + 1)]
    return pd.read_csv(motif_path, sep="\t", header=None, names=names, comment="#")


def motifs_from_dataframe(
    motifs_df: pd.DataFrame, score_column: str = "score"
) -> List[Motif]:
    """Convert a table with chrom/start/end/strand/score columns to Motif records"""
    required_cols = ["chrom", "start", "end", "strand", score_column]
    missing_cols = [col for col in required_cols if col not in motifs_df.columns]
    if missing_cols:
        raise InvalidMotifError(f"Missing required motif columns: {missing_cols}")

    has_name = "name" in motifs_df.columns
    motifs = []

    for row in motifs_df.itertuples(index=False):
        record = row._asdict()
        try:
            motif = Motif(
                chrom=str(record["chrom"]),
                start=int(record["start"]),
                end=int(record["end"]),
                strand=str(record["strand"]),
                score=float(record[score_column]),
                name=str(record["name"]) if has_name else None,
            )
        except (TypeError, ValueError) as e:
            raise InvalidMotifError(f"Malformed motif record {record}: {e}", record)
        motifs.append(motif)

    return motifs


def load_motifs(
    motifs: Union[str, Path, pd.DataFrame],
    score_column: str = "score",
    min_score: Optional[float] = None,
) -> MotifIndex:
    """
    Load motifs from a BED6 file or DataFrame into a MotifIndex

    Args:
        motifs: BED file path or DataFrame
        score_column: Column holding the -log10 p-value motif score
        min_score: Optional score threshold

    Returns:
        MotifIndex over the loaded motifs
    """
    if isinstance(motifs, pd.DataFrame):
        motifs_df = motifs
    else:
        logger.info(f"Loading motifs from {motifs}")
        motifs_df = read_motif_table(motifs)

    index = MotifIndex(
        motifs_from_dataframe(motifs_df, score_column=score_column),
        min_score=min_score,
    )
    logger.info(f"Loaded {len(index)} motifs on {len(index.chromosomes())} chromosomes")
    return index


def load_known_loops(loops_file: Union[str, Path]) -> List[KnownLoop]:
    """
    Load known loops from a BEDPE file

    Args:
        loops_file: Path to BEDPE file (header optional)

    Returns:
        List of KnownLoop records
    """
    loops_path = Path(loops_file)

    if not loops_path.exists():
        raise FileNotFoundError(f"Loops file not found: {loops_path}")

    if _has_header(loops_path):
        loops_df = pd.read_csv(loops_path, sep="\t", comment="#")
    else:
        sample_df = pd.read_csv(loops_path, sep="\t", nrows=1, header=None, comment="#")
        n_cols = len(sample_df.columns)
        if n_cols < 6:
            raise ValueError("Loops file must have at least 6 columns (BEDPE format)")
        cols = BEDPE_COLUMNS + [f"col{i}" for i in range(7, n_cols + 1)]
        loops_df = pd.read_csv(
            loops_path, sep="\t", header=None, names=cols, comment="#"
        )

    column_mapping = {
        "chr1": "chrom1",
        "chr2": "chrom2",
        "x1": "start1",
        "x2": "end1",
        "y1": "start2",
        "y2": "end2",
    }
    loops_df = loops_df.rename(columns=column_mapping)

    missing_cols = [col for col in BEDPE_COLUMNS if col not in loops_df.columns]
    if missing_cols:
        raise ValueError(f"Missing required columns: {missing_cols}")

    loops = [
        KnownLoop(
            chrom1=str(row.chrom1),
            start1=int(row.start1),
            end1=int(row.end1),
            chrom2=str(row.chrom2),
            start2=int(row.start2),
            end2=int(row.end2),
        )
        for row in loops_df[BEDPE_COLUMNS].itertuples(index=False)
    ]

    logger.info(f"Loaded {len(loops)} known loops from {loops_path}")
    return loops
