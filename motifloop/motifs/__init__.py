"""
Motif records, the sorted motif index, and their loaders
"""

from .index import MotifIndex, chrom_sort_key, validate_motif
from .io import load_known_loops, load_motifs, motifs_from_dataframe, read_motif_table
from .models import STRANDS, KnownLoop, Motif

__all__ = [
    "Motif",
    "KnownLoop",
    "STRANDS",
    "MotifIndex",
    "chrom_sort_key",
    "validate_motif",
    "load_motifs",
    "load_known_loops",
    "motifs_from_dataframe",
    "read_motif_table",
]
