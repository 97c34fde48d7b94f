"""
Sorted per-chromosome motif collection
"""

import logging
import math
import re
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..exceptions import InvalidMotifError
from .models import STRANDS, Motif

logger = logging.getLogger(__name__)

_CHROM_PATTERN = re.compile(r"^(?:chr)?(\d+|[A-Za-z]+)(.*)$")


def chrom_sort_key(chrom: str) -> Tuple:
    """Natural chromosome ordering: chr1, chr2, ..., chr10, chrX, chrY, chrM"""
    match = _CHROM_PATTERN.match(chrom)
    if not match:
        return (2, 0, chrom)

    label, suffix = match.groups()
    if label.isdigit():
        return (0, int(label), suffix)
    return (1, 0, label + suffix)


def validate_motif(motif: Motif) -> None:
    """Raise InvalidMotifError if the record is malformed"""
    if not motif.chrom:
        raise InvalidMotifError(f"Motif has no chromosome: {motif!r}", motif)

    if motif.start < 0:
        raise InvalidMotifError(f"Motif start is negative: {motif}", motif)

    if motif.start >= motif.end:
        raise InvalidMotifError(
            f"Motif start must be smaller than end: {motif}", motif
        )

    if motif.strand not in STRANDS:
        raise InvalidMotifError(
            f"Unrecognized strand {motif.strand!r} for motif {motif}", motif
        )

    if motif.score is None or math.isnan(motif.score):
        raise InvalidMotifError(f"Motif score is missing: {motif}", motif)

    if motif.score < 0:
        raise InvalidMotifError(
            f"Motif score must be non-negative, got {motif.score}: {motif}", motif
        )


class MotifIndex:
    """
    Read-only, per-chromosome sorted collection of motifs

    Motifs are ordered by start, then end, then input order. Each stored
    motif carries its position within its chromosome in ``Motif.index``.
    """

    def __init__(self, motifs: Iterable[Motif], min_score: Optional[float] = None):
        """
        Args:
            motifs: Unordered motif records
            min_score: Optional score threshold; weaker motifs are dropped
        """
        grouped: Dict[str, List[Motif]] = {}
        n_input = 0
        n_filtered = 0

        for motif in motifs:
            validate_motif(motif)
            n_input += 1

            if min_score is not None and motif.score < min_score:
                n_filtered += 1
                continue

            grouped.setdefault(motif.chrom, []).append(motif)

        self._by_chrom: Dict[str, Tuple[Motif, ...]] = {}
        for chrom in sorted(grouped, key=chrom_sort_key):
            # sorted() is stable, so equal (start, end) keep input order
            ordered = sorted(grouped[chrom], key=lambda m: (m.start, m.end))
            self._by_chrom[chrom] = tuple(
                replace(motif, index=i) for i, motif in enumerate(ordered)
            )

        if n_filtered:
            logger.info(
                f"Dropped {n_filtered}/{n_input} motifs with score below {min_score}"
            )
        logger.debug(
            f"Indexed {len(self)} motifs on {len(self._by_chrom)} chromosomes"
        )

    def chromosomes(self) -> List[str]:
        """Chromosomes in natural order"""
        return list(self._by_chrom)

    def __getitem__(self, chrom: str) -> Sequence[Motif]:
        return self._by_chrom.get(chrom, ())

    def __contains__(self, chrom: str) -> bool:
        return chrom in self._by_chrom

    def __len__(self) -> int:
        return sum(len(motifs) for motifs in self._by_chrom.values())

    def __iter__(self) -> Iterator[Motif]:
        for motifs in self._by_chrom.values():
            yield from motifs

    def starts(self, chrom: str) -> List[int]:
        return [motif.start for motif in self[chrom]]

    def __repr__(self) -> str:
        return (
            f"MotifIndex(motifs={len(self)}, chromosomes={len(self._by_chrom)})"
        )
