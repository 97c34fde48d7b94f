"""
Value records for motif sites and reference loops
"""

from dataclasses import dataclass, field
from typing import Optional

STRANDS = ("+", "-")


@dataclass(frozen=True)
class Motif:
    """An oriented motif match on the genome (0-based, half-open)"""

    chrom: str
    start: int
    end: int
    strand: str
    score: float
    name: Optional[str] = None
    # Position within the chromosome's sorted motif list, set by MotifIndex
    index: Optional[int] = field(default=None, compare=False)

    @property
    def center(self) -> int:
        return (self.start + self.end) // 2

    def __str__(self) -> str:
        return f"{self.chrom}:{self.start}-{self.end}({self.strand})"


@dataclass(frozen=True)
class KnownLoop:
    """An experimentally observed loop given by its two anchor regions"""

    chrom1: str
    start1: int
    end1: int
    chrom2: str
    start2: int
    end2: int

    @property
    def is_intra_chromosomal(self) -> bool:
        return self.chrom1 == self.chrom2
