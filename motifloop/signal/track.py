"""
Signal-track accessors

An accessor is any callable ``(chrom, start, end) -> sequence of floats``
returning one value per base of the half-open interval, raising
SignalUnavailableError when the interval cannot be served.
"""

import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Dict, Mapping, Sequence, Tuple, Union

import numpy as np
import pyBigWig

from ..exceptions import SignalUnavailableError

logger = logging.getLogger(__name__)

TrackAccessor = Callable[[str, int, int], Sequence[float]]


class ArrayTrack:
    """Per-base signal held in memory as one numpy array per chromosome"""

    def __init__(self, arrays: Mapping[str, Sequence[float]]):
        self.arrays: Dict[str, np.ndarray] = {
            chrom: np.asarray(values, dtype=np.float64)
            for chrom, values in arrays.items()
        }

    def __call__(self, chrom: str, start: int, end: int) -> np.ndarray:
        values = self.arrays.get(chrom)
        if values is None:
            raise SignalUnavailableError(chrom, start, end, "chromosome not in track")
        if start < 0 or end > len(values) or start >= end:
            raise SignalUnavailableError(
                chrom, start, end, f"outside track bounds [0, {len(values)})"
            )
        return values[start:end]


class BigWigTrack:
    """
    Signal read from an indexed bigWig file with pyBigWig

    Bases without data in the file read as 0. The file handle is opened
    lazily and guarded by a lock, since pyBigWig handles are not thread-safe.
    """

    def __init__(self, bigwig_file: Union[str, Path]):
        self.path = Path(bigwig_file)
        if not self.path.exists():
            raise FileNotFoundError(f"bigWig file not found: {self.path}")

        self._handle = None
        self._lock = threading.Lock()

    def _open(self):
        if self._handle is None:
            logger.debug(f"Opening bigWig {self.path}")
            self._handle = pyBigWig.open(str(self.path))
            if self._handle is None or not self._handle.isBigWig():
                self._handle = None
                raise ValueError(f"Not a bigWig file: {self.path}")
        return self._handle

    def __call__(self, chrom: str, start: int, end: int) -> np.ndarray:
        with self._lock:
            handle = self._open()
            chrom_length = handle.chroms(chrom)

            if chrom_length is None:
                raise SignalUnavailableError(chrom, start, end, "chromosome not in track")
            if start < 0 or end > chrom_length or start >= end:
                raise SignalUnavailableError(
                    chrom, start, end, f"outside chromosome bounds [0, {chrom_length})"
                )

            try:
                values = handle.values(chrom, start, end)
            except RuntimeError as e:
                raise SignalUnavailableError(chrom, start, end, str(e)) from e

        values = np.asarray(values, dtype=np.float64)
        return np.nan_to_num(values, nan=0.0)

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __getstate__(self):
        return {"path": self.path}

    def __setstate__(self, state):
        self.path = state["path"]
        self._handle = None
        self._lock = threading.Lock()


class CachedTrack:
    """Thread-safe LRU cache in front of a slow accessor"""

    def __init__(self, track: TrackAccessor, max_size: int = 100_000):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.track = track
        self.max_size = max_size
        self.hits = 0
        self.misses = 0
        self._cache: "OrderedDict[Tuple[str, int, int], np.ndarray]" = OrderedDict()
        self._lock = threading.Lock()

    def __call__(self, chrom: str, start: int, end: int) -> np.ndarray:
        key = (chrom, start, end)
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self.hits += 1
                return self._cache[key]
            self.misses += 1

        # Read outside the lock; failures are not cached
        values = np.asarray(self.track(chrom, start, end), dtype=np.float64)
        values.setflags(write=False)

        with self._lock:
            self._cache[key] = values
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)

        return values

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0
