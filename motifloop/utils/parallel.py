"""
Parallel execution helpers
"""

import logging
import os
from typing import Any, Callable, Iterable, List, Optional

from joblib import Parallel, delayed

logger = logging.getLogger(__name__)


def resolve_n_jobs(n_jobs: Optional[int]) -> int:
    """Translate joblib-style worker counts (None, -1, ...) to a positive int"""
    cpu_count = os.cpu_count() or 1

    if n_jobs is None or n_jobs == 0:
        return 1
    if n_jobs < 0:
        return max(1, cpu_count + 1 + n_jobs)
    return n_jobs


def run_parallel(
    func: Callable[..., Any],
    items: Iterable[Any],
    n_jobs: Optional[int] = 1,
    backend: str = "loky",
) -> List[Any]:
    """
    Apply ``func`` to every item, preserving input order in the result

    Args:
        func: Function of one argument
        items: Items to process
        n_jobs: Number of workers (joblib semantics, 1 runs inline)
        backend: joblib backend name

    Returns:
        List of results in the same order as ``items``
    """
    items = list(items)
    workers = min(resolve_n_jobs(n_jobs), max(1, len(items)))

    if workers == 1:
        return [func(item) for item in items]

    logger.debug(f"Running {len(items)} tasks on {workers} {backend} workers")
    return Parallel(n_jobs=workers, backend=backend)(
        delayed(func)(item) for item in items
    )
