"""
Utility functions and classes for motifloop
"""

from .logging import get_logger, log_execution_time, setup_logging
from .parallel import resolve_n_jobs, run_parallel
from .validation import validate_environment, validate_python_packages

__all__ = [
    "setup_logging",
    "get_logger",
    "log_execution_time",
    "validate_environment",
    "validate_python_packages",
    "run_parallel",
    "resolve_n_jobs",
]
