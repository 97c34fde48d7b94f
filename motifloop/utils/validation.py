"""
Validation utilities for motifloop
"""

import importlib
import logging
import sys
from typing import Dict, List

logger = logging.getLogger(__name__)

CORE_PACKAGES = [
    "numpy",
    "pandas",
    "scipy",
    "pyBigWig",
    "sklearn",
    "joblib",
    "yaml",
]


def validate_python_packages(packages: List[str]) -> Dict[str, bool]:
    """Check which of the given Python packages can be imported"""
    results = {}

    for package in packages:
        try:
            importlib.import_module(package)
            results[package] = True
            logger.debug(f"Package {package}: available")
        except ImportError:
            results[package] = False
            logger.debug(f"Package {package}: not available")

    return results


def validate_environment() -> List[str]:
    """
    Environment validation

    Returns:
        List of validation issues found
    """
    issues = []

    logger.info("Validating motifloop environment...")

    if sys.version_info < (3, 8):
        issues.append(
            f"Python 3.8+ required, found {sys.version_info.major}.{sys.version_info.minor}"
        )

    package_status = validate_python_packages(CORE_PACKAGES)
    missing_packages = [
        pkg for pkg, available in package_status.items() if not available
    ]
    if missing_packages:
        issues.append(f"Missing Python packages: {', '.join(missing_packages)}")

    if issues:
        logger.warning(f"Environment validation found {len(issues)} issues")
        for issue in issues:
            logger.warning(f"  - {issue}")
    else:
        logger.info("Environment validation passed")

    return issues
