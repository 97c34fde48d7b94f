"""
Loop labeling against known interaction sets
"""

from .labeler import LoopLabeler

__all__ = ["LoopLabeler"]
