"""
Exception hierarchy for motifloop
"""


class MotifLoopError(Exception):
    """Base class for all motifloop errors"""


class InvalidMotifError(MotifLoopError, ValueError):
    """A motif record is malformed and cannot be loaded"""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record


class SignalUnavailableError(MotifLoopError):
    """The signal track cannot serve a requested interval"""

    def __init__(self, chrom: str, start: int, end: int, reason: str = ""):
        self.chrom = chrom
        self.start = start
        self.end = end
        self.reason = reason
        message = f"No signal available for {chrom}:{start}-{end}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingFeatureError(MotifLoopError, KeyError):
    """A scoring model references a feature that is not available"""

    def __init__(self, feature: str, message: str = ""):
        self.feature = feature
        super().__init__(message or f"Feature not available: {feature}")

    def __str__(self) -> str:
        return self.args[0]
