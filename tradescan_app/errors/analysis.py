"""
Analysis error classifications for price-history processing.

These exceptions describe why a single analysis call could not produce a
result. They are terminal for that call and never retried.
"""

from typing import Optional, Dict, Any


class AnalysisError(Exception):
    """Base class for failures of a single analysis call."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class ParseEmptyError(AnalysisError):
    """Input text produced zero valid trades."""

    def __init__(self, message: str, line_count: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.line_count = line_count


class InsufficientDataError(AnalysisError):
    """Not enough trades for the requested calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class NoWinningPairsError(AnalysisError):
    """A statistic over winning round-trips was requested but none exist."""

    def __init__(self, message: str, total_pairs: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.total_pairs = total_pairs
