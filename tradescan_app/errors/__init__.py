"""
Error classification for price-history analysis.

Every analysis entry point signals failure through one of these exception
types; turning them into user-visible text is left to the caller.
"""

from .analysis import (
    AnalysisError,
    ParseEmptyError,
    InsufficientDataError,
    NoWinningPairsError,
)
from .configuration import ConfigurationError

__all__ = [
    # Analysis Errors
    "AnalysisError",
    "ParseEmptyError",
    "InsufficientDataError",
    "NoWinningPairsError",
    # Configuration
    "ConfigurationError",
]
