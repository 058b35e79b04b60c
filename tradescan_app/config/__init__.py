"""Analyzer configuration: defaults, YAML overrides and validation."""

from .defaults import (
    DefaultConfig,
    ParserParams,
    PatternParams,
    PnLParams,
    get_default_config,
)
from .loader import ConfigLoader, load_config

__all__ = [
    "DefaultConfig",
    "ParserParams",
    "PatternParams",
    "PnLParams",
    "ConfigLoader",
    "get_default_config",
    "load_config",
]
