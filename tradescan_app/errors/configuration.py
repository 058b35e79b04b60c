"""Configuration error raised when merged parameters fail validation."""

from typing import Any, Optional


class ConfigurationError(Exception):
    """Invalid analyzer configuration."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = errors or []
        self.recoverable = False
