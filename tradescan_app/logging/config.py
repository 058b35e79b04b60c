"""
Centralized logging configuration for the TradeScan analyzer.

This module provides standardized logging configuration using structlog
for all components. Parsers and analyses log through loggers obtained here
so that output stays structured and consistently formatted.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Logs go to stderr so that report output on stdout stays machine readable
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_analysis_logger(name: str, analysis: str) -> FilteringBoundLogger:
    """
    Get a logger bound to a named analysis stage.

    Args:
        name: Logger name (typically __name__)
        analysis: Stage name, e.g. "max_profit" or "patterns"

    Returns:
        Configured structlog logger carrying the stage name
    """
    # Must stay a lazy proxy until configure_logging() has run
    return structlog.get_logger(name, subsystem="analysis", analysis=analysis)


def log_line_rejected(
    logger: FilteringBoundLogger,
    line_number: int,
    reason: str,
    line: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a dropped input line with standardized format.

    Args:
        logger: Structlog logger instance
        line_number: 1-based line number in the pasted text
        reason: Why the line was dropped
        line: The raw line content
        context: Additional context data
    """
    bound_logger = logger.bind(
        line_number=line_number,
        reason=reason,
        line=line,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Line rejected")
