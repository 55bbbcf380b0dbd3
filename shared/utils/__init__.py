"""
Utility modules for trade aggregation.

Provides common utilities for:
- Structured logging
- Error handling
"""

from .logging import setup_logging, get_logger
from .errors import (
    DataProcessingError,
    InvalidTimestampError,
    InvalidConfigurationError,
    ConfigurationError,
    AggregationError,
    SourceError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "DataProcessingError",
    "InvalidTimestampError",
    "InvalidConfigurationError",
    "ConfigurationError",
    "AggregationError",
    "SourceError",
]
