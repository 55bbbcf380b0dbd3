"""
Core framework components for trade view tooling.

Provides the base configuration classes shared by the
aggregation engine and its command line entry point.
"""

from .config import ServiceConfig, ObservabilityConfig

__all__ = [
    "ServiceConfig",
    "ObservabilityConfig",
]
