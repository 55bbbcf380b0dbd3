"""
Configuration management for trade view components.

Provides typed configuration classes with environment variable
injection and validation.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Any

from shared.utils.logging import LOG_FORMATS


ENVIRONMENTS = ["local", "dev", "staging", "prod"]


@dataclass
class ObservabilityConfig:
    """Observability configuration."""
    log_level: str = field(default_factory=lambda: os.getenv("TRADE_VIEW_LOG_LEVEL", "info"))
    log_format: str = field(default_factory=lambda: os.getenv("TRADE_VIEW_LOG_FORMAT", "json"))


@dataclass
class ServiceConfig:
    """Base service configuration."""
    service_name: str
    environment: str = field(default_factory=lambda: os.getenv("TRADE_VIEW_ENV", "local"))

    # Sub-configurations
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.service_name:
            raise ValueError("service_name is required")

        if self.environment not in ENVIRONMENTS:
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.observability.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {self.observability.log_format}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "service_name": self.service_name,
            "environment": self.environment,
            "observability": {
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
            },
        }
