"""
Custom error classes for trade aggregation.

Provides structured error handling with error codes,
context information, and proper exception chaining.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Error context information."""
    service: str
    operation: str
    period: Optional[str] = None
    record_index: Optional[int] = None
    correlation_id: Optional[str] = None
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class DataProcessingError(Exception):
    """Base exception for data processing errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        result = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        if self.context:
            result["context"] = {
                "service": self.context.service,
                "operation": self.context.operation,
                "period": self.context.period,
                "record_index": self.context.record_index,
                "correlation_id": self.context.correlation_id,
                "metadata": self.context.metadata,
            }

        return result


class InvalidTimestampError(DataProcessingError):
    """Error raised when a record timestamp cannot be parsed to an instant."""

    def __init__(
        self,
        message: str,
        value: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="INVALID_TIMESTAMP",
            context=context,
            details=details or {}
        )
        self.value = value

        if value is not None:
            self.details["value"] = repr(value)


class AggregationError(DataProcessingError):
    """Error raised when bucket aggregation or reduction fails."""

    def __init__(
        self,
        message: str,
        bucket_key: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="AGGREGATION_ERROR",
            context=context,
            details=details or {}
        )
        self.bucket_key = bucket_key

        if bucket_key:
            self.details["bucket_key"] = bucket_key


class SourceError(DataProcessingError):
    """Error raised when trade records cannot be retrieved."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="SOURCE_ERROR",
            context=context,
            details=details or {}
        )
        self.url = url
        self.status = status

        if url:
            self.details["url"] = url
        if status is not None:
            self.details["status"] = status


class ConfigurationError(DataProcessingError):
    """Error raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "CONFIGURATION_ERROR"
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            details=details or {}
        )
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details["config_key"] = config_key
        if config_value is not None:
            self.details["config_value"] = str(config_value)


class InvalidConfigurationError(ConfigurationError):
    """Error raised for an unrecognized aggregation selector such as the period."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            config_key=config_key,
            config_value=config_value,
            context=context,
            details=details,
            error_code="INVALID_CONFIGURATION"
        )


def create_error_context(
    service: str,
    operation: str,
    period: Optional[str] = None,
    record_index: Optional[int] = None,
    correlation_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> ErrorContext:
    """Create error context."""
    return ErrorContext(
        service=service,
        operation=operation,
        period=period,
        record_index=record_index,
        correlation_id=correlation_id,
        metadata=metadata or {}
    )
