"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.

Missing forecast input ("insufficient data") is not an error: it is
represented by an empty result.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MalformedRecordError(DomainError):
    """Raised when a stored record carries a date that cannot be parsed."""

    def __init__(
        self,
        record_type: str,
        field: str,
        value: Any,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.record_type = record_type
        self.field = field
        self.value = value
        message = f"Malformed {record_type}.{field}: {value!r}"
        super().__init__(message, details)


class ForecastComputationError(DomainError):
    """Raised when a forecast strategy fails to produce a result."""

    def __init__(
        self, strategy: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        self.strategy = strategy
        super().__init__(f"[{strategy}] {message}", details)


class ForecastTimeoutError(ForecastComputationError):
    """Raised when a forecast strategy exceeds its time budget."""

    def __init__(
        self,
        strategy: str,
        timeout_seconds: float,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            strategy, f"computation exceeded {timeout_seconds:.2f}s", details
        )
