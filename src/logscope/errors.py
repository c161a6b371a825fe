"""
logscope - Core Error Types

Defines the exception hierarchy for the instrumentation engine.
All library exceptions inherit from LogScopeError for consistent handling.

Errors raised by observed methods or by hooks are never wrapped: they
propagate to the caller exactly as raised.
"""

from typing import Any


class LogScopeError(Exception):
    """Base exception for all logscope errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LogScopeError):
    """Raised when configuration is invalid or missing."""

    pass


class ScopeConfigurationError(LogScopeError):
    """Raised when a scope is asked to wrap a class without any hooks."""

    def __init__(self, scope_label: str, details: dict[str, Any] | None = None):
        message = f"Scope '{scope_label}' has no log options to wrap a class with"
        super().__init__(message, {"scope": scope_label, **(details or {})})
        self.scope_label = scope_label


class InstrumentationError(LogScopeError):
    """Raised when a class decorator is applied to something that is not a class."""

    def __init__(self, target: Any):
        message = f"Cannot instrument {target!r}: expected a class"
        super().__init__(message, {"target_type": type(target).__name__})
