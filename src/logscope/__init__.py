"""
logscope - Method Instrumentation

Mark methods of a class as observed and wrap them so every call fires a
start hook, is timed, and fires an end hook with the result and duration.
Return values, arguments and exceptions pass through unchanged.
"""

__version__ = "1.0.0"

from .clock import Clock, get_clock, set_clock
from .errors import ConfigurationError, InstrumentationError, LogScopeError, ScopeConfigurationError
from .installer import install
from .loggers import ConsoleLogger, Logger, StdlibLogger
from .models import (
    ExecutionTimeResult,
    LogOptions,
    LogOptionsProtocol,
    MethodDescriptor,
    MethodObservation,
    ScopeId,
)
from .presets import ABNORMAL_EXECUTION_TIME_LOG, INVOCATION_LOG, SIMPLE_LOG, LoggingOptions
from .registry import ScopeRegistry, get_registry
from .scope import Scope, create_scope, log_async_method, log_class, log_sync_method
from .tracking import track_async, track_sync

__all__ = [
    # Scopes
    "Scope",
    "create_scope",
    "log_sync_method",
    "log_async_method",
    "log_class",
    # Core
    "install",
    "track_sync",
    "track_async",
    "ScopeRegistry",
    "get_registry",
    "Clock",
    "get_clock",
    "set_clock",
    # Models
    "ScopeId",
    "MethodObservation",
    "MethodDescriptor",
    "ExecutionTimeResult",
    "LogOptions",
    "LogOptionsProtocol",
    # Loggers and presets
    "Logger",
    "ConsoleLogger",
    "StdlibLogger",
    "LoggingOptions",
    "SIMPLE_LOG",
    "ABNORMAL_EXECUTION_TIME_LOG",
    "INVOCATION_LOG",
    # Errors
    "LogScopeError",
    "ConfigurationError",
    "ScopeConfigurationError",
    "InstrumentationError",
]
