"""
logscope - Observability Module

Logging configuration for the library's own diagnostics.

Usage:
    from logscope.observability import setup_logging

    setup_logging(level="DEBUG", json_format=True)
"""

from .monitoring import JSONFormatter, setup_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
]
