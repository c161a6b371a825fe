"""
logscope - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, get_config_or_default, load_config, reload_config
from .schemas import Environment, LogFormat, LogLevel, LogScopeConfig

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "get_config_or_default",
    "reload_config",
    # Main config
    "LogScopeConfig",
    # Enums
    "Environment",
    "LogFormat",
    "LogLevel",
]
