"""
logscope - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import LogScopeConfig

logger = logging.getLogger(__name__)

_config_instance: LogScopeConfig | None = None


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> LogScopeConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated LogScopeConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.debug(f"Loading environment from {env_path}")
        try:
            # an explicit file wins; the implicit cwd .env never overrides the host environment
            load_dotenv(env_path, override=env_file is not None)
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e

    normal_ms = os.getenv("LOGSCOPE_DEFAULT_NORMAL_EXECUTION_MS")

    config_dict = {
        "environment": os.getenv("LOGSCOPE_ENVIRONMENT", "development"),
        "log_level": os.getenv("LOGSCOPE_LOG_LEVEL", "INFO"),
        "log_format": os.getenv("LOGSCOPE_LOG_FORMAT", "text") or "text",
        "enabled": _env_flag("LOGSCOPE_ENABLED", "true"),
        "logger_attribute": os.getenv("LOGSCOPE_LOGGER_ATTRIBUTE", "logger"),
        "default_normal_execution_ms": normal_ms if normal_ms else None,
    }

    try:
        _config_instance = LogScopeConfig(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your LOGSCOPE_* environment variables.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.debug(
        f"Configuration loaded (environment: {_config_instance.environment.value})",
        extra={"environment": _config_instance.environment.value, "enabled": _config_instance.enabled},
    )
    return _config_instance


def get_config() -> LogScopeConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current LogScopeConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def get_config_or_default() -> LogScopeConfig:
    """
    Get the current configuration, or the defaults when it is invalid.

    Used on the instrumentation paths, which must not fail because of
    unrelated environment settings.
    """
    try:
        return get_config()
    except ConfigurationError as e:
        logger.warning(
            f"Invalid logscope configuration, using defaults: {e.message}",
            extra={"details": e.details},
        )
        return LogScopeConfig()


def reload_config(env_file: str | None = None) -> LogScopeConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded LogScopeConfig instance
    """
    return load_config(env_file=env_file, reload=True)
