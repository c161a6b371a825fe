"""
logscope - Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
All configuration is read from environment variables at load time.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Output format for the library's own log records."""

    TEXT = "text"
    JSON = "json"


class LogScopeConfig(BaseModel):
    """Main logscope configuration."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Level for the 'logscope' logger")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Text or JSON log records")

    enabled: bool = Field(default=True, description="Install instrumentation when classes are wrapped")
    logger_attribute: str = Field(
        default="logger",
        min_length=1,
        description="Instance attribute passed to hooks as the logger",
    )
    default_normal_execution_ms: int | None = Field(
        default=None,
        ge=0,
        description="Fallback threshold for the abnormal execution time preset",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: object) -> object:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("logger_attribute")
    @classmethod
    def validate_logger_attribute(cls, v: str) -> str:
        """Ensure the logger attribute is a valid Python identifier."""
        if not v.isidentifier():
            raise ValueError(f"logger_attribute must be a valid identifier, got {v!r}")
        return v
