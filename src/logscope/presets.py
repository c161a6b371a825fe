"""
logscope - Hook Presets

Ready-made LogOptions for loggers implementing ``log(message)``:

- SIMPLE_LOG: one line on entry, one line with the duration on completion
- ABNORMAL_EXECUTION_TIME_LOG: completion line, preceded by a warning when
  the call took longer than ``metadata.normal_execution_time_ms``
- INVOCATION_LOG: one line on entry only
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import get_config_or_default
from .loggers import Logger
from .models import ExecutionTimeResult, LogOptions, MethodDescriptor


@dataclass(frozen=True, slots=True)
class Metadata:
    """Empty metadata for presets that need none."""


@dataclass(frozen=True, slots=True)
class NormalExecutionMetadata:
    normal_execution_time_ms: int


def _invoked(logger: Logger, method: MethodDescriptor[Any]) -> None:
    logger.log(f"[{method.qualified_name}] was invoked")


def _completed(logger: Logger, method: MethodDescriptor[Any], execution_time_result: ExecutionTimeResult[Any]) -> None:
    logger.log(f"[{method.qualified_name}] completed in {execution_time_result.execution_time_ms}ms")


def normal_execution_time_ms(metadata: Any) -> int | None:
    """
    Threshold carried by ``metadata``, if any.

    Accepts an object attribute or a mapping key named
    ``normal_execution_time_ms``; otherwise falls back to
    LOGSCOPE_DEFAULT_NORMAL_EXECUTION_MS.
    """
    if isinstance(metadata, Mapping):
        threshold = metadata.get("normal_execution_time_ms")
    else:
        threshold = getattr(metadata, "normal_execution_time_ms", None)

    if isinstance(threshold, int | float) and not isinstance(threshold, bool):
        return int(threshold)
    return get_config_or_default().default_normal_execution_ms


def _completed_with_threshold(
    logger: Logger, method: MethodDescriptor[Any], execution_time_result: ExecutionTimeResult[Any]
) -> None:
    threshold = normal_execution_time_ms(method.metadata)
    elapsed = execution_time_result.execution_time_ms
    if threshold is not None and elapsed > threshold:
        logger.log(
            f"WARNING: [{method.qualified_name}] completed in {elapsed}ms, "
            f"which exceeds normal execution time of {threshold}ms"
        )
    _completed(logger, method, execution_time_result)


class LoggingOptions:
    """Namespace for the bundled presets."""

    SIMPLE_LOG: LogOptions[Logger, Any] = LogOptions(on_method_start=_invoked, on_method_end=_completed)

    ABNORMAL_EXECUTION_TIME_LOG: LogOptions[Logger, Any] = LogOptions(on_method_end=_completed_with_threshold)

    INVOCATION_LOG: LogOptions[Logger, Any] = LogOptions(on_method_start=_invoked)


SIMPLE_LOG = LoggingOptions.SIMPLE_LOG
ABNORMAL_EXECUTION_TIME_LOG = LoggingOptions.ABNORMAL_EXECUTION_TIME_LOG
INVOCATION_LOG = LoggingOptions.INVOCATION_LOG
