"""
logscope - Track Routines

Run one observed call between the start and end hooks and build its
ExecutionTimeResult.

Protocol for both variants:
1. ``on_method_start`` fires.
2. Monotonic and wall-clock start are recorded.
3. The call runs (sync) or the already-created awaitable is awaited (async).
   Any exception propagates unchanged and the end hook is skipped.
4. Monotonic and wall-clock end are recorded; the duration is floored to
   whole milliseconds.
5. ``on_method_end`` fires with the result.
6. The result is returned unchanged.
"""

import inspect
import math
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

from .clock import Clock, get_clock
from .models import ExecutionTimeResult, LogOptionsProtocol, MethodDescriptor

T = TypeVar("T")


def _build_result(
    value: T,
    clock: Clock,
    monotonic_start: float,
    start: datetime,
) -> ExecutionTimeResult[T]:
    monotonic_end = clock.now()
    end = clock.wall_clock_now()

    return ExecutionTimeResult(
        value=value,
        start=start,
        end=max(end, start),
        execution_time_ms=max(0, math.floor(monotonic_end - monotonic_start)),
    )


def track_sync(
    step: Callable[[], T],
    logger: Any,
    options: LogOptionsProtocol[Any, Any],
    descriptor: MethodDescriptor[Any],
    clock: Clock | None = None,
) -> T:
    """
    Run a synchronous call between the start and end hooks.

    Args:
        step: Zero-argument callable performing the original call
        logger: Passed to the hooks unexamined
        options: Hook pair
        descriptor: Identity of the observed method
        clock: Clock to time with (default: process-wide clock)

    Returns:
        Whatever ``step`` returned
    """
    clock = clock or get_clock()

    options.on_method_start(logger, descriptor)

    monotonic_start = clock.now()
    start = clock.wall_clock_now()

    result = step()

    options.on_method_end(logger, descriptor, _build_result(result, clock, monotonic_start, start))

    return result


async def track_async(
    step: Awaitable[T],
    logger: Any,
    options: LogOptionsProtocol[Any, Any],
    descriptor: MethodDescriptor[Any],
    clock: Clock | None = None,
) -> T:
    """
    Await an already-created awaitable between the start and end hooks.

    The hooks bracket the await, not the call that produced ``step``.
    A rejected awaitable (or cancellation) propagates after the start hook
    and before the end hook, which is skipped.
    """
    clock = clock or get_clock()

    try:
        options.on_method_start(logger, descriptor)
    except BaseException:
        # the awaitable will never be awaited now
        if inspect.iscoroutine(step):
            step.close()
        raise

    monotonic_start = clock.now()
    start = clock.wall_clock_now()

    result = await step

    options.on_method_end(logger, descriptor, _build_result(result, clock, monotonic_start, start))

    return result
