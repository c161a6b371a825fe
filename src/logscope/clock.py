"""
logscope - Clock

Timestamps for duration measurement and wall-clock markers for display.

Two tiers:
- High resolution: ``time.perf_counter`` in fractional milliseconds.
- Fallback: the wall clock in integral milliseconds, used for both roles when
  the high-resolution timer is not available on the host.

The fallback is silent: callers see the same signatures and units, only
lower precision.
"""

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def _perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


def _detect_high_resolution() -> bool:
    """Check whether the host exposes a usable monotonic high-resolution timer."""
    try:
        info = time.get_clock_info("perf_counter")
    except (ValueError, OSError, AttributeError) as e:
        logger.debug(f"perf_counter unavailable, using wall clock: {e}")
        return False
    return info.monotonic


class Clock:
    """
    Millisecond clock with a monotonic source and a wall-clock source.

    Attributes:
        high_resolution: True when the monotonic high-resolution tier is active
    """

    def __init__(
        self,
        monotonic_source: Callable[[], float] | None = None,
        wall_clock_source: Callable[[], datetime] | None = None,
        high_resolution: bool | None = None,
    ):
        """
        Initialize the clock.

        Args:
            monotonic_source: Callable returning milliseconds for subtraction.
                Defaults to perf_counter, or the wall clock on fallback.
            wall_clock_source: Callable returning an aware datetime.
            high_resolution: Force a tier (default: detect on the host)
        """
        if high_resolution is None:
            high_resolution = _detect_high_resolution()
        self.high_resolution = high_resolution

        if monotonic_source is None:
            monotonic_source = _perf_counter_ms if high_resolution else _wall_clock_ms
        self._monotonic = monotonic_source
        self._wall_clock = wall_clock_source or self._default_wall_clock

    @staticmethod
    def _default_wall_clock() -> datetime:
        return datetime.now(UTC)

    def now(self) -> float:
        """Milliseconds, only meaningful relative to another ``now()``."""
        return self._monotonic()

    def wall_clock_now(self) -> datetime:
        """Current absolute time for human-readable start/end markers."""
        return self._wall_clock()


_clock: Clock | None = None


def get_clock() -> Clock:
    """
    Get the process-wide clock, creating it on first access.

    Returns:
        Global Clock instance
    """
    global _clock

    if _clock is None:
        _clock = Clock()

    return _clock


def set_clock(clock: Clock | None) -> None:
    """Replace the process-wide clock; ``None`` resets to a freshly detected one."""
    global _clock
    _clock = clock
