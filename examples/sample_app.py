"""
Sample Application

Demonstrates the default-scope decorators on a single class.

This example shows:
- Marking sync and async methods with log_sync_method / log_async_method
- Wrapping the class with log_class and the SIMPLE_LOG preset
- Durations reported for a busy-waiting method and a sleeping coroutine

Run after installing the package (pip install -e .):

    python examples/sample_app.py
"""

import asyncio
import sys
import time

from logscope import SIMPLE_LOG, ConsoleLogger, Logger, log_async_method, log_class, log_sync_method
from logscope.presets import Metadata


def sync_delay(delay_ms: int) -> None:
    """Busy-wait without yielding, like a CPU-bound step."""
    start = time.monotonic()
    while (time.monotonic() - start) * 1000 < delay_ms:
        pass


@log_class("MyClass", SIMPLE_LOG)
class MyClass:
    def __init__(self, logger: Logger):
        self.logger = logger

    @log_sync_method(Metadata())
    def my_method(self) -> None:
        sync_delay(50)

    @log_async_method(Metadata())
    async def my_network_call(self) -> None:
        await asyncio.sleep(0.1)


async def run_sample() -> None:
    sample_object = MyClass(ConsoleLogger())
    sample_object.my_method()
    await sample_object.my_network_call()


if __name__ == "__main__":
    try:
        asyncio.run(run_sample())
    except Exception as e:
        print(f"Sample run errored: {e}", file=sys.stderr)
        raise
