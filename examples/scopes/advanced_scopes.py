"""
Stacked Scopes Example

Three independent scopes observe the same class with different presets:

- calls: logs entry and completion of my_method (SIMPLE_LOG)
- execution_times: warns when a call exceeds its normal duration
- invocations: logs entry only; its class decorator is left out on purpose,
  so its markers have no effect

a_worker_operation is marked by two scopes. Only execution_times wraps the
class, so it is the only one whose hooks fire for that method.

Run after installing the package (pip install -e .):

    python examples/scopes/advanced_scopes.py
"""

import asyncio
import logging

from logscope import (
    ABNORMAL_EXECUTION_TIME_LOG,
    INVOCATION_LOG,
    SIMPLE_LOG,
    Logger,
    StdlibLogger,
    create_scope,
)
from logscope.observability import setup_logging
from logscope.presets import Metadata, NormalExecutionMetadata

log_method_calls = create_scope("MyAdvancedClass1", SIMPLE_LOG)
log_method_execution_times = create_scope("MyAdvancedClass2", ABNORMAL_EXECUTION_TIME_LOG)
log_method_invocations = create_scope("MyAdvancedClass3", INVOCATION_LOG)


@log_method_execution_times.wrap_class()
@log_method_calls.wrap_class()
# @log_method_invocations.wrap_class()
class MyAdvancedClass:
    def __init__(self, logger: Logger):
        self.logger = logger

    @log_method_calls.mark_sync(Metadata())
    def my_method(self) -> None:
        self._my_private_method()

    @log_method_invocations.mark_async(Metadata())
    @log_method_execution_times.mark_async(NormalExecutionMetadata(normal_execution_time_ms=100))
    def a_worker_operation(self) -> "asyncio.Future[None]":
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        future.set_result(None)
        return future

    @log_method_execution_times.mark_async(NormalExecutionMetadata(normal_execution_time_ms=100))
    async def my_network_call(self) -> None:
        await asyncio.sleep(0.1)

    @log_method_invocations.mark_sync(Metadata())
    def _my_private_method(self) -> None:
        pass


async def main() -> None:
    setup_logging(level="DEBUG")
    sample = MyAdvancedClass(StdlibLogger("logscope.examples", level=logging.INFO))
    sample.my_method()
    await sample.a_worker_operation()
    await sample.my_network_call()


if __name__ == "__main__":
    asyncio.run(main())
