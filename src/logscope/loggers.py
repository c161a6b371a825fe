"""
logscope - Logger Adapters

Loggers handed to hooks through an instance's ``logger`` attribute. The core
never inspects them; these adapters are what the bundled presets expect.
"""

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class Logger(Protocol):
    """Minimal logger consumed by the presets."""

    def log(self, message: str) -> None: ...


class ConsoleLogger:
    """Print each message on its own line to stdout."""

    def log(self, message: str) -> None:
        print(message)


class StdlibLogger:
    """Forward messages to a ``logging.Logger`` at a fixed level."""

    def __init__(self, logger: logging.Logger | str, level: int = logging.INFO):
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger
        self.level = level

    def log(self, message: str) -> None:
        self.logger.log(self.level, message)
