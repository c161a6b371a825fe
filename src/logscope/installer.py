"""
logscope - Instrumentation Installer

Replaces the observed methods of a class with instrumented wrappers.

Installation happens once per (class, scope), when the class decorator is
applied. Wrappers are set on the class itself, so every instance shares
them. A method already wrapped by an earlier scope is wrapped again, which
gives stacked instrumentation::

    @outer.wrap_class()     # applied last: start fires first, end fires last
    @inner.wrap_class()     # applied first
    class Worker: ...

Only methods declared directly on the class are instrumented; inherited
methods are skipped.
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .config import get_config_or_default
from .errors import InstrumentationError
from .models import LogOptionsProtocol, MethodDescriptor, MethodObservation, ScopeId
from .registry import ScopeRegistry, get_registry
from .tracking import track_async, track_sync

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)


def _sync_wrapper(
    original: Callable[..., Any],
    options: LogOptionsProtocol[Any, Any],
    descriptor: MethodDescriptor[Any],
    logger_attribute: str,
) -> Callable[..., Any]:
    @functools.wraps(original)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        return track_sync(
            lambda: original(self, *args, **kwargs),
            getattr(self, logger_attribute, None),
            options,
            descriptor,
        )

    return wrapper


def _async_wrapper(
    original: Callable[..., Any],
    options: LogOptionsProtocol[Any, Any],
    descriptor: MethodDescriptor[Any],
    logger_attribute: str,
) -> Callable[..., Any]:
    @functools.wraps(original)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        # The original runs at call time; only its settlement is tracked.
        return track_async(
            original(self, *args, **kwargs),
            getattr(self, logger_attribute, None),
            options,
            descriptor,
        )

    if inspect.iscoroutinefunction(original):
        inspect.markcoroutinefunction(wrapper)

    return wrapper


def build_wrapper(
    original: Callable[..., Any],
    observation: MethodObservation[Any],
    options: LogOptionsProtocol[Any, Any],
    descriptor: MethodDescriptor[Any],
    logger_attribute: str = "logger",
) -> Callable[..., Any]:
    """
    Wrap one method implementation.

    Args:
        original: Current implementation (possibly another scope's wrapper)
        observation: Selects the sync or async wrapper
        options: Hook pair
        descriptor: Identity passed to the hooks
        logger_attribute: Instance attribute handed to the hooks as logger

    Returns:
        Instrumented function exposing ``original`` as ``__wrapped__``
    """
    factory = _async_wrapper if observation.is_async else _sync_wrapper
    return factory(original, options, descriptor, logger_attribute)


def install(
    cls: C,
    scope_id: ScopeId,
    class_name: str,
    options: LogOptionsProtocol[Any, Any],
    *,
    logger_attribute: str | None = None,
    registry: ScopeRegistry | None = None,
) -> C:
    """
    Instrument every method observed on ``cls`` under ``scope_id``.

    Args:
        cls: Class to instrument in place
        scope_id: Scope whose observations are installed
        class_name: Class label used in method descriptors
        options: Hook pair
        logger_attribute: Instance attribute passed to hooks
            (default: LOGSCOPE_LOGGER_ATTRIBUTE from config)
        registry: Registry to read (default: process-wide registry)

    Returns:
        ``cls`` itself

    Raises:
        InstrumentationError: If ``cls`` is not a class
    """
    if not inspect.isclass(cls):
        raise InstrumentationError(cls)

    config = get_config_or_default()
    if not config.enabled:
        logger.debug(
            f"Instrumentation disabled, leaving {class_name} untouched",
            extra={"class_name": class_name, "scope": scope_id.label},
        )
        return cls

    registry = registry or get_registry()
    logger_attribute = logger_attribute or config.logger_attribute

    if registry.is_installed(cls, scope_id):
        return cls

    registry.harvest(cls)

    installed: list[str] = []
    for method_name, observation in registry.observations(cls, scope_id).items():
        original = cls.__dict__.get(method_name)
        if original is None or not inspect.isfunction(original):
            logger.debug(
                f"Skipping {class_name}.{method_name}: no own function implementation",
                extra={"class_name": class_name, "method_name": method_name, "scope": scope_id.label},
            )
            continue

        descriptor = MethodDescriptor.from_observation(class_name, method_name, observation)
        setattr(cls, method_name, build_wrapper(original, observation, options, descriptor, logger_attribute))
        installed.append(method_name)

    registry.mark_installed(cls, scope_id)

    logger.debug(
        f"Instrumented {len(installed)} method(s) on {class_name} for scope {scope_id.label}",
        extra={"class_name": class_name, "scope": scope_id.label, "methods": installed},
    )
    return cls
