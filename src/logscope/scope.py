"""
logscope - Scope Factory

A Scope is an isolated observation context. Methods marked under one scope
are wrapped and hooked independently of every other scope, so several
scopes can observe the same method of the same class.

Usage:
    calls = create_scope("Worker", SIMPLE_LOG)

    @calls.wrap_class()
    class Worker:
        def __init__(self, logger):
            self.logger = logger

        @calls.mark_sync({})
        def run(self, x):
            return x
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from .errors import ScopeConfigurationError
from .installer import install
from .models import LogOptionsProtocol, MethodObservation, ScopeId
from .registry import ScopeRegistry, get_registry, mark_function

logger = logging.getLogger(__name__)

L = TypeVar("L")
M = TypeVar("M")
F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)


class Scope(Generic[L, M]):
    """
    Observation scope bound to a unique ScopeId.

    Exposes the three decoration capabilities: ``mark_sync``, ``mark_async``
    and ``wrap_class``.
    """

    def __init__(
        self,
        label: str,
        options: LogOptionsProtocol[L, M] | None = None,
        registry: ScopeRegistry | None = None,
    ):
        self.label = label
        self.options = options
        self.scope_id = ScopeId(label)
        self._registry = registry or get_registry()

    def __repr__(self) -> str:
        return f"Scope({self.label!r}, id={self.scope_id.value})"

    def mark_sync(self, metadata: M) -> Callable[[F], F]:
        """Method decorator: observe a synchronous method under this scope."""
        return self._marker(MethodObservation(metadata=metadata, is_async=False))

    def mark_async(self, metadata: M) -> Callable[[F], F]:
        """Method decorator: observe an awaitable-returning method under this scope."""
        return self._marker(MethodObservation(metadata=metadata, is_async=True))

    def _marker(self, observation: MethodObservation[M]) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return mark_function(func, self.scope_id, observation)

        return decorator

    def observe(self, cls: type, method_name: str, metadata: M, *, is_async: bool = False) -> None:
        """
        Mark ``cls.method_name`` without decorator syntax.

        Must be called before the class is wrapped by this scope.
        """
        self._registry.register(cls, self.scope_id, method_name, MethodObservation(metadata, is_async))

    def wrap_class(
        self,
        class_name: str | None = None,
        options: LogOptionsProtocol[L, M] | None = None,
        *,
        logger_attribute: str | None = None,
    ) -> Callable[[C], C]:
        """
        Class decorator installing this scope's instrumentation.

        Args:
            class_name: Label used in method descriptors (default: the scope label)
            options: Hook pair (default: the options the scope was created with)
            logger_attribute: Instance attribute handed to hooks
                (default: LOGSCOPE_LOGGER_ATTRIBUTE from config)

        Raises:
            ScopeConfigurationError: If neither this call nor the scope has options
        """
        hooks = options or self.options
        if hooks is None:
            raise ScopeConfigurationError(self.label)

        def decorator(cls: C) -> C:
            return install(
                cls,
                self.scope_id,
                class_name or self.label,
                hooks,
                logger_attribute=logger_attribute,
                registry=self._registry,
            )

        return decorator

    def observed_methods(self, cls: type) -> Mapping[str, MethodObservation[M]]:
        """Methods of ``cls`` registered under this scope (after it was wrapped)."""
        return self._registry.observations(cls, self.scope_id)


def create_scope(
    label: str,
    options: LogOptionsProtocol[L, M] | None = None,
    registry: ScopeRegistry | None = None,
) -> Scope[L, M]:
    """
    Create an isolated observation scope with a fresh ScopeId.

    Args:
        label: Human-readable name (for diagnostics only; labels may repeat)
        options: Default hook pair for ``wrap_class``
        registry: Registry to record into (default: process-wide registry)

    Returns:
        New Scope
    """
    scope: Scope[L, M] = Scope(label, options, registry)
    logger.debug(f"Created scope {label}", extra={"scope": label, "scope_id": scope.scope_id.value})
    return scope


_default_scope: Scope[Any, Any] | None = None


def get_default_scope() -> Scope[Any, Any]:
    """Process-wide scope used by the module-level decorators."""
    global _default_scope

    if _default_scope is None:
        _default_scope = Scope("default")

    return _default_scope


def log_sync_method(metadata: Any) -> Callable[[F], F]:
    """Observe a synchronous method in the default scope. Use with ``log_class``."""
    return get_default_scope().mark_sync(metadata)


def log_async_method(metadata: Any) -> Callable[[F], F]:
    """Observe an awaitable-returning method in the default scope. Use with ``log_class``."""
    return get_default_scope().mark_async(metadata)


def log_class(
    class_name: str | None,
    options: LogOptionsProtocol[Any, Any],
    *,
    logger_attribute: str | None = None,
) -> Callable[[C], C]:
    """
    Class decorator instrumenting methods marked with ``log_sync_method`` or
    ``log_async_method``.

    Args:
        class_name: Label used in method descriptors (``None``: ``cls.__name__``)
        options: Hook pair
        logger_attribute: Instance attribute handed to hooks
    """
    scope = get_default_scope()

    def decorator(cls: C) -> C:
        return scope.wrap_class(class_name or cls.__name__, options, logger_attribute=logger_attribute)(cls)

    return decorator
