"""
logscope - Scope Registry

Records which methods of a class are observed, per scope.

Entries are keyed ``(class, ScopeId, method_name) -> MethodObservation``.
Method decorators run before their class exists, so marking stores the
observation on the function itself; the registry harvests those markers
from the class's own attributes the first time the class is wrapped.
"""

import logging
import weakref
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .models import MethodObservation, ScopeId

logger = logging.getLogger(__name__)

OBSERVATIONS_ATTR = "__logscope_observations__"


def mark_function(func: Any, scope_id: ScopeId, observation: MethodObservation[Any]) -> Any:
    """
    Attach an observation for ``scope_id`` to a function.

    Last write wins for the same scope; other scopes' markers are untouched.
    Objects that cannot carry attributes are returned unmarked.

    Returns:
        ``func`` unchanged
    """
    namespace = getattr(func, "__dict__", None)
    if namespace is None:
        logger.debug(
            f"Cannot mark {func!r} for scope {scope_id.label}: object has no attribute dictionary",
            extra={"scope": scope_id.label},
        )
        return func

    # copied, since functools.wraps shares the dict between a wrapper and its original
    markers = dict(namespace.get(OBSERVATIONS_ATTR) or {})
    markers[scope_id] = observation
    namespace[OBSERVATIONS_ATTR] = markers
    return func


def function_markers(func: Any) -> Mapping[ScopeId, MethodObservation[Any]]:
    """Observations attached to ``func`` by ``mark_function``, keyed by scope."""
    namespace = getattr(func, "__dict__", None)
    if not namespace:
        return {}
    return namespace.get(OBSERVATIONS_ATTR) or {}


class ScopeRegistry:
    """
    Per-class, per-scope method observation table.

    Classes are held weakly so that registering a class does not keep it alive.
    """

    def __init__(self) -> None:
        self._entries: weakref.WeakKeyDictionary[type, dict[ScopeId, dict[str, MethodObservation[Any]]]] = (
            weakref.WeakKeyDictionary()
        )
        self._harvested: weakref.WeakSet[type] = weakref.WeakSet()
        self._installed: weakref.WeakKeyDictionary[type, set[ScopeId]] = weakref.WeakKeyDictionary()

    def register(
        self,
        cls: type,
        scope_id: ScopeId,
        method_name: str,
        observation: MethodObservation[Any],
    ) -> None:
        """Record an observation; replaces any previous one for the same scope and name."""
        scopes = self._entries.setdefault(cls, {})
        scopes.setdefault(scope_id, {})[method_name] = observation

    def harvest(self, cls: type) -> None:
        """
        Move function markers declared directly on ``cls`` into the registry.

        Runs once per class. Later wraps of the same class see the installed
        wrappers, which carry the same markers, so a second pass would add
        nothing.
        """
        if cls in self._harvested:
            return
        self._harvested.add(cls)

        for method_name, member in vars(cls).items():
            for scope_id, observation in function_markers(member).items():
                self.register(cls, scope_id, method_name, observation)

    def observations(self, cls: type, scope_id: ScopeId) -> Mapping[str, MethodObservation[Any]]:
        """Read-only view of the methods observed on ``cls`` under ``scope_id``."""
        entries = self._entries.get(cls, {}).get(scope_id, {})
        return MappingProxyType(dict(entries))

    def is_installed(self, cls: type, scope_id: ScopeId) -> bool:
        return scope_id in self._installed.get(cls, ())

    def mark_installed(self, cls: type, scope_id: ScopeId) -> None:
        self._installed.setdefault(cls, set()).add(scope_id)


_registry: ScopeRegistry | None = None


def get_registry() -> ScopeRegistry:
    """
    Get the process-wide registry.

    Returns:
        Global ScopeRegistry instance
    """
    global _registry

    if _registry is None:
        _registry = ScopeRegistry()

    return _registry
