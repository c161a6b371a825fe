"""
logscope - Data Model

Value types shared by the registry, the installer and the track routines,
plus the hook protocol that policy collaborators implement.
"""

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
L = TypeVar("L")
M = TypeVar("M")

L_contra = TypeVar("L_contra", contravariant=True)
M_contra = TypeVar("M_contra", contravariant=True)

_scope_counter = itertools.count(1)


class ScopeId:
    """
    Opaque, process-unique scope token.

    Compared by identity. Values come from a process-wide counter and are
    never reused, so two scopes never share a token even if they share a label.
    """

    __slots__ = ("value", "label")

    def __init__(self, label: str):
        self.value = next(_scope_counter)
        self.label = label

    def __repr__(self) -> str:
        return f"ScopeId({self.value}, {self.label!r})"


@dataclass(frozen=True, slots=True)
class MethodObservation(Generic[M]):
    """Per-method, per-scope record of caller metadata and sync/async kind."""

    metadata: M
    is_async: bool


@dataclass(frozen=True, slots=True)
class MethodDescriptor(Generic[M]):
    """Identity of an observed method as seen by hooks."""

    class_name: str
    method_name: str
    metadata: M
    is_async: bool

    @classmethod
    def from_observation(
        cls, class_name: str, method_name: str, observation: MethodObservation[M]
    ) -> "MethodDescriptor[M]":
        return cls(
            class_name=class_name,
            method_name=method_name,
            metadata=observation.metadata,
            is_async=observation.is_async,
        )

    @property
    def qualified_name(self) -> str:
        """``ClassName.method_name``"""
        return f"{self.class_name}.{self.method_name}"


@dataclass(frozen=True, slots=True)
class ExecutionTimeResult(Generic[T]):
    """
    Outcome and timing of one successful call, passed to the end hook.

    Attributes:
        value: The method's return value, unchanged
        start: Wall-clock marker taken just before the method ran
        end: Wall-clock marker taken just after it completed (never before start)
        execution_time_ms: Floored monotonic duration in milliseconds (>= 0)
    """

    value: T
    start: datetime
    end: datetime
    execution_time_ms: int


@runtime_checkable
class LogOptionsProtocol(Protocol[L_contra, M_contra]):
    """Hook pair invoked around an observed method."""

    def on_method_start(self, logger: L_contra, method: MethodDescriptor[M_contra]) -> None: ...

    def on_method_end(
        self,
        logger: L_contra,
        method: MethodDescriptor[M_contra],
        execution_time_result: ExecutionTimeResult[Any],
    ) -> None: ...


def _noop_start(logger: Any, method: MethodDescriptor[Any]) -> None:
    return None


def _noop_end(logger: Any, method: MethodDescriptor[Any], execution_time_result: ExecutionTimeResult[Any]) -> None:
    return None


@dataclass(frozen=True)
class LogOptions(Generic[L, M]):
    """
    Hook pair built from two callables.

    Either hook may be omitted; the missing one does nothing.

    Example:
        >>> options = LogOptions(
        ...     on_method_start=lambda logger, method: logger.log(f"[{method.qualified_name}] was invoked"),
        ... )
    """

    on_method_start: Callable[[L, MethodDescriptor[M]], None] = field(default=_noop_start)
    on_method_end: Callable[[L, MethodDescriptor[M], ExecutionTimeResult[Any]], None] = field(default=_noop_end)
