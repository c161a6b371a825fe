"""
Tests for Scopes

Covers scope isolation, stacked instrumentation order across scopes,
the module-level default-scope decorators, and scope configuration errors.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from logscope import (
    INVOCATION_LOG,
    SIMPLE_LOG,
    MethodObservation,
    Scope,
    ScopeConfigurationError,
    ScopeRegistry,
    create_scope,
    log_async_method,
    log_class,
    log_sync_method,
)


class TestCreateScope:
    """Test scope creation."""

    def test_each_scope_gets_a_fresh_id(self, registry: ScopeRegistry) -> None:
        first = create_scope("same", SIMPLE_LOG, registry=registry)
        second = create_scope("same", SIMPLE_LOG, registry=registry)

        assert isinstance(first, Scope)
        assert first.scope_id is not second.scope_id
        assert first.scope_id.value < second.scope_id.value

    def test_repr_includes_label(self, registry: ScopeRegistry) -> None:
        scope = create_scope("calls", registry=registry)
        assert "calls" in repr(scope)

    def test_wrap_class_without_options_raises(self, registry: ScopeRegistry) -> None:
        scope = create_scope("bare", registry=registry)

        with pytest.raises(ScopeConfigurationError) as exc_info:
            scope.wrap_class()

        assert exc_info.value.details["scope"] == "bare"
        assert exc_info.value.to_dict()["error"] == "ScopeConfigurationError"

    def test_wrap_class_options_override_scope_options(self, registry: ScopeRegistry, logger: MagicMock) -> None:
        scope = create_scope("calls", SIMPLE_LOG, registry=registry)

        @scope.wrap_class(options=INVOCATION_LOG)
        class Target:
            def __init__(self, logger: Any):
                self.logger = logger

            @scope.mark_sync({})
            def run(self) -> None: ...

        Target(logger).run()

        logger.log.assert_called_once_with("[calls.run] was invoked")

    def test_class_label_defaults_to_scope_label(self, registry: ScopeRegistry, logger: MagicMock) -> None:
        scope = create_scope("Worker", SIMPLE_LOG, registry=registry)

        @scope.wrap_class()
        class _WorkerImpl:
            def __init__(self, logger: Any):
                self.logger = logger

            @scope.mark_sync({})
            def run(self) -> None: ...

        _WorkerImpl(logger).run()

        assert logger.log.call_args_list[0].args[0] == "[Worker.run] was invoked"

    def test_explicit_class_label_wins(self, registry: ScopeRegistry, logger: MagicMock) -> None:
        scope = create_scope("Worker", SIMPLE_LOG, registry=registry)

        @scope.wrap_class("Renamed")
        class Target:
            def __init__(self, logger: Any):
                self.logger = logger

            @scope.mark_sync({})
            def run(self) -> None: ...

        Target(logger).run()

        assert logger.log.call_args_list[0].args[0] == "[Renamed.run] was invoked"

    def test_observed_methods_view(self, registry: ScopeRegistry) -> None:
        scope = create_scope("calls", SIMPLE_LOG, registry=registry)

        @scope.wrap_class()
        class Target:
            @scope.mark_sync({"a": 1})
            def run(self) -> None: ...

            @scope.mark_async({"b": 2})
            async def fetch(self) -> None: ...

        assert dict(scope.observed_methods(Target)) == {
            "run": MethodObservation({"a": 1}, False),
            "fetch": MethodObservation({"b": 2}, True),
        }

    def test_remarking_last_write_wins(self, registry: ScopeRegistry, recorder: Any) -> None:
        scope = create_scope("calls", recorder.options("calls"), registry=registry)

        @scope.wrap_class()
        class Target:
            @scope.mark_sync("second")
            @scope.mark_sync("first")
            def run(self) -> None: ...

        Target().run()

        assert [descriptor.metadata for _, _, descriptor, _ in recorder.calls] == ["second", "second"]


class TestScopeIsolation:
    """Independent scopes on the same class."""

    def test_unwrapped_scope_markers_have_no_effect(self, registry: ScopeRegistry, recorder: Any) -> None:
        wrapped = create_scope("wrapped", recorder.options("wrapped"), registry=registry)
        unwrapped = create_scope("unwrapped", recorder.options("unwrapped"), registry=registry)

        @wrapped.wrap_class()
        class Target:
            @unwrapped.mark_sync({})
            def only_unwrapped(self) -> int:
                return 1

            @wrapped.mark_sync({})
            def only_wrapped(self) -> int:
                return 2

        target = Target()
        assert target.only_unwrapped() == 1
        assert recorder.calls == []

        assert target.only_wrapped() == 2
        assert recorder.events == [("start", "wrapped"), ("end", "wrapped")]

    def test_metadata_is_invisible_across_scopes(self, registry: ScopeRegistry, recorder: Any) -> None:
        inner = create_scope("inner", recorder.options("inner"), registry=registry)
        outer = create_scope("outer", recorder.options("outer"), registry=registry)

        @outer.wrap_class()
        @inner.wrap_class()
        class Target:
            @outer.mark_sync({"owner": "outer"})
            @inner.mark_sync({"owner": "inner"})
            def run(self) -> int:
                return 1

        Target().run()

        for _, label, descriptor, _ in recorder.calls:
            assert descriptor.metadata == {"owner": label}

    def test_same_label_scopes_are_independent(self, registry: ScopeRegistry, recorder: Any) -> None:
        first = create_scope("dup", recorder.options("first"), registry=registry)
        second = create_scope("dup", recorder.options("second"), registry=registry)

        @first.wrap_class()
        class Target:
            @second.mark_sync({})
            def run(self) -> None: ...

        Target().run()

        assert recorder.calls == []


class TestStackedScopes:
    """Several scopes instrumenting the same method."""

    def test_sync_hooks_nest_in_application_order(self, registry: ScopeRegistry, recorder: Any) -> None:
        inner = create_scope("inner", recorder.options("inner"), registry=registry)
        outer = create_scope("outer", recorder.options("outer"), registry=registry)

        @outer.wrap_class()
        @inner.wrap_class()
        class Target:
            @outer.mark_sync({})
            @inner.mark_sync({})
            def run(self, x: int) -> int:
                return x * 2

        assert Target().run(4) == 8
        assert recorder.events == [
            ("start", "outer"),
            ("start", "inner"),
            ("end", "inner"),
            ("end", "outer"),
        ]

    async def test_async_hooks_nest_in_application_order(self, registry: ScopeRegistry, recorder: Any) -> None:
        inner = create_scope("inner", recorder.options("inner"), registry=registry)
        outer = create_scope("outer", recorder.options("outer"), registry=registry)

        @outer.wrap_class()
        @inner.wrap_class()
        class Target:
            @inner.mark_async({})
            @outer.mark_async({})
            async def fetch(self, x: int) -> int:
                return x + 1

        assert await Target().fetch(1) == 2
        assert recorder.events == [
            ("start", "outer"),
            ("start", "inner"),
            ("end", "inner"),
            ("end", "outer"),
        ]

    def test_three_scopes_stack(self, registry: ScopeRegistry, recorder: Any) -> None:
        scopes = [create_scope(name, recorder.options(name), registry=registry) for name in ("a", "b", "c")]
        a, b, c = scopes

        @c.wrap_class()
        @b.wrap_class()
        @a.wrap_class()
        class Target:
            @a.mark_sync({})
            @b.mark_sync({})
            @c.mark_sync({})
            def run(self) -> None: ...

        Target().run()

        assert recorder.events == [
            ("start", "c"),
            ("start", "b"),
            ("start", "a"),
            ("end", "a"),
            ("end", "b"),
            ("end", "c"),
        ]

    def test_failure_skips_every_end_hook(self, registry: ScopeRegistry, recorder: Any) -> None:
        inner = create_scope("inner", recorder.options("inner"), registry=registry)
        outer = create_scope("outer", recorder.options("outer"), registry=registry)

        @outer.wrap_class()
        @inner.wrap_class()
        class Target:
            @outer.mark_sync({})
            @inner.mark_sync({})
            def run(self) -> None:
                raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            Target().run()

        assert recorder.events == [("start", "outer"), ("start", "inner")]


class TestDefaultScope:
    """Module-level decorators on the default scope."""

    def test_log_class_with_sync_method(self, logger: MagicMock) -> None:
        @log_class("Legacy", SIMPLE_LOG)
        class Legacy:
            def __init__(self, logger: Any):
                self.logger = logger

            @log_sync_method({})
            def run(self) -> str:
                return "ok"

        assert Legacy(logger).run() == "ok"
        assert [call.args[0] for call in logger.log.call_args_list] == [
            "[Legacy.run] was invoked",
            "[Legacy.run] completed in 0ms",
        ]

    async def test_log_class_with_async_method(self, logger: MagicMock) -> None:
        @log_class(None, SIMPLE_LOG)
        class Fetcher:
            def __init__(self, logger: Any):
                self.logger = logger

            @log_async_method({})
            async def fetch(self) -> int:
                return 42

        assert await Fetcher(logger).fetch() == 42
        assert logger.log.call_args_list[0].args[0] == "[Fetcher.fetch] was invoked"
