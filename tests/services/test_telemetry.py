"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tokenctl.config.settings import TokSettings
from tokenctl.services.result import ServiceError, ServiceResult
from tokenctl.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_with_children(self) -> None:
        root = Span(name="root")
        child = Span(name="child")
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert [c["name"] for c in d["children"]] == ["child"]

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("tokens", 42)
        span.end()
        assert span.to_dict()["annotations"] == {"tokens": 42}


# ── trace_span tests ─────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b") as inner:
                    assert inner is not None
                    inner.annotate("key", "value")
            assert root.children[0].name == "a"
            assert root.children[0].end_time is not None
            assert root.children[0].children[0].annotations == {"key": "value"}
        finally:
            _current_span.reset(token)


# ── @traced decorator tests ──────────────────────────────────────────


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            with trace_span("stage_a"):
                pass
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("my_func")
        assert telemetry["duration_ms"] >= 0
        assert [c["name"] for c in telemetry["children"]] == ["stage_a"]

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"

    def test_exception_propagates_and_resets_span(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            msg = "boom"
            raise ValueError(msg)

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            my_func()
        assert _current_span.get() is None

    def test_error_result_gets_telemetry(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(
                ok=False,
                op="test",
                error=ServiceError(code="FAIL", message="oops"),
            )

        enable_telemetry()
        result = my_func()
        assert not result.ok
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"] == {"ok": False}


# ── Spans recorded by ResolveService ────────────────────────────────


class TestTraceSpanInServices:
    def test_resolve_file_has_child_spans(
        self, settings: TokSettings, write_tokens: Callable[..., Path], button_tree: dict
    ) -> None:
        from tokenctl.services.resolve import ResolveService

        path = write_tokens(button_tree)
        enable_telemetry()
        result = ResolveService(settings).resolve_file(path)
        assert result.ok
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert "ResolveService.resolve_file" in telemetry["name"]
        children = telemetry["children"]
        assert [c["name"] for c in children] == ["load", "resolve"]
        assert children[0]["annotations"] == {"entries": 2}
        assert children[1]["annotations"] == {"tokens": 2}

    def test_resolve_tree_has_no_load_span(
        self, settings: TokSettings, button_tree: dict
    ) -> None:
        from tokenctl.services.resolve import ResolveService

        enable_telemetry()
        result = ResolveService(settings).resolve_tree(button_tree)
        assert result.meta is not None
        assert [c["name"] for c in result.meta["telemetry"]["children"]] == ["resolve"]
