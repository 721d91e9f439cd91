"""
Tests for error boundaries
"""

import logging

import pytest

from zenwidget.utils.errors import StorageError, ValidationError, ZenWidgetError, error_boundary, safe_execute


def explode(*args, **kwargs):
    raise RuntimeError("boom")


class TestErrorBoundary:
    def test_passes_result_through(self):
        wrapped = error_boundary()(lambda x: x * 2)
        assert wrapped(4) == 8

    def test_returns_none_without_fallback(self, caplog):
        assert error_boundary(context="loading things")(explode)() is None
        assert "Failed loading things: boom" in caplog.text

    def test_fallback_receives_arguments(self):
        wrapped = error_boundary(fallback=lambda a, b=0: a + b)(explode)
        assert wrapped(1, b=2) == 3

    def test_reraise(self):
        with pytest.raises(RuntimeError):
            error_boundary(reraise=True)(explode)()

    def test_log_level(self, caplog):
        caplog.set_level(logging.DEBUG)
        error_boundary(log_level=logging.WARNING)(explode)()
        assert caplog.records[-1].levelno == logging.WARNING


class TestSafeExecute:
    def test_success(self):
        assert safe_execute(lambda: 42) == 42

    def test_default_and_callback(self):
        seen = []
        assert safe_execute(explode, on_error=seen.append, default="fallback") == "fallback"
        assert isinstance(seen[0], RuntimeError)


def test_exception_hierarchy():
    assert issubclass(ValidationError, ZenWidgetError)
    assert issubclass(ValidationError, ValueError)
    assert issubclass(StorageError, ZenWidgetError)
