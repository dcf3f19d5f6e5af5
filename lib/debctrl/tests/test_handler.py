"""Tests for diagnostic reporting"""

import pytest

from debctrl.errors import (
    ControlError, ControlFileError, ControlMemoryError, ControlParameterError,
    ControlSyntaxError, Status,
)
from debctrl.handler import ErrorHandler, emit_critical, emit_warning
from debctrl.model import ParserContext

from typing import Any


class TestDefaultHandlers:

    def test_warning_without_context(self, capsys):
        # type: (Any) -> None
        emit_warning(None, "something odd")
        assert capsys.readouterr().err == "warning: something odd\n"

    def test_warning_with_context(self, capsys):
        # type: (Any) -> None
        emit_warning(ParserContext('debian/control', 12), "something odd")
        assert capsys.readouterr().err == \
            "warning: something odd at debian/control line 12\n"

    def test_critical_with_context(self, capsys):
        # type: (Any) -> None
        emit_critical(ParserContext('debian/control', 3), "broken")
        captured = capsys.readouterr()
        assert captured.err == "critical error: broken at debian/control line 3\n"
        assert captured.out == ""


class TestErrorHandler:

    def test_defaults(self, capsys):
        # type: (Any) -> None
        handler = ErrorHandler()
        assert handler.warn_handler is emit_warning
        assert handler.critical_handler is emit_critical
        handler.warn(None, "a %s", "warning")
        handler.critical(None, "a critical error")
        assert capsys.readouterr().err == "warning: a warning\ncritical error: a critical error\n"

    def test_replace_and_restore(self, capsys):
        # type: (Any) -> None
        seen = []
        handler = ErrorHandler()
        handler.set_warn_handler(lambda ctx, msg: seen.append(('warn', ctx, msg)))
        handler.set_critical_handler(lambda ctx, msg: seen.append(('crit', ctx, msg)))
        context = ParserContext('control', 1)
        handler.warn(context, "w")
        handler.critical(None, "c %d", 42)
        assert seen == [('warn', context, 'w'), ('crit', None, 'c 42')]
        assert capsys.readouterr().err == ""

        handler.set_warn_handler(None)
        handler.set_critical_handler(None)
        assert handler.warn_handler is emit_warning
        assert handler.critical_handler is emit_critical

    def test_constructor_arguments(self):
        # type: () -> None
        seen = []
        handler = ErrorHandler(critical=lambda ctx, msg: seen.append(msg))
        assert handler.warn_handler is emit_warning
        handler.critical(None, "boom")
        assert seen == ["boom"]

    def test_reset(self):
        # type: () -> None
        handler = ErrorHandler(warn=lambda ctx, msg: None, critical=lambda ctx, msg: None)
        handler.reset()
        assert handler.warn_handler is emit_warning
        assert handler.critical_handler is emit_critical

    def test_message_without_args_is_not_formatted(self):
        # type: () -> None
        seen = []
        handler = ErrorHandler(warn=lambda ctx, msg: seen.append(msg))
        handler.warn(None, "100% literal")
        assert seen == ["100% literal"]


class TestErrors:

    @pytest.mark.parametrize('exc_class,status', [
        (ControlParameterError, Status.PARAMETER_ERROR),
        (ControlMemoryError, Status.MEMORY_ERROR),
        (ControlFileError, Status.FILE_ERROR),
        (ControlSyntaxError, Status.SYNTAX_ERROR),
    ])
    def test_status(self, exc_class, status):
        # type: (Any, Status) -> None
        exc = exc_class("message")
        assert isinstance(exc, ControlError)
        assert exc.status is status
        assert exc.context is None
        assert str(exc) == "message"

    def test_str_with_context(self):
        # type: () -> None
        exc = ControlSyntaxError("bad line", ParserContext('debian/control', 7))
        assert str(exc) == "bad line at debian/control line 7"
        assert exc.message == "bad line"

    def test_parameter_error_is_value_error(self):
        # type: () -> None
        with pytest.raises(ValueError):
            raise ControlParameterError("wrong")
