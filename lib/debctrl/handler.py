""" Pluggable reporting of parser diagnostics

The parser never writes to the console itself.  Instead it reports
warnings and critical errors to an :class:`ErrorHandler`, which forwards them
to two replaceable callables.  Each callable receives the
:class:`~debctrl.model.ParserContext` of the line being parsed (or None when
no line is involved, e.g. if the file cannot be opened) and the formatted
message.

The default callables write to standard error::

    warning: Multiple blank lines will be transformed into a single blank line at debian/control line 7
    critical error: Can't open file 'debian/control': No such file or directory
"""

import sys

from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from debctrl.model import ParserContext

    DiagnosticCallback = Callable[[Optional[ParserContext], str], None]


def _emit(prefix, context, message):
    # type: (str, Optional[ParserContext], str) -> None
    text = prefix + message
    if context is not None:
        text += " at {path} line {line}".format(path=context.path, line=context.line)
    # Look up stderr on each call; it may have been replaced since import.
    sys.stderr.write(text + "\n")


def emit_warning(context, message):
    # type: (Optional[ParserContext], str) -> None
    """Default warning handler"""
    _emit("warning: ", context, message)


def emit_critical(context, message):
    # type: (Optional[ParserContext], str) -> None
    """Default critical error handler"""
    _emit("critical error: ", context, message)


class ErrorHandler:
    """Dispatches parser diagnostics to a pair of replaceable callables

    Warnings are informational and never stop the parser.  Critical errors
    are reported here *and* raised by the parser as a
    :class:`~debctrl.errors.ControlError`; the handler itself does not
    influence control flow.

    >>> messages = []
    >>> handler = ErrorHandler(warn=lambda ctx, msg: messages.append(msg))
    >>> handler.warn(None, "field %s seen %d times", "Source", 2)
    >>> messages
    ['field Source seen 2 times']
    """

    __slots__ = ('_warn', '_critical')

    def __init__(self,
                 warn=None,  # type: Optional[DiagnosticCallback]
                 critical=None,  # type: Optional[DiagnosticCallback]
                 ):
        # type: (...) -> None
        self._warn = emit_warning  # type: DiagnosticCallback
        self._critical = emit_critical  # type: DiagnosticCallback
        self.set_warn_handler(warn)
        self.set_critical_handler(critical)

    def set_warn_handler(self, warn):
        # type: (Optional[DiagnosticCallback]) -> None
        """Replace the warning callable; None restores the default"""
        self._warn = warn if warn is not None else emit_warning

    def set_critical_handler(self, critical):
        # type: (Optional[DiagnosticCallback]) -> None
        """Replace the critical error callable; None restores the default"""
        self._critical = critical if critical is not None else emit_critical

    def reset(self):
        # type: () -> None
        self.set_warn_handler(None)
        self.set_critical_handler(None)

    @property
    def warn_handler(self):
        # type: () -> DiagnosticCallback
        return self._warn

    @property
    def critical_handler(self):
        # type: () -> DiagnosticCallback
        return self._critical

    def warn(self, context, message, *args):
        # type: (Optional[ParserContext], str, *Any) -> None
        if args:
            message = message % args
        self._warn(context, message)

    def critical(self, context, message, *args):
        # type: (Optional[ParserContext], str, *Any) -> None
        if args:
            message = message % args
        self._critical(context, message)
