""" Error kinds reported by the control file parser

Every critical problem the parser detects is raised as a subclass of
:class:`ControlError`.  The exception carries the :class:`Status` describing
the kind of failure and (where known) the :class:`~debctrl.model.ParserContext`
of the offending line.
"""

import enum

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from debctrl.model import ParserContext


class Status(enum.Enum):
    """Outcome of a parser operation"""

    NO_ERROR = 'no error'
    PARAMETER_ERROR = 'parameter error'
    MEMORY_ERROR = 'memory error'
    FILE_ERROR = 'file error'
    SYNTAX_ERROR = 'syntax error'


class ControlError(Exception):
    """Base class for errors raised while reading a control file"""

    status = Status.NO_ERROR
    is_user_error = False

    def __init__(self, message, context=None):
        # type: (str, Optional[ParserContext]) -> None
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self):
        # type: () -> str
        if self.context is None:
            return self.message
        return "{msg} at {path} line {line}".format(msg=self.message,
                                                     path=self.context.path,
                                                     line=self.context.line)


class ControlParameterError(ControlError, ValueError):
    """Indicates that a parser method was called with invalid arguments or
    at the wrong time (e.g. reading twice into the same parser)"""

    status = Status.PARAMETER_ERROR


class ControlMemoryError(ControlError):
    """Indicates that memory ran out while building the document"""

    status = Status.MEMORY_ERROR


class ControlFileError(ControlError):
    """Indicates that the input file could not be opened or read"""

    status = Status.FILE_ERROR
    is_user_error = True


class ControlSyntaxError(ControlError):
    """Indicates that a line does not conform to the control file syntax"""

    status = Status.SYNTAX_ERROR
    is_user_error = True
