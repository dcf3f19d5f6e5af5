""" Parser for RFC822-like Debian control files

The package reads files such as ``debian/control`` into a document model of
sections, fields ("blocks") and line chunks, reporting problems through a
replaceable error handler.  See :mod:`debctrl.parser` for details.
"""

# The "from X import Y as Y" form marks the names as re-exported for mypy.
# pylint: disable=useless-import-alias
from debctrl.parser import (
    parse_control_file as parse_control_file,
    ControlParser as ControlParser,
    ParserState as ParserState,
)
from debctrl.model import (
    ParserContext as ParserContext,
    ChunkType as ChunkType,
    ControlChunk as ControlChunk,
    ControlBlock as ControlBlock,
    ControlSection as ControlSection,
)
from debctrl.handler import (
    ErrorHandler as ErrorHandler,
)
from debctrl.errors import (
    Status as Status,
    ControlError as ControlError,
    ControlParameterError as ControlParameterError,
    ControlMemoryError as ControlMemoryError,
    ControlFileError as ControlFileError,
    ControlSyntaxError as ControlSyntaxError,
)
from debctrl._util import print_document as print_document

__all__ = [
    'parse_control_file',
    'ControlParser',
    'ParserState',
    'ParserContext',
    'ChunkType',
    'ControlChunk',
    'ControlBlock',
    'ControlSection',
    'ErrorHandler',
    'Status',
    'ControlError',
    'ControlParameterError',
    'ControlMemoryError',
    'ControlFileError',
    'ControlSyntaxError',
    'print_document',
]
