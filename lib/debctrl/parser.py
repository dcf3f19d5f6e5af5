""" Syntactic parser for Debian control files

This module reads RFC822-like Debian metadata files (``debian/control`` and
friends) into a tree of :class:`~debctrl.model.ControlSection`,
:class:`~debctrl.model.ControlBlock` and :class:`~debctrl.model.ControlChunk`
objects.  The parser is "dumb": it knows the syntax of the format but not
the meaning of any field.  Interpreting the fields is left to the caller.

A concrete example::

    >>> from debctrl import parse_control_file
    >>> lines = ['Source: foo\\n',
    ...          'Maintainer: A <a@example.com>\\n',
    ...          ' continuation line\\n',
    ...          ' .\\n',
    ...          'Section: libs\\n']
    >>> parser = parse_control_file(lines)
    >>> section = parser.head
    >>> [str(block.name) for block in section]
    ['Source', 'Maintainer', 'Section']
    >>> list(section.find('maintainer'))
    [ControlChunk(fixed, 'A <a@example.com>'), ControlChunk(merge, 'continuation line'), ControlChunk(empty)]

Diagnostics go to the handler passed to the parser::

    >>> handler = RecordingErrorHandler()
    >>> parser = parse_control_file(['Package: foo\\n', 'package: bar\\n'], handler=handler)
    >>> [w.message for w in handler.warnings]
    ['Duplicate field names are not permitted (package), contents will be merged together']
    >>> [chunk.text for chunk in parser.head.find('Package')]
    ['foo', 'bar']

Line syntax
-----------

Lines are classified by their first characters:

 * ``#``: a comment, which is skipped.
 * an empty line (after removing trailing whitespace): the end of the
   current section.  Repeated blank lines are collapsed into one (with a
   warning).
 * a space or tab: a continuation of the last field.  ``" ."`` is an empty
   line in the value, two leading whitespace characters mark preformatted
   (FIXED) text, one marks text that may be re-wrapped (MERGE).
 * anything else: a ``Field: value`` line.  A field that is already present
   in the section (case-insensitively) produces a warning and the new value
   is merged into the existing field.

Errors
------

Problems are reported to the parser's :class:`~debctrl.handler.ErrorHandler`.
Warnings do not stop the parser.  Critical problems are reported and then
raised as a :class:`~debctrl.errors.ControlError`; the partially built
document should be discarded afterwards.
"""

import enum
import logging
import os

from typing import IO, Iterable, Iterator, Optional, Union

from debctrl._util import LinkedList
from debctrl.errors import (
    ControlError, ControlParameterError, ControlMemoryError, ControlFileError,
    ControlSyntaxError,
)
from debctrl.handler import ErrorHandler
from debctrl.model import (
    ChunkType, ControlBlock, ControlChunk, ControlSection, ParserContext, _NO_CONTEXT,
)

logger = logging.getLogger(__name__)

# Stripped from the end of every line
_TRAILING_WHITESPACE = ' \t\r\n'
# Marks a continuation line
_CONTINUATION_PREFIX = ' \t'

StrOrBytes = Union[str, bytes]
PathLike = Union[str, 'os.PathLike[str]']


class ParserState(enum.Enum):
    """Where the parser is in reading a document"""

    BEFORE_DOCUMENT = 'before document'
    IN_SECTION = 'in section'
    AFTER_CRITICAL_ERROR = 'after critical error'


class ControlParser:
    """Holds a parsed control file and the state needed to read one

    A parser reads exactly one input (see :meth:`read_file` and
    :meth:`read_lines`).  Iterating over it yields the sections of the
    file in order.
    """

    __slots__ = ('_context', '_handler', '_sections', '_state')

    def __init__(self, handler=None):
        # type: (Optional[ErrorHandler]) -> None
        self._context = _NO_CONTEXT
        self._handler = handler if handler is not None else ErrorHandler()
        self._sections = LinkedList()  # type: LinkedList[ControlSection]
        self._state = ParserState.BEFORE_DOCUMENT

    @property
    def context(self):
        # type: () -> ParserContext
        """Path and number of the line most recently read"""
        return self._context

    @property
    def handler(self):
        # type: () -> ErrorHandler
        return self._handler

    @handler.setter
    def handler(self, handler):
        # type: (Optional[ErrorHandler]) -> None
        self._handler = handler if handler is not None else ErrorHandler()

    @property
    def state(self):
        # type: () -> ParserState
        return self._state

    @property
    def head(self):
        # type: () -> Optional[ControlSection]
        return self._sections.head

    @property
    def tail(self):
        # type: () -> Optional[ControlSection]
        return self._sections.tail

    def __iter__(self):
        # type: () -> Iterator[ControlSection]
        return iter(self._sections)

    def __len__(self):
        # type: () -> int
        return len(self._sections)

    def __bool__(self):
        # type: () -> bool
        return True

    def append(self, section):
        # type: (ControlSection) -> None
        self._sections.append(section)

    def clear(self):
        # type: () -> None
        """Discard the document and return the parser to its initial state

        The error handler is reset to the default handlers as well.
        """
        for section in self._sections:
            section.clear()
        self._sections.clear()
        self._context = _NO_CONTEXT
        self._handler.reset()
        self._state = ParserState.BEFORE_DOCUMENT

    def convert_to_text(self):
        # type: () -> str
        """Render the document (without comments) as control file text

        Sections are separated by a single blank line; sections without
        fields are skipped.
        """
        return "\n".join(s.convert_to_text() for s in self._sections if s.head is not None)

    def dump(self, fd):
        # type: (IO[bytes]) -> None
        fd.write(self.convert_to_text().encode('utf-8'))

    def read_file(self, path):
        # type: (PathLike) -> None
        """Read and parse a control file

        :param path: The file to read.  It is decoded as UTF-8.
        :raises ControlParameterError: if path is not a path, or the parser
          already holds a document
        :raises ControlFileError: if the file cannot be opened or read
        :raises ControlSyntaxError: if a line of the file is malformed
        """
        try:
            path = os.fspath(path)
        except TypeError as e:
            raise ControlParameterError("read_file expects a path, got {path!r}".format(
                path=path)) from e
        self._check_fresh()
        self._context = ParserContext(path, 0)
        try:
            fd = open(path, 'rb')
        except OSError as e:
            raise self._critical(ControlFileError, None, "Can't open file '%s': %s",
                                 path, e.strerror or str(e)) from e
        with fd:
            self._read(fd)

    def read_lines(self,
                   lines,  # type: Iterable[StrOrBytes]
                   path='<input>',  # type: str
                   ):
        # type: (...) -> None
        """Parse control file content from an iterable of lines

        :param lines: An iterable of str or bytes lines (an open file will
          do).  Bytes are decoded as UTF-8.
        :param path: The name used for the input in diagnostics.
        """
        self._check_fresh()
        self._context = ParserContext(path, 0)
        self._read(lines)

    def read_line(self, line):
        # type: (StrOrBytes) -> None
        """Parse a single physical line into the current document

        Only valid while a document is being read (i.e. after
        :meth:`read_file` or :meth:`read_lines` started successfully and no
        critical error has occurred).  A string holding more than one line
        raises ControlParameterError; within read_file or read_lines this
        also stops the parser.
        """
        if self._state is ParserState.BEFORE_DOCUMENT:
            raise ControlParameterError("No document has been started;"
                                        " use read_file or read_lines first")
        if self._state is ParserState.AFTER_CRITICAL_ERROR:
            raise ControlParameterError("The parser stopped after a critical error;"
                                        " the document must be discarded")

        self._context = self._context._replace(line=self._context.line + 1)

        if isinstance(line, bytes):
            try:
                line = line.decode('utf-8')
            except UnicodeDecodeError as e:
                raise self._critical(ControlFileError, self._context,
                                     "Line is not valid UTF-8 (%s)", e.reason) from e

        line = line.rstrip(_TRAILING_WHITESPACE)
        if '\n' in line:
            raise ControlParameterError("read_line expects a single line, got {line!r}".format(
                line=line))

        if line.startswith('#'):
            return

        if not line:
            self._end_section()
        elif line[0] in _CONTINUATION_PREFIX:
            self._parse_chunk(line)
        else:
            self._parse_block(line)

    def _check_fresh(self):
        # type: () -> None
        if self._sections or self._state is not ParserState.BEFORE_DOCUMENT:
            raise ControlParameterError("The parser already holds a document;"
                                        " use a new parser for each file")

    def _critical(self, exc_class, context, message, *args):
        # type: (type, Optional[ParserContext], str, *object) -> ControlError
        """Report a critical error, stop the parser and return the exception to raise"""
        if args:
            message = message % args
        self._state = ParserState.AFTER_CRITICAL_ERROR
        self._handler.critical(context, message)
        return exc_class(message, context)

    def _read(self, lines):
        # type: (Iterable[StrOrBytes]) -> None
        path = self._context.path
        logger.debug("Reading control data from %s", path)
        self._sections.append(ControlSection())
        self._state = ParserState.IN_SECTION
        try:
            for line in lines:
                self.read_line(line)
        except ControlParameterError as e:
            raise self._critical(ControlParameterError, self._context, e.message) from e
        except OSError as e:
            raise self._critical(ControlFileError, None, "Error reading file '%s': %s",
                                 path, e.strerror or str(e)) from e
        except MemoryError as e:
            raise self._critical(ControlMemoryError, self._context,
                                 "Out of memory while parsing") from e
        logger.debug("Read %d line(s) and %d section(s) from %s",
                     self._context.line, len(self._sections), path)

    def _end_section(self):
        # type: () -> None
        section = self._sections.tail
        assert section is not None
        if section.head is None:
            self._handler.warn(self._context,
                               "Multiple blank lines will be transformed into a single blank line")
            return
        logger.debug("Section %d of %s ends at line %d",
                     len(self._sections), self._context.path, self._context.line)
        self._sections.append(ControlSection())

    def _parse_chunk(self, line):
        # type: (str) -> None
        section = self._sections.tail
        assert section is not None
        block = section.tail
        if block is None:
            raise self._critical(ControlSyntaxError, self._context,
                                 "Attempted to continue a previous field, however,"
                                 " none have been opened yet")

        # The line has no trailing whitespace, so there is at least one more
        # character after the leading space.
        if line[1] == '.':
            if len(line) != 2:
                raise self._critical(ControlSyntaxError, self._context,
                                     "Continuation lines beginning with '.' are reserved"
                                     " for future use")
            chunk = ControlChunk(None, ChunkType.EMPTY, self._context)
        elif line[1] in _CONTINUATION_PREFIX:
            chunk = ControlChunk(line[2:], ChunkType.FIXED, self._context)
        else:
            chunk = ControlChunk(line[1:], ChunkType.MERGE, self._context)

        block.append(chunk)

    def _parse_block(self, line):
        # type: (str) -> None
        name, separator, value = line.partition(':')
        if not separator:
            raise self._critical(ControlSyntaxError, self._context,
                                 "Expected a field: value pair; if continuing a previous"
                                 " line, indent it with a space")
        value = value.lstrip(' \t')

        section = self._sections.tail
        assert section is not None
        block = section.find(name)
        if block is not None:
            self._handler.warn(self._context,
                               "Duplicate field names are not permitted (%s),"
                               " contents will be merged together", name)
        else:
            block = ControlBlock(name, self._context)
            section.append(block)

        if value:
            chunk = ControlChunk(value, ChunkType.FIXED, self._context)
        else:
            chunk = ControlChunk(None, ChunkType.EMPTY, self._context)
        block.append(chunk)


def parse_control_file(source,  # type: Union[PathLike, Iterable[StrOrBytes]]
                       *,
                       handler=None,  # type: Optional[ErrorHandler]
                       ):
    # type: (...) -> ControlParser
    """Parse a control file into a new ControlParser

    :param source: Either a path to the file or an iterable over lines of
      str or bytes (an open file for reading will do).
    :param handler: The ErrorHandler receiving warnings and critical errors.
      Defaults to one writing to standard error.
    :raises ControlError: if the file could not be parsed (after reporting
      the problem to the handler).
    """
    parser = ControlParser(handler=handler)
    if isinstance(source, (str, os.PathLike)):
        parser.read_file(source)
    else:
        parser.read_lines(source)
    return parser


if __name__ == "__main__":  # pragma: no cover
    import doctest
    doctest.testmod()
