""" Document model for parsed control files

A parsed file is a tree:

 * a :class:`~debctrl.parser.ControlParser` owns a list of sections,
 * a :class:`ControlSection` (an RFC822 "paragraph") owns its fields,
 * a :class:`ControlBlock` (one field, e.g. "Description") owns its chunks,
 * a :class:`ControlChunk` holds the contribution of one physical line.

Every list is ordered by appearance in the file.  Field names are unique
within a section (compared case-insensitively).
"""

import collections
import enum

from typing import Iterator, Optional

from debctrl._util import LinkedList, _strI


ParserContext = collections.namedtuple('ParserContext', ['path', 'line'])
ParserContext.__doc__ = """Position of a line in the input (path and 1-based line number)"""

_NO_CONTEXT = ParserContext(None, 0)


class ChunkType(enum.Enum):
    """How the text of a chunk relates to the line before it"""

    # A standalone blank continuation line (" .")
    EMPTY = 'empty'
    # Continues the previous line; may be re-wrapped with it
    MERGE = 'merge'
    # Preformatted; must be reproduced exactly
    FIXED = 'fixed'


class ControlChunk:
    """The value contributed by a single physical line

    The text is None exactly when the chunk is EMPTY.  If no type is
    given, a chunk with text is MERGE and a chunk without is EMPTY.

    >>> ControlChunk('foo')
    ControlChunk(merge, 'foo')
    >>> ControlChunk(None)
    ControlChunk(empty)
    """

    __slots__ = ('_text', '_chunk_type', 'context')

    def __init__(self,
                 text,  # type: Optional[str]
                 chunk_type=None,  # type: Optional[ChunkType]
                 context=None,  # type: Optional[ParserContext]
                 ):
        # type: (...) -> None
        if chunk_type is None:
            chunk_type = ChunkType.EMPTY if text is None else ChunkType.MERGE
        if (text is None) != (chunk_type is ChunkType.EMPTY):
            raise ValueError("A chunk has text if and only if it is not EMPTY"
                             " (got type {t} with text {text!r})".format(t=chunk_type.name,
                                                                         text=text))
        if text is not None and '\n' in text:
            raise ValueError("Chunk text must not contain newlines")
        self._text = text
        self._chunk_type = chunk_type
        self.context = context if context is not None else _NO_CONTEXT  # type: ParserContext

    def __repr__(self):
        # type: () -> str
        if self._text is None:
            return "{clsname}({t})".format(clsname=self.__class__.__name__,
                                           t=self._chunk_type.value)
        return "{clsname}({t}, {text!r})".format(clsname=self.__class__.__name__,
                                                  t=self._chunk_type.value,
                                                  text=self._text)

    @property
    def text(self):
        # type: () -> Optional[str]
        return self._text

    @property
    def chunk_type(self):
        # type: () -> ChunkType
        return self._chunk_type

    def clear(self):
        # type: () -> None
        """Drop the text, turning this into an EMPTY chunk"""
        self._text = None
        self._chunk_type = ChunkType.EMPTY


class ControlBlock:
    """A field in a section along with its value chunks"""

    __slots__ = ('_name', '_chunks', 'context')

    def __init__(self, name, context=None):
        # type: (str, Optional[ParserContext]) -> None
        self._name = name if isinstance(name, _strI) else _strI(name)
        self._chunks = LinkedList()  # type: LinkedList[ControlChunk]
        self.context = context if context is not None else _NO_CONTEXT  # type: ParserContext

    def __repr__(self):
        # type: () -> str
        return "{clsname}({name!r}, chunks={n})".format(clsname=self.__class__.__name__,
                                                        name=str(self._name),
                                                        n=len(self._chunks))

    @property
    def name(self):
        # type: () -> _strI
        return self._name

    @property
    def head(self):
        # type: () -> Optional[ControlChunk]
        return self._chunks.head

    @property
    def tail(self):
        # type: () -> Optional[ControlChunk]
        return self._chunks.tail

    def __iter__(self):
        # type: () -> Iterator[ControlChunk]
        return iter(self._chunks)

    def __len__(self):
        # type: () -> int
        return len(self._chunks)

    def __bool__(self):
        # type: () -> bool
        return True

    def append(self, chunk):
        # type: (ControlChunk) -> None
        self._chunks.append(chunk)

    def prepend(self, chunk):
        # type: (ControlChunk) -> None
        self._chunks.prepend(chunk)

    def unlink(self, chunk):
        # type: (ControlChunk) -> ControlChunk
        """Remove a chunk from this block and hand it back to the caller"""
        try:
            return self._chunks.remove(chunk)
        except ValueError:
            raise ValueError("Chunk {chunk!r} is not part of field {name}".format(
                chunk=chunk, name=str(self._name))) from None

    def delete(self, chunk):
        # type: (ControlChunk) -> None
        """Remove a chunk from this block and discard it"""
        self.unlink(chunk).clear()

    def clear(self):
        # type: () -> None
        for chunk in self._chunks:
            chunk.clear()
        self._chunks.clear()

    def convert_to_text(self):
        # type: () -> str
        """Render the field the way it would appear in a control file

        >>> block = ControlBlock('Description')
        >>> block.append(ControlChunk('short', ChunkType.FIXED))
        >>> block.append(ControlChunk('long'))
        >>> block.append(ControlChunk(None))
        >>> block.append(ControlChunk('verbatim', ChunkType.FIXED))
        >>> print(block.convert_to_text(), end='')
        Description: short
         long
         .
          verbatim
        """
        chunks = iter(self._chunks)
        first = next(chunks, None)
        if first is None:
            raise ValueError("Field {name} has no content".format(name=str(self._name)))
        if first.text is None:
            parts = [self._name, ":\n"]
        else:
            parts = [self._name, ": ", first.text, "\n"]
        for chunk in chunks:
            if chunk.chunk_type is ChunkType.EMPTY:
                parts.append(" .\n")
            elif chunk.chunk_type is ChunkType.FIXED:
                parts.extend(("  ", chunk.text, "\n"))
            else:
                parts.extend((" ", chunk.text, "\n"))
        return "".join(parts)


class ControlSection:
    """A paragraph of a control file (a run of fields between blank lines)"""

    __slots__ = ('_blocks',)

    def __init__(self):
        # type: () -> None
        self._blocks = LinkedList()  # type: LinkedList[ControlBlock]

    def __repr__(self):
        # type: () -> str
        return "{clsname}({names!r})".format(clsname=self.__class__.__name__,
                                             names=[str(b.name) for b in self._blocks])

    @property
    def head(self):
        # type: () -> Optional[ControlBlock]
        return self._blocks.head

    @property
    def tail(self):
        # type: () -> Optional[ControlBlock]
        return self._blocks.tail

    def __iter__(self):
        # type: () -> Iterator[ControlBlock]
        return iter(self._blocks)

    def __len__(self):
        # type: () -> int
        return len(self._blocks)

    def __bool__(self):
        # type: () -> bool
        return True

    def __contains__(self, name):
        # type: (object) -> bool
        return isinstance(name, str) and self.find(name) is not None

    def find(self, name):
        # type: (str) -> Optional[ControlBlock]
        """Look up a field by name, ignoring case"""
        name = name.lower()
        for block in self._blocks:
            if block.name.lower() == name:
                return block
        return None

    def append(self, block):
        # type: (ControlBlock) -> None
        if self.find(block.name) is not None:
            raise ValueError("Field {name} is already present in this section".format(
                name=str(block.name)))
        self._blocks.append(block)

    def clear(self):
        # type: () -> None
        for block in self._blocks:
            block.clear()
        self._blocks.clear()

    def convert_to_text(self):
        # type: () -> str
        return "".join(block.convert_to_text() for block in self._blocks)
