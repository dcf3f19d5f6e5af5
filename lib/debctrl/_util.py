import logging
import weakref
from weakref import ReferenceType

from typing import (
    Optional, Callable, TYPE_CHECKING, Generic, Iterator, TypeVar,
)

if TYPE_CHECKING:
    from debctrl.parser import ControlParser


T = TypeVar('T')


def resolve_ref(ref):
    # type: (Optional[ReferenceType[T]]) -> Optional[T]
    return ref() if ref is not None else None


class _strI(str):
    """A case-insensitive str, used for field names

    Equality and hashing ignore case while the original spelling is kept
    for output.

    >>> _strI('Source') == 'source'
    True
    >>> str(_strI('Source'))
    'Source'
    """

    def __new__(cls, str_):  # type: ignore
        s = str.__new__(cls, str_)
        s._lower = str_.lower()
        return s

    def __eq__(self, other):
        # type: (object) -> bool
        if isinstance(other, str):
            return self._lower == other.lower()
        return NotImplemented

    def __ne__(self, other):
        # type: (object) -> bool
        return not self == other

    def __hash__(self):
        # type: () -> int
        return hash(self._lower)

    def lower(self):
        # type: () -> str
        return self._lower


class LinkedListNode(Generic[T]):

    __slots__ = ('_previous_node', 'value', 'next_node', '__weakref__')

    def __init__(self, value):
        # type: (T) -> None
        self._previous_node = None  # type: Optional[ReferenceType[LinkedListNode[T]]]
        self.next_node = None  # type: Optional[LinkedListNode[T]]
        self.value = value

    @property
    def previous_node(self):
        # type: () -> Optional[LinkedListNode[T]]
        return resolve_ref(self._previous_node)

    @previous_node.setter
    def previous_node(self, node):
        # type: (Optional[LinkedListNode[T]]) -> None
        self._previous_node = weakref.ref(node) if node is not None else None

    def remove(self):
        # type: () -> T
        LinkedListNode.link_nodes(self.previous_node, self.next_node)
        self.previous_node = None
        self.next_node = None
        return self.value

    def iter_next(self):
        # type: () -> Iterator[LinkedListNode[T]]
        node = self  # type: Optional[LinkedListNode[T]]
        while node:
            yield node
            node = node.next_node

    @staticmethod
    def link_nodes(previous_node, next_node):
        # type: (Optional[LinkedListNode[T]], Optional[LinkedListNode[T]]) -> None
        if next_node:
            next_node.previous_node = previous_node
        if previous_node:
            previous_node.next_node = next_node

    @staticmethod
    def _insert_link(first_node,  # type: Optional[LinkedListNode[T]]
                     new_node,  # type: LinkedListNode[T]
                     last_node,  # type: Optional[LinkedListNode[T]]
                     ):
        # type: (...) -> None
        LinkedListNode.link_nodes(first_node, new_node)
        LinkedListNode.link_nodes(new_node, last_node)

    def insert_before(self, new_node):
        # type: (LinkedListNode[T]) -> None
        assert self is not new_node and new_node is not self.previous_node
        LinkedListNode._insert_link(self.previous_node, new_node, self)

    def insert_after(self, new_node):
        # type: (LinkedListNode[T]) -> None
        assert self is not new_node and new_node is not self.next_node
        LinkedListNode._insert_link(self, new_node, self.next_node)


class LinkedList(Generic[T]):
    """Ordered owning container for the parser's chunks, blocks and sections

    Head and tail are tracked explicitly, so appending and prepending are
    O(1).  Backward links are weak references; the list (and through it the
    owner of the list) is the only strong owner of its values.
    """

    __slots__ = ('head_node', 'tail_node', '_size')

    def __init__(self):
        # type: () -> None
        self.head_node = None  # type: Optional[LinkedListNode[T]]
        self.tail_node = None  # type: Optional[LinkedListNode[T]]
        self._size = 0

    def __bool__(self):
        # type: () -> bool
        return self.head_node is not None

    def __len__(self):
        # type: () -> int
        return self._size

    @property
    def head(self):
        # type: () -> Optional[T]
        return self.head_node.value if self.head_node is not None else None

    @property
    def tail(self):
        # type: () -> Optional[T]
        return self.tail_node.value if self.tail_node is not None else None

    def iter_nodes(self):
        # type: () -> Iterator[LinkedListNode[T]]
        head_node = self.head_node
        if head_node is None:
            return
        yield from head_node.iter_next()

    def __iter__(self):
        # type: () -> Iterator[T]
        yield from (node.value for node in self.iter_nodes())

    def find_node(self, predicate):
        # type: (Callable[[T], bool]) -> Optional[LinkedListNode[T]]
        for node in self.iter_nodes():
            if predicate(node.value):
                return node
        return None

    def remove_node(self, node):
        # type: (LinkedListNode[T]) -> T
        if node is self.head_node:
            self.head_node = node.next_node
            if self.head_node is None:
                self.tail_node = None
        elif node is self.tail_node:
            self.tail_node = node.previous_node
            # The single node case is handled by the head branch
            assert self.tail_node is not None
        assert self._size > 0
        self._size -= 1
        return node.remove()

    def remove(self, value):
        # type: (T) -> T
        """Remove a value (compared by identity) from the list and return it"""
        node = self.find_node(lambda v: v is value)
        if node is None:
            raise ValueError("LinkedList.remove(x): x not in list")
        return self.remove_node(node)

    def append(self, value):
        # type: (T) -> LinkedListNode[T]
        node = LinkedListNode(value)
        if self.head_node is None:
            self.head_node = node
            self.tail_node = node
        else:
            # Primarily as a hint to mypy
            assert self.tail_node is not None
            self.tail_node.insert_after(node)
            self.tail_node = node
        self._size += 1
        return node

    def prepend(self, value):
        # type: (T) -> LinkedListNode[T]
        if self.head_node is None:
            return self.append(value)
        node = LinkedListNode(value)
        self.head_node.insert_before(node)
        self.head_node = node
        self._size += 1
        return node

    def clear(self):
        # type: () -> None
        # Unlink explicitly so that nodes leaked to callers do not keep
        # the rest of the chain alive.
        node = self.head_node
        while node is not None:
            next_node = node.next_node
            node.remove()
            node = next_node
        self.head_node = None
        self.tail_node = None
        self._size = 0


def print_document(parser,  # type: ControlParser
                   *,
                   output_function=None,  # type: Optional[Callable[[str], None]]
                   ):
    # type: (...) -> None
    """Debugging aid, which dumps the sections, blocks and chunks of a parser

    :param parser: A ControlParser (usually after a read_file or read_lines call)
    :param output_function: Callable that receives a single str argument and is
      responsible for "displaying" that line. The callable may be invoked multiple
      times (one per line of output).  Defaults to logging.info if omitted.

    >>> from debctrl.parser import parse_control_file
    >>> parser = parse_control_file(['Source: foo\\n', 'Description: bar\\n', ' baz\\n'])
    >>> print_document(parser, output_function=print)
    ------ Section 1 ------
      Source
    [fixed] foo
      Description
    [fixed] bar
    [merge] baz
    """
    # Avoid circular dependency
    # pylint: disable=import-outside-toplevel
    from debctrl.model import ChunkType
    if output_function is None:
        output_function = logging.info
    for no, section in enumerate(parser, start=1):
        output_function("------ Section {no} ------".format(no=no))
        for block in section:
            output_function("  " + block.name)
            for chunk in block:
                if chunk.chunk_type is ChunkType.EMPTY:
                    output_function("[empty]")
                else:
                    output_function("[{kind}] {text}".format(kind=chunk.chunk_type.value,
                                                             text=chunk.text))
