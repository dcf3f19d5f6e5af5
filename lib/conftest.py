import collections

from typing import Any, Callable, Dict, List, Optional

import pytest

from debctrl.handler import ErrorHandler
from debctrl.model import ParserContext


Diagnostic = collections.namedtuple('Diagnostic', ['context', 'message'])


class RecordingErrorHandler(ErrorHandler):
    """ErrorHandler that keeps every diagnostic instead of printing it"""

    __slots__ = ('warnings', 'criticals')

    def __init__(self):
        # type: () -> None
        super().__init__()
        self.warnings = []  # type: List[Diagnostic]
        self.criticals = []  # type: List[Diagnostic]
        self.set_warn_handler(self._record_warning)
        self.set_critical_handler(self._record_critical)

    def _record_warning(self, context, message):
        # type: (Optional[ParserContext], str) -> None
        self.warnings.append(Diagnostic(context, message))

    def _record_critical(self, context, message):
        # type: (Optional[ParserContext], str) -> None
        self.criticals.append(Diagnostic(context, message))


@pytest.fixture()
def recording_handler():
    # type: () -> RecordingErrorHandler
    return RecordingErrorHandler()


@pytest.fixture()
def control_file(tmp_path):
    # type: (Any) -> Callable[[str], str]
    """Writes the given text to a file and returns its path"""
    def _write(text, name='control'):
        # type: (str, str) -> str
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def doctest_add_parser_names(doctest_namespace):
    # type: (Dict[str, Any]) -> None
    # Make the recording handler available to doctests without an import.
    doctest_namespace['RecordingErrorHandler'] = RecordingErrorHandler
