"""
Line sources: the input side of the reader.

The reader consumes input one line at a time (a line keeps its trailing
newline) or takes the whole remainder at once. Two adapters exist:

  - StringSource: in-memory text, returned exactly as given
  - FileSource:   a text file handle; a last line that lacks a physical
                  newline gets a synthetic one and ``synthetic_newline``
                  is set so the reader can strip it from the body again

Open text handles passed to the parser are wrapped in FileSource.
Only ``\\n`` terminates a line. Files should be opened with
``newline="\\n"`` so that ``\\r`` reaches the parser untranslated.
"""

from __future__ import annotations

import io
from typing import TextIO

from docstore._format.spec import DEFAULT_ENCODING


class Source:
    """Capability interface consumed by DocumentReader."""

    def __init__(self) -> None:
        self.synthetic_newline = False

    def read_line(self) -> str | None:
        raise NotImplementedError

    def read_all(self) -> str:
        raise NotImplementedError

    def at_end(self) -> bool:
        raise NotImplementedError


class StringSource(Source):

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def read_line(self) -> str | None:
        if self.at_end():
            return None
        end = self._text.find("\n", self._pos)
        end = len(self._text) if end == -1 else end + 1
        line = self._text[self._pos:end]
        self._pos = end
        return line

    def read_all(self) -> str:
        rest = self._text[self._pos:]
        self._pos = len(self._text)
        return rest


class FileSource(Source):
    """Source over an open text handle. The caller owns opening and closing it."""

    def __init__(self, handle: TextIO) -> None:
        super().__init__()
        self._handle = handle
        self._pending: str | None = None

    def _peek(self) -> str:
        if self._pending is None:
            self._pending = self._handle.readline()
        return self._pending

    def at_end(self) -> bool:
        return self._peek() == ""

    def read_line(self) -> str | None:
        line = self._peek()
        self._pending = None
        if line == "":
            return None
        if not line.endswith("\n"):
            self.synthetic_newline = True
            line += "\n"
        return line

    def read_all(self) -> str:
        rest = (self._pending or "") + self._handle.read()
        self._pending = ""
        if rest and not rest.endswith("\n"):
            self.synthetic_newline = True
            rest += "\n"
        return rest


def as_source(source: str | bytes | TextIO | Source, encoding: str = DEFAULT_ENCODING) -> Source:
    """Coerce parser input into a Source."""
    if isinstance(source, Source):
        return source
    if isinstance(source, str):
        return StringSource(source)
    if isinstance(source, (bytes, bytearray)):
        return StringSource(bytes(source).decode(encoding))
    if isinstance(source, io.TextIOBase):
        return FileSource(source)
    raise TypeError(
        f"Cannot read a document from {type(source).__name__}; "
        f"pass a str, bytes, an open text handle or a Source"
    )
