"""
Document model: simple (headers + body) and multipart (ordered parts).

Usage:
    doc = SimpleDocument({"Title": "Finishing the documentation"}, "ASAP.")
    doc.headers["Tags"] = "example"
    doc.save_file("simple.txt")

    doc = SimpleDocument.load_file("simple.txt")

    thread = MultipartDocument.parse(text)
    thread.parts.append(SimpleDocument({"Author": "Middle man"}, "Meh."))
    data = thread.to_bytes()

Both classes are plain mutable values. Header names are validated only
when the document is serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from docstore._format.source import FileSource, Source, as_source
from docstore._format.spec import DEFAULT_ENCODING

if TYPE_CHECKING:
    from docstore._format.writer import RandomSource


def _open_for_reading(path: str | Path, encoding: str) -> TextIO:
    # newline="\n": no universal-newline translation, "\r" stays in values
    return open(path, "r", encoding=encoding, newline="\n")


@dataclass
class SimpleDocument:
    """A header block and a free-form body.

    ``boundary`` for parse/load_file:
      - None:   read to the end of input
      - DETECT: take the boundary from the "Boundary" header (required)
      - a str:  stop after a line equal to ``--<boundary>``
    """

    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @classmethod
    def parse(
        cls,
        source: str | bytes | TextIO | Source,
        boundary: str | object | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> SimpleDocument:
        from docstore._format.reader import DocumentReader
        return DocumentReader.read_simple(as_source(source, encoding), boundary)

    @classmethod
    def load_file(
        cls,
        path: str | Path,
        boundary: str | object | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> SimpleDocument:
        with _open_for_reading(path, encoding) as f:
            return cls.parse(FileSource(f), boundary)

    def to_string(self) -> str:
        from docstore._format.writer import DocumentWriter
        return DocumentWriter.serialize_simple(self)

    def to_bytes(self, encoding: str = DEFAULT_ENCODING) -> bytes:
        return self.to_string().encode(encoding)

    def save(self, handle: TextIO) -> None:
        handle.write(self.to_string())

    def save_file(self, path: str | Path, encoding: str = DEFAULT_ENCODING) -> int:
        from docstore._format.writer import DocumentWriter
        return DocumentWriter.write(self.to_string(), path, encoding)

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class MultipartDocument:
    """An ordered list of simple documents separated by a boundary line.

    The boundary is never stored; a new one is generated on every
    serialization. Pass ``rng`` (anything with ``choice``) to make it
    reproducible.
    """

    parts: list[SimpleDocument] = field(default_factory=list)

    @classmethod
    def parse(
        cls, source: str | bytes | TextIO | Source, encoding: str = DEFAULT_ENCODING,
    ) -> MultipartDocument:
        from docstore._format.reader import DocumentReader
        return DocumentReader.read_multipart(as_source(source, encoding))

    @classmethod
    def load_file(cls, path: str | Path, encoding: str = DEFAULT_ENCODING) -> MultipartDocument:
        with _open_for_reading(path, encoding) as f:
            return cls.parse(FileSource(f))

    def to_string(self, rng: RandomSource | None = None) -> str:
        from docstore._format.writer import DocumentWriter
        return DocumentWriter.serialize_multipart(self, rng)

    def to_bytes(
        self, encoding: str = DEFAULT_ENCODING, rng: RandomSource | None = None,
    ) -> bytes:
        return self.to_string(rng).encode(encoding)

    def save(self, handle: TextIO, rng: RandomSource | None = None) -> None:
        handle.write(self.to_string(rng))

    def save_file(
        self,
        path: str | Path,
        encoding: str = DEFAULT_ENCODING,
        rng: RandomSource | None = None,
    ) -> int:
        from docstore._format.writer import DocumentWriter
        return DocumentWriter.write(self.to_string(rng), path, encoding)

    def __str__(self) -> str:
        return self.to_string()
