"""
Reader: line-at-a-time parser for simple and multipart documents.

A simple document is read in two phases:
  1. Headers, up to and including the empty terminator line
  2. Body, either to the end of input or up to a boundary delimiter line

A multipart document is a prologue (read with boundary detection) followed
by parts, each read with the prologue's boundary until the input runs out.
Errors from any part propagate unchanged.
"""

from __future__ import annotations

import logging

from docstore._format.document import MultipartDocument, SimpleDocument
from docstore._format.errors import (
    InvalidHeaderError,
    NoBoundaryDefinedError,
    UnterminatedHeadersError,
)
from docstore._format.source import Source
from docstore._format.spec import (
    BOUNDARY_HEADER,
    BOUNDARY_PREFIX,
    DETECT,
    HEADER_LINE_RE,
    unquote_header_value,
)

log = logging.getLogger(__name__)


def _trim_synthetic(source: Source, text: str) -> str:
    if source.synthetic_newline and text.endswith("\n"):
        return text[:-1]
    return text


class DocumentReader:

    @staticmethod
    def parse_headers(source: Source, detect_boundary: bool = False) -> dict[str, str]:
        """Read the header block. Later duplicates overwrite earlier ones."""
        headers: dict[str, str] = {}
        terminated = False

        while not source.at_end():
            line = source.read_line()
            if source.synthetic_newline:
                line = line[:-1]
            if line == "\n":
                terminated = True
                break

            match = HEADER_LINE_RE.fullmatch(line)
            if match is None:
                raise InvalidHeaderError(line[:-1] if line.endswith("\n") else line)
            name, raw_value = match.groups()
            headers[name] = unquote_header_value(raw_value.strip())

        if not terminated:
            raise UnterminatedHeadersError()
        if detect_boundary and BOUNDARY_HEADER not in headers:
            raise NoBoundaryDefinedError()

        log.debug("Parsed %d header(s)", len(headers))
        return headers

    @staticmethod
    def parse_body(source: Source, boundary: str | None = None) -> str:
        """Read the body, stopping after the ``--<boundary>`` line if one is given.

        A missing delimiter is not an error: the last part of a multipart
        document is terminated by the end of input.
        """
        if boundary is None:
            return _trim_synthetic(source, source.read_all())

        delimiter = f"{BOUNDARY_PREFIX}{boundary}\n"
        lines: list[str] = []
        while not source.at_end():
            line = source.read_line()
            if line == delimiter and not source.synthetic_newline:
                body = "".join(lines)
                # The newline before the delimiter belongs to the delimiter.
                return body[:-1] if body.endswith("\n") else body
            lines.append(line)

        return _trim_synthetic(source, "".join(lines))

    @classmethod
    def read_simple(cls, source: Source, boundary: str | object | None = None) -> SimpleDocument:
        detect = boundary is DETECT
        headers = cls.parse_headers(source, detect_boundary=detect)
        if detect:
            boundary = headers[BOUNDARY_HEADER]
            log.debug("Detected boundary %r", boundary)
        body = cls.parse_body(source, boundary)
        return SimpleDocument(headers, body)

    @classmethod
    def read_multipart(cls, source: Source) -> MultipartDocument:
        prologue = cls.read_simple(source, DETECT)
        boundary = prologue.headers[BOUNDARY_HEADER]

        parts: list[SimpleDocument] = []
        while not source.at_end():
            parts.append(cls.read_simple(source, boundary))

        log.debug("Parsed multipart document with %d part(s)", len(parts))
        return MultipartDocument(parts)
