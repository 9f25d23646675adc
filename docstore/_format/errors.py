"""
Syntax errors raised while parsing or serializing documents.

Every error is fatal to the call that raised it: there is no partial
result and nothing is recovered. Callers get the offending text back on
the exception and the message is meant to be shown verbatim.
"""

from __future__ import annotations


class DocumentSyntaxError(ValueError):
    """Base class for all document format errors."""


class InvalidHeaderError(DocumentSyntaxError):
    """A header line is not ``name: value`` and not the empty terminator line."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Invalid header: {line!r}.")


class UnterminatedHeadersError(DocumentSyntaxError):
    """Input ended before the empty line separating headers from body."""

    def __init__(self) -> None:
        super().__init__("Unterminated headers.")


class NoBoundaryDefinedError(DocumentSyntaxError):
    """Boundary detection was requested but there is no Boundary header."""

    def __init__(self) -> None:
        super().__init__("No boundary defined.")


class UnterminatedHeaderValueError(DocumentSyntaxError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unterminated header value: {value!r}.")


class BadlyQuotedHeaderValueError(DocumentSyntaxError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Badly quoted header value: {value!r}.")


class InvalidEscapeSequenceError(DocumentSyntaxError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid escape sequence in header value: {value!r}.")


class InvalidHeaderNameError(DocumentSyntaxError):
    """Raised at serialization time only; construction does not validate."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid header name: {name!r}.")
