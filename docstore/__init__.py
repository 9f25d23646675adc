"""
docstore: RFC 822-like text documents: headers, an empty line, a body.

Layout:
    Simple:     <Name>: <value> lines, empty line, body
    Multipart:  Boundary prologue, then parts separated by --<boundary> lines
    CLI:        docstore check / show / fmt
"""

__version__ = "0.1.0"

from docstore._format import (  # noqa: E402
    DETECT,
    FORMAT_VERSION,
    BadlyQuotedHeaderValueError,
    DocumentSyntaxError,
    FileSource,
    InvalidEscapeSequenceError,
    InvalidHeaderError,
    InvalidHeaderNameError,
    MultipartDocument,
    NoBoundaryDefinedError,
    SimpleDocument,
    Source,
    StringSource,
    UnterminatedHeadersError,
    UnterminatedHeaderValueError,
)

__all__ = [
    "DETECT",
    "FORMAT_VERSION",
    "BadlyQuotedHeaderValueError",
    "DocumentSyntaxError",
    "FileSource",
    "InvalidEscapeSequenceError",
    "InvalidHeaderError",
    "InvalidHeaderNameError",
    "MultipartDocument",
    "NoBoundaryDefinedError",
    "SimpleDocument",
    "Source",
    "StringSource",
    "UnterminatedHeadersError",
    "UnterminatedHeaderValueError",
]
