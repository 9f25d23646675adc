"""
Document format engine: parser and serializer for simple and multipart
documents.

Format: RFC 822-like headers, an empty line, a free-form body; multipart
documents chain simple documents with a boundary declared in a prologue.
"""

from docstore._format.spec import FORMAT_VERSION, BOUNDARY_HEADER, DETECT
from docstore._format.errors import (
    DocumentSyntaxError,
    InvalidHeaderError,
    UnterminatedHeadersError,
    NoBoundaryDefinedError,
    UnterminatedHeaderValueError,
    BadlyQuotedHeaderValueError,
    InvalidEscapeSequenceError,
    InvalidHeaderNameError,
)
from docstore._format.source import Source, StringSource, FileSource, as_source
from docstore._format.document import SimpleDocument, MultipartDocument
from docstore._format.reader import DocumentReader
from docstore._format.writer import DocumentWriter
