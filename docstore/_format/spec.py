"""
Document Format Specification v1.

Simple document:
    Title: My blog article          <- header: name, colon, optional whitespace, value
    Note: "two\\nlines"             <- quoted value with C-like escapes
                                    <- empty line terminates the headers (mandatory)
    Lorem ipsum dolor sit amet...   <- body, verbatim, no implicit terminator

Multipart document:
    Boundary: <token>               <- prologue; only the Boundary header matters
                                    <-
    --<token>                       <- delimiter, then a simple document (a part)
    ...
    --<token>
    ...                             <- the last part has no closing delimiter

Header names:
    - Case sensitive, [A-Za-z0-9-]+, checked on serialization only
    - Duplicates are allowed when parsing, the last value wins
    - Written in sorted order

Header values:
    - Unquoted values are stripped of surrounding whitespace
    - Values starting with " or ' are quoted and must end with the same quote
    - Escapes: \\xHH, \\OOO (3 octal digits), \\0 \\a \\b \\t \\n \\v \\f \\r \\" \\' \\\\
    - Values that cannot be written literally are re-quoted on write
"""

from __future__ import annotations

import re
import string

from docstore._format.errors import (
    BadlyQuotedHeaderValueError,
    InvalidEscapeSequenceError,
    UnterminatedHeaderValueError,
)

FORMAT_VERSION = "1"

BOUNDARY_HEADER = "Boundary"
BOUNDARY_PREFIX = "--"
BOUNDARY_LENGTH = 64
BOUNDARY_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

# Latin-1 maps bytes 0x00-0xFF one-to-one onto code points, so any input
# survives parse -> to_bytes unchanged and \xHH writes back as byte 0xHH.
DEFAULT_ENCODING = "latin-1"

HEADER_NAME_RE = re.compile(r"[A-Za-z0-9-]+")
HEADER_LINE_RE = re.compile(r"([A-Za-z0-9-]+):(.*)\n")

QUOTE_CHARS = "\"'"

# \xHH first, then \OOO, then single-character escapes. An empty match after
# the backslash means the value ends in a lone backslash.
_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|[0-7]{3}|.?)", re.DOTALL)
_ESCAPE_PAIR_RE = re.compile(r"\\.", re.DOTALL)

_UNESCAPES = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "'": "'",
    "\\": "\\",
}

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def is_valid_header_name(name: str) -> bool:
    return isinstance(name, str) and HEADER_NAME_RE.fullmatch(name) is not None


def is_simple_value(value: str) -> bool:
    """True if the value survives being written unquoted and parsed back."""
    return (
        value != ""
        and value == value.strip()
        and "\n" not in value
        and "\r" not in value
        and value[0] not in QUOTE_CHARS
    )


def unquote_header_value(value: str) -> str:
    """Decode a stripped raw header value. Unquoted values are returned as-is."""
    if not value or value[0] not in QUOTE_CHARS:
        return value

    quote = value[0]
    if len(value) < 2 or value[-1] != quote:
        raise UnterminatedHeaderValueError(value)

    inner = value[1:-1]
    if quote in _ESCAPE_PAIR_RE.sub("", inner):
        raise BadlyQuotedHeaderValueError(value)

    def _decode(match: re.Match) -> str:
        token = match.group(1)
        if len(token) == 3 and token[0] == "x":
            return chr(int(token[1:], 16))
        if len(token) == 3:
            code = int(token, 8)
            if code > 0o377:
                raise InvalidEscapeSequenceError(value)
            return chr(code)
        if token in _UNESCAPES:
            return _UNESCAPES[token]
        raise InvalidEscapeSequenceError(value)

    return _ESCAPE_RE.sub(_decode, inner)


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    code = ord(char)
    if code < 0x20 or 0x7F <= code <= 0x9F or (code <= 0xFF and not char.isprintable()):
        return f"\\{code:03o}"
    return char


def quote_header_value(value: str) -> str:
    """Wrap a value in double quotes, escaping what cannot be written literally."""
    return '"' + "".join(_escape_char(c) for c in value) + '"'


def format_header_value(value: str) -> str:
    return value if is_simple_value(value) else quote_header_value(value)


class _Detect:
    """Boundary argument asking the reader to take it from the Boundary header."""

    def __repr__(self) -> str:
        return "DETECT"


DETECT = _Detect()
