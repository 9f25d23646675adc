"""
Writer: serializes documents to their text form.

Simple documents: headers sorted by name, one per line, values re-quoted
when they cannot be written literally, an empty line, then the body.

Multipart documents: a fresh random boundary on every call, so two
serializations of the same document differ byte-wise. The boundary is not
checked against the parts' content; a 64-character token from a
62-symbol alphabet makes a collision negligible.
"""

from __future__ import annotations

import logging
import os
import random
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

from docstore._format.errors import InvalidHeaderNameError
from docstore._format.spec import (
    BOUNDARY_ALPHABET,
    BOUNDARY_HEADER,
    BOUNDARY_LENGTH,
    BOUNDARY_PREFIX,
    DEFAULT_ENCODING,
    format_header_value,
    is_valid_header_name,
)

if TYPE_CHECKING:
    from docstore._format.document import MultipartDocument, SimpleDocument

log = logging.getLogger(__name__)


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


_system_random = random.SystemRandom()


class DocumentWriter:

    @staticmethod
    def serialize_simple(doc: SimpleDocument) -> str:
        """Serialize a simple document. Raises InvalidHeaderNameError on a bad name."""
        for name in doc.headers:
            if not is_valid_header_name(name):
                raise InvalidHeaderNameError(name)

        header_lines = [
            f"{name}: {format_header_value(doc.headers[name])}\n"
            for name in sorted(doc.headers)
        ]
        return "".join(header_lines) + "\n" + doc.body

    @staticmethod
    def generate_boundary(rng: RandomSource | None = None, length: int = BOUNDARY_LENGTH) -> str:
        rng = rng or _system_random
        return "".join(rng.choice(BOUNDARY_ALPHABET) for _ in range(length))

    @classmethod
    def serialize_multipart(cls, doc: MultipartDocument, rng: RandomSource | None = None) -> str:
        from docstore._format.document import SimpleDocument

        boundary = cls.generate_boundary(rng)
        prologue = cls.serialize_simple(SimpleDocument({BOUNDARY_HEADER: boundary}, ""))
        parts = [
            f"{BOUNDARY_PREFIX}{boundary}\n{cls.serialize_simple(part)}"
            for part in doc.parts
        ]
        log.debug("Serialized multipart document with %d part(s)", len(parts))
        return prologue + "\n".join(parts)

    @staticmethod
    def write(
        data: str, path: str | Path, encoding: str = DEFAULT_ENCODING, mode: int = 0o644,
    ) -> int:
        """Write serialized text to a file atomically. Returns bytes written."""
        raw = data.encode(encoding)
        dir_name = os.path.dirname(os.path.abspath(path)) or "."
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".tmp", prefix=".docstore_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(raw)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        log.debug("Wrote %d bytes to %s", len(raw), path)
        return len(raw)
