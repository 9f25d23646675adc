"""
docstore CLI: inspect and normalize document files.

Commands:
  docstore check FILE  - Parse a file and report whether it is well formed
  docstore show FILE   - Print the parsed headers and body as JSON
  docstore fmt FILE    - Re-serialize in canonical form (sorted, re-quoted headers)

Add --multipart to any command for multipart documents.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import Any

log = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> Any:
    """Load SimpleDocument or MultipartDocument from args.path, exiting on error."""
    from docstore import MultipartDocument, SimpleDocument

    try:
        if args.multipart:
            return MultipartDocument.load_file(args.path, encoding=args.encoding)
        return SimpleDocument.load_file(args.path, encoding=args.encoding)
    except (ValueError, OSError) as e:
        print(f"Error: {args.path}: {e}", file=sys.stderr)
        sys.exit(1)


def _simple_to_dict(doc: Any) -> dict[str, Any]:
    return {"headers": dict(sorted(doc.headers.items())), "body": doc.body}


def cmd_check(args: argparse.Namespace) -> None:
    """Parse a document and report success."""
    doc = _load(args)
    if args.multipart:
        print(f"OK {args.path} ({len(doc.parts)} part(s))")
    else:
        print(f"OK {args.path} ({len(doc.headers)} header(s), {len(doc.body)} body chars)")


def cmd_show(args: argparse.Namespace) -> None:
    """Print the parsed document as JSON."""
    doc = _load(args)
    if args.multipart:
        data: dict[str, Any] = {"parts": [_simple_to_dict(part) for part in doc.parts]}
    else:
        data = _simple_to_dict(doc)
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_fmt(args: argparse.Namespace) -> None:
    """Re-serialize a document to stdout or to a file (atomic write)."""
    doc = _load(args)
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        text = doc.to_string(rng) if args.multipart else doc.to_string()
        if args.output:
            from docstore._format.writer import DocumentWriter
            nbytes = DocumentWriter.write(text, args.output, args.encoding)
            print(f"Formatted {args.path} -> {args.output} ({nbytes} bytes)")
        else:
            # Same bytes as -o would write, independent of the terminal encoding
            sys.stdout.flush()
            sys.stdout.buffer.write(text.encode(args.encoding))
            sys.stdout.buffer.flush()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _add_doc_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Path to the document file")
    parser.add_argument(
        "--multipart", action="store_true", help="Treat the file as a multipart document",
    )


def main(argv: list[str] | None = None) -> None:
    from docstore import __version__
    from docstore.config import load_config

    parser = argparse.ArgumentParser(
        prog="docstore",
        description="docstore: parse and normalize RFC 822-like text documents.",
    )
    parser.add_argument("--version", action="version", version=f"docstore {__version__}")
    parser.add_argument("--config", help="Path to config TOML (or set DOCSTORE_CONFIG)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p_check = sub.add_parser("check", help="Check that a document parses")
    _add_doc_args(p_check)

    p_show = sub.add_parser("show", help="Print parsed document as JSON")
    _add_doc_args(p_show)

    p_fmt = sub.add_parser("fmt", help="Re-serialize in canonical form")
    _add_doc_args(p_fmt)
    p_fmt.add_argument("-o", "--output", help="Output file (default: stdout)")
    p_fmt.add_argument(
        "--seed", type=int, help="Seed for the multipart boundary (reproducible output)",
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    level = "DEBUG" if args.verbose else config["log_level"]
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.encoding = config["encoding"]

    if not args.command:
        print("docstore: RFC 822-like text documents")
        print()
        print("Usage:")
        print("  docstore check file.txt [--multipart]")
        print("  docstore show file.txt [--multipart]")
        print("  docstore fmt file.txt [--multipart] [-o out.txt] [--seed N]")
        print()
        print("Run 'docstore <command> --help' for details on any command.")
        sys.exit(0)

    commands = {
        "check": cmd_check,
        "show": cmd_show,
        "fmt": cmd_fmt,
    }

    log.debug("Running %s on %s", args.command, args.path)
    commands[args.command](args)


if __name__ == "__main__":
    main()
