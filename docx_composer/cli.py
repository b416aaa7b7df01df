"""
Command-line interface for docx_composer.

Usage:
    docx-composer dump document.docx --indent 2
    docx-composer info document.docx
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from .exceptions import PackageError
from .parser.document_reader import DocumentReader
from .parser.package_reader import PackageReader
from .utils.logger import configure_logging
from .validator import DocumentValidator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docx-composer",
        description="Inspect .docx packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docx-composer dump document.docx
  docx-composer dump document.docx --indent 4
  docx-composer info document.docx
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    dump_parser = subparsers.add_parser("dump", help="Print the document model as JSON")
    dump_parser.add_argument("input", help="Input DOCX file")
    dump_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    info_parser = subparsers.add_parser("info", help="List package parts and feature flags")
    info_parser.add_argument("input", help="Input DOCX file")

    return parser


def cmd_dump(args) -> int:
    document = DocumentReader(args.input).read()
    print(json.dumps(document.json(), indent=args.indent, ensure_ascii=False))
    return 0


def cmd_info(args) -> int:
    with PackageReader(args.input) as package:
        print(f"Main document: {package.main_document_part}")
        print("Parts:")
        for part_name in package.list_parts():
            content_type = package.content_types.get(f"/{part_name}")
            if content_type is None:
                extension = part_name.rsplit(".", 1)[-1]
                content_type = package.content_types.get(f"*.{extension}", "?")
            print(f"  {part_name}  [{content_type}]")

    document = DocumentReader(args.input).read()
    print("Features:")
    for name, enabled in asdict(DocumentValidator(document).features()).items():
        print(f"  {name}: {'yes' if enabled else 'no'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(level=args.log_level)

    handlers = {"dump": cmd_dump, "info": cmd_info}
    try:
        return handlers[args.command](args)
    except PackageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
