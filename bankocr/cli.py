"""Command-line interface for bank OCR decoding."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(
        prog="bank-ocr",
        description="Decode seven-segment account number entries",
    )
    parser.add_argument(
        "entries",
        help="Path to the entry file (3 lines of 27 characters per entry)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Append ERR/ILL/AMB to unusable entries in text output",
    )
    parser.add_argument(
        "--repair",
        action="store_true",
        help="Try single-stroke fixes for illegible or invalid entries",
    )
    parser.add_argument(
        "--pad",
        action="store_true",
        help="Right-pad short lines with spaces to 27 characters",
    )
    parser.add_argument(
        "--glyphs",
        help="Path to a custom glyph file rendering digits 0-9",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and per-entry details",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    entries_path = Path(args.entries)
    if not entries_path.exists():
        print(f"Error: Entry file not found: {entries_path}", file=sys.stderr)
        sys.exit(1)

    from bankocr.api import BankOCRReader

    try:
        reader = BankOCRReader(
            glyphs_file=args.glyphs,
            pad_short_lines=args.pad,
            repair=args.repair,
        )
        if args.format == "json":
            _print_json(reader.read_entries(entries_path), args.verbose)
        elif args.status or args.repair:
            print(reader.read_annotated(entries_path))
        else:
            print(reader.read(entries_path))
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _print_json(results, verbose):
    output = [r.to_dict() for r in results]
    if not verbose:
        for item in output:
            item.pop("confidence")
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
