#!/usr/bin/env python3
"""
Generate a sample bank OCR entry file.

Each account number is drawn as three 27-character rows using the
seven-segment digit glyphs. Numbers come from the command line, or are
drawn at random with --random.
"""

import argparse
import random
from pathlib import Path

from bankocr.models import MAX_ACCOUNT_NUMBER
from bankocr.rendering import render_entries

DEFAULT_OUTPUT = Path(__file__).parent.parent / "entries.txt"


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("accounts", nargs="*", help="9-digit account numbers")
    parser.add_argument(
        "--random",
        type=int,
        default=0,
        metavar="N",
        help="Append N random account numbers",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--output", "-o", default=str(DEFAULT_OUTPUT), help="Output file path"
    )
    args = parser.parse_args()

    rng = random.Random(args.seed)
    accounts = list(args.accounts)
    accounts += [rng.randint(0, MAX_ACCOUNT_NUMBER) for _ in range(args.random)]
    if not accounts:
        parser.error("give account numbers or --random N")

    output = Path(args.output)
    output.write_text(render_entries(accounts), encoding="utf-8")
    print(f"Wrote {len(accounts)} entries to {output}")


if __name__ == "__main__":
    main()
