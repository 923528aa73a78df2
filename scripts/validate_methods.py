#!/usr/bin/env python3
"""
Validate a Methods Section

Runs the methodology validator on a text file (or stdin) and prints the
ValidationRecord as camelCase JSON. Exit status is 0 when the text passes,
1 when it does not.

Usage:
    PYTHONPATH=src python scripts/validate_methods.py methods.txt
    pbpaste | PYTHONPATH=src python scripts/validate_methods.py -
"""

import argparse
import json
import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from medlit.validation import validate_methodology_text


def read_text(source: str) -> str:
    """Read the excerpt from a path, or from stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()
    with open(source, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check whether a text looks like a methods section")
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="Text file to validate (default: stdin)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent (default: 2)",
    )
    args = parser.parse_args(argv)

    try:
        text = read_text(args.source)
    except OSError as e:
        print(f"Cannot read {args.source}: {e}", file=sys.stderr)
        return 2

    record = validate_methodology_text(text)
    print(json.dumps(record.model_dump(by_alias=True, mode="json"), indent=args.indent))
    return 0 if record.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
