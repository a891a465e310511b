from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from protowrite.encoder import EncodeError, marshal
from protowrite.loader import LoadError, load_file


def run(input_path: str, output_path: Optional[str], indent: Optional[str]) -> None:
    """Main pipeline: load the description, render, write."""
    try:
        document = load_file(input_path)
    except (OSError, LoadError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        data = marshal(document, indent=indent)
    except EncodeError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    if output_path is None:
        sys.stdout.write(data.decode("utf-8") + "\n")
        return

    Path(output_path).write_bytes(data + b"\n")
    print(f"Wrote {output_path} (package {document.package or '<none>'})", file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(
        description="Render a JSON document description as a proto3 schema",
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the JSON document description",
    )
    parser.add_argument(
        "--output",
        help="Path of the .proto file to write (default: stdout)",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Number of spaces per indentation level (default: 4)",
    )
    group.add_argument(
        "--tabs",
        action="store_true",
        help="Indent with tabs instead of spaces",
    )

    args = parser.parse_args()
    if args.tabs:
        indent = "\t"
    elif args.indent is not None:
        indent = " " * args.indent
    else:
        indent = None
    run(args.input, args.output, indent)


if __name__ == "__main__":
    main()
