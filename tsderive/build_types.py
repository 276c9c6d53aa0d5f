#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tsderive.errors import DeriveError
from tsderive.exporter import DEFAULT_OUTPUT, export_declarations
from tsderive.ir import DeriveConfig


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tsderive",
        description=(
            "Generate TypeScript interface declarations from record classes "
            "defined in Python source files."
        ),
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="Python files containing @typescript_interface classes.",
    )
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT),
        help="Declaration file to write (default: target/types.d.ts).",
    )
    parser.add_argument(
        "--all",
        dest="include_all",
        action="store_true",
        help="Export every top-level class with annotated fields, not only marked ones.",
    )
    parser.add_argument(
        "--export",
        dest="exported",
        action="store_true",
        help="Emit 'export interface' declarations.",
    )
    parser.add_argument(
        "--merge",
        action="store_true",
        help=(
            "Keep declarations already present in the output file and replace "
            "only the records generated by this run."
        ),
    )
    parser.add_argument(
        "--strict-generics",
        action="store_true",
        help="Fail on generic or tuple types with more than one argument instead of truncating.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    config = DeriveConfig(
        include_all=args.include_all,
        exported=args.exported,
        strict_generics=args.strict_generics,
    )
    output_path = Path(args.output).resolve()

    try:
        declarations = export_declarations(
            args.sources,
            output_path,
            config=config,
            merge=args.merge,
        )
    except (DeriveError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Generated TypeScript declarations: {output_path}")
    for name in declarations.names():
        print(f"- {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
