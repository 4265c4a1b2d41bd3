"""CLI entry point: `queryir file.sexp` or `python -m queryir file.sexp`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .ir.serialization import deserialize_ir, serialize_ir
    from .shared.errors import IRDeserializationError
    from .utils import config

    prog = config.PROGRAM_NAME
    parser = argparse.ArgumentParser(
        prog=prog, description="Read one serialized IR expression and print it.")
    parser.add_argument("file", type=Path, nargs="?",
                        help="Path to S-expression file (default: standard input)")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--compact", action="store_true",
                        help="Re-serialize on a single line")
    output.add_argument("--render", action="store_true",
                        help="Print the expression's textual rendering, e.g. Bind(f, 1, 2)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.file is None:
        text = sys.stdin.read()
    else:
        path = args.file.resolve()
        if not path.is_file():
            sys.stderr.write(f"{prog}: error: not a file: {path}\n")
            return 1
        try:
            text = path.read_text(encoding=config.DEFAULT_FILE_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"{prog}: error: could not read file: {e}\n")
            return 1

    try:
        node = deserialize_ir(text)
    except IRDeserializationError as e:
        sys.stderr.write(f"{prog}: error: {e}\n")
        return 1

    if args.render:
        sys.stdout.write(f"{node}\n")
    else:
        sys.stdout.write(serialize_ir(node, pretty=not args.compact) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
