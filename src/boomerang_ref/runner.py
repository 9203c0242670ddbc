from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from .evaluator import Evaluator
from .logging_utils import configure_logging, logger
from .nodes import Node
from .parser import parse
from .types import BoomerangRuntimeError

DEFAULT_SOURCE = "source.bmg"
DEBUG_TRACE_ENV = "BOOMERANG_DEBUG_PY_TRACE"

def run(src: str) -> list[Node]:
    """Parse and evaluate `src`; returns the top-level values in order."""
    statements = parse(src)
    return Evaluator(statements).evaluate()

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None => the default source file.
    - "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None:
        default = Path(DEFAULT_SOURCE)
        if not default.exists():
            raise SystemExit(f"{DEFAULT_SOURCE} not found; pass a path, '-' or source text")
        return default.read_text(encoding="utf-8")

    if arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def main(argv: Optional[list[str]] = None) -> None:
    configure_logging()

    print_results = False
    arg = None

    for token in sys.argv[1:] if argv is None else argv:
        if token == "--print-results":
            print_results = True
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg)

    try:
        results = run(source)
    except BoomerangRuntimeError as exc:
        if os.getenv(DEBUG_TRACE_ENV):
            raise
        logger.debug("program failed: {}", exc.message)
        print(exc, file=sys.stderr)
        raise SystemExit(1) from None

    if print_results:
        for value in results:
            print(value.render())

if __name__ == "__main__":
    main()
