from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from lispflat import __version__
from lispflat.config import load_settings
from lispflat.interpreter import Interpreter
from lispflat.repl import repl, run_file
from lispflat import selftest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lispflat", description="A small Scheme-flavoured Lisp.")
    parser.add_argument("file", nargs="?", help="source file to evaluate instead of starting the REPL")
    parser.add_argument("--selftest", action="store_true", help="run the built-in test table and exit")
    parser.add_argument("--log-level", default=None, help="logging level (overrides LISPFLAT_LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_selftest(interp: Interpreter) -> int:
    failures = 0
    for result in selftest.run(interp):
        line = f"{result.source} => {result.actual or 'None'}"
        if not result.ok:
            failures += 1
            line += f" !! => {result.error or result.expected}"
        print(line)
    print(f"{len(selftest.CASES) - failures} passed, {failures} failed")
    return 1 if failures else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as ex:
        parser.error(str(ex))
    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {level}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.recursion_limit is not None:
        sys.setrecursionlimit(settings.recursion_limit)

    interp = Interpreter()
    if args.selftest:
        return run_selftest(interp)
    if args.file:
        return 0 if run_file(args.file, interp) else 1
    repl(interp, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
