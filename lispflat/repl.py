"""Console read-eval-print loop for LispFlat.

Input is collected line by line until parentheses balance, so a definition can
span several lines. Each complete chunk may hold several forms; every non-empty
result is printed. Errors are reported and the loop carries on.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from lispflat.config import Settings
from lispflat.errors import LispError
from lispflat.interpreter import Interpreter

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Write = Callable[[str], None]


def paren_depth(text: str) -> int:
    """Open minus close parens; negative means a surplus ')'."""
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return depth
    return depth


def read_chunk(read_line: ReadLine, prompt: str, continuation_prompt: str) -> str:
    """Read lines until the accumulated text has balanced parentheses.

    Raises EOFError when input ends, even with a partial chunk pending.
    """
    lines = [read_line(prompt)]
    while paren_depth("\n".join(lines)) > 0:
        lines.append(read_line(continuation_prompt))
    return "\n".join(lines)


def format_error(ex: BaseException) -> str:
    if isinstance(ex, RecursionError):
        return "RecursionError: maximum recursion depth exceeded"
    return f"{type(ex).__name__}: {ex}"


def eval_and_print(interp: Interpreter, source: str, write: Write) -> bool:
    """Evaluate one chunk, printing results or the error. Returns False on error."""
    try:
        for text in interp.run(source):
            write(text)
    except (LispError, RecursionError) as ex:
        logger.debug("evaluation failed", exc_info=True)
        write(format_error(ex))
        return False
    return True


def repl(
    interp: Optional[Interpreter] = None,
    settings: Optional[Settings] = None,
    read_line: ReadLine = input,
    write: Write = print,
) -> None:
    """A prompt-read-eval-print loop. Returns when input is exhausted."""
    if interp is None:
        interp = Interpreter()
    if settings is None:
        settings = Settings()
    while True:
        try:
            source = read_chunk(read_line, settings.prompt, settings.continuation_prompt)
        except EOFError:
            write("")
            return
        except KeyboardInterrupt:
            write("")
            continue
        if not source.strip():
            continue
        try:
            eval_and_print(interp, source, write)
        except KeyboardInterrupt:
            write("")


def run_file(path: str, interp: Optional[Interpreter] = None, write: Write = print) -> bool:
    """Evaluate a source file top to bottom. Returns False if any form failed."""
    if interp is None:
        interp = Interpreter()
    with open(path, encoding="utf-8") as f:
        source = f.read()
    logger.debug("running %s", path)
    return eval_and_print(interp, source, write)
