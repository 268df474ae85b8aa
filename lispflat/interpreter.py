from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from lispflat.builtin.primitives import standard_env
from lispflat.evaluation.evaluator import evaluate
from lispflat.printer import to_string
from lispflat.reader.parser import TokenStream, tokenize
from lispflat.types.environment import Environment
from lispflat.types.expression import NIL, Expression

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating LispFlat code.
    Owns one global Environment, kept across calls so definitions persist.
    """

    def __init__(
        self,
        env: Optional[Environment] = None,
        eval_fn: Callable[[Expression, Environment], Expression] = evaluate,
    ):
        self.env: Environment = env if env is not None else standard_env()
        self.eval_fn = eval_fn

    def forms(self, code: Optional[str]) -> Iterator[Expression]:
        """Read and evaluate `code` one top-level form at a time, yielding each value."""
        for expr in TokenStream(tokenize(code)).parse_all():
            logger.debug("eval %s", to_string(expr))
            yield self.eval_fn(expr, self.env)

    def eval(self, code: Optional[str]) -> Expression:
        """Evaluate every form in `code`; return the value of the last one.

        Source with no forms evaluates to NIL. Errors propagate; forms that ran
        before the failing one keep their side effects.
        """
        result: Expression = NIL
        for result in self.forms(code):
            pass
        return result

    def eval_to_string(self, code: Optional[str]) -> str:
        return to_string(self.eval(code))

    def run(self, code: Optional[str]) -> Iterator[str]:
        """Yield the printable result of each form as soon as it is evaluated (empty ones skipped)."""
        for value in self.forms(code):
            text = to_string(value)
            if text:
                yield text
