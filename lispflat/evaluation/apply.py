"""Application engine for LispFlat.

Centralizes procedure application for the evaluator and for primitives that
call back into user code (`map`, `apply`):
- Closures get a fresh frame whose parent is the closure's defining
  environment, never the caller's; this is what makes scoping lexical.
- Primitives are called with the caller's environment and the argument list.
"""

from __future__ import annotations

from typing import Sequence

from lispflat.errors import LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import Closure, Expression, Primitive
from lispflat.evaluation import EvaluatorFn


def apply(
    proc: Expression,
    args: Sequence[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """Apply a procedure to already-evaluated arguments.

    Raises LispArityError (via Environment.bind) when a closure receives the
    wrong number of arguments, and LispTypeError when `proc` is not a procedure.
    """
    match proc:
        case Closure(params, body, closure_env):
            return evaluate_fn(body, Environment.bind(params, args, closure_env))
        case Primitive(_, fn):
            return fn(env, list(args))
        case _:
            raise LispTypeError(f"Cannot apply non-procedure {to_string(proc, nested=True)}")
