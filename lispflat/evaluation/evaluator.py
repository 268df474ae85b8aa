"""Core evaluator for the LispFlat interpreter.

A plain recursive tree walker. Dispatch order is fixed: symbol lookup,
self-evaluating atoms, special forms, then procedure application. There is no
tail-call elimination, so every nested call uses one Python stack frame and deep
non-tail recursion ends in RecursionError.
"""

from __future__ import annotations

from typing import assert_never

from lispflat.types.environment import Environment
from lispflat.types.expression import (
    Boolean,
    Closure,
    Expression,
    List,
    Number,
    Primitive,
    Symbol,
)
from lispflat.evaluation.apply import apply
from lispflat.evaluation.special_forms import SPECIAL_FORMS, SpecialForm


def evaluate(expr: Expression, env: Environment) -> Expression:
    """Evaluate an expression in an environment."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case Number() | Boolean() | Primitive() | Closure():
            return expr
        case List(items):
            if not items:
                return expr
            head, *operands = items
            form = SpecialForm.of(head)
            if form is not None:
                return SPECIAL_FORMS[form](tuple(operands), env, evaluate)
            proc = evaluate(head, env)
            # Arguments are evaluated strictly left to right.
            args = [evaluate(arg, env) for arg in operands]
            return apply(proc, args, env, evaluate)
        case _:
            assert_never(expr)
