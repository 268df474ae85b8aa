from lispflat.errors import LispArityError, LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import NIL, Expression, Symbol
from lispflat.evaluation import EvaluatorFn


def define_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    (define name value)
    Always binds in the innermost frame. Returns NIL, which prints as nothing.
    """
    if len(operands) != 2:
        raise LispArityError("define requires exactly 2 arguments")

    name, val_expr = operands
    if not isinstance(name, Symbol):
        raise LispTypeError(f"define first argument must be a symbol, got {to_string(name, nested=True)}")
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return NIL
