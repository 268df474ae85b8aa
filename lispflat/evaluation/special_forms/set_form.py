from lispflat.errors import LispArityError, LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import NIL, Expression, Symbol
from lispflat.evaluation import EvaluatorFn


def set_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if len(operands) != 2:
        raise LispArityError("set! requires exactly 2 arguments: (set! var value)")
    var_sym, val_expr = operands
    if not isinstance(var_sym, Symbol):
        raise LispTypeError(f"set! first argument must be a symbol, got {to_string(var_sym, nested=True)}")
    value = evaluate_fn(val_expr, env)
    env.set(var_sym, value)
    return NIL
