from lispflat.errors import LispArityError, LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import Closure, Expression, List, Symbol
from lispflat.evaluation import EvaluatorFn


def lambda_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    # (lambda (params...) body): a single body form; use begin for sequencing.
    if len(operands) != 2:
        raise LispArityError("lambda requires a parameter list and a body")

    params, body = operands
    if not isinstance(params, List):
        raise LispTypeError(f"lambda parameters must be a list, got {to_string(params)}")
    for p in params:
        if not isinstance(p, Symbol):
            raise LispTypeError(f"lambda parameter must be a symbol, got {to_string(p, nested=True)}")

    return Closure(params, body, env)
