from lispflat.errors import LispArityError
from lispflat.types.environment import Environment
from lispflat.types.expression import Expression
from lispflat.evaluation import EvaluatorFn


def quote_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """(quote datum) returns datum unevaluated."""
    if len(operands) != 1:
        raise LispArityError("quote requires exactly 1 argument")
    return operands[0]
