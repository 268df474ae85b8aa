from lispflat.errors import LispArityError
from lispflat.types.environment import Environment
from lispflat.types.expression import Expression
from lispflat.evaluation import EvaluatorFn


def begin_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if not operands:
        raise LispArityError("begin requires at least 1 expression")
    for e in operands[:-1]:
        evaluate_fn(e, env)
    return evaluate_fn(operands[-1], env)
