from lispflat.errors import LispArityError, LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import Boolean, Expression
from lispflat.evaluation import EvaluatorFn


def if_form(
    operands: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if len(operands) != 3:
        raise LispArityError("if requires a test, a consequent and an alternative")

    test, consequent, alternative = operands
    cond = evaluate_fn(test, env)
    # No truthiness: only #t and #f may steer an if.
    if not isinstance(cond, Boolean):
        raise LispTypeError(f"if test must be a boolean, got {to_string(cond, nested=True)}")

    return evaluate_fn(consequent if cond.value else alternative, env)
