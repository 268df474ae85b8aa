"""Built-in procedures for the LispFlat global environment.

This module defines arithmetic, comparison, list processing, predicates and
application helpers, and `register` which installs them as Primitive values.
Every primitive receives (env, args) with arguments already evaluated.
"""
from __future__ import annotations

import math
import operator
from typing import Callable

from lispflat.errors import LispArityError, LispTypeError
from lispflat.printer import to_string
from lispflat.types.environment import Environment
from lispflat.types.expression import (
    Boolean,
    Expression,
    List,
    Number,
    Primitive,
    Symbol,
    boolean,
    is_procedure,
)
from lispflat.evaluation.apply import apply as apply_engine
from lispflat.evaluation.evaluator import evaluate


def _expect_arity(name: str, args: list[Expression], n: int) -> None:
    if len(args) != n:
        plural = "argument" if n == 1 else "arguments"
        raise LispArityError(f"{name} requires exactly {n} {plural}, got {len(args)}")


def _number(name: str, x: Expression) -> float:
    if not isinstance(x, Number):
        raise LispTypeError(f"{name} expects a number, got {to_string(x, nested=True)}")
    return x.value


def _list(name: str, x: Expression) -> List:
    if not isinstance(x, List):
        raise LispTypeError(f"{name} expects a list, got {to_string(x, nested=True)}")
    return x


# -------------------------------
# Arithmetic
# -------------------------------
def _divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is +-inf, 0/0 is nan."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _remainder(a: float, b: float) -> float:
    """Truncated remainder (sign follows the dividend); nan where undefined."""
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _arithmetic(name: str, op: Callable[[float, float], float]):
    def primitive(env: Environment, args: list[Expression]) -> Expression:
        _expect_arity(name, args, 2)
        return Number(op(_number(name, args[0]), _number(name, args[1])))

    primitive.__name__ = f"prim_{name}"
    return primitive


def _comparison(name: str, op: Callable[[float, float], bool]):
    def primitive(env: Environment, args: list[Expression]) -> Expression:
        _expect_arity(name, args, 2)
        return boolean(op(_number(name, args[0]), _number(name, args[1])))

    primitive.__name__ = f"prim_{name}"
    return primitive


ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "%": _remainder,
}

COMPARISONS = {
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
    ">": operator.gt,
    ">=": operator.ge,
}


# -------------------------------
# List operations
# -------------------------------
def car(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("car", args, 1)
    xs = _list("car", args[0])
    if not xs:
        raise LispTypeError("car of empty list")
    return xs.head


def cdr(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("cdr", args, 1)
    xs = _list("cdr", args[0])
    if not xs:
        raise LispTypeError("cdr of empty list")
    return xs.rest


def cons(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("cons", args, 2)
    head, tail = args
    return List((head, *_list("cons", tail)))


def append(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("append", args, 2)
    return List(_list("append", args[0]).items + _list("append", args[1]).items)


def list_builtin(env: Environment, args: list[Expression]) -> Expression:
    return List(tuple(args))


def length(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("length", args, 1)
    return Number(len(_list("length", args[0])))


# -------------------------------
# Predicates
# -------------------------------
def _predicate(name: str, test: Callable[[Expression], bool]):
    def primitive(env: Environment, args: list[Expression]) -> Expression:
        _expect_arity(name, args, 1)
        return boolean(test(args[0]))

    primitive.__name__ = f"prim_{name}"
    return primitive


PREDICATES = {
    "list?": lambda x: isinstance(x, List),
    "null?": lambda x: isinstance(x, List) and not x,
    "number?": lambda x: isinstance(x, Number),
    "procedure?": is_procedure,
    "symbol?": lambda x: isinstance(x, Symbol),
    "boolean?": lambda x: isinstance(x, Boolean),
}


def logical_not(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("not", args, 1)
    x = args[0]
    if not isinstance(x, Boolean):
        raise LispTypeError(f"not expects a boolean, got {to_string(x, nested=True)}")
    return boolean(not x.value)


# -------------------------------
# Equality
# -------------------------------
def is_eq(a: Expression, b: Expression) -> bool:
    """Identity for procedures and non-empty lists, value equality for atoms."""
    if a is b:
        return True
    if isinstance(a, List) and isinstance(b, List):
        return not a and not b
    if is_procedure(a) or is_procedure(b):
        return False
    return a == b


def eq(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("eq?", args, 2)
    return boolean(is_eq(args[0], args[1]))


def equal(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("equal?", args, 2)
    # Dataclass equality is structural for lists and atoms, identity for procedures.
    return boolean(args[0] == args[1])


# -------------------------------
# Function application
# -------------------------------
def map_builtin(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("map", args, 2)
    fn, xs = args
    return List(tuple(apply_engine(fn, [x], env, evaluate) for x in _list("map", xs)))


def apply(env: Environment, args: list[Expression]) -> Expression:
    _expect_arity("apply", args, 2)
    fn, xs = args
    return apply_engine(fn, list(_list("apply", xs)), env, evaluate)


# -------------------------------
# Registration
# -------------------------------
def primitives() -> dict[str, Callable[[Environment, list[Expression]], Expression]]:
    table: dict[str, Callable[[Environment, list[Expression]], Expression]] = {}
    table.update({name: _arithmetic(name, op) for name, op in ARITHMETIC.items()})
    table.update({name: _comparison(name, op) for name, op in COMPARISONS.items()})
    table.update({name: _predicate(name, test) for name, test in PREDICATES.items()})
    table.update({
        "car": car,
        "cdr": cdr,
        "cons": cons,
        "append": append,
        "list": list_builtin,
        "length": length,
        "not": logical_not,
        "eq?": eq,
        "equal?": equal,
        "map": map_builtin,
        "apply": apply,
    })
    return table


def register(env: Environment) -> None:
    env.update({Symbol(name): Primitive(name, fn) for name, fn in primitives().items()})


def standard_env() -> Environment:
    """A fresh global environment holding every primitive."""
    env = Environment()
    register(env)
    return env
