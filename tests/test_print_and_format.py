import math

import pytest
from hypothesis import given, strategies as st

from lispflat.builtin.primitives import standard_env
from lispflat.printer import PROCEDURE_PLACEHOLDER, format_number, to_string
from lispflat.reader.parser import NUMBER_RE, parse
from lispflat.types.expression import FALSE, NIL, TRUE, Closure, List, Number, Primitive, Symbol


def L(*items):
    return List(items)


@pytest.mark.parametrize(
    "value,expected",
    [
        (4.0, "4"),
        (-3.0, "-3"),
        (0.5, "0.5"),
        (210.0, "210"),
        (-3.14e159, "-3.14e+159"),
        (3.0414093201713376e64, "3.04140932017134e+64"),
        (1e16, "1e+16"),
        (-0.0, "0"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
        (math.nan, "nan"),
    ]
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "expr,expected",
    [
        (TRUE, "#t"),
        (FALSE, "#f"),
        (Number(42), "42"),
        (Symbol("twice"), "twice"),
        (NIL, ""),
        (L(Number(1), Number(2), Number(3)), "(1 2 3)"),
        (L(L(Number(1)), Number(2), Number(3)), "((1) 2 3)"),
        (L(Symbol("a"), NIL, TRUE), "(a () #t)"),
    ]
)
def test_to_string(expr, expected):
    assert to_string(expr) == expected


def test_procedures_print_as_placeholder():
    env = standard_env()
    prim = env.lookup(Symbol("car"))
    assert isinstance(prim, Primitive)
    closure = Closure(L(Symbol("x")), Symbol("x"), env)
    assert to_string(prim) == PROCEDURE_PLACEHOLDER
    assert to_string(L(closure)) == f"({PROCEDURE_PLACEHOLDER})"


# -------------------------------
# Strategies
# -------------------------------
symbol_strat = (
    st.from_regex(r"[a-z!?*<>=+\-][a-z0-9!?*<>=+\-]{0,8}", fullmatch=True)
    .filter(lambda s: not NUMBER_RE.fullmatch(s))
    .map(Symbol)
)
number_strat = st.one_of(
    st.integers(min_value=-10**6, max_value=10**6),
    st.floats(min_value=-1e300, max_value=1e300, allow_nan=False, allow_infinity=False),
).map(Number)
atom_strat = st.one_of(symbol_strat, number_strat, st.booleans().map(lambda b: TRUE if b else FALSE))
sexpr_strat = st.recursive(
    atom_strat,
    lambda children: st.lists(children, max_size=4).map(lambda xs: List(tuple(xs))),
    max_leaves=20,
)
list_strat = st.lists(sexpr_strat, min_size=1, max_size=5).map(lambda xs: List(tuple(xs)))


@given(list_strat)
def test_print_read_round_trip_is_stable(expr):
    printed = to_string(expr)
    assert to_string(parse(printed)) == printed


@given(st.lists(st.one_of(symbol_strat, st.integers(-1000, 1000).map(Number)), min_size=1, max_size=6))
def test_print_read_round_trip_preserves_tree(items):
    expr = List(tuple(items))
    assert parse(to_string(expr)) == expr
