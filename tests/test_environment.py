import pytest

from lispflat.errors import LispArityError, LispTypeError, LispUnboundSymbol
from lispflat.types.environment import Environment
from lispflat.types.expression import List, Number, Symbol


def L(*items):
    return List(items)


@pytest.fixture
def outer():
    e = Environment()
    e.define(Symbol("x"), Number(1))
    e.define(Symbol("y"), Number(2))
    return e


def test_define_and_lookup(outer):
    assert outer.lookup(Symbol("x")) == Number(1)


def test_find_returns_innermost_frame(outer):
    inner = Environment(outer)
    inner.define(Symbol("x"), Number(10))
    assert inner.find(Symbol("x")) is inner
    assert inner.find(Symbol("y")) is outer
    assert inner.lookup(Symbol("x")) == Number(10)
    assert outer.lookup(Symbol("x")) == Number(1)


def test_find_unbound_raises(outer):
    with pytest.raises(LispUnboundSymbol):
        Environment(outer).find(Symbol("nope"))


def test_define_never_walks_the_chain(outer):
    inner = Environment(outer)
    inner.define(Symbol("y"), Number(20))
    assert outer.lookup(Symbol("y")) == Number(2)
    assert inner.lookup(Symbol("y")) == Number(20)


def test_set_mutates_the_owning_frame(outer):
    inner = Environment(outer)
    inner.set(Symbol("y"), Number(99))
    assert Symbol("y") not in inner.vars
    assert outer.lookup(Symbol("y")) == Number(99)


def test_set_unbound_raises(outer):
    with pytest.raises(LispUnboundSymbol):
        outer.set(Symbol("z"), Number(0))


def test_define_rejects_non_symbols(outer):
    with pytest.raises(LispTypeError):
        outer.define(Number(1), Number(2))


def test_bind_pairs_parameters_positionally(outer):
    frame = Environment.bind(L(Symbol("a"), Symbol("b")), [Number(3), Number(4)], outer)
    assert frame.outer is outer
    assert frame.lookup(Symbol("a")) == Number(3)
    assert frame.lookup(Symbol("b")) == Number(4)
    assert frame.lookup(Symbol("x")) == Number(1)


@pytest.mark.parametrize(
    "params,args",
    [
        (L(Symbol("a"), Symbol("b")), [Number(1)]),
        (L(Symbol("a")), [Number(1), Number(2)]),
        (L(), [Number(1)]),
    ]
)
def test_bind_arity_mismatch_raises(outer, params, args):
    with pytest.raises(LispArityError):
        Environment.bind(params, args, outer)


def test_bind_rejects_non_symbol_parameters(outer):
    with pytest.raises(LispTypeError):
        Environment.bind(L(Number(1)), [Number(1)], outer)


def test_str_and_repr(outer):
    inner = Environment(outer)
    inner.define(Symbol("a"), Number(5))
    assert str(inner) == "{a: 5} -> ..."
    assert repr(inner) == "<Environment chain: {a: 5} -> {x: 1, y: 2}>"
