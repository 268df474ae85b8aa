"""Expression model for LispFlat.

Every value that flows through the reader, evaluator and printer is one of the
variants defined here. Source code and runtime data share the representation:
a parsed `(+ 1 2)` is a `List` of a `Symbol` and two `Number`s, and the same
`List` type is the only compound value a program can build.

    - Number     -> double precision float (no int/float split)
    - Boolean    -> #t / #f
    - Symbol     -> identifier, interned name
    - List       -> ordered, immutable tuple of expressions; () is NIL
    - Primitive  -> built-in procedure implemented in Python
    - Closure    -> user procedure: params + body + defining environment
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator, TypeAlias, Union

if TYPE_CHECKING:
    from lispflat.types.environment import Environment


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def __post_init__(self):
        # All numeric literals are doubles, whatever the caller passed in.
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool


@dataclass(frozen=True, slots=True)
class Symbol:
    name: str

    def __post_init__(self):
        object.__setattr__(self, "name", sys.intern(self.name))

    def __str__(self):
        return self.name


@dataclass(frozen=True, slots=True)
class List:
    items: tuple[Expression, ...] = ()

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Expression]:
        return iter(self.items)

    def __getitem__(self, i: int) -> Expression:
        return self.items[i]

    @property
    def head(self) -> Expression:
        return self.items[0]

    @property
    def rest(self) -> List:
        return List(self.items[1:])


PrimitiveFn: TypeAlias = Callable[["Environment", list["Expression"]], "Expression"]


@dataclass(frozen=True, eq=False, slots=True)
class Primitive:
    """A procedure implemented in Python: fn(env, args) -> Expression."""

    name: str
    fn: PrimitiveFn = field(repr=False)


@dataclass(frozen=True, eq=False, slots=True)
class Closure:
    """A first-class lambda with formal parameters, body, and closure env."""

    params: List
    body: Expression
    env: Environment = field(repr=False)


Procedure: TypeAlias = Union[Primitive, Closure]
Expression: TypeAlias = Union[Number, Boolean, Symbol, List, Primitive, Closure]

NIL = List(())
TRUE = Boolean(True)
FALSE = Boolean(False)


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def is_procedure(x: Expression) -> bool:
    return isinstance(x, (Primitive, Closure))
