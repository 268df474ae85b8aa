"""Runtime environment for LispFlat.

The Environment stores bindings of Symbols to evaluated expressions and supports
nested scopes via an `outer` link. Frames are never copied: every closure built
while a frame was innermost holds a reference to that same frame, so `set!`
through one closure is visible through all of them.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

from lispflat.errors import LispArityError, LispTypeError, LispUnboundSymbol
from lispflat.printer import to_string
from lispflat.types.expression import Expression, List, Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Expression] = {}
        self.outer: Environment | None = outer

    @classmethod
    def bind(
        cls, params: List, args: Sequence[Expression], outer: Environment | None
    ) -> Environment:
        """Create a frame pairing `params` with `args` positionally.

        Raises LispArityError when the counts differ and LispTypeError when a
        parameter is not a Symbol.
        """
        if len(params) != len(args):
            raise LispArityError(
                f"Expected {len(params)} argument(s), got {len(args)}: {to_string(params)}"
            )
        frame = cls(outer)
        for param, arg in zip(params, args):
            if not isinstance(param, Symbol):
                raise LispTypeError(f"Parameter must be a symbol, got {to_string(param)}")
            frame.vars[param] = arg
        return frame

    def define(self, name: Symbol, value: Expression) -> None:
        """Bind `name` in this frame, shadowing any outer binding."""
        if not isinstance(name, Symbol):
            raise LispTypeError(f"Cannot define {to_string(name)} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Environment:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        raise LispUnboundSymbol(f"Unbound symbol {symbol}")

    def set(self, name: Symbol, value: Expression) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises LispUnboundSymbol if the symbol is not found.
        """
        if not isinstance(name, Symbol):
            raise LispTypeError(f"Cannot set {to_string(name)}: not a symbol")
        self.find(name).vars[name] = value

    def lookup(self, name: Symbol) -> Expression:
        return self.find(name).vars[name]

    def update(self, mapping: dict[Symbol, Expression]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {to_string(v)}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            first = True
            while env is not None:
                if not first:
                    buffer.write(" -> ")
                env._write_vars(buffer)
                first = False
                env = env.outer
            buffer.write(">")
            return buffer.getvalue()
