"""Convert expressions back into LispFlat source text.

The printer is the inverse of the reader for everything except procedures,
which print as an opaque placeholder. A top-level empty list prints as the
empty string: that is how `define`, `set!` and friends tell a REPL there is
nothing to show.
"""

from __future__ import annotations

import math
from typing import assert_never

from lispflat.types.expression import (
    Boolean,
    Closure,
    Expression,
    List,
    Number,
    Primitive,
    Symbol,
)

PROCEDURE_PLACEHOLDER = "<function>"


def format_number(value: float) -> str:
    """Render a double using at most 15 significant digits (4.0 -> "4")."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = f"{value:.15g}"
    return "0" if text == "-0" else text


def to_string(expr: Expression, nested: bool = False) -> str:
    match expr:
        case Boolean(value):
            return "#t" if value else "#f"
        case Number(value):
            return format_number(value)
        case Symbol(name):
            return name
        case Primitive() | Closure():
            return PROCEDURE_PLACEHOLDER
        case List(items):
            if not items:
                # Nested empties must survive a print/read round trip.
                return "()" if nested else ""
            return "(" + " ".join(to_string(x, nested=True) for x in items) + ")"
        case _:
            assert_never(expr)
