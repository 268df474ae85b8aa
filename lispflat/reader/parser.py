"""
  Lisp Reader: Tokenizer and Parser

- Tokenizing pads every paren with spaces and splits on whitespace.
- Parsing is recursive descent over a token queue, consumed destructively.
- Emits Expression variants directly; there is no separate AST:

    - numeric literal -> Number (always a double)
    - #t / #f         -> Boolean
    - "" (empty)      -> NIL
    - anything else   -> Symbol
    - ( ... )         -> List
"""

from __future__ import annotations

import re
from collections import deque
from typing import Iterable, Iterator, Optional

from lispflat.errors import LispSyntaxError
from lispflat.types.expression import FALSE, NIL, TRUE, Expression, List, Number, Symbol

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def tokenize(source: Optional[str]) -> deque[str]:
    """Convert a string into a queue of tokens."""
    if source is None:
        raise LispSyntaxError("no code")
    return deque(source.replace("(", " ( ").replace(")", " ) ").split())


def atom(token: str) -> Expression:
    """Numbers become numbers; #t and #f become booleans; every other token is a symbol."""
    if NUMBER_RE.fullmatch(token):
        return Number(float(token))
    if token == "#t":
        return TRUE
    if token == "#f":
        return FALSE
    if token == "":
        return NIL
    return Symbol(token)


class TokenStream:
    def __init__(self, tokens: Iterable[str]):
        self.tokens: deque[str] = tokens if isinstance(tokens, deque) else deque(tokens)

    def peek(self) -> Optional[str]:
        return self.tokens[0] if self.tokens else None

    def advance(self) -> str:
        if not self.tokens:
            raise LispSyntaxError("unexpected EOF while reading")
        return self.tokens.popleft()

    def at_end(self) -> bool:
        return not self.tokens

    def parse_expr(self) -> Expression:
        """Read exactly one expression; later tokens stay in the queue."""
        token = self.advance()
        if token == "(":
            items = []
            while self.peek() != ")":
                # advance() raises on EOF inside an open list
                items.append(self.parse_expr())
            self.advance()
            return List(tuple(items))
        if token == ")":
            raise LispSyntaxError("unexpected ')'")
        return atom(token)

    def parse_all(self) -> Iterator[Expression]:
        while not self.at_end():
            yield self.parse_expr()


def parse(source: Optional[str]) -> Expression:
    """Read the first Scheme expression from a string."""
    return TokenStream(tokenize(source)).parse_expr()


def parse_all(source: Optional[str]) -> list[Expression]:
    return list(TokenStream(tokenize(source)).parse_all())
