from __future__ import annotations

"""
Static indexer for LispFlat source files; never evaluates code.

A tolerant positional reader turns the buffer into nodes that remember where
they start, even when parentheses do not balance. From those nodes we build:
- definitions: top-level (define name ...), with lambda parameters when present
- problems: stray ')', unclosed '(', wrong operand counts for special forms

Tokens follow the interpreter's rule: parens are tokens of their own and any
other run of non-space characters is one token.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from lispflat.evaluation.special_forms import SpecialForm

TOKEN_REGEX = re.compile(r"[()]|[^\s()]+")

# Operand counts checked statically: (minimum, maximum or None for unbounded)
FORM_ARITY: Dict[SpecialForm, Tuple[int, Optional[int]]] = {
    SpecialForm.QUOTE: (1, 1),
    SpecialForm.IF: (3, 3),
    SpecialForm.DEFINE: (2, 2),
    SpecialForm.SET: (2, 2),
    SpecialForm.LAMBDA: (2, 2),
    SpecialForm.BEGIN: (1, None),
}


@dataclass
class Node:
    line: int
    col: int
    token: Optional[str] = None  # atoms only
    children: List["Node"] = field(default_factory=list)
    closed: bool = True

    @property
    def is_list(self) -> bool:
        return self.token is None


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        if self.kind == "function":
            return "(" + " ".join([self.name, *self.params]) + ")"
        return self.name


@dataclass
class Problem:
    message: str
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[Problem] = field(default_factory=list)
    forms: List[Node] = field(default_factory=list)


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        yield m.group(0), m.start()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def read_nodes(text: str, problems: List[Problem]) -> List[Node]:
    """Read every top-level form, recording paren problems instead of raising."""
    top: List[Node] = []
    stack: List[Node] = []
    for tok, offset in _iter_tokens(text):
        line, col = _position_from_offset(text, offset)
        if tok == "(":
            node = Node(line, col, closed=False)
            (stack[-1].children if stack else top).append(node)
            stack.append(node)
        elif tok == ")":
            if not stack:
                problems.append(Problem("unexpected ')'", line, col))
                continue
            stack.pop().closed = True
        else:
            (stack[-1].children if stack else top).append(Node(line, col, token=tok))
    for node in stack:
        problems.append(Problem("unexpected EOF while reading: unclosed '('", node.line, node.col))
    return top


def _check_forms(node: Node, problems: List[Problem]) -> None:
    if not node.is_list:
        return
    if node.children and not node.children[0].is_list:
        head = node.children[0]
        form = next((f for f in SpecialForm if f.value == head.token), None)
        if form is not None:
            lo, hi = FORM_ARITY[form]
            n = len(node.children) - 1
            if node.closed and (n < lo or (hi is not None and n > hi)):
                expected = str(lo) if lo == hi else f"at least {lo}"
                problems.append(
                    Problem(f"{form.value} expects {expected} operand(s), got {n}", head.line, head.col, len(head.token))
                )
            if form is SpecialForm.QUOTE:
                # quoted data is not code
                return
    for child in node.children:
        _check_forms(child, problems)


def _definition(node: Node) -> Optional[SymbolDef]:
    if not node.is_list or len(node.children) < 2:
        return None
    head, name = node.children[0], node.children[1]
    if head.token != SpecialForm.DEFINE.value or name.is_list:
        return None
    value = node.children[2] if len(node.children) > 2 else None
    if (
        value is not None
        and value.is_list
        and len(value.children) >= 2
        and value.children[0].token == SpecialForm.LAMBDA.value
        and value.children[1].is_list
    ):
        params = [p.token for p in value.children[1].children if not p.is_list]
        return SymbolDef(name.token, "function", name.line, name.col, params)
    return SymbolDef(name.token, "var", name.line, name.col)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    idx.forms = read_nodes(text, idx.problems)
    for form in idx.forms:
        _check_forms(form, idx.problems)
        sdef = _definition(form)
        if sdef is not None:
            idx.symbols[sdef.name] = sdef
    idx.problems.sort(key=lambda p: (p.line, p.col))
    return idx


def extract_word_at(text: str, line_no: int, character: int) -> Tuple[Optional[str], int]:
    """Return the token under the cursor and the column where it starts."""
    lines = text.splitlines(True)
    if line_no >= len(lines):
        return None, character
    line = lines[line_no]
    start = min(character, len(line))
    while start > 0 and line[start - 1] not in " \t()\n\r":
        start -= 1
    end = character
    while end < len(line) and line[end] not in " \t()\n\r":
        end += 1
    word = line[start:end]
    return (word if word else None), start


# Signatures for hover and completion without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ a b)",
    "-": "(- a b)",
    "*": "(* a b)",
    "/": "(/ a b)",
    "%": "(% a b)",
    "<": "(< a b)",
    "<=": "(<= a b)",
    "=": "(= a b)",
    ">": "(> a b)",
    ">=": "(>= a b)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "cons": "(cons x xs)",
    "append": "(append xs ys)",
    "list": "(list x ...)",
    "length": "(length xs)",
    "list?": "(list? x)",
    "null?": "(null? x)",
    "number?": "(number? x)",
    "procedure?": "(procedure? x)",
    "symbol?": "(symbol? x)",
    "boolean?": "(boolean? x)",
    "not": "(not b)",
    "eq?": "(eq? a b)",
    "equal?": "(equal? a b)",
    "map": "(map f xs)",
    "apply": "(apply f args)",
}

SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    SpecialForm.QUOTE.value: "(quote datum)",
    SpecialForm.IF.value: "(if test consequent alternative)",
    SpecialForm.DEFINE.value: "(define name value)",
    SpecialForm.SET.value: "(set! name value)",
    SpecialForm.LAMBDA.value: "(lambda (params ...) body)",
    SpecialForm.BEGIN.value: "(begin expr ...)",
}
