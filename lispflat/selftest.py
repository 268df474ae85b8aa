"""Built-in smoke test table, run with `lispflat --selftest`.

Cases run in order against one interpreter: later cases use definitions made by
earlier ones. An expected output of "" means the form prints nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lispflat.errors import LispError
from lispflat.interpreter import Interpreter

CASES: list[tuple[str, str]] = [
    ("(quote (testing 1 (2.0) -3.14e159))", "(testing 1 (2) -3.14e+159)"),
    ("(+ 2 2)", "4"),
    ("(+ (* 2 100) (* 1 10))", "210"),
    ("(if (> 6 5) (+ 1 1) (+ 2 2))", "2"),
    ("(if (< 6 5) (+ 1 1) (+ 2 2))", "4"),
    ("(define x 3)", ""),
    ("x", "3"),
    ("(+ x x)", "6"),
    ("(begin (define x 1) (set! x (+ x 1)) (+ x 1))", "3"),
    ("((lambda (x) (+ x x)) 5)", "10"),
    ("(define twice (lambda (x) (* 2 x)))", ""),
    ("(twice 5)", "10"),
    ("(define compose (lambda (f g) (lambda (x) (f (g x)))))", ""),
    ("((compose list twice) 5)", "(10)"),
    ("(define repeat (lambda (f) (compose f f)))", ""),
    ("((repeat twice) 5)", "20"),
    ("((repeat (repeat twice)) 5)", "80"),
    ("(define fact (lambda (n) (if (<= n 1) 1 (* n (fact (- n 1))))))", ""),
    ("(fact 3)", "6"),
    ("(fact 50)", "3.04140932017134e+64"),
    ("(define abs (lambda (n) ((if (> n 0) + -) 0 n)))", ""),
    ("(list (abs -3) (abs 0) (abs 3))", "(3 0 3)"),
    ("(not #f)", "#t"),
    ("(length (list 1 2 3))", "3"),
    ("(length ())", "0"),
    ("(null? ())", "#t"),
    ("(null? (list 0))", "#f"),
    ("(begin (define a (list 1 2 3 4)) a)", "(1 2 3 4)"),
    ("(car a)", "1"),
    ("(cdr a)", "(2 3 4)"),
    ("(car (cdr (cdr a)))", "3"),
    (
        "(define combine (lambda (f)"
        " (lambda (x y)"
        " (if (null? x) (quote ())"
        " (f (list (car x) (car y))"
        " ((combine f) (cdr x) (cdr y)))))))",
        "",
    ),
    ("(cons (list 1) (list 2 3))", "((1) 2 3)"),
    ("(cons 1 (list 2 3))", "(1 2 3)"),
    ("(define zip (combine cons))", ""),
    ("(zip (list 1 2 3 4) (list 5 6 7 8))", "((1 5) (2 6) (3 7) (4 8))"),
    ("(append (list 1) (list 2 3))", "(1 2 3)"),
    ("(append (list 1 2) (list 3))", "(1 2 3)"),
    ("((combine append) (list 1 2 3 4) (list 5 6 7 8))", "(1 5 2 6 3 7 4 8)"),
    (
        "(define riff-shuffle (lambda (deck) (begin"
        " (define take (lambda (n seq) (if (<= n 0) (quote ()) (cons (car seq) (take (- n 1) (cdr seq))))))"
        " (define drop (lambda (n seq) (if (<= n 0) seq (drop (- n 1) (cdr seq)))))"
        " (define mid (lambda (seq) (/ (length seq) 2)))"
        " ((combine append) (take (mid deck) deck) (drop (mid deck) deck)))))",
        "",
    ),
    ("(riff-shuffle (list 1 2 3 4 5 6 7 8))", "(1 5 2 6 3 7 4 8)"),
    ("((repeat riff-shuffle) (list 1 2 3 4 5 6 7 8))", "(1 3 5 7 2 4 6 8)"),
    ("(riff-shuffle (riff-shuffle (riff-shuffle (list 1 2 3 4 5 6 7 8))))", "(1 2 3 4 5 6 7 8)"),
]


@dataclass(frozen=True)
class SelfTestResult:
    source: str
    expected: str
    actual: str
    ok: bool
    error: Optional[str] = None


def run(interp: Optional[Interpreter] = None) -> list[SelfTestResult]:
    """For each (source, expected) case, check eval(parse(source)) prints as expected."""
    if interp is None:
        interp = Interpreter()
    results: list[SelfTestResult] = []
    for source, expected in CASES:
        try:
            actual = interp.eval_to_string(source)
        except LispError as ex:
            results.append(SelfTestResult(source, expected, "", False, f"{type(ex).__name__}: {ex}"))
            continue
        results.append(SelfTestResult(source, expected, actual, actual == expected))
    return results
