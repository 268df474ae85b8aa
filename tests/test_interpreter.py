import pytest

from lispflat import selftest
from lispflat.errors import LispSyntaxError, LispTypeError, LispUnboundSymbol
from lispflat.interpreter import Interpreter
from lispflat.types.expression import NIL, Number, Symbol


def test_eval_returns_last_form(interp):
    assert interp.eval("(define x 3) (+ x 1)") == Number(4)


def test_eval_of_empty_source_is_nil(interp):
    assert interp.eval("") == NIL
    assert interp.eval("   \n ") == NIL


def test_eval_none_is_a_syntax_error(interp):
    with pytest.raises(LispSyntaxError):
        interp.eval(None)


def test_definitions_persist_across_calls(interp):
    interp.eval("(define twice (lambda (x) (* 2 x)))")
    assert interp.eval_to_string("(twice 5)") == "10"


def test_interpreters_do_not_share_globals():
    a, b = Interpreter(), Interpreter()
    a.eval("(define only-in-a 1)")
    with pytest.raises(LispUnboundSymbol):
        b.eval("only-in-a")


def test_run_collects_printable_results(interp):
    assert list(interp.run("(define x 2) x (list x x) (set! x 3) x")) == ["2", "(2 2)", "3"]


def test_run_yields_each_result_before_a_later_failure(interp):
    results = interp.run("(+ 1 1) (define z 4) (car 5) z")
    assert next(results) == "2"
    with pytest.raises(LispTypeError):
        next(results)
    assert interp.env.lookup(Symbol("z")) == Number(4)


def test_forms_before_a_syntax_error_still_run(interp):
    with pytest.raises(LispSyntaxError):
        interp.eval("(define y 7) (+ y")
    assert interp.env.lookup(Symbol("y")) == Number(7)


def test_custom_eval_fn_is_used():
    seen = []

    def tracing_eval(expr, env):
        seen.append(expr)
        return NIL

    Interpreter(eval_fn=tracing_eval).eval("1 2")
    assert seen == [Number(1), Number(2)]


def test_selftest_table_passes():
    results = selftest.run()
    failures = [r for r in results if not r.ok]
    assert not failures, failures
    assert len(results) == len(selftest.CASES)


def test_selftest_reports_errors_instead_of_raising():
    interp = Interpreter()
    interp.eval("(define car 1)")
    results = selftest.run(interp)
    broken = [r for r in results if r.source == "(car a)"]
    assert broken and not broken[0].ok
    assert broken[0].error.startswith("LispTypeError")
