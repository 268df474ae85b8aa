import pytest

from lispflat.__main__ import main
from lispflat.config import Settings
from lispflat.interpreter import Interpreter
from lispflat.evaluation.evaluator import evaluate
from lispflat.repl import eval_and_print, paren_depth, read_chunk, repl, run_file
from lispflat.types.expression import Symbol


def feeder(lines):
    """read_line stand-in: records prompts, raises EOFError when exhausted."""
    it = iter(lines)
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line, prompts


@pytest.mark.parametrize(
    "text,depth",
    [
        ("", 0),
        ("(+ 1 2)", 0),
        ("(define f (lambda (x)", 2),
        ("(a))", -1),
        (")(", -1),
    ]
)
def test_paren_depth(text, depth):
    assert paren_depth(text) == depth


def test_read_chunk_collects_until_balanced():
    read_line, prompts = feeder(["(define f", "  (lambda (x)", "    (* x 2)))", "(f 1)"])
    chunk = read_chunk(read_line, "> ", "... ")
    assert chunk == "(define f\n  (lambda (x)\n    (* x 2)))"
    assert prompts == ["> ", "... ", "... "]


def test_read_chunk_returns_surplus_close_immediately():
    read_line, prompts = feeder(["1)", "never read"])
    assert read_chunk(read_line, "> ", "... ") == "1)"
    assert prompts == ["> "]


def test_read_chunk_eof_mid_form():
    read_line, _ = feeder(["(+ 1"])
    with pytest.raises(EOFError):
        read_chunk(read_line, "> ", "... ")


def test_repl_prints_results_and_errors_then_continues():
    read_line, prompts = feeder([
        "(define x 3)",
        "x",
        "(car (quote ()))",
        "(+ x",
        "  1)",
        ")",
        "undefined-symbol",
        "",
        "(list x x)",
    ])
    out = []
    repl(Interpreter(), Settings(prompt="> ", continuation_prompt=". "), read_line, out.append)
    assert out == [
        "3",
        "LispTypeError: car of empty list",
        "4",
        "LispSyntaxError: unexpected ')'",
        "LispUnboundSymbol: Unbound symbol undefined-symbol",
        "(3 3)",
        "",
    ]
    assert ". " in prompts


def test_repl_reports_recursion_errors():
    read_line, _ = feeder([
        "(define down (lambda (n) (if (= n 0) 0 (+ 1 (down (- n 1))))))",
        "(down 100000)",
        "(down 3)",
    ])
    out = []
    repl(Interpreter(), Settings(), read_line, out.append)
    assert out == ["RecursionError: maximum recursion depth exceeded", "3", ""]


def test_eval_and_print_writes_results_before_the_error():
    out = []
    assert not eval_and_print(Interpreter(), "(+ 1 1) (car (quote ())) (+ 2 2)", out.append)
    assert out == ["2", "LispTypeError: car of empty list"]


def test_repl_survives_an_interrupted_evaluation():
    def interruptible(expr, env):
        if expr == Symbol("slow"):
            raise KeyboardInterrupt
        return evaluate(expr, env)

    read_line, _ = feeder(["slow", "(+ 1 2)"])
    out = []
    repl(Interpreter(eval_fn=interruptible), Settings(), read_line, out.append)
    assert out == ["", "3", ""]


def test_run_file(tmp_path):
    src = tmp_path / "prog.lisp"
    src.write_text("(define sq (lambda (x) (* x x)))\n(sq 7)\n(list 1 2)\n")
    out = []
    assert run_file(str(src), write=out.append)
    assert out == ["49", "(1 2)"]


def test_run_file_reports_failure(tmp_path):
    src = tmp_path / "bad.lisp"
    src.write_text("(+ 1 2)\n(car 5)\n")
    out = []
    assert not run_file(str(src), write=out.append)
    assert out == ["3", "LispTypeError: car expects a list, got 5"]


def test_main_selftest_exit_status(capsys):
    assert main(["--selftest"]) == 0
    captured = capsys.readouterr().out
    assert "(+ 2 2) => 4" in captured
    assert "(define x 3) => None" in captured
    assert "0 failed" in captured


def test_main_runs_a_file(tmp_path, capsys):
    src = tmp_path / "prog.lisp"
    src.write_text("(+ 2 2)")
    assert main([str(src)]) == 0
    assert capsys.readouterr().out == "4\n"


def test_main_rejects_an_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "chatty", "--selftest"])
    assert exc.value.code == 2
    assert "unknown log level: CHATTY" in capsys.readouterr().err


def test_main_rejects_a_bad_recursion_limit(monkeypatch, capsys):
    monkeypatch.setenv("LISPFLAT_RECURSION_LIMIT", "lots")
    with pytest.raises(SystemExit) as exc:
        main(["--selftest"])
    assert exc.value.code == 2
    assert "LISPFLAT_RECURSION_LIMIT must be an integer" in capsys.readouterr().err
