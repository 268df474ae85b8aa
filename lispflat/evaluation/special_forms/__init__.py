"""Registry of special forms for the LispFlat evaluator.

Special forms are a closed set of keywords. The evaluator recognises them
before any symbol lookup, so a user binding named `if` can never shadow the
form. Each keyword maps to a handler taking the unevaluated operands.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from lispflat.types.environment import Environment
from lispflat.types.expression import Expression, Symbol
from lispflat.evaluation import EvaluatorFn
from lispflat.evaluation.special_forms.quote_form import quote_form
from lispflat.evaluation.special_forms.if_form import if_form
from lispflat.evaluation.special_forms.define_form import define_form
from lispflat.evaluation.special_forms.set_form import set_form
from lispflat.evaluation.special_forms.lambda_form import lambda_form
from lispflat.evaluation.special_forms.begin_form import begin_form

SpecialFormHandler = Callable[[tuple[Expression, ...], Environment, EvaluatorFn], Expression]


class SpecialForm(Enum):
    QUOTE = "quote"
    IF = "if"
    DEFINE = "define"
    SET = "set!"
    LAMBDA = "lambda"
    BEGIN = "begin"

    @classmethod
    def of(cls, head: Expression) -> Optional[SpecialForm]:
        """Return the special form named by `head`, or None."""
        if isinstance(head, Symbol):
            return _BY_NAME.get(head.name)
        return None


_BY_NAME: dict[str, SpecialForm] = {form.value: form for form in SpecialForm}

SPECIAL_FORMS: dict[SpecialForm, SpecialFormHandler] = {
    SpecialForm.QUOTE: quote_form,
    SpecialForm.IF: if_form,
    SpecialForm.DEFINE: define_form,
    SpecialForm.SET: set_form,
    SpecialForm.LAMBDA: lambda_form,
    SpecialForm.BEGIN: begin_form,
}

_missing = set(SpecialForm) - SPECIAL_FORMS.keys()
if _missing:
    raise RuntimeError(f"special forms without a handler: {sorted(f.value for f in _missing)}")
