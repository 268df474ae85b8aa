from typing import Callable

from lispflat.types.environment import Environment
from lispflat.types.expression import Expression

# Evaluator function type, handed to special forms and the application engine
EvaluatorFn = Callable[[Expression, Environment], Expression]
