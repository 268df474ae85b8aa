import pytest

from lispflat.builtin.primitives import standard_env
from lispflat.interpreter import Interpreter


@pytest.fixture
def env():
    """Fresh global environment with every primitive registered."""
    return standard_env()


@pytest.fixture
def interp():
    """Interpreter with its own global environment."""
    return Interpreter()
