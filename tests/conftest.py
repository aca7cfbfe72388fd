import pytest

from core import Operators, tokenize, to_postfix, RPNEvaluator
from executor import MathExecutor


@pytest.fixture
def operators():
    return Operators()


@pytest.fixture
def executor():
    return MathExecutor()


@pytest.fixture
def calc(operators):
    def _calc(expression, variables=None):
        postfix = to_postfix(tokenize(expression, operators), operators)
        return RPNEvaluator.evaluate(postfix, variables or {}, operators)
    return _calc
