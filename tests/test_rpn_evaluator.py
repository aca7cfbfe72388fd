import math

import pytest

from core import (
    DivisionByZeroError, IncorrectExpressionError, Operators, RPNEvaluator, Token,
    TokenType, UnknownVariableError
)


def test_evaluates_postfix_sequence():
    tokens = [Token.number(2), Token.number(3), Token.number(4), Token.operator('*'), Token.operator('+')]
    assert RPNEvaluator.evaluate(tokens, {}) == 14.0


def test_result_is_plain_float():
    result = RPNEvaluator.evaluate([Token.number(2)], {})
    assert type(result) is float


def test_variables_are_resolved():
    tokens = [Token.variable('x'), Token.number(1), Token.operator('+')]
    assert RPNEvaluator.evaluate(tokens, {'x': 2}) == 3.0


def test_unknown_variable():
    tokens = [Token.variable('x'), Token.number(1), Token.operator('+')]
    with pytest.raises(UnknownVariableError) as excinfo:
        RPNEvaluator.evaluate(tokens, {})
    assert excinfo.value.name == 'x'


def test_non_numeric_variable():
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate([Token.variable('x')], {'x': 'abc'})


def test_unary_operator_pops_one_operand():
    tokens = [Token.number(5), Token.operator('-', arity=1)]
    assert RPNEvaluator.evaluate(tokens, {}) == -5.0


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        [Token.number(1), Token.operator('+')],
        [Token.number(1), Token.number(2)],
        [Token.number(1), Token.function('min')],
        [Token.operator('-', arity=1)],
    ],
)
def test_stack_imbalance(tokens):
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate(tokens, {})


def test_structural_tokens_are_rejected():
    tokens = [Token.number(1), Token(TokenType.LEFT_PAREN, '(')]
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate(tokens, {})


def test_string_operand_in_arithmetic():
    tokens = [Token.string('a'), Token.number(1), Token.operator('+')]
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate(tokens, {})


def test_string_result_is_rejected():
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate([Token.string('a')], {})


def test_string_as_function_argument():
    operators = Operators()
    operators.register_function('strlen', len)
    tokens = [Token.string('abc'), Token.function('strlen')]
    assert RPNEvaluator.evaluate(tokens, {}, operators) == 3.0


def test_string_passed_to_numeric_function():
    tokens = [Token.string('abc'), Token.function('sin')]
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate(tokens, {})


def test_function_returning_non_number():
    operators = Operators()
    operators.register_function('bad', lambda x: 'x')
    with pytest.raises(IncorrectExpressionError):
        RPNEvaluator.evaluate([Token.number(1), Token.function('bad')], {}, operators)


def test_function_arguments_keep_order():
    operators = Operators()
    operators.register_function('minus', lambda a, b: a - b, 2)
    tokens = [Token.number(10), Token.number(3), Token.function('minus')]
    assert RPNEvaluator.evaluate(tokens, {}, operators) == 7.0


def test_division_policy():
    tokens = [Token.number(1), Token.number(0), Token.operator('/')]
    with pytest.raises(DivisionByZeroError):
        RPNEvaluator.evaluate(tokens, {}, Operators(division_by_zero_exception=True))
    result = RPNEvaluator.evaluate(tokens, {}, Operators(division_by_zero_exception=False))
    assert result == math.inf


@pytest.mark.parametrize(
    "expression, variables, expected",
    [
        ("sin(pi/2)", {'pi': math.pi}, 1.0),
        ("cos(0) + tan(0)", {}, 1.0),
        ("acos(1) + asin(0) + atan(0)", {}, 0.0),
        ("x^2 + y^2", {'x': 3, 'y': 4}, 25.0),
        ("avg(x, 2*x)", {'x': 4}, 6.0),
    ],
)
def test_pipeline(calc, expression, variables, expected):
    assert calc(expression, variables) == pytest.approx(expected)


def test_evaluation_is_deterministic(calc):
    assert calc("2^0.5 * 3 - 1/7") == calc("2^0.5 * 3 - 1/7")
