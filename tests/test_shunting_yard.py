import pytest

from core import (
    Associativity, IncorrectExpressionError, OperatorDefinition, Operators, TokenType,
    UnknownTokenError, Token,
    format_tokens, to_postfix, tokenize
)


def postfix(expression, operators=None):
    return format_tokens(to_postfix(tokenize(expression, operators), operators))


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2+3*4", "2 3 4 * +"),
        ("(2+3)*4", "2 3 + 4 *"),
        ("2-3-4", "2 3 - 4 -"),
        ("2^3^2", "2 3 2 ^ ^"),
        ("2*3/4", "2 3 * 4 /"),
        ("-2+3", "2 -u 3 +"),
        ("3*-2", "3 2 -u *"),
        ("-2^2", "2 -u 2 ^"),
        ("2^-1", "2 1 -u ^"),
        ("--2", "2 -u -u"),
        ("min(3,5)", "3 5 min"),
        ("max(1+2, 3)*2", "1 2 + 3 max 2 *"),
        ("sin(x)", "x sin"),
        ("avg(min(1,2), max(3,4))", "1 2 min 3 4 max avg"),
        ("((1))", "1"),
    ],
)
def test_postfix_order(expression, expected):
    assert postfix(expression) == expected


def test_string_arguments_pass_through():
    operators = Operators()
    operators.register_function('strlen', len)
    tokens = to_postfix(tokenize("strlen('abc')", operators), operators)
    assert [t.type for t in tokens] == [TokenType.STRING, TokenType.FUNCTION]
    assert format_tokens(tokens) == "'abc' strlen"


def test_zero_arity_function():
    operators = Operators()
    operators.register_function('answer', lambda: 42, 0)
    assert postfix("answer() + 1", operators) == "answer 1 +"


def test_postfix_contains_no_structural_tokens():
    tokens = to_postfix(tokenize("max((1+2)*3, min(4, 5))"))
    structural = (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.SEPARATOR)
    assert not any(t.type in structural for t in tokens)


@pytest.mark.parametrize(
    "expression",
    [
        "(2+3",
        "2+3)",
        ")",
        "min(3)",
        "min(1,2,3)",
        "min(1,)",
        "min(,1)",
        "1,2",
        "(1,2)",
        "()",
        "2*()",
    ],
)
def test_malformed_expressions(expression):
    with pytest.raises(IncorrectExpressionError):
        to_postfix(tokenize(expression))


def test_unknown_operator_in_token_stream():
    tokens = [Token.number(1), Token.operator('%'), Token.number(2)]
    with pytest.raises(UnknownTokenError):
        to_postfix(tokens)


def test_conversion_does_not_mutate_input():
    tokens = tokenize("1+2*3")
    before = list(tokens)
    to_postfix(tokens)
    assert tokens == before


def test_prefix_operator_never_pops_the_stack():
    operators = Operators()
    operators.register_operator(OperatorDefinition('+', 5, Associativity.LEFT, Operators.add))
    assert postfix("1+-2", operators) == "1 2 -u +"
