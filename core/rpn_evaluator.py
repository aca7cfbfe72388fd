"""RPN表达式求值器 - 通过Operators注册表查找运算符和函数"""
import numbers
import numpy as np
import logging

from core.exceptions import IncorrectExpressionError, UnknownVariableError
from core.token_system import Token, TokenType, format_tokens
from core.operators import Operators

logger = logging.getLogger(__name__)

_DEFAULT_OPERATORS = None


def _default_operators():
    global _DEFAULT_OPERATORS
    if _DEFAULT_OPERATORS is None:
        _DEFAULT_OPERATORS = Operators()
    return _DEFAULT_OPERATORS


class RPNEvaluator:
    """评估RPN表达式的值"""

    @staticmethod
    def evaluate(token_sequence, variables, operators=None):
        """
        单遍扫描后缀Token序列
        Args:
            token_sequence: 后缀顺序的Token序列
            variables: 变量名 -> 数值
            operators: 运算符/函数注册表，默认使用内置注册表
        Returns:
            float 结果
        """
        if operators is None:
            operators = _default_operators()
        stack = []

        for token in token_sequence:
            if token.type in (TokenType.NUMBER, TokenType.STRING):
                stack.append(token)

            elif token.type == TokenType.VARIABLE:
                if token.name not in variables:
                    logger.debug(f"Unknown variable {token.name} in: {format_tokens(token_sequence)}")
                    raise UnknownVariableError(token.name)
                try:
                    stack.append(Token.number(variables[token.name]))
                except (TypeError, ValueError, OverflowError):
                    raise IncorrectExpressionError(
                        f"Variable {token.name} is not a number: {variables[token.name]!r}") from None

            elif token.type == TokenType.OPERATOR:
                definition = operators.resolve_operator(token.name, unary=token.is_unary)
                args = RPNEvaluator._pop_operands(stack, definition.arity, token.name)
                if any(arg.type == TokenType.STRING for arg in args):
                    raise IncorrectExpressionError(
                        f"Operator {token.name} cannot be applied to a string literal")
                result = RPNEvaluator._invoke(definition.function, [arg.value for arg in args], token.name)
                stack.append(result)

            elif token.type == TokenType.FUNCTION:
                definition = operators.resolve_function(token.name)
                args = RPNEvaluator._pop_operands(stack, definition.arity, token.name)
                result = RPNEvaluator._invoke(definition.function, [arg.value for arg in args], token.name)
                stack.append(result)

            elif token.type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.SEPARATOR):
                # 结构Token不会出现在合法的后缀序列中
                raise IncorrectExpressionError(f"Unexpected {token.name!r} in postfix sequence")

            else:
                raise IncorrectExpressionError(f"Unknown token type: {token.type}")

        if len(stack) != 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1")
            logger.debug(f"RPN expression: {format_tokens(token_sequence)}")
            raise IncorrectExpressionError(
                f"Stack has {len(stack)} elements after evaluation, expected 1")

        result = stack[0]
        if result.type != TokenType.NUMBER:
            raise IncorrectExpressionError("Expression result is not a number")
        return float(result.value)

    @staticmethod
    def _pop_operands(stack, arity, name):
        if len(stack) < arity:
            logger.debug(f"Insufficient operands for {name}: need {arity}, have {len(stack)}")
            raise IncorrectExpressionError(f"Insufficient operands for {name}")
        if arity == 0:
            return []
        args = stack[-arity:]
        del stack[-arity:]
        return args

    @staticmethod
    def _invoke(function, values, name):
        try:
            result = function(*values)
        except (TypeError, ValueError, OverflowError) as e:
            raise IncorrectExpressionError(f"Invalid arguments for {name}: {e}") from e
        if isinstance(result, bool) or not isinstance(result, (numbers.Real, np.number)):
            raise IncorrectExpressionError(f"{name} returned a non-numeric value: {result!r}")
        try:
            return Token.number(result)
        except OverflowError:
            raise IncorrectExpressionError(f"{name} returned a value too large for a float: {result!r}") from None
