"""core/shunting_yard.py - 中缀Token序列转后缀（逆波兰）序列"""
import logging

from core.exceptions import IncorrectExpressionError
from core.operators import Operators
from core.token_system import TokenType, OPERAND_TYPES, format_tokens

logger = logging.getLogger(__name__)


class _Group:
    """一对括号内的状态：是否为函数调用、已见到的参数个数"""

    def __init__(self, function=None):
        self.function = function
        self.separators = 0
        self.current_empty = True  # 当前参数是否还没有任何Token
        self.empty = True          # 整个括号内是否没有任何Token

    def mark(self):
        self.current_empty = False
        self.empty = False

    @property
    def argument_count(self):
        return 0 if self.empty else self.separators + 1


class ShuntingYard:

    def __init__(self, operators=None):
        self.operators = operators if operators is not None else Operators()

    def convert(self, tokens):
        """
        调度场算法
        Args:
            tokens: 词法分析得到的中缀Token序列
        Returns:
            后缀顺序的Token列表
        """
        output = []
        stack = []   # 运算符 / 函数 / 左括号
        groups = []  # 与栈中的左括号一一对应

        for i, token in enumerate(tokens):
            if groups and token.type != TokenType.RIGHT_PAREN and token.type != TokenType.SEPARATOR:
                groups[-1].mark()

            if token.type in OPERAND_TYPES:
                output.append(token)

            elif token.type == TokenType.FUNCTION:
                stack.append(token)

            elif token.type == TokenType.LEFT_PAREN:
                previous = tokens[i - 1] if i > 0 else None
                function = None
                if previous is not None and previous.type == TokenType.FUNCTION:
                    function = self.operators.resolve_function(previous.name)
                stack.append(token)
                groups.append(_Group(function))

            elif token.type == TokenType.SEPARATOR:
                if not groups or groups[-1].function is None:
                    raise IncorrectExpressionError("Argument separator outside of a function call")
                if groups[-1].current_empty:
                    raise IncorrectExpressionError(f"Empty argument in call to {groups[-1].function.name}")
                self._pop_until_paren(stack, output)
                groups[-1].separators += 1
                groups[-1].current_empty = True

            elif token.type == TokenType.RIGHT_PAREN:
                if not groups:
                    raise IncorrectExpressionError("Unmatched closing parenthesis")
                self._pop_until_paren(stack, output)
                stack.pop()  # 左括号
                group = groups.pop()
                if group.function is None:
                    if group.empty:
                        raise IncorrectExpressionError("Empty parentheses")
                else:
                    self._check_arity(group)
                    output.append(stack.pop())

            elif token.type == TokenType.OPERATOR:
                self._push_operator(token, stack, output)

            else:
                raise IncorrectExpressionError(f"Unexpected token {token!r}")

        while stack:
            token = stack.pop()
            if token.type == TokenType.LEFT_PAREN:
                raise IncorrectExpressionError("Unmatched opening parenthesis")
            output.append(token)

        logger.debug(f"Postfix: {format_tokens(output)}")
        return output

    def _push_operator(self, token, stack, output):
        current = self.operators.resolve_operator(token.name, unary=token.is_unary)
        if token.is_unary:
            # 前缀运算符没有左操作数，不弹出任何运算符
            stack.append(token)
            return
        while stack and stack[-1].type == TokenType.OPERATOR:
            top = self.operators.resolve_operator(stack[-1].name, unary=stack[-1].is_unary)
            if top.precedence > current.precedence or \
                    (top.precedence == current.precedence and current.left_associative):
                output.append(stack.pop())
            else:
                break
        stack.append(token)

    @staticmethod
    def _pop_until_paren(stack, output):
        while stack and stack[-1].type != TokenType.LEFT_PAREN:
            output.append(stack.pop())

    @staticmethod
    def _check_arity(group):
        if group.current_empty and group.separators > 0:
            raise IncorrectExpressionError(f"Empty argument in call to {group.function.name}")
        if group.argument_count != group.function.arity:
            raise IncorrectExpressionError(
                f"Function {group.function.name} expects {group.function.arity} argument(s), "
                f"got {group.argument_count}")


def to_postfix(tokens, operators=None):
    return ShuntingYard(operators).convert(tokens)
