"""核心模块 - Token系统、词法分析、调度场转换、RPN评估器和操作符"""
from .exceptions import (
    MathExecutorError, LexError, IncorrectExpressionError, UnknownTokenError,
    UnknownVariableError, DivisionByZeroError
)
from .token_system import TokenType, QuoteKind, Associativity, Token, format_tokens
from .operators import Operators, OperatorDefinition, FunctionDefinition
from .lexer import Lexer, tokenize
from .shunting_yard import ShuntingYard, to_postfix
from .rpn_evaluator import RPNEvaluator

__all__ = [
    'MathExecutorError', 'LexError', 'IncorrectExpressionError', 'UnknownTokenError',
    'UnknownVariableError', 'DivisionByZeroError',
    'TokenType', 'QuoteKind', 'Associativity', 'Token', 'format_tokens',
    'Operators', 'OperatorDefinition', 'FunctionDefinition',
    'Lexer', 'tokenize', 'ShuntingYard', 'to_postfix', 'RPNEvaluator'
]
