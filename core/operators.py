"""core/operators.py"""
import numpy as np
import logging

from config.config import OPERATOR_CONFIG, EXECUTOR_CONFIG
from core.exceptions import DivisionByZeroError, UnknownTokenError
from core.token_system import Associativity

logger = logging.getLogger(__name__)


class OperatorDefinition:
    """运算符定义：符号、优先级、结合性、求值函数"""

    def __init__(self, symbol, precedence, associativity, function, arity=2):
        if arity not in (1, 2):
            raise ValueError(f"Operator arity must be 1 or 2, got {arity}")
        if not symbol or any(c.isspace() or c in '(),' for c in symbol):
            raise ValueError(f"Invalid operator symbol: {symbol!r}")
        self.symbol = symbol
        self.precedence = int(precedence)
        self.associativity = associativity
        self.function = function
        self.arity = arity

    @property
    def left_associative(self):
        return self.associativity == Associativity.LEFT

    def __repr__(self):
        return (f"OperatorDefinition({self.symbol!r}, precedence={self.precedence}, "
                f"{self.associativity.value}, arity={self.arity})")


class FunctionDefinition:
    """函数定义：名称、固定参数个数、求值函数"""

    def __init__(self, name, function, arity=1):
        if arity < 0:
            raise ValueError(f"Function arity must be non-negative, got {arity}")
        self.name = name
        self.function = function
        self.arity = arity

    def __repr__(self):
        return f"FunctionDefinition({self.name!r}, arity={self.arity})"


class Operators:
    """运算符与函数注册表，外加默认的求值函数"""

    def __init__(self, division_by_zero_exception=None, with_defaults=True):
        if division_by_zero_exception is None:
            division_by_zero_exception = EXECUTOR_CONFIG["division_by_zero_exception"]
        self.division_by_zero_exception = division_by_zero_exception
        self._binary = {}
        self._unary = {}
        self._functions = {}
        if with_defaults:
            self._register_defaults()

    def _register_defaults(self):
        additive = OPERATOR_CONFIG["additive"]
        multiplicative = OPERATOR_CONFIG["multiplicative"]
        unary = OPERATOR_CONFIG["unary"]

        self.register_operator(OperatorDefinition('+', additive, Associativity.LEFT, Operators.add))
        self.register_operator(OperatorDefinition('-', additive, Associativity.LEFT, Operators.sub))
        self.register_operator(OperatorDefinition('*', multiplicative, Associativity.LEFT, Operators.mul))
        self.register_operator(OperatorDefinition('/', multiplicative, Associativity.LEFT, self.div))
        self.register_operator(
            OperatorDefinition('^', OPERATOR_CONFIG["power"], Associativity.RIGHT, Operators.power))

        self.register_operator(OperatorDefinition('+', unary, Associativity.RIGHT, Operators.pos, arity=1))
        self.register_operator(OperatorDefinition('-', unary, Associativity.RIGHT, Operators.neg, arity=1))

        # 三角函数（tn/atn 保留旧名称）
        for name, function in (('sin', np.sin), ('cos', np.cos), ('tan', np.tan),
                               ('asin', np.arcsin), ('acos', np.arccos), ('atan', np.arctan),
                               ('tn', np.tan), ('atn', np.arctan)):
            self.register_function(name, Operators._unary_math(function))

        self.register_function('min', Operators.min, 2)
        self.register_function('max', Operators.max, 2)
        self.register_function('avg', Operators.avg, 2)

    # 注册与查找====================

    def register_operator(self, definition):
        """注册运算符，同一符号（同一元数）后注册的覆盖先注册的"""
        table = self._unary if definition.arity == 1 else self._binary
        if definition.symbol in table:
            logger.debug(f"Overriding operator {definition.symbol!r} (arity {definition.arity})")
        table[definition.symbol] = definition
        return definition

    def register_function(self, name, function, arity=1):
        """注册函数，同名后注册的覆盖先注册的"""
        if not name or not (name[0].isalpha() or name[0] == '_') \
                or not all(c.isalnum() or c == '_' for c in name):
            raise ValueError(f"Invalid function name: {name!r}")
        if name in self._functions:
            logger.debug(f"Overriding function {name!r}")
        definition = FunctionDefinition(name, function, arity)
        self._functions[name] = definition
        return definition

    def resolve_operator(self, symbol, unary=False):
        table = self._unary if unary else self._binary
        try:
            return table[symbol]
        except KeyError:
            kind = "unary" if unary else "binary"
            raise UnknownTokenError(f"Unknown {kind} operator: {symbol}") from None

    def resolve_function(self, name):
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownTokenError(f"Unknown function: {name}") from None

    def symbols(self):
        """所有运算符符号，按长度从长到短（最长匹配）"""
        return sorted(set(self._binary) | set(self._unary), key=lambda s: (-len(s), s))

    def get_operators(self):
        return {
            'binary': dict(self._binary),
            'unary': dict(self._unary),
        }

    def get_functions(self):
        return dict(self._functions)

    # 默认求值函数====================

    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return np.float64(operand1) + np.float64(operand2)

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return np.float64(operand1) - np.float64(operand2)

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return np.float64(operand1) * np.float64(operand2)

    def div(self, operand1, operand2):
        """除法操作符，除数恰好为0时按除零策略处理"""
        operand1 = np.float64(operand1)
        operand2 = np.float64(operand2)
        if operand2 == 0:
            if self.division_by_zero_exception:
                logger.debug(f"Division by zero: {operand1} / {operand2}")
                raise DivisionByZeroError("Division by zero")
            if operand1 == 0 or np.isnan(operand1):
                return np.float64(np.nan)
            # 符号跟随被除数（以及带符号的零）
            return np.copysign(np.inf, operand1) * np.copysign(1.0, operand2)
        with np.errstate(over='ignore'):
            return operand1 / operand2

    @staticmethod
    def power(operand1, operand2):
        """乘方；负数的小数次幂得到NaN"""
        with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
            return np.power(np.float64(operand1), np.float64(operand2))

    @staticmethod
    def pos(operand):
        return np.float64(operand)

    @staticmethod
    def neg(operand):
        return -np.float64(operand)

    @staticmethod
    def min(operand1, operand2):
        return np.minimum(np.float64(operand1), np.float64(operand2))

    @staticmethod
    def max(operand1, operand2):
        return np.maximum(np.float64(operand1), np.float64(operand2))

    @staticmethod
    def avg(operand1, operand2):
        return (np.float64(operand1) + np.float64(operand2)) / 2

    @staticmethod
    def _unary_math(function):
        """包装numpy一元函数：超出定义域返回NaN而不是告警"""
        def wrapper(operand):
            with np.errstate(invalid='ignore', divide='ignore'):
                return function(np.float64(operand))
        wrapper.__name__ = function.__name__
        return wrapper
