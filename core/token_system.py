"""core/token_system.py"""
from enum import Enum
import numpy as np


class TokenType(Enum):
    NUMBER = "number"          # 数字，自带值
    STRING = "string"          # 字符串字面量，只能作为函数参数
    VARIABLE = "variable"      # 变量，求值时从变量环境中取值
    OPERATOR = "operator"      # 运算符，按符号在注册表中查找
    FUNCTION = "function"      # 函数，按名称在注册表中查找
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    SEPARATOR = "separator"    # 函数参数分隔符 ,


class QuoteKind(Enum):
    SINGLE = "'"
    DOUBLE = '"'


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


# 操作数类Token（直接进入输出序列）
OPERAND_TYPES = (TokenType.NUMBER, TokenType.STRING, TokenType.VARIABLE)


class Token:
    def __init__(self, token_type, name, value=None, arity=0, quote=None, position=None):
        self.type = token_type
        self.name = name
        self.value = value
        self.arity = arity  # 运算符：1为一元，2为二元
        self.quote = quote  # 仅字符串使用
        self.position = position  # 在原始表达式中的偏移

    @classmethod
    def number(cls, value, position=None):
        value = np.float64(value)
        if value.is_integer() and abs(value) < 1e15:
            name = str(int(value))
        else:
            name = repr(float(value))
        return cls(TokenType.NUMBER, name, value=value, position=position)

    @classmethod
    def string(cls, text, quote=QuoteKind.DOUBLE, position=None):
        return cls(TokenType.STRING, text, value=text, quote=quote, position=position)

    @classmethod
    def variable(cls, name, position=None):
        return cls(TokenType.VARIABLE, name, position=position)

    @classmethod
    def operator(cls, symbol, arity=2, position=None):
        return cls(TokenType.OPERATOR, symbol, arity=arity, position=position)

    @classmethod
    def function(cls, name, position=None):
        return cls(TokenType.FUNCTION, name, position=position)

    @property
    def is_unary(self):
        return self.type == TokenType.OPERATOR and self.arity == 1

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.name, self.arity, self.quote) == \
            (other.type, other.name, other.arity, other.quote)

    def __hash__(self):
        return hash((self.type, self.name, self.arity, self.quote))

    def __str__(self):
        if self.type == TokenType.STRING:
            return f"{self.quote.value}{self.name}{self.quote.value}"
        if self.is_unary:
            # 区分一元运算符，避免后缀表达式产生歧义
            return f"{self.name}u"
        return self.name

    def __repr__(self):
        return f"Token({self.type.name}, {self.name!r})"



def format_tokens(token_sequence):
    """把Token序列转成空格分隔的字符串，用于日志和调试"""
    return ' '.join(str(t) for t in token_sequence)
