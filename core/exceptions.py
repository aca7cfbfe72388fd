"""core/exceptions.py"""


class MathExecutorError(Exception):
    """所有表达式错误的基类"""


class LexError(MathExecutorError):
    """词法错误：无法识别的字符、未闭合的字符串、非法数字"""

    def __init__(self, message, expression=None, position=None):
        self.expression = expression
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)


class IncorrectExpressionError(MathExecutorError):
    """括号不匹配、参数个数不符、求值结束时栈不平衡"""


class UnknownTokenError(IncorrectExpressionError):
    """注册表中找不到的运算符或函数"""


class UnknownVariableError(MathExecutorError):
    """变量环境中不存在该变量"""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Variable ({name}) not set")


class DivisionByZeroError(MathExecutorError, ZeroDivisionError):
    """仅在除零策略为抛出异常时使用"""
