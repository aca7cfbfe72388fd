import logging
import numbers
from collections import OrderedDict
from typing import Callable, Dict, Optional

import numpy as np

from config.config import EXECUTOR_CONFIG, DEFAULT_VARIABLES
from core import (
    Lexer, ShuntingYard, RPNEvaluator, Operators, OperatorDefinition,
    UnknownVariableError, format_tokens
)

logger = logging.getLogger(__name__)


class MathExecutor:
    """
    表达式执行器：持有变量环境、运算符注册表和后缀表达式缓存。
    缓存以表达式原文为键（不做任何规范化），超出上限时淘汰最久未使用的条目。
    非线程安全，多线程共享时需要调用方自行加锁。
    """

    def __init__(self, cache_size=None, division_by_zero_exception=None):
        if cache_size is None:
            cache_size = EXECUTOR_CONFIG["cache_size"]
        self.cache_size = cache_size
        self.operators = Operators(division_by_zero_exception=division_by_zero_exception)
        self._variables: Dict[str, float] = {}
        # 使用有限大小的OrderedDict实现LRU缓存
        self._cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0
        self.set_vars(DEFAULT_VARIABLES)

    # 变量====================

    def get_vars(self) -> Dict[str, float]:
        return dict(self._variables)

    def get_var(self, name):
        if name not in self._variables:
            raise UnknownVariableError(name)
        return self._variables[name]

    def set_var(self, name, value):
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (numbers.Real, np.number)):
            raise TypeError(f"Variable ({name}) value must be a number, got {type(value).__name__}")
        self._variables[name] = value
        return self

    def set_vars(self, variables, clear=True):
        """
        Args:
            variables: 变量名 -> 数值
            clear: 是否先清空已有变量（包括 pi、e）
        """
        if clear:
            self.remove_vars()
        for name, value in variables.items():
            self.set_var(name, value)
        return self

    def remove_var(self, name):
        self._variables.pop(name, None)
        return self

    def remove_vars(self):
        self._variables = {}
        return self

    # 运算符与函数====================

    def add_operator(self, definition: OperatorDefinition):
        self.operators.register_operator(definition)
        # 优先级可能改变，已缓存的后缀序列不再可靠
        self.clear_cache()
        return self

    def get_operators(self):
        return self.operators.get_operators()

    def add_function(self, name: str, function: Optional[Callable] = None, arity: int = 1):
        if function is None:
            raise ValueError(f"Function ({name}) needs a callable")
        self.operators.register_function(name, function, arity)
        self.clear_cache()
        return self

    def get_functions(self):
        return self.operators.get_functions()

    def set_division_by_zero_exception(self, exception=True):
        self.operators.division_by_zero_exception = exception
        return self

    def get_division_by_zero_exception(self):
        return self.operators.division_by_zero_exception

    # 执行====================

    def execute(self, expression: str) -> float:
        tokens = self.compile(expression)
        return RPNEvaluator.evaluate(tokens, self._variables, self.operators)

    def compile(self, expression: str) -> list:
        """返回表达式的后缀Token序列（优先从缓存中取）"""
        if expression in self._cache:
            # 移到末尾（最近使用）
            self._cache.move_to_end(expression)
            self._cache_hits += 1
            logger.debug(f"Cache hit for expression: {expression[:50]}")
            return self._cache[expression]

        self._cache_misses += 1
        infix = Lexer(self.operators).tokenize(expression)
        postfix = ShuntingYard(self.operators).convert(infix)
        logger.debug(f"Compiled {expression[:50]!r} -> {format_tokens(postfix)}")

        self._cache[expression] = postfix
        self._manage_cache()
        return postfix

    # 缓存====================

    def _manage_cache(self):
        """管理缓存大小"""
        if not self.cache_size:
            return
        while len(self._cache) > self.cache_size:
            # 删除最久未使用的条目
            self._cache.popitem(last=False)

    def clear_cache(self):
        """清空缓存（供外部调用）"""
        self._cache.clear()
        logger.info(f"Cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
        self._cache_hits = 0
        self._cache_misses = 0

    def cache_info(self):
        return {
            'hits': self._cache_hits,
            'misses': self._cache_misses,
            'size': len(self._cache),
            'max_size': self.cache_size,
        }
