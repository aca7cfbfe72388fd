"""执行器模块 - 变量环境与后缀表达式缓存"""
from .math_executor import MathExecutor

__all__ = ['MathExecutor']
