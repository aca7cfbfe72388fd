"""配置模块"""
from .config import (
    OPERATOR_CONFIG, EXECUTOR_CONFIG, DEFAULT_VARIABLES, LOGGING_CONFIG,
    validate_config
)

__all__ = [
    'OPERATOR_CONFIG', 'EXECUTOR_CONFIG', 'DEFAULT_VARIABLES', 'LOGGING_CONFIG',
    'validate_config'
]
