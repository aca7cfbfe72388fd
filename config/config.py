"""配置文件"""

# 运算符优先级（数值越大结合越紧）
OPERATOR_CONFIG = {
    "additive": 1,        # + -
    "multiplicative": 2,  # * /
    "power": 3,           # ^ 右结合，二元运算符中最高
    "unary": 4,           # 一元 + -，全局最高
}

# 执行器参数
EXECUTOR_CONFIG = {
    "cache_size": 1000,  # 后缀表达式缓存上限，None 或 0 表示不限
    "division_by_zero_exception": True,  # False 时返回带符号的无穷大
}

# 预置常量（作为变量注入，而不是Token）
DEFAULT_VARIABLES = {
    "pi": 3.14159265359,
    "e": 2.71828182846,
}

# 日志配置（仅命令行入口使用）
LOGGING_CONFIG = {
    "level": "WARNING",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert OPERATOR_CONFIG["additive"] < OPERATOR_CONFIG["multiplicative"], "乘除必须比加减结合更紧"
    assert OPERATOR_CONFIG["multiplicative"] < OPERATOR_CONFIG["power"], "乘方必须比乘除结合更紧"
    assert OPERATOR_CONFIG["power"] < OPERATOR_CONFIG["unary"], "一元运算符优先级必须最高"
    cache_size = EXECUTOR_CONFIG["cache_size"]
    assert cache_size is None or cache_size >= 0, "cache_size不能为负数"
