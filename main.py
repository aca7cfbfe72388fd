"""主程序入口 - 在命令行中计算表达式"""
import argparse
import logging
import sys

from config.config import LOGGING_CONFIG, validate_config
from core import MathExecutorError, format_tokens
from executor import MathExecutor

logger = logging.getLogger(__name__)


def parse_variable(text):
    """解析 NAME=VALUE 形式的变量定义"""
    name, sep, value = text.partition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Variable {name.strip()} must be a number, got '{value}'") from None


def build_parser():
    parser = argparse.ArgumentParser(description="Evaluate arithmetic expressions")
    parser.add_argument(
        "expressions",
        nargs="+",
        help="Expressions to evaluate, e.g. '2 + 3 * x'"
    )
    parser.add_argument(
        "--var",
        dest="variables",
        type=parse_variable,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (may be repeated)"
    )
    parser.add_argument(
        "--no-division-exception",
        action="store_true",
        help="Return signed infinity on division by zero instead of failing"
    )
    parser.add_argument(
        "--postfix",
        action="store_true",
        help="Also print the postfix (RPN) form of each expression"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=LOGGING_CONFIG["level"],
        help="Logging level (default: %(default)s)"
    )
    return parser


def main(args):
    validate_config()
    executor = MathExecutor(division_by_zero_exception=not args.no_division_exception)
    executor.set_vars(dict(args.variables), clear=False)

    status = 0
    for expression in args.expressions:
        try:
            if args.postfix:
                print(f"{expression} => {format_tokens(executor.compile(expression))}")
            result = executor.execute(expression)
        except MathExecutorError as e:
            logger.error(f"{expression}: {type(e).__name__}: {e}")
            status = 1
            continue
        print(f"{expression} = {result:.15g}")
    return status


if __name__ == "__main__":
    args = build_parser().parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format=LOGGING_CONFIG["format"]
    )
    sys.exit(main(args))
