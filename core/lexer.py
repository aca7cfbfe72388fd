"""core/lexer.py - 把表达式文本切分为中缀Token序列"""
import logging

from core.exceptions import LexError
from core.operators import Operators
from core.token_system import Token, TokenType, QuoteKind

logger = logging.getLogger(__name__)

STRUCTURAL_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    ',': TokenType.SEPARATOR,
}

QUOTES = {"'": QuoteKind.SINGLE, '"': QuoteKind.DOUBLE}

ESCAPES = {'n': '\n', 't': '\t'}

# 出现在这些Token之后的 + / - 视为一元运算符
UNARY_CONTEXT = (TokenType.OPERATOR, TokenType.LEFT_PAREN, TokenType.SEPARATOR)


class Lexer:
    """逐字符扫描表达式，遇到无法识别的内容抛出LexError"""

    def __init__(self, operators=None):
        self.operators = operators if operators is not None else Operators()
        self.expression = ''
        self.index = 0

    def tokenize(self, expression):
        self.expression = expression
        self.index = 0
        # 最长匹配：符号表在每次扫描开始时取一次
        symbols = self.operators.symbols()
        tokens = []

        while self.curr_char is not None:
            c = self.curr_char

            if c.isspace():
                self._skip_whitespace()
                continue

            start = self.index
            if c.isdigit() or c == '.':
                tokens.append(Token.number(self._make_number(), position=start))
                continue
            if c in QUOTES:
                text = self._make_string()
                tokens.append(Token.string(text, QUOTES[c], position=start))
                continue
            if c.isalpha() or c == '_':
                tokens.append(self._make_word(symbols, tokens, start))
                continue
            if c in STRUCTURAL_TOKENS:
                tokens.append(Token(STRUCTURAL_TOKENS[c], c, position=start))
                self._advance()
                continue

            symbol = self._match_symbol(symbols)
            if symbol is not None:
                tokens.append(self._make_operator(symbol, tokens, start))
                continue

            raise LexError(f"Unrecognized character '{c}'", self.expression, start)

        logger.debug(f"Tokenized {expression!r}: {len(tokens)} tokens")
        return tokens

    def _make_number(self):
        """数字：最多一个小数点，可带指数部分"""
        start = self.index
        found_period = False

        while self.curr_char is not None and (self.curr_char.isdigit() or self.curr_char == '.'):
            if self.curr_char == '.':
                if found_period:
                    raise LexError('Unexpected period (.)', self.expression, self.index)
                found_period = True
            self._advance()

        # 指数部分：e 之后必须有数字，否则 e 留给后面当变量
        if self.curr_char in ('e', 'E'):
            offset = 1
            if self._peek(offset) in ('+', '-'):
                offset += 1
            following = self._peek(offset)
            if following is not None and following.isdigit():
                self.index += offset
                while self.curr_char is not None and self.curr_char.isdigit():
                    self._advance()

        text = self.expression[start:self.index]
        if self.curr_char == '.':
            raise LexError('Unexpected period (.)', self.expression, self.index)
        try:
            return float(text)
        except ValueError:
            raise LexError(f"Invalid number '{text}'", self.expression, start) from None

    def _make_string(self):
        """引号字符串，支持反斜杠转义"""
        start = self.index
        quote = self.curr_char
        self._advance()
        chars = []

        while self.curr_char is not None:
            c = self.curr_char
            if c == quote:
                self._advance()
                return ''.join(chars)
            if c == '\\':
                self._advance()
                if self.curr_char is None:
                    break
                chars.append(ESCAPES.get(self.curr_char, self.curr_char))
            else:
                chars.append(c)
            self._advance()

        raise LexError('Unterminated string literal', self.expression, start)

    def _make_word(self, symbols, tokens, start):
        """标识符：紧跟 ( 的是函数，否则是变量（或字母运算符）"""
        while self.curr_char is not None and (self.curr_char.isalnum() or self.curr_char == '_'):
            self._advance()
        word = self.expression[start:self.index]

        if self.curr_char == '(':
            # 函数名必须已注册
            self.operators.resolve_function(word)
            return Token.function(word, position=start)
        if word in symbols:
            return self._make_operator(word, tokens, start)
        return Token.variable(word, position=start)

    def _make_operator(self, symbol, tokens, start):
        previous = tokens[-1] if tokens else None
        unary_position = previous is None or previous.type in UNARY_CONTEXT

        # 位置与定义不符（如开头的 * ）时由注册表抛出 UnknownTokenError
        definition = self.operators.resolve_operator(symbol, unary=unary_position)
        return Token.operator(symbol, arity=definition.arity, position=start)

    def _match_symbol(self, symbols):
        for symbol in symbols:
            if self.expression.startswith(symbol, self.index):
                self.index += len(symbol)
                return symbol
        return None

    def _skip_whitespace(self):
        while self.curr_char is not None and self.curr_char.isspace():
            self._advance()

    def _advance(self):
        self.index += int(self.index < len(self.expression))

    def _peek(self, offset):
        position = self.index + offset
        return self.expression[position] if position < len(self.expression) else None

    @property
    def curr_char(self):
        return self.expression[self.index] if self.index < len(self.expression) else None


def tokenize(expression, operators=None):
    return Lexer(operators).tokenize(expression)
