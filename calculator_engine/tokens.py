"""Token types shared by the tokenizer, the resolver, the evaluator and the editor."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    CONSTANT = "constant"


# Symbols as they appear in the buffer.
MULTIPLY = "x"
DIVIDE = "÷"
MODULO = "mod"
PERCENT = "%"
POWER = "^"
FACTORIAL = "!"
PI = "π"

SINGLE_CHAR_SYMBOLS = "+-x÷%()^!"
FUNCTION_NAMES = ("sin", "cos", "tan", "asin", "acos", "atan", "ln", "exp", "sqrt")
KEYWORDS = (MODULO,) + FUNCTION_NAMES + (PI,)

# Operators the editor treats as replaceable when typed twice in a row.
BINARY_BUTTON_OPERATORS = "+-x÷"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    symbol: Optional[str] = None   # None for numbers
    value: float = 0.0
    was_percent: bool = False

    @classmethod
    def number(cls, value: float, was_percent: bool = False) -> "Token":
        return cls(TokenKind.NUMBER, value=value, was_percent=was_percent)

    @classmethod
    def operator(cls, symbol: str) -> "Token":
        return cls(TokenKind.OPERATOR, symbol)

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    def __repr__(self) -> str:
        if self.is_number:
            suffix = "%" if self.was_percent else ""
            return f"Token(number, {self.value!r}{suffix})"
        return f"Token({self.kind.value}, {self.symbol!r})"


OPEN_PAREN = Token(TokenKind.OPEN_PAREN, "(")
CLOSE_PAREN = Token(TokenKind.CLOSE_PAREN, ")")
IMPLICIT_MULTIPLY = Token.operator(MULTIPLY)


@dataclass(frozen=True)
class TokenSpan:
    """A token plus where it came from in the scanned text."""
    token: Token
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length
