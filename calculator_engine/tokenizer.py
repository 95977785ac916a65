"""
Tokenizer for calculator expressions.

The scanner is lenient: characters that do not start a token are skipped, so
it never fails on text typed one key at a time. A '-' directly followed by a
digit is read as the sign of a number unless the previous token is a number or
a closing parenthesis, in which case it is subtraction.
"""
import logging
from typing import List, Optional

from calculator_engine.tokens import (
    CLOSE_PAREN,
    FUNCTION_NAMES,
    KEYWORDS,
    MODULO,
    OPEN_PAREN,
    PERCENT,
    PI,
    SINGLE_CHAR_SYMBOLS,
    Token,
    TokenKind,
    TokenSpan,
)

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


def _is_digit(ch: str) -> bool:
    return ch != "" and ch in DIGITS


class Scanner:
    """Splits a raw buffer string into token spans, left to right."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)
        self.spans: List[TokenSpan] = []

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ""

    def _previous(self) -> Optional[Token]:
        return self.spans[-1].token if self.spans else None

    def _sign_allowed(self) -> bool:
        prev = self._previous()
        if prev is None:
            return True
        return prev.kind not in (TokenKind.NUMBER, TokenKind.CLOSE_PAREN)

    def _emit(self, token: Token, start: int) -> None:
        self.spans.append(TokenSpan(token, start, self.pos - start))

    def _read_digits(self) -> None:
        while _is_digit(self._peek()):
            self.pos += 1

    def _read_number(self, start: int) -> None:
        # digits, then an optional '.' that must be followed by more digits
        self._read_digits()
        if self._peek() == "." and _is_digit(self._peek(1)):
            self.pos += 1
            self._read_digits()
        self._emit(Token.number(float(self.text[start:self.pos])), start)

    def _match_keyword(self) -> Optional[str]:
        for word in KEYWORDS:
            if self.text.startswith(word, self.pos):
                return word
        return None

    def scan(self) -> List[TokenSpan]:
        while self.pos < self.len:
            start = self.pos
            ch = self._peek()

            if ch == "-" and _is_digit(self._peek(1)) and self._sign_allowed():
                self.pos += 1
                self._read_number(start)
            elif _is_digit(ch):
                self._read_number(start)
            elif ch in SINGLE_CHAR_SYMBOLS:
                self.pos += 1
                if ch == "(":
                    self._emit(OPEN_PAREN, start)
                elif ch == ")":
                    self._emit(CLOSE_PAREN, start)
                else:
                    self._emit(Token.operator(ch), start)
            else:
                word = self._match_keyword()
                if word is None:
                    # unknown character: dropped
                    self.pos += 1
                    continue
                self.pos += len(word)
                if word == PI:
                    self._emit(Token(TokenKind.CONSTANT, PI), start)
                elif word in FUNCTION_NAMES:
                    self._emit(Token(TokenKind.FUNCTION, word), start)
                else:
                    self._emit(Token.operator(word), start)
        return self.spans


def scan(text: str) -> List[TokenSpan]:
    """Return the token spans of `text` without any post-processing."""
    return Scanner(text).scan()


def _is_percent(token: Token) -> bool:
    return token.kind is TokenKind.OPERATOR and token.symbol == PERCENT


def disambiguate_percent(tokens: List[Token]) -> List[Token]:
    """
    A '%' with a number literal on both sides is the binary modulo operator;
    any other '%' stays the postfix percent operator.
    """
    out: List[Token] = []
    for i, token in enumerate(tokens):
        if _is_percent(token) and 0 < i < len(tokens) - 1 \
                and tokens[i - 1].is_number and tokens[i + 1].is_number:
            out.append(Token.operator(MODULO))
        else:
            out.append(token)
    return out


def fold_percent(tokens: List[Token]) -> List[Token]:
    """Fold a percent that directly follows a plain number literal into that number."""
    out: List[Token] = []
    for token in tokens:
        prev = out[-1] if out else None
        if _is_percent(token) and prev is not None and prev.is_number and not prev.was_percent:
            out[-1] = Token.number(prev.value, was_percent=True)
        else:
            out.append(token)
    return out


def tokenize(text: str) -> List[Token]:
    tokens = [span.token for span in scan(text)]
    tokens = fold_percent(disambiguate_percent(tokens))
    logger.debug("tokenize(%r) -> %s", text, tokens)
    return tokens
